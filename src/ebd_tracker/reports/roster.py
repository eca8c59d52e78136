from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..common.validators import coerce_count
from ..core.exceptions import ValidationError
from .model import SessionSummary, VisitorCounts

PRESENT_FLAG = "presente"
BIBLE_FLAG = "trouxe_biblia"
MAGAZINE_FLAG = "trouxe_revista"


def require_roster(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, list):
        raise ValidationError("Lista de alunos inválida")
    for i, entry in enumerate(value):
        if not isinstance(entry, Mapping):
            raise ValidationError(f"Entrada {i} da lista de alunos inválida")
    return value


def parse_visitors(value: Any) -> VisitorCounts:
    """Visitor counters; missing or malformed values count as zero."""
    if not isinstance(value, Mapping):
        return VisitorCounts()
    return VisitorCounts(
        quantidade=coerce_count(value.get("quantidade")),
        biblias=coerce_count(value.get("biblias")),
        revistas=coerce_count(value.get("revistas")),
    )


def summarize_roster(roster: Sequence[Mapping[str, Any]], visitors: VisitorCounts | None = None) -> SessionSummary:
    return SessionSummary(
        presentes=sum(1 for a in roster if a.get(PRESENT_FLAG)),
        biblias=sum(1 for a in roster if a.get(BIBLE_FLAG)),
        revistas=sum(1 for a in roster if a.get(MAGAZINE_FLAG)),
        visitantes=visitors or VisitorCounts(),
    )
