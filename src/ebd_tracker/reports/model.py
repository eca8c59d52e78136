from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional


@dataclass(frozen=True)
class VisitorCounts:
    quantidade: int = 0
    biblias: int = 0
    revistas: int = 0

    def to_dict(self) -> dict:
        return {"quantidade": self.quantidade, "biblias": self.biblias, "revistas": self.revistas}


@dataclass(frozen=True)
class SessionSummary:
    """Counters computed from the roster of one session."""

    presentes: int
    biblias: int
    revistas: int
    visitantes: VisitorCounts = field(default_factory=VisitorCounts)

    def to_dict(self) -> dict:
        return {
            "presentes": self.presentes,
            "biblias": self.biblias,
            "revistas": self.revistas,
            "visitantes": self.visitantes.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionSummary":
        visitors = data.get("visitantes") or {}
        return cls(
            presentes=int(data.get("presentes", 0)),
            biblias=int(data.get("biblias", 0)),
            revistas=int(data.get("revistas", 0)),
            visitantes=VisitorCounts(
                quantidade=int(visitors.get("quantidade", 0)),
                biblias=int(visitors.get("biblias", 0)),
                revistas=int(visitors.get("revistas", 0)),
            ),
        )


@dataclass(frozen=True)
class ReportDraft:
    """Report content as computed by the recorder, before it has an id."""

    turma_id: str
    data_aula: datetime
    oferta_total: Decimal
    professor: str
    observacoes: str
    resumo: SessionSummary
    detalhes_alunos: list[Any]


@dataclass(frozen=True)
class AttendanceReport:
    """Domain entity: one attendance/offering report per class and session day."""

    report_id: int
    turma_id: str
    data_aula: datetime
    oferta_total: Decimal
    professor: str
    observacoes: str
    resumo: SessionSummary
    detalhes_alunos: list[Any]
    criado_em: Optional[datetime] = None
    atualizado_em: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.report_id,
            "turma_id": self.turma_id,
            "data_aula": self.data_aula.isoformat(),
            "oferta_total": float(self.oferta_total),
            "professor": self.professor,
            "observacoes": self.observacoes,
            "resumo": self.resumo.to_dict(),
            "detalhes_alunos": list(self.detalhes_alunos),
            "criado_em": self.criado_em.isoformat() if self.criado_em else None,
            "atualizado_em": self.atualizado_em.isoformat() if self.atualizado_em else None,
        }


@dataclass(frozen=True)
class UpsertResult:
    report_id: int
    created: bool
