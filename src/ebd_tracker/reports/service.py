from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from ..common.datetime_utils import day_bounds, format_br_date, now_local, parse_iso_date, session_noon
from ..common.validators import coerce_offering, require_mapping, require_max_length, require_reference
from ..core.constants import MAX_NAME_LENGTH, MSG_REPORT_CREATED, MSG_REPORT_UPDATED
from ..core.exceptions import NotFoundError, ValidationError
from .model import AttendanceReport, ReportDraft
from .repository import ReportRepository
from .roster import parse_visitors, require_roster, summarize_roster

logger = logging.getLogger(__name__)


def _parse_session_day(value: str):
    try:
        return parse_iso_date(value.strip())
    except (AttributeError, ValueError) as e:
        raise ValidationError("Data da aula inválida (use AAAA-MM-DD)") from e


def _text(value: Any, field_name: str, max_length: Optional[int] = None) -> str:
    if value is None:
        return ""
    text = value if isinstance(value, str) else str(value)
    return require_max_length(text, field_name, max_length)


@dataclass(frozen=True)
class RecordResult:
    report_id: int
    created: bool

    @property
    def message(self) -> str:
        return MSG_REPORT_CREATED if self.created else MSG_REPORT_UPDATED

    def to_dict(self) -> dict:
        return {"sucesso": True, "mensagem": self.message, "id": self.report_id, "criado": self.created}


class AttendanceRecorder:
    """Turns a submitted roster into the single report of its (class, day)."""

    def __init__(self, reports: ReportRepository, *, clock: Callable[[], datetime] = now_local):
        self._reports = reports
        self._clock = clock

    def build_draft(self, payload: Mapping[str, Any]) -> ReportDraft:
        payload = require_mapping(payload, "Corpo da requisição")
        turma_id = require_reference(payload.get("turma_id"), "turma_id")
        roster = require_roster(payload.get("alunos"))

        raw_date = payload.get("data_aula")
        if raw_date:
            data_aula = session_noon(_parse_session_day(raw_date))
        else:
            data_aula = self._clock()

        return ReportDraft(
            turma_id=turma_id,
            data_aula=data_aula,
            oferta_total=coerce_offering(payload.get("oferta")),
            professor=_text(payload.get("professor"), "professor", MAX_NAME_LENGTH),
            observacoes=_text(payload.get("observacoes"), "observacoes"),
            resumo=summarize_roster(roster, parse_visitors(payload.get("visitantes"))),
            detalhes_alunos=list(roster),
        )

    def record(self, payload: Mapping[str, Any]) -> RecordResult:
        draft = self.build_draft(payload)
        result = self._reports.upsert_for_session(draft)

        logger.info(
            "Report %s %s for turma=%s on %s (presentes=%d, oferta=%s)",
            result.report_id,
            "created" if result.created else "updated",
            draft.turma_id,
            draft.data_aula.date().isoformat(),
            draft.resumo.presentes,
            draft.oferta_total,
        )
        return RecordResult(report_id=result.report_id, created=result.created)


class ReportService:
    def __init__(self, reports: ReportRepository):
        self._reports = reports

    def list_reports(self) -> list[dict]:
        out: list[dict] = []
        for r in self._reports.list_all():
            row = r.to_dict()
            row["data_formatada"] = format_br_date(r.data_aula)
            out.append(row)
        return out

    def delete_report(self, report_id: int) -> None:
        if not self._reports.delete(report_id=int(report_id)):
            raise NotFoundError("Relatório não encontrado")
        logger.info("Report %s deleted", report_id)

    def find_session(self, *, turma_id: Any, data: Optional[str]) -> Optional[AttendanceReport]:
        turma_id = require_reference(turma_id, "turma_id")
        if not data:
            raise ValidationError("data é obrigatória")
        start, end = day_bounds(_parse_session_day(data))
        return self._reports.find_for_class_between(turma_id=turma_id, start=start, end=end)
