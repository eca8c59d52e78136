from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceReport, ReportDraft, UpsertResult


class ReportRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceReport]:
        """All reports, newest session first."""

        raise NotImplementedError

    def get_by_id(self, report_id: int) -> Optional[AttendanceReport]:
        raise NotImplementedError

    def find_for_class_between(self, *, turma_id: str, start: datetime, end: datetime) -> Optional[AttendanceReport]:
        """First report of the class whose data_aula lies in the inclusive [start, end] range."""

        raise NotImplementedError

    def upsert_for_session(self, draft: ReportDraft) -> UpsertResult:
        """Create the report for (turma_id, calendar day of data_aula) or overwrite it.

        Must be atomic: two concurrent calls for the same class and day leave exactly
        one report behind.
        """

        raise NotImplementedError

    def delete(self, *, report_id: int) -> bool:
        raise NotImplementedError

    def list_offerings(self, *, year: Optional[int] = None, turma_id: Optional[str] = None) -> Sequence[dict]:
        """Rows ``{"id", "data_aula", "oferta_total"}`` for reports with oferta_total > 0,
        largest offering first."""

        raise NotImplementedError
