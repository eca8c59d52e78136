from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from ..reports.repository import ReportRepository
from .model import FinancialSummary, PeriodTotal, QuarterKey, quarter_for_month_index

logger = logging.getLogger(__name__)


def _classify(row: Mapping[str, Any]) -> tuple[QuarterKey, Decimal]:
    session = row.get("data_aula")
    if not isinstance(session, date):
        raise ValueError(f"data_aula ausente ou inválida: {session!r}")

    raw = row.get("oferta_total")
    if raw is None or isinstance(raw, bool):
        raise ValueError(f"oferta_total ausente ou inválida: {raw!r}")
    amount = Decimal(str(raw))
    if not amount.is_finite():
        raise ValueError(f"oferta_total inválida: {raw!r}")

    key = QuarterKey(year=session.year, quarter=quarter_for_month_index(session.month - 1))
    return key, amount


class QuarterlyAggregator:
    """Sums positive offerings into (year, quarter) buckets.

    A report with a malformed date or amount is skipped and logged; it never aborts
    the whole summary. Input order is irrelevant: the output is sorted by (year, quarter).
    """

    def __init__(self, reports: ReportRepository):
        self._reports = reports

    def summarize(self, *, year: Optional[int] = None, turma_id: Optional[str] = None) -> FinancialSummary:
        rows = self._reports.list_offerings(year=year, turma_id=turma_id)

        buckets: dict[QuarterKey, Decimal] = {}
        grand_total = Decimal("0")
        skipped = 0

        for row in rows:
            try:
                key, amount = _classify(row)
            except (TypeError, ValueError, InvalidOperation) as e:
                skipped += 1
                logger.warning("Skipping report %s in financial summary: %s", row.get("id"), e)
                continue

            if amount <= 0:
                continue

            buckets[key] = buckets.get(key, Decimal("0")) + amount
            grand_total += amount

        if skipped:
            logger.warning("Financial summary skipped %d malformed report(s)", skipped)

        periods = [PeriodTotal(key=k, total=v) for k, v in sorted(buckets.items())]
        return FinancialSummary(total=grand_total, periods=periods)
