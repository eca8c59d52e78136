from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core.constants import QUARTER_LABELS


def quarter_for_month_index(month_index: int) -> int:
    """Quarter (1-4) of a 0-based month index: 0-2 -> 1, 3-5 -> 2, ..."""
    if not 0 <= int(month_index) <= 11:
        raise ValueError(f"Invalid month index: {month_index!r}")
    return int(month_index) // 3 + 1


@dataclass(frozen=True, order=True)
class QuarterKey:
    """Sortable (year, quarter) bucket; the display label is built only for output."""

    year: int
    quarter: int

    @property
    def label(self) -> str:
        return f"{QUARTER_LABELS[self.quarter]}/{self.year}"


@dataclass(frozen=True)
class PeriodTotal:
    key: QuarterKey
    total: Decimal

    def to_dict(self) -> dict:
        return {
            "periodo": self.key.label,
            "ano": self.key.year,
            "trimestre": self.key.quarter,
            "total": float(self.total),
        }


@dataclass(frozen=True)
class FinancialSummary:
    total: Decimal
    periods: list[PeriodTotal]

    def to_dict(self) -> dict:
        return {
            "total_acumulado": float(self.total),
            "historico": [p.to_dict() for p in self.periods],
        }
