from __future__ import annotations

from datetime import date, datetime, time, timedelta

from ..core.constants import SESSION_HOUR


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def session_noon(day: date) -> datetime:
    return datetime.combine(day, time(hour=SESSION_HOUR))


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Inclusive [start, end] instants covering one calendar day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1) - timedelta(microseconds=1)


def format_br_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")
