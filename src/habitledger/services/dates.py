"""Calendar arithmetic over ISO ``YYYY-MM-DD`` day strings.

Days travel through the ledger as ISO strings because their lexicographic
order is their chronological order; storage range filters and ``MAX()``
aggregation depend on that.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, timedelta
from typing import Callable, Optional

from ..errors import InvalidDateError

_ISO_DAY = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Achievement windows reach back into the previous month and up to 20 days
# ahead, so days at the very ends of the calendar are not accepted.
EARLIEST_DAY = "0001-02-01"
LATEST_DAY = "9999-12-11"


def parse_day(value: object) -> str:
    """Validate a ``YYYY-MM-DD`` string naming a real calendar day."""

    if not isinstance(value, str) or not _ISO_DAY.match(value):
        raise InvalidDateError(value)
    try:
        date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidDateError(value) from exc
    if not EARLIEST_DAY <= value <= LATEST_DAY:
        raise InvalidDateError(value, reason=f"outside {EARLIEST_DAY}..{LATEST_DAY}")
    return value


def shift_date(day: str, delta_days: int) -> str:
    """Return the ISO day ``delta_days`` away from ``day`` (either direction)."""

    return (date.fromisoformat(day) + timedelta(days=delta_days)).isoformat()


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def first_of_month(day: str) -> str:
    return f"{day[:7]}-01"


def previous_month(day: str) -> tuple[int, int]:
    """Return (year, month) of the calendar month before the one containing ``day``."""

    current = date.fromisoformat(day)
    if current.month == 1:
        return current.year - 1, 12
    return current.year, current.month - 1


def month_days(year: int, month: int) -> list[str]:
    """Every ISO day of the given month, ascending."""

    return [date(year, month, d).isoformat() for d in range(1, days_in_month(year, month) + 1)]


def today_iso(clock: Optional[Callable[[], date]] = None) -> str:
    """Local calendar day; only the outer boundary should call this."""

    return (clock or date.today)().isoformat()


__all__ = [
    "EARLIEST_DAY",
    "LATEST_DAY",
    "days_in_month",
    "first_of_month",
    "month_days",
    "parse_day",
    "previous_month",
    "shift_date",
    "today_iso",
]
