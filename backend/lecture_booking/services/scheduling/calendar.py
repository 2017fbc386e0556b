"""
Calendar arithmetic.

Pure date helpers. Inputs are valid calendar dates by construction
(validated at the HTTP boundary).
"""

import calendar
from datetime import date, timedelta


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month, leap-year aware."""
    return calendar.monthrange(year, month)[1]


def is_last_day_of_month(d: date) -> bool:
    return d.day == days_in_month(d.year, d.month)


def add_days(d: date, n: int) -> date:
    return d + timedelta(days=n)


def add_months_pinned(d: date, n: int) -> date:
    """
    Add n months to a date.

    A month-end date stays on the month end (Jan 31 + 1 → Feb 29 in 2024).
    Any other day keeps its day-of-month, clipped to the target month length.
    """
    if is_last_day_of_month(d):
        year, month = _shift_month(d, n)
        return date(year, month, days_in_month(year, month))
    return add_months_clipped(d, n)


def add_months_clipped(d: date, n: int) -> date:
    """
    Same day n months later, clipped to the target month length.

    No month-end pinning: Feb 28 2023 + 12 → Feb 28 2024.
    """
    year, month = _shift_month(d, n)
    return date(year, month, min(d.day, days_in_month(year, month)))


def _shift_month(d: date, n: int) -> tuple[int, int]:
    year, month = divmod(d.year * 12 + (d.month - 1) + n, 12)
    return year, month + 1


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a month."""
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def year_bounds(year: int) -> tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)
