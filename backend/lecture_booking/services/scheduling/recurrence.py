"""
Recurrence expansion.

Turns (start date, rule, end date) into the ordered list of concrete dates
of a series. Pure function of its inputs: calling it twice gives the same
list.

Rules:
  weekly    → every 7 days
  biweekly  → every 14 days
  monthly   → occurrence k = start + k months
              (month-end start stays on month end, other days are clipped)

Output is bounded by start + recurrence_cap_months regardless of end date.
"""

from datetime import date

from .calendar import add_days, add_months_clipped, add_months_pinned
from .config import BookingConfig, get_booking_config
from .types import RecurrenceRule

STEP_DAYS = {
    RecurrenceRule.WEEKLY: 7,
    RecurrenceRule.BIWEEKLY: 14,
}


def series_cap(start_date: date, config: BookingConfig | None = None) -> date:
    """
    Latest date a series starting at start_date may reach.

    Same calendar day recurrence_cap_months later (clipped, never pinned to
    month end), so the cap is never past start + 1 year.
    """
    config = config or get_booking_config()
    return add_months_clipped(start_date, config.recurrence_cap_months)


def expand(
    start_date: date,
    rule: RecurrenceRule,
    end_date: date,
    config: BookingConfig | None = None,
) -> list[date]:
    """
    Expand a recurrence into dates.

    Returns:
        Ascending list of dates, start_date first. Empty for RecurrenceRule.NONE
        or when end_date is before start_date.
    """
    if rule is RecurrenceRule.NONE:
        return []

    limit = min(end_date, series_cap(start_date, config))
    dates: list[date] = []

    current = start_date
    k = 0
    while current <= limit:
        dates.append(current)
        k += 1
        current = _occurrence(start_date, rule, k)

    return dates


def _occurrence(start_date: date, rule: RecurrenceRule, k: int) -> date:
    """k-th occurrence of the series (k=0 is the start date)."""
    if rule is RecurrenceRule.MONTHLY:
        # Anchored on the start date so clipping in short months does not drift
        return add_months_pinned(start_date, k)
    return add_days(start_date, STEP_DAYS[rule] * k)
