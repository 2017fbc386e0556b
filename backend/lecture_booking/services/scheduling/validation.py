"""
Input validation boundary.

Tokens coming from requests are turned into enums here; nothing past this
point compares human-readable labels.
"""

import math
from datetime import date, datetime, timedelta
from typing import Any, Optional

from ...errors import ValidationError
from .config import BookingConfig, get_booking_config
from .slots import Slot, all_slots
from .types import RecurrenceRule, ReservationStatus


def parse_rule(token: Optional[str]) -> RecurrenceRule:
    """Recurrence rule from its token; empty means no recurrence."""
    if token is None or token == "":
        return RecurrenceRule.NONE
    try:
        return RecurrenceRule(token.strip().lower())
    except ValueError:
        allowed = ", ".join(r.value for r in RecurrenceRule)
        raise ValidationError("rule", f"unknown recurrence rule {token!r}, expected one of: {allowed}")


def parse_slot(token: str) -> Slot:
    """Slot from its token or its time label ("09:00-12:00")."""
    for slot in Slot:
        if token == slot.value or token == slot.label:
            return slot
    raise ValidationError("slot", f"unknown slot {token!r}")


def parse_status(token: str) -> ReservationStatus:
    for status in ReservationStatus:
        if token == status.value or token == status.label:
            return status
    raise ValidationError("status", f"unknown status {token!r}")


def parse_rate(value: Any) -> float:
    """
    Hourly rate of the payer.

    Anything that does not parse to a finite non-negative number becomes 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        rate = float(str(value).strip().replace(",", ""))
    except ValueError:
        return 0.0
    if math.isnan(rate) or math.isinf(rate) or rate < 0:
        return 0.0
    return rate


def parse_date(value: Any, field: str = "date") -> date:
    """Well-formed ISO calendar date (YYYY-MM-DD)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(field, "Date must be in YYYY-MM-DD format")


def validate_public_request(
    target_date: date,
    slot: Slot,
    today: date,
    config: BookingConfig | None = None,
) -> None:
    """
    Constraints of the public request path.

    - date at least min_advance_days ahead (tomorrow by default)
    - only the per-day grid slots are bookable
    """
    config = config or get_booking_config()

    earliest = today + timedelta(days=config.min_advance_days)
    if target_date < earliest:
        raise ValidationError("date", f"Date must be on or after {earliest.isoformat()}")

    if slot not in all_slots():
        raise ValidationError("slot", f"Slot {slot.value} cannot be requested publicly")


def validate_series_window(start_date: date, end_date: Optional[date], rule: RecurrenceRule) -> None:
    # A missing end date is not an error: the request degrades to a single reservation
    if rule is RecurrenceRule.NONE or end_date is None:
        return
    if end_date < start_date:
        raise ValidationError("end_date", "end date must not be before the start date")
