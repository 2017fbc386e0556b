from __future__ import annotations

from datetime import date

import pytest

from lecture_booking.errors import ValidationError
from lecture_booking.services.scheduling import BookingConfig, Slot
from lecture_booking.services.scheduling.types import RecurrenceRule, ReservationStatus
from lecture_booking.services.scheduling.validation import (
    parse_date,
    parse_rate,
    parse_rule,
    parse_slot,
    parse_status,
    validate_public_request,
    validate_series_window,
)

TODAY = date(2024, 3, 1)


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        (None, RecurrenceRule.NONE),
        ("", RecurrenceRule.NONE),
        ("none", RecurrenceRule.NONE),
        ("weekly", RecurrenceRule.WEEKLY),
        ("Biweekly", RecurrenceRule.BIWEEKLY),
        ("monthly", RecurrenceRule.MONTHLY),
    ],
)
def test_parse_rule(token: str | None, expected: RecurrenceRule) -> None:
    assert parse_rule(token) is expected


def test_parse_rule_rejects_unknown() -> None:
    with pytest.raises(ValidationError) as exc_info:
        parse_rule("daily")
    assert exc_info.value.field == "rule"


def test_parse_slot_accepts_token_and_label() -> None:
    assert parse_slot("morning") is Slot.MORNING
    assert parse_slot("13:30-16:30") is Slot.AFTERNOON
    assert parse_slot("全天/不指定") is Slot.UNSPECIFIED

    with pytest.raises(ValidationError):
        parse_slot("evening")


def test_parse_status_accepts_token_and_label() -> None:
    assert parse_status("confirmed") is ReservationStatus.CONFIRMED
    assert parse_status("已取消") is ReservationStatus.CANCELLED

    with pytest.raises(ValidationError):
        parse_status("archived")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1500, 1500.0),
        ("1,200", 1200.0),
        (" 800.5 ", 800.5),
        ("abc", 0.0),
        (None, 0.0),
        (-50, 0.0),
        ("nan", 0.0),
        ("inf", 0.0),
        (True, 0.0),
    ],
)
def test_parse_rate(value, expected: float) -> None:
    assert parse_rate(value) == expected


def test_parse_date() -> None:
    assert parse_date("2024-02-29") == date(2024, 2, 29)
    assert parse_date(date(2024, 1, 1)) == date(2024, 1, 1)

    with pytest.raises(ValidationError):
        parse_date("2023-02-29")
    with pytest.raises(ValidationError):
        parse_date("29/02/2024")


def test_public_request_must_be_in_advance() -> None:
    validate_public_request(date(2024, 3, 2), Slot.MORNING, TODAY)

    with pytest.raises(ValidationError) as exc_info:
        validate_public_request(TODAY, Slot.MORNING, TODAY)
    assert exc_info.value.field == "date"

    with pytest.raises(ValidationError):
        validate_public_request(date(2024, 2, 1), Slot.AFTERNOON, TODAY)


def test_public_request_advance_follows_config() -> None:
    config = BookingConfig(min_advance_days=3)

    with pytest.raises(ValidationError):
        validate_public_request(date(2024, 3, 3), Slot.MORNING, TODAY, config)
    validate_public_request(date(2024, 3, 4), Slot.MORNING, TODAY, config)


def test_public_request_rejects_unspecified_slot() -> None:
    with pytest.raises(ValidationError) as exc_info:
        validate_public_request(date(2024, 3, 5), Slot.UNSPECIFIED, TODAY)
    assert exc_info.value.field == "slot"


def test_series_window() -> None:
    validate_series_window(date(2024, 1, 1), None, RecurrenceRule.WEEKLY)
    validate_series_window(date(2024, 1, 1), date(2023, 1, 1), RecurrenceRule.NONE)

    with pytest.raises(ValidationError) as exc_info:
        validate_series_window(date(2024, 1, 10), date(2024, 1, 1), RecurrenceRule.WEEKLY)
    assert exc_info.value.field == "end_date"


def test_booking_config_rejects_inconsistent_rollup() -> None:
    with pytest.raises(ValueError):
        BookingConfig(category_top_n=7, category_rollup_threshold=6)
    with pytest.raises(ValueError):
        BookingConfig(recurrence_cap_months=0)
