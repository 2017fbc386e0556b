from __future__ import annotations

from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from lecture_booking.errors import (
    ConfirmationRequiredError,
    ConflictError,
    PartialBatchFailure,
    ValidationError,
)
from lecture_booking.services.scheduling import (
    RecurrenceRequest,
    ReservationDraft,
    ReservationStatus,
    ReservationWriter,
    Slot,
)
from lecture_booking.services.scheduling.types import RecurrenceRule
from lecture_booking.services.store import ReservationStore

DAY = date(2024, 3, 10)


def _series(start: date, end: date | None, rule=RecurrenceRule.WEEKLY, slot=Slot.MORNING) -> RecurrenceRequest:
    return RecurrenceRequest(
        start_date=start,
        rule=rule,
        end_date=end,
        template=ReservationDraft(date=start, slot=slot, org_name="Org", rate_per_hour=1000),
    )


# ── Single ───────────────────────────────────────────────────────────────


def test_create_single_returns_stored_reservation(writer) -> None:
    created = writer.create_single(
        ReservationDraft(date=DAY, slot=Slot.AFTERNOON, rate_per_hour=1200, org_name="Org")
    )

    assert created.id > 0
    assert created.status is ReservationStatus.PENDING
    assert created.computed_fee == 3600
    assert writer.store.get(created.id) == created


def test_recheck_catches_insert_between_prepare_and_commit(writer, store) -> None:
    draft = ReservationDraft(date=DAY, slot=Slot.MORNING)
    writer.prepare_single(draft)

    # Competing requester lands first
    store.insert(ReservationDraft(date=DAY, slot=Slot.MORNING, org_name="Other"))

    with pytest.raises(ConflictError):
        writer.commit(draft)
    assert len(store.list_active_on(DAY)) == 1


def test_store_index_rejects_race_past_the_recheck(writer, store) -> None:
    draft = ReservationDraft(date=DAY, slot=Slot.MORNING)
    writer.create_single(draft)

    with patch.object(writer.availability, "is_free", return_value=True):
        with pytest.raises(ConflictError):
            writer.commit(draft)

    assert len(store.list_active_on(DAY)) == 1


def test_cancelled_entry_on_taken_slot_is_stored(writer, store) -> None:
    writer.create_single(ReservationDraft(date=DAY, slot=Slot.MORNING))

    cancelled = writer.create_single(
        ReservationDraft(date=DAY, slot=Slot.MORNING, status=ReservationStatus.CANCELLED)
    )

    assert cancelled.status is ReservationStatus.CANCELLED
    assert len(store.snapshot()) == 2
    assert len(store.list_active_on(DAY)) == 1


def test_unspecified_conflicts_with_fixed_slot(writer) -> None:
    writer.create_single(ReservationDraft(date=DAY, slot=Slot.AFTERNOON))

    with pytest.raises(ConflictError):
        writer.create_single(ReservationDraft(date=DAY, slot=Slot.UNSPECIFIED))


# ── Series ───────────────────────────────────────────────────────────────


def test_series_created(writer, store) -> None:
    result = writer.create_series(_series(date(2024, 1, 15), date(2024, 2, 5)))

    assert result.count == 4
    assert [r.date for r in result.created] == [
        date(2024, 1, 15),
        date(2024, 1, 22),
        date(2024, 1, 29),
        date(2024, 2, 5),
    ]
    assert all(r.org_name == "Org" for r in result.created)
    assert len(store.snapshot()) == 4


def test_series_without_end_date_is_single(writer) -> None:
    plan = writer.plan_series(_series(DAY, None))
    assert plan.single
    assert plan.dates == [DAY]

    writer.create_series(_series(DAY, None))
    # Single path: availability is checked
    with pytest.raises(ConflictError):
        writer.create_series(_series(DAY, None))


def test_series_end_before_start_rejected(writer) -> None:
    with pytest.raises(ValidationError):
        writer.plan_series(_series(date(2024, 2, 1), date(2024, 1, 1)))


def test_confirmation_threshold_boundary(writer) -> None:
    twenty = writer.plan_series(_series(date(2024, 1, 1), date(2024, 5, 13)))
    twenty_one = writer.plan_series(_series(date(2024, 1, 1), date(2024, 5, 20)))

    assert twenty.count == 20
    assert not twenty.requires_confirmation
    assert twenty_one.count == 21
    assert twenty_one.requires_confirmation


def test_unconfirmed_large_series_writes_nothing() -> None:
    store = MagicMock(spec=ReservationStore)
    writer = ReservationWriter(store)

    with pytest.raises(ConfirmationRequiredError) as exc_info:
        writer.create_series(_series(date(2024, 1, 1), date(2024, 5, 20)))

    assert exc_info.value.count == 21
    assert exc_info.value.threshold == 20
    store.insert.assert_not_called()


def test_confirmed_large_series_is_written(writer, store) -> None:
    with pytest.raises(ConfirmationRequiredError):
        writer.create_series(_series(date(2024, 1, 1), date(2024, 5, 20)))
    assert store.snapshot() == []

    result = writer.create_series(_series(date(2024, 1, 1), date(2024, 5, 20)), confirmed=True)
    assert result.count == 21
    assert len(store.snapshot()) == 21


def test_partial_series_keeps_successes(writer, store) -> None:
    existing = store.insert(ReservationDraft(date=date(2024, 1, 22), slot=Slot.MORNING))

    with pytest.raises(PartialBatchFailure) as exc_info:
        writer.create_series(_series(date(2024, 1, 15), date(2024, 2, 5)))

    failure = exc_info.value
    assert len(failure.succeeded) == 3
    assert len(failure.failed) == 1
    assert failure.failed[0].startswith("2024-01-22")

    ids = {r.id for r in store.snapshot()}
    assert ids == set(failure.succeeded) | {existing.id}


# ── Mutations ────────────────────────────────────────────────────────────


def test_update_status_is_idempotent(writer) -> None:
    created = writer.create_single(ReservationDraft(date=DAY, slot=Slot.MORNING))

    first = writer.update_status(created.id, ReservationStatus.CONFIRMED)
    second = writer.update_status(created.id, ReservationStatus.CONFIRMED)

    assert first.status is ReservationStatus.CONFIRMED
    assert second == first


def test_reactivation_checks_the_slot(writer) -> None:
    old = writer.create_single(ReservationDraft(date=DAY, slot=Slot.MORNING))
    writer.cancel(old.id)
    writer.create_single(ReservationDraft(date=DAY, slot=Slot.MORNING))

    with pytest.raises(ConflictError):
        writer.update_status(old.id, ReservationStatus.PENDING)
    assert writer.store.get(old.id).status is ReservationStatus.CANCELLED


def test_reactivation_of_free_slot(writer) -> None:
    old = writer.create_single(ReservationDraft(date=DAY, slot=Slot.MORNING))
    writer.cancel(old.id)

    assert writer.update_status(old.id, ReservationStatus.CONFIRMED).status is ReservationStatus.CONFIRMED


def test_payment_and_receipt_flags(writer) -> None:
    created = writer.create_single(ReservationDraft(date=DAY, slot=Slot.MORNING))

    paid = writer.mark_payment_received(created.id)
    assert paid.payment_received
    assert writer.mark_payment_received(created.id) == paid

    assert writer.mark_receipt_sent(created.id).receipt_sent
    assert not writer.mark_payment_received(created.id, received=False).payment_received


def test_update_details(writer) -> None:
    created = writer.create_single(ReservationDraft(date=DAY, slot=Slot.MORNING))

    updated = writer.update_details(created.id, org_name="New Org", rate_per_hour="2,000")
    assert updated.org_name == "New Org"
    assert updated.rate_per_hour == 2000
    assert updated.computed_fee == 6000

    with pytest.raises(ValidationError):
        writer.update_details(created.id, slot=Slot.AFTERNOON)


def test_reschedule(writer) -> None:
    first = writer.create_single(ReservationDraft(date=DAY, slot=Slot.MORNING))
    second = writer.create_single(ReservationDraft(date=DAY, slot=Slot.AFTERNOON))

    with pytest.raises(ConflictError):
        writer.reschedule(second.id, DAY, Slot.MORNING)

    moved = writer.reschedule(first.id, date(2024, 3, 11), Slot.MORNING)
    assert moved.date == date(2024, 3, 11)
    assert writer.availability.is_free(DAY, Slot.MORNING)


def test_delete_is_idempotent(writer) -> None:
    created = writer.create_single(ReservationDraft(date=DAY, slot=Slot.MORNING))

    assert writer.delete(created.id) is True
    assert writer.delete(created.id) is False
    assert writer.availability.is_free(DAY, Slot.MORNING)
