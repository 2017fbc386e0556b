from __future__ import annotations

from datetime import date

import pytest

from lecture_booking.errors import ConflictError
from lecture_booking.services.scheduling import ReservationDraft, Slot
from lecture_booking.services.scheduling.availability import AvailabilityChecker
from lecture_booking.services.scheduling.slots import conflicts, occupied_by

DAY = date(2024, 3, 10)


def test_conflict_matrix() -> None:
    assert conflicts(Slot.MORNING, Slot.MORNING)
    assert not conflicts(Slot.MORNING, Slot.AFTERNOON)
    assert conflicts(Slot.UNSPECIFIED, Slot.MORNING)
    assert conflicts(Slot.AFTERNOON, Slot.UNSPECIFIED)
    assert conflicts(Slot.UNSPECIFIED, Slot.UNSPECIFIED)


def test_occupied_by_expands_whole_day() -> None:
    assert occupied_by(set()) == set()
    assert occupied_by({Slot.UNSPECIFIED}) == set(Slot)
    assert occupied_by({Slot.MORNING}) == {Slot.MORNING, Slot.UNSPECIFIED}


def test_empty_day_is_free(store) -> None:
    checker = AvailabilityChecker(store)
    assert checker.check_availability(DAY) == set()
    assert all(checker.is_free(DAY, slot) for slot in Slot)


def test_reservation_blocks_its_slot(store) -> None:
    store.insert(ReservationDraft(date=DAY, slot=Slot.MORNING))
    checker = AvailabilityChecker(store)

    assert not checker.is_free(DAY, Slot.MORNING)
    assert checker.is_free(DAY, Slot.AFTERNOON)
    assert not checker.is_free(DAY, Slot.UNSPECIFIED)
    assert checker.is_free(date(2024, 3, 11), Slot.MORNING)


def test_unspecified_blocks_whole_day(store) -> None:
    store.insert(ReservationDraft(date=DAY, slot=Slot.UNSPECIFIED))
    checker = AvailabilityChecker(store)

    assert checker.check_availability(DAY) == set(Slot)


def test_is_free_matches_check_availability(store) -> None:
    store.insert(ReservationDraft(date=DAY, slot=Slot.AFTERNOON))
    checker = AvailabilityChecker(store)
    occupied = checker.check_availability(DAY)

    for slot in Slot:
        assert checker.is_free(DAY, slot) == (slot not in occupied)


def test_cancelled_does_not_block(store, writer) -> None:
    created = store.insert(ReservationDraft(date=DAY, slot=Slot.MORNING))
    writer.cancel(created.id)

    assert writer.availability.is_free(DAY, Slot.MORNING)
    # The slot can be booked again
    writer.create_single(ReservationDraft(date=DAY, slot=Slot.MORNING))


def test_exclude_id_ignores_own_reservation(store) -> None:
    created = store.insert(ReservationDraft(date=DAY, slot=Slot.MORNING))
    checker = AvailabilityChecker(store)

    assert checker.is_free(DAY, Slot.MORNING, exclude_id=created.id)


def test_day_grid(store) -> None:
    store.insert(ReservationDraft(date=DAY, slot=Slot.AFTERNOON))
    grid = AvailabilityChecker(store).day_grid(DAY)

    assert [row["slot"] for row in grid] == [Slot.MORNING, Slot.AFTERNOON]
    assert grid[0]["is_available"] is True
    assert grid[0]["label"] == "09:00-12:00"
    assert grid[0]["hours"] == 3
    assert grid[1]["is_available"] is False


def test_second_request_for_same_slot_conflicts(writer) -> None:
    writer.create_single(ReservationDraft(date=DAY, slot=Slot.MORNING))

    with pytest.raises(ConflictError) as exc_info:
        writer.create_single(ReservationDraft(date=DAY, slot=Slot.MORNING))

    assert exc_info.value.date == DAY
    assert exc_info.value.slot is Slot.MORNING
