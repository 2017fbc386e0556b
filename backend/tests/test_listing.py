from __future__ import annotations

from datetime import date

from conftest import make_reservation
from lecture_booking.services.reports import (
    SortOrder,
    filter_options,
    filter_reservations,
    sort_reservations,
)
from lecture_booking.services.scheduling import ReservationStatus

SNAPSHOT = [
    make_reservation(date(2024, 1, 10), org="Alpha", course="A", contact="Chen", id=1,
                     status=ReservationStatus.COMPLETED),
    make_reservation(date(2024, 2, 5), org="Beta", course="B", contact="Lin", id=2,
                     status=ReservationStatus.PENDING),
    make_reservation(date(2024, 2, 20), org="Alpha", course="B", contact="Wang", id=3,
                     status=ReservationStatus.CANCELLED),
    make_reservation(date(2024, 3, 1), org="Gamma", course="A", contact="Huang", id=4,
                     status=ReservationStatus.PENDING),
]


def _ids(items) -> list[int]:
    return [r.id for r in items]


def test_filter_by_month_org_course() -> None:
    assert _ids(filter_reservations(SNAPSHOT, month="2024-02")) == [2, 3]
    assert _ids(filter_reservations(SNAPSHOT, org="Alpha")) == [1, 3]
    assert _ids(filter_reservations(SNAPSHOT, course="A", org="Gamma")) == [4]


def test_search_is_case_insensitive() -> None:
    assert _ids(filter_reservations(SNAPSHOT, search="beta")) == [2]
    assert _ids(filter_reservations(SNAPSHOT, search="WANG")) == [3]
    assert _ids(filter_reservations(SNAPSHOT, search="2024-03")) == [4]


def test_no_filters_keeps_everything() -> None:
    assert _ids(filter_reservations(SNAPSHOT)) == [1, 2, 3, 4]


def test_sort_orders() -> None:
    assert _ids(sort_reservations(SNAPSHOT)) == [4, 3, 2, 1]
    assert _ids(sort_reservations(SNAPSHOT, SortOrder.DATE_ASC)) == [1, 2, 3, 4]
    # pending first (newest first), then completed, then cancelled
    assert _ids(sort_reservations(SNAPSHOT, SortOrder.STATUS)) == [4, 2, 1, 3]


def test_filter_options() -> None:
    options = filter_options(SNAPSHOT)

    assert options["months"] == ["2024-03", "2024-02", "2024-01"]
    assert options["orgs"] == ["Gamma", "Beta", "Alpha"]
    assert options["courses"] == ["B", "A"]
