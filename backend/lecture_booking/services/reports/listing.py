"""
Operator reservation list: filtering, sorting and filter options.
"""

from enum import Enum
from typing import Iterable, Optional

from ..scheduling.types import Reservation, ReservationStatus


class SortOrder(str, Enum):
    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    STATUS = "status"


STATUS_PRIORITY = {
    ReservationStatus.PENDING: 1,
    ReservationStatus.CONFIRMED: 2,
    ReservationStatus.COMPLETED: 3,
    ReservationStatus.CANCELLED: 4,
}


def filter_reservations(
    reservations: Iterable[Reservation],
    month: Optional[str] = None,
    org: Optional[str] = None,
    course: Optional[str] = None,
    search: Optional[str] = None,
) -> list[Reservation]:
    """
    Filter the list the way the operator screen does.

    Args:
        month: "YYYY-MM" prefix of the date
        org: exact organisation name
        course: exact course name
        search: case-insensitive text over org, date, course and contact
    """
    needle = search.strip().lower() if search else ""
    result = []

    for r in reservations:
        if month and not r.date.isoformat().startswith(month):
            continue
        if org and r.org_name != org:
            continue
        if course and r.course_name != course:
            continue
        if needle and not _matches(r, needle):
            continue
        result.append(r)

    return result


def _matches(r: Reservation, needle: str) -> bool:
    haystack = (
        r.org_name,
        r.date.isoformat(),
        r.course_name,
        r.contact_name,
    )
    return any(value and needle in value.lower() for value in haystack)


def sort_reservations(
    reservations: Iterable[Reservation],
    order: SortOrder = SortOrder.DATE_DESC,
) -> list[Reservation]:
    items = list(reservations)

    if order is SortOrder.DATE_ASC:
        return sorted(items, key=lambda r: r.date)

    if order is SortOrder.STATUS:
        # Priority ascending, newest date first inside one status
        by_date = sorted(items, key=lambda r: r.date, reverse=True)
        return sorted(by_date, key=lambda r: STATUS_PRIORITY[r.status])

    return sorted(items, key=lambda r: r.date, reverse=True)


def filter_options(reservations: Iterable[Reservation]) -> dict[str, list[str]]:
    """Distinct months, organisations and courses, sorted descending."""
    months: set[str] = set()
    orgs: set[str] = set()
    courses: set[str] = set()

    for r in reservations:
        months.add(r.date.isoformat()[:7])
        if r.org_name:
            orgs.add(r.org_name)
        if r.course_name:
            courses.add(r.course_name)

    return {
        "months": sorted(months, reverse=True),
        "orgs": sorted(orgs, reverse=True),
        "courses": sorted(courses, reverse=True),
    }
