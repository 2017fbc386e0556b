"""
CSV export of a report window.

Shape consumed by the download collaborator:
  - UTF-8 byte-order mark first (spreadsheet compatibility)
  - header: Date,Slot,CourseName,Org,Contact,City,RatePerHour,TotalFee,Status,PaymentReceived
  - one row per non-cancelled reservation of the window, in display order
  - fields containing the delimiter or quotes are quoted
"""

import csv
import io
from typing import Iterable

from ..scheduling.types import Reservation
from .aggregation import ReportWindow, filter_window
from .listing import SortOrder, sort_reservations

BOM = "\ufeff"

HEADER = [
    "Date",
    "Slot",
    "CourseName",
    "Org",
    "Contact",
    "City",
    "RatePerHour",
    "TotalFee",
    "Status",
    "PaymentReceived",
]

PAYMENT_LABELS = {True: "是", False: "否"}


def export_rows(
    reservations: Iterable[Reservation],
    window: ReportWindow,
    order: SortOrder = SortOrder.DATE_DESC,
) -> list[Reservation]:
    """Reservations that go into the export, in display order."""
    return sort_reservations(filter_window(reservations, window), order)


def export_csv(
    reservations: Iterable[Reservation],
    window: ReportWindow,
    order: SortOrder = SortOrder.DATE_DESC,
) -> str:
    buffer = io.StringIO()
    buffer.write(BOM)

    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(HEADER)

    for r in export_rows(reservations, window, order):
        writer.writerow([
            r.date.isoformat(),
            r.slot.label,
            r.course_name or "",
            r.org_name or "",
            r.contact_name or "",
            r.city or "",
            _number(r.rate_per_hour),
            _number(r.computed_fee),
            r.status.value,
            PAYMENT_LABELS[r.payment_received],
        ])

    return buffer.getvalue()


def export_filename(window: ReportWindow) -> str:
    if window.year is not None:
        return f"course_report_{window.year}.csv"
    return f"course_report_{window.start.isoformat()}_{window.end.isoformat()}.csv"


def _number(value: float) -> str:
    """Whole amounts without a trailing .0"""
    if float(value).is_integer():
        return str(int(value))
    return str(value)
