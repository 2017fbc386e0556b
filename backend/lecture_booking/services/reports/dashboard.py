"""
Operator dashboard figures.

Computed from a snapshot and an explicit "today", like the reports.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable

from ..scheduling.calendar import add_days
from ..scheduling.config import BookingConfig, get_booking_config
from ..scheduling.types import Reservation, ReservationStatus

BILLED_STATUSES = (ReservationStatus.CONFIRMED, ReservationStatus.COMPLETED)


class DetailKind(str, Enum):
    INCOME = "income"
    PENDING = "pending"
    UPCOMING = "upcoming"
    UNPAID = "unpaid"


@dataclass
class DashboardSummary:
    month_income: float = 0.0
    pending_count: int = 0
    upcoming_count: int = 0
    unpaid_amount: float = 0.0
    pending: list[Reservation] = field(default_factory=list)
    schedule: list[Reservation] = field(default_factory=list)


@dataclass
class DashboardDetail:
    kind: DetailKind
    items: list[Reservation]
    total_fee: float | None = None


def _in_month(r: Reservation, today: date) -> bool:
    return r.date.year == today.year and r.date.month == today.month


def _is_unpaid(r: Reservation) -> bool:
    return r.status in BILLED_STATUSES and not r.payment_received


def dashboard_summary(
    reservations: Iterable[Reservation],
    today: date,
    config: BookingConfig | None = None,
) -> DashboardSummary:
    """
    Headline figures:
      - income of today's month (non-cancelled)
      - pending requests
      - upcoming reservations within upcoming_days
      - unpaid amount of confirmed/completed reservations
    """
    config = config or get_booking_config()
    horizon = add_days(today, config.upcoming_days)
    summary = DashboardSummary()
    upcoming: list[Reservation] = []

    for r in sorted(reservations, key=lambda r: r.date):
        if not r.status.is_active:
            continue

        fee = r.computed_fee

        if _in_month(r, today):
            summary.month_income += fee

        if r.status is ReservationStatus.PENDING:
            summary.pending_count += 1
            summary.pending.append(r)

        if today <= r.date <= horizon:
            upcoming.append(r)

        if _is_unpaid(r):
            summary.unpaid_amount += fee

    summary.upcoming_count = len(upcoming)
    summary.schedule = upcoming[:config.dashboard_schedule_limit]
    return summary


def dashboard_detail(
    reservations: Iterable[Reservation],
    kind: DetailKind,
    today: date,
) -> DashboardDetail:
    """Full list behind one dashboard figure."""
    items = list(reservations)

    if kind is DetailKind.INCOME:
        selected = [r for r in items if r.status.is_active and _in_month(r, today)]
        selected.sort(key=lambda r: r.date, reverse=True)
    elif kind is DetailKind.PENDING:
        selected = [r for r in items if r.status is ReservationStatus.PENDING]
        selected.sort(key=lambda r: r.date)
    elif kind is DetailKind.UPCOMING:
        selected = [r for r in items if r.status.is_active and r.date >= today]
        selected.sort(key=lambda r: r.date)
    else:
        selected = [r for r in items if _is_unpaid(r)]
        selected.sort(key=lambda r: r.date)

    total = None
    if kind in (DetailKind.INCOME, DetailKind.UNPAID):
        total = sum(r.computed_fee for r in selected)

    return DashboardDetail(kind=kind, items=selected, total_fee=total)
