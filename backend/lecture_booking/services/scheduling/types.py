"""
Domain types shared by the scheduling and reporting services.

Reservations handed around the engine are plain dataclasses, decoupled from
the ORM rows, so snapshots can be passed in explicitly (and built by hand in
tests).
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Optional

from .slots import Slot, hours_of


class ReservationStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

    @property
    def is_active(self) -> bool:
        return self is not ReservationStatus.CANCELLED


STATUS_LABELS: dict[ReservationStatus, str] = {
    ReservationStatus.PENDING: "待確認",
    ReservationStatus.CONFIRMED: "已確認",
    ReservationStatus.COMPLETED: "已完成",
    ReservationStatus.CANCELLED: "已取消",
}


class RecurrenceRule(str, Enum):
    NONE = "none"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class ReservationDraft:
    """Everything a reservation needs before the store assigns id/created_at."""
    date: date
    slot: Slot
    status: ReservationStatus = ReservationStatus.PENDING
    rate_per_hour: float = 0.0
    payment_received: bool = False
    receipt_sent: bool = False

    # Descriptive fields, opaque to the engine
    course_id: Optional[int] = None
    course_name: Optional[str] = None
    org_name: Optional[str] = None
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    contact_social: Optional[str] = None
    city: Optional[str] = None
    notes: Optional[str] = None
    work_category: Optional[str] = None
    fee_type: Optional[str] = None
    source: Optional[str] = None

    def on(self, target_date: date) -> "ReservationDraft":
        """Copy of the draft moved to another date."""
        return replace(self, date=target_date)


@dataclass(frozen=True)
class Reservation(ReservationDraft):
    id: int = 0
    created_at: Optional[datetime] = None

    @property
    def hours(self) -> int:
        return hours_of(self.slot)

    @property
    def computed_fee(self) -> float:
        return self.rate_per_hour * hours_of(self.slot)


@dataclass(frozen=True)
class RecurrenceRequest:
    """Transient request to book one slot repeatedly; never persisted."""
    start_date: date
    rule: RecurrenceRule
    template: ReservationDraft
    end_date: Optional[date] = None


@dataclass
class SeriesPlan:
    """Expanded series, ready to be written once confirmed (if needed)."""
    dates: list[date]
    drafts: list[ReservationDraft] = field(default_factory=list)
    requires_confirmation: bool = False
    single: bool = False  # no recurrence: written through the single-slot path

    @property
    def count(self) -> int:
        return len(self.drafts)


@dataclass
class SeriesResult:
    created: list[Reservation]

    @property
    def count(self) -> int:
        return len(self.created)
