# backend/lecture_booking/schemas/reservations.py

from dataclasses import asdict
from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ..services.scheduling.slots import Slot
from ..services.scheduling.types import Reservation, ReservationStatus
from ..services.scheduling.validation import parse_rate


class ReservationFields(BaseModel):
    """Descriptive fields shared by every create schema."""
    course_id: Optional[int] = None
    course_name: Optional[str] = None
    org_name: Optional[str] = None
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    contact_social: Optional[str] = None
    city: Optional[str] = None
    notes: Optional[str] = None
    fee_type: Optional[str] = None

    rate_per_hour: float = 0.0

    @field_validator("rate_per_hour", mode="before")
    @classmethod
    def normalize_rate(cls, v: Any) -> float:
        """Non-negative number, anything else becomes 0."""
        return parse_rate(v)


class PublicReservationCreate(ReservationFields):
    """Request submitted from the public booking page."""
    date: date
    slot: Slot
    org_name: str = Field(min_length=1)
    contact_name: str = Field(min_length=1)
    contact_phone: str = Field(min_length=1)
    contact_social: str = Field(min_length=1)


class AdminReservationCreate(ReservationFields):
    """
    Operator entry. With `rule` and `end_date` set it creates a series,
    otherwise a single reservation on `date`.
    """
    date: date
    slot: Slot
    status: ReservationStatus = ReservationStatus.PENDING
    payment_received: bool = False
    receipt_sent: bool = False
    work_category: Optional[str] = None
    source: Optional[str] = None

    rule: Optional[str] = Field(None, description="none / weekly / biweekly / monthly")
    end_date: Optional[date] = None


class ReservationRead(BaseModel):
    id: int
    date: date
    slot: Slot
    slot_label: str
    hours: int
    status: ReservationStatus
    status_label: str

    rate_per_hour: float
    computed_fee: float
    payment_received: bool
    receipt_sent: bool

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

    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, r: Reservation) -> "ReservationRead":
        return cls(
            **asdict(r),
            slot_label=r.slot.label,
            hours=r.hours,
            status_label=r.status.label,
            computed_fee=r.computed_fee,
        )


class ReservationPatch(BaseModel):
    """Editable descriptive fields; only the ones sent are changed."""
    rate_per_hour: Optional[float] = None
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


class StatusUpdate(BaseModel):
    status: ReservationStatus


class PaymentUpdate(BaseModel):
    received: bool = True


class ReceiptUpdate(BaseModel):
    sent: bool = True


class RescheduleRequest(BaseModel):
    date: date
    slot: Slot


class SlotStatus(BaseModel):
    slot: Slot
    label: str
    hours: int
    is_available: bool


class AvailabilityResponse(BaseModel):
    date: date
    slots: list[SlotStatus]


class SeriesPreviewResponse(BaseModel):
    count: int
    dates: list[date]
    requires_confirmation: bool
    confirm_threshold: int


class SeriesCreateResponse(BaseModel):
    count: int
    created: list[ReservationRead]


class FilterOptionsResponse(BaseModel):
    months: list[str]
    orgs: list[str]
    courses: list[str]
