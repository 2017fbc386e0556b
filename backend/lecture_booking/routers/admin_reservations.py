# backend/lecture_booking/routers/admin_reservations.py
"""
Operator reservation management.

List/filter/sort, single and recurring creation, status and payment
updates, edits, rescheduling and deletion.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_store, get_writer
from ..schemas.reservations import (
    AdminReservationCreate,
    FilterOptionsResponse,
    PaymentUpdate,
    ReceiptUpdate,
    RescheduleRequest,
    ReservationPatch,
    ReservationRead,
    SeriesCreateResponse,
    SeriesPreviewResponse,
    StatusUpdate,
)
from ..services.course_catalog import resolve_course_name
from ..services.events import emit_event, reservation_payload
from ..services.reports import SortOrder, filter_options, filter_reservations, sort_reservations
from ..services.scheduling import (
    RecurrenceRequest,
    ReservationDraft,
    ReservationWriter,
)
from ..services.scheduling.validation import parse_rule
from ..services.store import ReservationStore

router = APIRouter(prefix="/admin/reservations", tags=["admin-reservations"])


def _to_request(data: AdminReservationCreate, db: Session) -> RecurrenceRequest:
    """Validated body → recurrence request (rule token checked here)."""
    rule = parse_rule(data.rule)
    template = ReservationDraft(
        date=data.date,
        slot=data.slot,
        status=data.status,
        rate_per_hour=data.rate_per_hour,
        payment_received=data.payment_received,
        receipt_sent=data.receipt_sent,
        course_id=data.course_id,
        course_name=resolve_course_name(db, data.course_id, data.course_name),
        org_name=data.org_name,
        contact_name=data.contact_name,
        contact_phone=data.contact_phone,
        contact_email=data.contact_email,
        contact_social=data.contact_social,
        city=data.city,
        notes=data.notes,
        work_category=data.work_category,
        fee_type=data.fee_type,
        source=data.source,
    )
    return RecurrenceRequest(
        start_date=data.date,
        rule=rule,
        end_date=data.end_date,
        template=template,
    )


# ── Read ─────────────────────────────────────────────────────────────────


@router.get("/", response_model=list[ReservationRead])
def list_reservations(
    month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$"),
    org: Optional[str] = None,
    course: Optional[str] = None,
    search: Optional[str] = None,
    sort: SortOrder = SortOrder.DATE_DESC,
    store: ReservationStore = Depends(get_store),
):
    snapshot = store.snapshot()
    selected = filter_reservations(snapshot, month=month, org=org, course=course, search=search)
    return [ReservationRead.from_domain(r) for r in sort_reservations(selected, sort)]


@router.get("/filters", response_model=FilterOptionsResponse)
def get_filter_options(store: ReservationStore = Depends(get_store)):
    return FilterOptionsResponse(**filter_options(store.snapshot()))


@router.get("/{id}", response_model=ReservationRead)
def get_reservation(id: int, store: ReservationStore = Depends(get_store)):
    return ReservationRead.from_domain(store.get(id))


# ── Create ───────────────────────────────────────────────────────────────


@router.post("/preview", response_model=SeriesPreviewResponse)
def preview_series(
    data: AdminReservationCreate,
    db: Session = Depends(get_db),
    writer: ReservationWriter = Depends(get_writer),
):
    """Dates a request would create, without writing anything."""
    plan = writer.plan_series(_to_request(data, db))
    return SeriesPreviewResponse(
        count=plan.count,
        dates=plan.dates,
        requires_confirmation=plan.requires_confirmation,
        confirm_threshold=writer.config.series_confirm_threshold,
    )


@router.post("/", response_model=SeriesCreateResponse, status_code=status.HTTP_201_CREATED)
def create_reservations(
    data: AdminReservationCreate,
    confirm: bool = False,
    db: Session = Depends(get_db),
    writer: ReservationWriter = Depends(get_writer),
):
    """
    Create one reservation, or a series when `rule` and `end_date` are set.

    Series larger than the confirmation threshold answer 428 until the
    request is repeated with `?confirm=true`.
    """
    result = writer.create_series(_to_request(data, db), confirmed=confirm)
    return SeriesCreateResponse(
        count=result.count,
        created=[ReservationRead.from_domain(r) for r in result.created],
    )


# ── Update ───────────────────────────────────────────────────────────────


@router.post("/{id}/status", response_model=ReservationRead)
def update_status(
    id: int,
    data: StatusUpdate,
    writer: ReservationWriter = Depends(get_writer),
):
    before = writer.store.get(id)
    reservation = writer.update_status(id, data.status)

    if reservation.status is not before.status:
        emit_event("reservation_status_changed", {
            **reservation_payload(reservation),
            "previous_status": before.status.value,
        })

    return ReservationRead.from_domain(reservation)


@router.post("/{id}/payment", response_model=ReservationRead)
def update_payment(
    id: int,
    data: PaymentUpdate,
    writer: ReservationWriter = Depends(get_writer),
):
    return ReservationRead.from_domain(writer.mark_payment_received(id, data.received))


@router.post("/{id}/receipt", response_model=ReservationRead)
def update_receipt(
    id: int,
    data: ReceiptUpdate,
    writer: ReservationWriter = Depends(get_writer),
):
    return ReservationRead.from_domain(writer.mark_receipt_sent(id, data.sent))


@router.patch("/{id}", response_model=ReservationRead)
def patch_reservation(
    id: int,
    data: ReservationPatch,
    db: Session = Depends(get_db),
    writer: ReservationWriter = Depends(get_writer),
):
    changes = data.model_dump(exclude_unset=True)
    if "course_id" in changes and changes["course_id"] is not None:
        changes["course_name"] = resolve_course_name(db, changes["course_id"], changes.get("course_name"))
    return ReservationRead.from_domain(writer.update_details(id, **changes))


@router.post("/{id}/reschedule", response_model=ReservationRead)
def reschedule_reservation(
    id: int,
    data: RescheduleRequest,
    writer: ReservationWriter = Depends(get_writer),
):
    return ReservationRead.from_domain(writer.reschedule(id, data.date, data.slot))


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reservation(id: int, writer: ReservationWriter = Depends(get_writer)):
    writer.delete(id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
