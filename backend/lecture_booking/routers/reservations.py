# backend/lecture_booking/routers/reservations.py
"""
Public reservation requests.

A request is checked, prepared, rechecked and only then inserted (see
ReservationWriter). A taken slot answers 409 so the requester picks again.
"""

from dataclasses import replace
from datetime import date

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_today, get_writer
from ..schemas.reservations import PublicReservationCreate, ReservationRead
from ..services.course_catalog import resolve_course_name
from ..services.events import emit_event, reservation_payload
from ..services.scheduling import ReservationDraft, ReservationStatus, ReservationWriter
from ..services.scheduling.validation import validate_public_request

router = APIRouter(prefix="/reservations", tags=["reservations"])


@router.post("/", response_model=ReservationRead, status_code=status.HTTP_201_CREATED)
def request_reservation(
    data: PublicReservationCreate,
    db: Session = Depends(get_db),
    writer: ReservationWriter = Depends(get_writer),
    today: date = Depends(get_today),
):
    """
    Create a pending reservation from the public booking page.

    Steps:
    1. Validate date (tomorrow or later) and slot (public grid only)
    2. Check the slot is free
    3. Resolve the course name from the catalog
    4. Recheck and insert
    5. Emit reservation_created for the notification consumer
    """
    validate_public_request(data.date, data.slot, today)

    draft = ReservationDraft(
        date=data.date,
        slot=data.slot,
        status=ReservationStatus.PENDING,
        rate_per_hour=data.rate_per_hour,
        course_id=data.course_id,
        course_name=data.course_name,
        org_name=data.org_name,
        contact_name=data.contact_name,
        contact_phone=data.contact_phone,
        contact_email=data.contact_email,
        contact_social=data.contact_social,
        city=data.city,
        notes=data.notes,
        fee_type=data.fee_type,
        source="web",
    )
    draft = writer.prepare_single(draft)

    draft = replace(draft, course_name=resolve_course_name(db, data.course_id, data.course_name))
    reservation = writer.commit(draft)

    emit_event("reservation_created", {
        **reservation_payload(reservation),
        "initiated_by": {
            "role": "requester",
            "channel": "web",
        },
    })

    return ReservationRead.from_domain(reservation)
