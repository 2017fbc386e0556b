# backend/lecture_booking/routers/availability.py
"""
Public availability: which slots of a day can still be requested.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_availability
from ..schemas.reservations import AvailabilityResponse, SlotStatus
from ..services.scheduling import AvailabilityChecker

router = APIRouter(prefix="/availability", tags=["availability"])


@router.get("/", response_model=AvailabilityResponse)
def get_day_availability(
    target_date: date = Query(..., alias="date"),
    availability: AvailabilityChecker = Depends(get_availability),
):
    """Morning/afternoon status for a date."""
    grid = availability.day_grid(target_date)
    return AvailabilityResponse(
        date=target_date,
        slots=[SlotStatus(**entry) for entry in grid],
    )
