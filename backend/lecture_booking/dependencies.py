# backend/lecture_booking/dependencies.py
"""FastAPI dependencies wiring the store and the writer to a DB session."""

from datetime import date

from fastapi import Depends
from sqlalchemy.orm import Session

from .database import get_db
from .services.scheduling import AvailabilityChecker, ReservationWriter, get_booking_config
from .services.store import ReservationStore


def get_store(db: Session = Depends(get_db)) -> ReservationStore:
    return ReservationStore(db)


def get_writer(store: ReservationStore = Depends(get_store)) -> ReservationWriter:
    return ReservationWriter(store, get_booking_config())


def get_availability(store: ReservationStore = Depends(get_store)) -> AvailabilityChecker:
    return AvailabilityChecker(store)


def get_today() -> date:
    """Current local date (overridden in tests)."""
    return date.today()
