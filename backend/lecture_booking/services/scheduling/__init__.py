"""
Slot scheduling module.

Calendar arithmetic, slot catalog, availability checks, recurrence
expansion and the reservation writer.
"""

from .config import BookingConfig, get_booking_config
from .slots import Slot, all_slots, hours_of
from .types import (
    RecurrenceRequest,
    RecurrenceRule,
    Reservation,
    ReservationDraft,
    ReservationStatus,
    SeriesPlan,
    SeriesResult,
)
from .availability import AvailabilityChecker
from .recurrence import expand
from .writer import ReservationWriter

__all__ = [
    "BookingConfig",
    "get_booking_config",
    "Slot",
    "all_slots",
    "hours_of",
    "RecurrenceRequest",
    "RecurrenceRule",
    "Reservation",
    "ReservationDraft",
    "ReservationStatus",
    "SeriesPlan",
    "SeriesResult",
    "AvailabilityChecker",
    "expand",
    "ReservationWriter",
]
