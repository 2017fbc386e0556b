# backend/lecture_booking/errors.py
"""
Error taxonomy of the booking engine.

Every error is reported to the immediate caller. HTTP mapping lives in
main.py (exception handlers).
"""

from datetime import date


class BookingError(Exception):
    """Base class for all booking engine errors."""


class ConflictError(BookingError):
    """Requested slot is already occupied on that date."""

    def __init__(self, target_date: date, slot):
        self.date = target_date
        self.slot = slot
        slot_name = getattr(slot, "value", slot)
        super().__init__(f"Slot {slot_name} on {target_date.isoformat()} is already taken")


class ValidationError(BookingError):
    """Malformed or missing input, rejected before any store interaction."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class ConfirmationRequiredError(ValidationError):
    """A series is too large to be written without explicit confirmation."""

    def __init__(self, count: int, threshold: int):
        self.count = count
        self.threshold = threshold
        super().__init__(
            "confirm",
            f"series of {count} reservations exceeds {threshold}, confirmation required",
        )


class NotFoundError(BookingError):
    def __init__(self, reservation_id: int):
        self.reservation_id = reservation_id
        super().__init__(f"Reservation {reservation_id} not found")


class StoreUnavailableError(BookingError):
    """The reservation store could not be reached."""


class PartialBatchFailure(BookingError):
    """
    Some inserts of a series failed after others succeeded.

    Already created reservations are NOT rolled back.
    """

    def __init__(self, succeeded: list[int], failed: list[str]):
        self.succeeded = succeeded
        self.failed = failed
        super().__init__(
            f"{len(failed)} of {len(succeeded) + len(failed)} reservations failed"
        )
