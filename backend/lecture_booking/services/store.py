# backend/lecture_booking/services/store.py
"""
Reservation store backed by SQLAlchemy.

Contract used by the engine:
  - equality-filtered reads on date
  - single-row atomic insert returning a generated id
  - single-row atomic field update
  - full snapshot read for reporting
  - delete by id

No multi-row transaction is relied upon: every write commits on its own.
"""

import logging
from contextlib import contextmanager
from dataclasses import asdict, fields
from datetime import date, datetime, timezone
from enum import Enum
from typing import Iterator

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from ..errors import ConflictError, NotFoundError, StoreUnavailableError, ValidationError
from ..models.generated import Reservations as DBReservation
from .scheduling.slots import Slot
from .scheduling.types import Reservation, ReservationDraft, ReservationStatus

logger = logging.getLogger(__name__)

DRAFT_FIELDS = tuple(f.name for f in fields(ReservationDraft))
BOOL_FIELDS = ("payment_received", "receipt_sent")


class ReservationStore:
    """Session wrapper exposing the reservation store contract."""

    def __init__(self, db: Session):
        self.db = db

    # ── Read ─────────────────────────────────────────────────────────────

    def list_active_on(self, target_date: date) -> list[Reservation]:
        """Non-cancelled reservations on a date."""
        with self._guard():
            rows = (
                self.db.query(DBReservation)
                .filter(
                    DBReservation.date == target_date.isoformat(),
                    DBReservation.status != ReservationStatus.CANCELLED.value,
                )
                .all()
            )
        return [_to_domain(row) for row in rows]

    def get(self, reservation_id: int) -> Reservation:
        with self._guard():
            row = self.db.get(DBReservation, reservation_id)
        if row is None:
            raise NotFoundError(reservation_id)
        return _to_domain(row)

    def snapshot(self) -> list[Reservation]:
        """Point-in-time copy of the whole collection, ordered by id."""
        with self._guard():
            rows = self.db.query(DBReservation).order_by(DBReservation.id).all()
        return [_to_domain(row) for row in rows]

    # ── Write ────────────────────────────────────────────────────────────

    def insert(self, draft: ReservationDraft) -> Reservation:
        """
        Insert one reservation.

        Raises:
            ConflictError: the store refused a second active reservation
                for the same date+slot.
        """
        row = DBReservation(**_to_columns(asdict(draft)))
        with self._guard():
            self.db.add(row)
            try:
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                if not _is_slot_violation(e):
                    raise ValidationError("reservation", f"rejected by the store: {e.orig}")
                logger.warning(
                    f"Store rejected duplicate reservation: "
                    f"date={draft.date.isoformat()}, slot={draft.slot.value}"
                )
                raise ConflictError(draft.date, draft.slot)
            self.db.refresh(row)
        return _to_domain(row)

    def update(self, reservation_id: int, **changes) -> Reservation:
        """Update fields of one reservation and return the new state."""
        with self._guard():
            row = self.db.get(DBReservation, reservation_id)
            if row is None:
                raise NotFoundError(reservation_id)

            for name, value in _to_columns(changes).items():
                setattr(row, name, value)
            row.updated_at = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
            target_date, target_slot = _parse_date(row.date), Slot(row.slot)

            try:
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                if not _is_slot_violation(e):
                    raise ValidationError("reservation", f"rejected by the store: {e.orig}")
                raise ConflictError(target_date, target_slot)
            self.db.refresh(row)
        return _to_domain(row)

    def delete(self, reservation_id: int) -> bool:
        """Remove a reservation. Returns False if it did not exist."""
        with self._guard():
            row = self.db.get(DBReservation, reservation_id)
            if row is None:
                return False
            self.db.delete(row)
            self.db.commit()
        return True

    # ── Helpers ──────────────────────────────────────────────────────────

    @contextmanager
    def _guard(self) -> Iterator[None]:
        try:
            yield
        except OperationalError as e:
            self.db.rollback()
            logger.exception("Reservation store unavailable")
            raise StoreUnavailableError("Reservation store is unavailable, try again later") from e


def _is_slot_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return "ux_reservations_active_slot" in message or "reservations.date, reservations.slot" in message


def _to_columns(values: dict) -> dict:
    """Domain values → column values (enums as tokens, dates as ISO text)."""
    result = {}
    for name, value in values.items():
        if name not in DRAFT_FIELDS:
            continue
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, date):
            value = value.isoformat()
        elif name in BOOL_FIELDS:
            value = 1 if value else 0
        result[name] = value
    return result


def _to_domain(row: DBReservation) -> Reservation:
    """ORM row → Reservation."""
    values = {name: getattr(row, name) for name in DRAFT_FIELDS}
    values["date"] = _parse_date(row.date)
    values["slot"] = Slot(row.slot)
    values["status"] = ReservationStatus(row.status)
    values["rate_per_hour"] = float(row.rate_per_hour or 0)
    for name in BOOL_FIELDS:
        values[name] = bool(values[name])

    return Reservation(
        id=row.id,
        created_at=_parse_timestamp(row.created_at),
        **values,
    )


def _parse_date(value) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _parse_timestamp(value) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", ""))
    except ValueError:
        return None
