"""
Reservation writer.

Single reservations go through an explicit two-phase sequence:

  prepare_single()  → availability check, ConflictError if taken
  commit()          → recheck immediately before the insert, then insert

The check and the insert are separate store operations, so two requesters
can still race between them. The store's partial unique index on
(date, slot) closes that window for fixed slots; a rejected insert surfaces
as ConflictError too. Nothing is retried automatically.

Series (recurring) creation expands the dates, waits for confirmation when
the series is large, then inserts each occurrence independently. It skips
the application-level availability check; failed occurrences are reported
with PartialBatchFailure and successful ones are kept.
"""

import logging
from datetime import date
from typing import TYPE_CHECKING

from ...errors import (
    BookingError,
    ConfirmationRequiredError,
    ConflictError,
    PartialBatchFailure,
    ValidationError,
)
from .availability import AvailabilityChecker
from .config import BookingConfig, get_booking_config
from .recurrence import expand
from .slots import Slot
from .types import (
    RecurrenceRequest,
    RecurrenceRule,
    Reservation,
    ReservationDraft,
    ReservationStatus,
    SeriesPlan,
    SeriesResult,
)
from .validation import parse_rate, validate_series_window

if TYPE_CHECKING:
    from ..store import ReservationStore

logger = logging.getLogger(__name__)

# Fields an operator may edit in place (no scheduling impact)
EDITABLE_FIELDS = (
    "rate_per_hour",
    "course_id",
    "course_name",
    "org_name",
    "contact_name",
    "contact_phone",
    "contact_email",
    "contact_social",
    "city",
    "notes",
    "work_category",
    "fee_type",
    "source",
)


class ReservationWriter:

    def __init__(self, store: "ReservationStore", config: BookingConfig | None = None):
        self.store = store
        self.config = config or get_booking_config()
        self.availability = AvailabilityChecker(store)

    # ── Single ───────────────────────────────────────────────────────────

    def prepare_single(self, draft: ReservationDraft) -> ReservationDraft:
        """First phase: make sure the slot looks free."""
        # A cancelled draft holds no slot
        if draft.status.is_active and not self.availability.is_free(draft.date, draft.slot):
            raise ConflictError(draft.date, draft.slot)
        return draft

    def commit(self, draft: ReservationDraft) -> Reservation:
        """Second phase: recheck right before the insert, then insert."""
        if draft.status.is_active and not self.availability.is_free(draft.date, draft.slot):
            logger.info(
                f"Slot taken between check and commit: "
                f"date={draft.date.isoformat()}, slot={draft.slot.value}"
            )
            raise ConflictError(draft.date, draft.slot)

        reservation = self.store.insert(draft)
        logger.info(
            f"Reservation created: id={reservation.id}, "
            f"date={reservation.date.isoformat()}, slot={reservation.slot.value}, "
            f"status={reservation.status.value}"
        )
        return reservation

    def create_single(self, draft: ReservationDraft) -> Reservation:
        return self.commit(self.prepare_single(draft))

    # ── Series ───────────────────────────────────────────────────────────

    def plan_series(self, request: RecurrenceRequest) -> SeriesPlan:
        """
        Expand a recurrence request without writing anything.

        A request without rule or without end date degrades to a single
        reservation on the start date.
        """
        if request.rule is RecurrenceRule.NONE or request.end_date is None:
            draft = request.template.on(request.start_date)
            return SeriesPlan(dates=[request.start_date], drafts=[draft], single=True)

        validate_series_window(request.start_date, request.end_date, request.rule)

        dates = expand(request.start_date, request.rule, request.end_date, self.config)
        drafts = [request.template.on(d) for d in dates]
        return SeriesPlan(
            dates=dates,
            drafts=drafts,
            requires_confirmation=len(drafts) > self.config.series_confirm_threshold,
        )

    def commit_series(self, plan: SeriesPlan, confirmed: bool = False) -> SeriesResult:
        """
        Write an expanded series.

        Raises:
            ConfirmationRequiredError: plan is above the threshold and not confirmed
                (nothing has been written)
            PartialBatchFailure: some occurrences could not be inserted
        """
        if plan.single:
            return SeriesResult(created=[self.create_single(plan.drafts[0])])

        if plan.requires_confirmation and not confirmed:
            raise ConfirmationRequiredError(plan.count, self.config.series_confirm_threshold)

        created: list[Reservation] = []
        failed: list[str] = []

        for draft in plan.drafts:
            try:
                created.append(self.store.insert(draft))
            except BookingError as e:
                failed.append(f"{draft.date.isoformat()}: {e}")

        logger.info(
            f"Series written: created={len(created)}, failed={len(failed)}, "
            f"slot={plan.drafts[0].slot.value if plan.drafts else '-'}"
        )

        if failed:
            raise PartialBatchFailure(
                succeeded=[r.id for r in created],
                failed=failed,
            )
        return SeriesResult(created=created)

    def create_series(self, request: RecurrenceRequest, confirmed: bool = False) -> SeriesResult:
        return self.commit_series(self.plan_series(request), confirmed)

    # ── Mutations ────────────────────────────────────────────────────────

    def update_status(self, reservation_id: int, status: ReservationStatus) -> Reservation:
        """Set the status. Re-applying the current status is a no-op."""
        current = self.store.get(reservation_id)
        if current.status is status:
            return current

        if not current.status.is_active and status.is_active:
            # Reactivating a cancelled reservation claims its slot again
            if not self.availability.is_free(current.date, current.slot, exclude_id=current.id):
                raise ConflictError(current.date, current.slot)

        updated = self.store.update(reservation_id, status=status)
        logger.info(
            f"Reservation {reservation_id} status: "
            f"{current.status.value} → {updated.status.value}"
        )
        return updated

    def cancel(self, reservation_id: int) -> Reservation:
        return self.update_status(reservation_id, ReservationStatus.CANCELLED)

    def mark_payment_received(self, reservation_id: int, received: bool = True) -> Reservation:
        current = self.store.get(reservation_id)
        if current.payment_received == received:
            return current
        return self.store.update(reservation_id, payment_received=received)

    def mark_receipt_sent(self, reservation_id: int, sent: bool = True) -> Reservation:
        current = self.store.get(reservation_id)
        if current.receipt_sent == sent:
            return current
        return self.store.update(reservation_id, receipt_sent=sent)

    def update_details(self, reservation_id: int, **changes) -> Reservation:
        """Edit descriptive fields and the hourly rate."""
        unknown = sorted(set(changes) - set(EDITABLE_FIELDS))
        if unknown:
            raise ValidationError(unknown[0], "field cannot be edited here")

        if "rate_per_hour" in changes:
            changes["rate_per_hour"] = parse_rate(changes["rate_per_hour"])

        if not changes:
            return self.store.get(reservation_id)
        return self.store.update(reservation_id, **changes)

    def reschedule(self, reservation_id: int, new_date: date, new_slot: Slot) -> Reservation:
        """Move a reservation to another date/slot, checking the target first."""
        current = self.store.get(reservation_id)
        if current.date == new_date and current.slot is new_slot:
            return current

        if current.status.is_active and not self.availability.is_free(
            new_date, new_slot, exclude_id=current.id
        ):
            raise ConflictError(new_date, new_slot)

        return self.store.update(reservation_id, date=new_date, slot=new_slot)

    def delete(self, reservation_id: int) -> bool:
        deleted = self.store.delete(reservation_id)
        if deleted:
            logger.info(f"Reservation {reservation_id} deleted")
        return deleted
