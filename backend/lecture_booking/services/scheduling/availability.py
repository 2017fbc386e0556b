"""
Availability of slots on a date.

Reads non-cancelled reservations of the date from the store and reports
which slots they block. An "unspecified" reservation blocks the whole day,
and any fixed-slot reservation blocks a same-day "unspecified" one.

Pure read: nothing is cached between calls, so a recheck right before a
commit always sees the store's current state.
"""

from datetime import date
from typing import TYPE_CHECKING, Optional

from .slots import Slot, all_slots, occupied_by

if TYPE_CHECKING:
    from ..store import ReservationStore


class AvailabilityChecker:

    def __init__(self, store: "ReservationStore"):
        self.store = store

    def check_availability(
        self,
        target_date: date,
        exclude_id: Optional[int] = None,
    ) -> set[Slot]:
        """
        Slots occupied on target_date.

        Args:
            target_date: Date to check
            exclude_id: Ignore this reservation (used when moving it)
        """
        taken = {
            r.slot
            for r in self.store.list_active_on(target_date)
            if r.id != exclude_id
        }
        return occupied_by(taken)

    def is_free(
        self,
        target_date: date,
        slot: Slot,
        exclude_id: Optional[int] = None,
    ) -> bool:
        return slot not in self.check_availability(target_date, exclude_id)

    def day_grid(self, target_date: date) -> list[dict]:
        """Per-slot status of the public grid for a date."""
        occupied = self.check_availability(target_date)
        return [
            {
                "slot": slot,
                "label": slot.label,
                "hours": slot.hours,
                "is_available": slot not in occupied,
            }
            for slot in all_slots()
        ]
