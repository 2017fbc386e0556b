"""
Slot catalog.

Two bookable slots per day (morning, afternoon) plus an "unspecified"
whole-day slot used only for operator-entered reservations.
"""

from enum import Enum


class Slot(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    UNSPECIFIED = "unspecified"

    @property
    def label(self) -> str:
        return SLOT_LABELS[self]

    @property
    def hours(self) -> int:
        return SLOT_HOURS[self]


SLOT_HOURS: dict[Slot, int] = {
    Slot.MORNING: 3,
    Slot.AFTERNOON: 3,
    Slot.UNSPECIFIED: 1,
}

SLOT_LABELS: dict[Slot, str] = {
    Slot.MORNING: "09:00-12:00",
    Slot.AFTERNOON: "13:30-16:30",
    Slot.UNSPECIFIED: "全天/不指定",
}


def hours_of(slot: Slot) -> int:
    """Billable hours of a slot."""
    return SLOT_HOURS[slot]


def all_slots() -> tuple[Slot, ...]:
    """Per-day grid shown to public requesters (Unspecified excluded)."""
    return (Slot.MORNING, Slot.AFTERNOON)


def conflicts(a: Slot, b: Slot) -> bool:
    """
    Whether two reservations on the same date collide.

    Unspecified occupies the whole day: it collides with every slot.
    """
    if a is Slot.UNSPECIFIED or b is Slot.UNSPECIFIED:
        return True
    return a is b


def occupied_by(taken: set[Slot]) -> set[Slot]:
    """Expand the slots held by existing reservations to every slot they block."""
    return {slot for slot in Slot if any(conflicts(slot, t) for t in taken)}
