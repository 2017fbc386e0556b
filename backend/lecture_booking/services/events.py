"""
backend/lecture_booking/services/events.py

Event emitter: pushes events to a Redis queue for the notification consumer
(e-mail to the lecturer on new requests, status notices to requesters).

Delivery is fire-and-forget: a failed push is logged and never raised, so a
committed reservation is never reported as failed because of it.
"""

import json
import time
import logging

from ..redis_client import redis_client

logger = logging.getLogger(__name__)

EVENTS_QUEUE = "events:p2p"


def emit_event(event_type: str, payload: dict) -> None:
    """
    Emit an event (instant delivery).

    Pushed to Redis list `events:p2p` for the consumer loop.
    """
    event = {
        "type": event_type,
        **payload,
        "ts": int(time.time()),
    }
    try:
        redis_client.rpush(EVENTS_QUEUE, json.dumps(event, ensure_ascii=False, default=str))
        logger.info(f"Event emitted: {event_type} → {EVENTS_QUEUE}")
    except Exception as e:
        logger.error(f"Failed to emit event {event_type}: {e}")


def reservation_payload(reservation) -> dict:
    """Event fields describing a reservation."""
    return {
        "reservation_id": reservation.id,
        "date": reservation.date.isoformat(),
        "slot": reservation.slot.value,
        "slot_label": reservation.slot.label,
        "status": reservation.status.value,
        "course_name": reservation.course_name,
        "org_name": reservation.org_name,
        "contact_name": reservation.contact_name,
        "contact_email": reservation.contact_email,
    }
