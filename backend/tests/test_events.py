from __future__ import annotations

import json
from datetime import date
from unittest.mock import patch

from conftest import make_reservation
from lecture_booking.services.events import EVENTS_QUEUE, emit_event, reservation_payload
from lecture_booking.services.scheduling import Slot


def test_emit_event_pushes_json() -> None:
    with patch("lecture_booking.services.events.redis_client") as redis_client:
        emit_event("reservation_created", {"reservation_id": 7, "org_name": "臺大"})

    queue, raw = redis_client.rpush.call_args.args
    event = json.loads(raw)
    assert queue == EVENTS_QUEUE
    assert event["type"] == "reservation_created"
    assert event["reservation_id"] == 7
    assert event["org_name"] == "臺大"
    assert "ts" in event


def test_emit_event_never_raises() -> None:
    with patch("lecture_booking.services.events.redis_client") as redis_client:
        redis_client.rpush.side_effect = ConnectionError("redis down")
        emit_event("reservation_created", {"reservation_id": 1})


def test_reservation_payload() -> None:
    payload = reservation_payload(make_reservation(date(2024, 3, 5), slot=Slot.AFTERNOON, id=3))

    assert payload["reservation_id"] == 3
    assert payload["date"] == "2024-03-05"
    assert payload["slot"] == "afternoon"
    assert payload["slot_label"] == "13:30-16:30"
    assert payload["status"] == "confirmed"
