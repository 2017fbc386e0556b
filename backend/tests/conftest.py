from __future__ import annotations

from datetime import date
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from lecture_booking.database import get_db
from lecture_booking.dependencies import get_today
from lecture_booking.main import app
from lecture_booking.models.generated import Base
from lecture_booking.services.scheduling import (
    BookingConfig,
    Reservation,
    ReservationStatus,
    ReservationWriter,
    Slot,
)
from lecture_booking.services.store import ReservationStore

# Fixed "today" for every test that goes through the API
TODAY = date(2024, 3, 1)


@pytest.fixture
def engine():
    # In-memory SQLite shared by every session of one test
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db) -> ReservationStore:
    return ReservationStore(db)


@pytest.fixture
def writer(store) -> ReservationWriter:
    return ReservationWriter(store, BookingConfig())


@pytest.fixture
def events():
    # Notification delivery must never leave the test process
    with (
        patch("lecture_booking.routers.reservations.emit_event") as public_emit,
        patch("lecture_booking.routers.admin_reservations.emit_event") as admin_emit,
    ):
        yield {"public": public_emit, "admin": admin_emit}


@pytest.fixture
def client(session_factory, events):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_reservation(
    d: date,
    slot: Slot = Slot.MORNING,
    rate: float = 1000,
    status: ReservationStatus = ReservationStatus.CONFIRMED,
    course: str | None = "校園巡迴演講",
    city: str | None = "臺北市",
    org: str | None = "Org",
    contact: str | None = "Contact",
    paid: bool = False,
    id: int = 0,
) -> Reservation:
    """Hand-built reservation for snapshot-based tests."""
    return Reservation(
        date=d,
        slot=slot,
        status=status,
        rate_per_hour=rate,
        payment_received=paid,
        course_name=course,
        city=city,
        org_name=org,
        contact_name=contact,
        id=id,
    )
