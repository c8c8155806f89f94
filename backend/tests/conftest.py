"""Shared test fixtures and helpers."""

import os

# Configure before any slotbook import reads settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("REDIS_URL", None)

from datetime import date, datetime
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from slotbook.database import get_db
from slotbook.main import app
from slotbook.models.generated import (
    Availability,
    Base,
    Bookings,
    Services,
    VendorExceptions,
    Vendors,
)
from slotbook.routers.slots import get_now


# Monday
TODAY = date(2026, 10, 19)
NOW = datetime(2026, 10, 19, 10, 0)
NEXT_SUNDAY = date(2026, 10, 25)
NEXT_MONDAY = date(2026, 10, 26)

SUNDAY, MONDAY = 0, 1


@pytest.fixture
def engine():
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
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: NOW
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_vendor(
    db,
    buffer_minutes: int = 0,
    min_lead_time_hours: int = 0,
    is_active: bool = True,
    business_name: str = "Studio Nine",
) -> Vendors:
    vendor = Vendors(
        business_name=business_name,
        buffer_minutes=buffer_minutes,
        min_lead_time_hours=min_lead_time_hours,
        is_active=1 if is_active else 0,
    )
    db.add(vendor)
    db.commit()
    db.refresh(vendor)
    return vendor


def make_service(
    db,
    vendor: Vendors,
    duration_min: int = 30,
    is_active: bool = True,
    deleted_at: Optional[str] = None,
    name: str = "Haircut",
) -> Services:
    service = Services(
        vendor_id=vendor.id,
        name=name,
        duration_min=duration_min,
        price=25.0,
        is_active=1 if is_active else 0,
        deleted_at=deleted_at,
    )
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


def set_weekly(
    db,
    vendor: Vendors,
    day_of_week: int,
    start_time: str = "09:00",
    end_time: str = "17:00",
    is_active: bool = True,
) -> Availability:
    record = Availability(
        vendor_id=vendor.id,
        day_of_week=day_of_week,
        start_time=start_time,
        end_time=end_time,
        is_active=1 if is_active else 0,
    )
    db.add(record)
    db.commit()
    return record


def make_exception(
    db,
    vendor: Vendors,
    target_date: date,
    is_closed: bool = True,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    reason: Optional[str] = None,
) -> VendorExceptions:
    record = VendorExceptions(
        vendor_id=vendor.id,
        date=target_date.isoformat(),
        is_closed=1 if is_closed else 0,
        start_time=start_time,
        end_time=end_time,
        reason=reason,
    )
    db.add(record)
    db.commit()
    return record


def make_booking(
    db,
    vendor: Vendors,
    service: Services,
    target_date: date,
    start_time: str,
    end_time: str,
    status: str = "confirmed",
    customer_id: int = 1,
) -> Bookings:
    booking = Bookings(
        vendor_id=vendor.id,
        service_id=service.id,
        customer_id=customer_id,
        date=target_date.isoformat(),
        start_time=start_time,
        end_time=end_time,
        status=status,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking
