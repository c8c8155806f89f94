# backend/slotbook/services/slots/availability.py
"""
Service availability for one vendor on one day.

Pipeline:
  resolve_day_window → generate_slots → filter_by_lead_time

Pure read path: no locks, no reservations. A listed slot may be taken by
the time it is admitted.
"""

from datetime import date, datetime
from redis import Redis
from sqlalchemy.orm import Session

from ...errors import NotFound
from ...models.enums import ACTIVE_STATUSES
from .config import BookingConfig, get_booking_config
from .calculator import generate_slots
from .lead_time import filter_by_lead_time
from .resolver import resolve_day_window


NO_SLOTS_LEFT = "No available slots on this date"
PAST_DATE = "Date cannot be in the past"


def calculate_service_availability(
    db: Session,
    vendor_id: int,
    service_id: int,
    target_date: date,
    now: datetime,
    config: BookingConfig | None = None,
    redis: Redis | None = None,
) -> dict:
    """
    Calculate bookable slots for a service.

    Raises:
        NotFound: vendor missing/inactive or service not bookable.

    Returns:
        Dict for SlotsDayResponse. `message` is set when `slots` is empty,
        including past dates, which list nothing.
    """
    config = config or get_booking_config()

    vendor = get_active_vendor(db, vendor_id)
    service = get_bookable_service(db, service_id, vendor_id)

    result = {
        "vendor_id": vendor_id,
        "service_id": service_id,
        "date": target_date.isoformat(),
        "service_duration_min": service.duration_min,
        "slots": [],
        "message": None,
    }

    if target_date < now.date():
        result["message"] = PAST_DATE
        return result

    # Step 1: Opening window (weekly schedule merged with exceptions)
    window = resolve_day_window(db, vendor_id, target_date, config, redis)
    if not window.is_open:
        result["message"] = window.reason
        return result

    # Step 2: Candidates against existing bookings
    existing = [
        (b.start_time, b.end_time)
        for b in get_active_bookings(db, vendor_id, target_date)
    ]
    slots = generate_slots(
        window.start_time,
        window.end_time,
        service.duration_min,
        vendor.buffer_minutes or 0,
        existing,
        config,
    )

    # Step 3: Same-day lead time
    slots = filter_by_lead_time(slots, target_date, now, vendor.min_lead_time_hours or 0)

    result["slots"] = [
        {"start_time": s.start_time, "end_time": s.end_time}
        for s in slots
    ]
    if not slots:
        result["message"] = NO_SLOTS_LEFT
    return result


# ── Database helpers ─────────────────────────────────────────────────────


def get_active_vendor(db: Session, vendor_id: int):
    """Get vendor by ID or raise NotFound if missing or inactive."""
    from ...models.generated import Vendors

    vendor = db.get(Vendors, vendor_id)
    if not vendor or not vendor.is_active:
        raise NotFound("Vendor not found")
    return vendor


def get_bookable_service(db: Session, service_id: int, vendor_id: int):
    """Get service owned by vendor, active and not soft-deleted."""
    from ...models.generated import Services

    service = (
        db.query(Services)
        .filter(
            Services.id == service_id,
            Services.vendor_id == vendor_id,
            Services.is_active == 1,
            Services.deleted_at.is_(None),
        )
        .first()
    )
    if not service:
        raise NotFound("Service not found")
    return service


def get_active_bookings(db: Session, vendor_id: int, target_date: date) -> list:
    """Get PENDING/CONFIRMED bookings for vendor on date."""
    from ...models.generated import Bookings

    return (
        db.query(Bookings)
        .filter(
            Bookings.vendor_id == vendor_id,
            Bookings.date == target_date.isoformat(),
            Bookings.status.in_(ACTIVE_STATUSES),
        )
        .order_by(Bookings.start_time)
        .all()
    )
