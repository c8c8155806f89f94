# backend/slotbook/services/booking_admission.py
"""
Booking admission: re-check a chosen slot and insert it atomically.

The conflict check never trusts the earlier slot listing. It runs inside
the same transaction as the insert, after locking the (vendor, date) row
in booking_day_locks:

- PostgreSQL: SELECT ... FOR UPDATE on that row. Other vendors and other
  dates of the same vendor are not serialised.
- SQLite: inserting the lock row takes the database write lock until
  commit, so a second admission waits and then sees the first booking.

The partial unique index on (vendor_id, date, start_time) is a second
guard at the database level.
"""

import logging
from datetime import date
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import InvalidSlot, SlotUnavailable
from ..models.enums import BookingStatus
from ..models.generated import BookingDayLocks, Bookings
from .events import emit_event
from .slots.availability import get_active_bookings, get_active_vendor, get_bookable_service
from .slots.calculator import blocked_intervals, intervals_overlap
from .slots.config import LAST_MINUTE, minutes_to_time_str, time_str_to_minutes

logger = logging.getLogger(__name__)

SLOT_TAKEN = "This time slot is no longer available"


def find_conflict(
    start_min: int,
    end_min: int,
    existing: Iterable[tuple[str, str]],
    buffer_minutes: int,
) -> tuple[int, int] | None:
    """
    First blocked interval overlapping [start_min, end_min), or None.

    Existing bookings are padded by the buffer at their end only.
    """
    for b_start, b_end in blocked_intervals(existing, buffer_minutes):
        if intervals_overlap(start_min, end_min, b_start, b_end):
            return b_start, b_end
    return None


def admit_booking(
    db: Session,
    vendor_id: int,
    service_id: int,
    customer_id: int,
    target_date: date,
    start_time: str,
    customer_notes: str | None = None,
) -> Bookings:
    """
    Admit a new booking or fail.

    Raises:
        InvalidTimeFormat: start_time is not "HH:MM"
        NotFound: vendor or service not bookable
        InvalidSlot: booking would run past 23:59
        SlotUnavailable: overlaps an active booking (incl. its buffer)
    """
    start_min = time_str_to_minutes(start_time)

    vendor = get_active_vendor(db, vendor_id)
    service = get_bookable_service(db, service_id, vendor_id)

    end_min = start_min + service.duration_min
    if end_min > LAST_MINUTE:
        raise InvalidSlot("Booking cannot extend past 23:59")

    start_str = minutes_to_time_str(start_min)
    end_str = minutes_to_time_str(end_min)
    date_str = target_date.isoformat()

    try:
        _lock_vendor_day(db, vendor_id, date_str)

        existing = [
            (b.start_time, b.end_time)
            for b in get_active_bookings(db, vendor_id, target_date)
        ]
        conflict = find_conflict(start_min, end_min, existing, vendor.buffer_minutes or 0)
        if conflict is not None:
            logger.info(
                f"Slot taken: vendor_id={vendor_id}, date={date_str}, "
                f"requested={start_str}-{end_str}, blocked={minutes_to_time_str(conflict[0])}"
            )
            raise SlotUnavailable(SLOT_TAKEN)

        booking = Bookings(
            vendor_id=vendor_id,
            service_id=service_id,
            customer_id=customer_id,
            date=date_str,
            start_time=start_str,
            end_time=end_str,
            status=BookingStatus.CONFIRMED.value,
            customer_notes=customer_notes,
        )
        db.add(booking)
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(f"Slot taken (unique index): vendor_id={vendor_id}, date={date_str}, start={start_str}")
        raise SlotUnavailable(SLOT_TAKEN) from None
    except Exception:
        db.rollback()
        raise

    db.refresh(booking)

    logger.info(
        f"Booking admitted: booking_id={booking.id}, vendor_id={vendor_id}, "
        f"service_id={service_id}, customer_id={customer_id}, "
        f"time={date_str} {start_str}-{end_str}"
    )

    emit_event("booking_created", {
        "booking_id": booking.id,
        "vendor_id": vendor_id,
        "customer_id": customer_id,
        "date": date_str,
        "start_time": start_str,
    })

    return booking


def _lock_vendor_day(db: Session, vendor_id: int, date_str: str) -> None:
    """Create the (vendor, date) lock row if missing and lock it for this transaction."""
    dialect = db.get_bind().dialect.name
    values = {"vendor_id": vendor_id, "date": date_str}

    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
        db.execute(insert(BookingDayLocks).values(**values).on_conflict_do_nothing())
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
        db.execute(insert(BookingDayLocks).values(**values).on_conflict_do_nothing())
    else:
        exists = db.get(BookingDayLocks, (vendor_id, date_str))
        if exists is None:
            try:
                with db.begin_nested():
                    db.add(BookingDayLocks(**values))
            except IntegrityError:
                pass  # created concurrently

    db.execute(
        select(BookingDayLocks)
        .where(
            BookingDayLocks.vendor_id == vendor_id,
            BookingDayLocks.date == date_str,
        )
        .with_for_update()
    )
