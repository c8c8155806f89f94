# backend/slotbook/services/booking_status.py
"""
Booking status transitions.

PENDING   → CONFIRMED, CANCELLED
CONFIRMED → COMPLETED, CANCELLED, NO_SHOW
Terminal states have no exits. Leaving PENDING/CONFIRMED for a terminal
state frees the interval for new bookings.
"""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from ..errors import InvalidStatusTransition, NotFound
from ..models.enums import BookingStatus
from ..models.generated import Bookings
from .events import emit_event

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[BookingStatus, tuple[BookingStatus, ...]] = {
    BookingStatus.PENDING: (BookingStatus.CONFIRMED, BookingStatus.CANCELLED),
    BookingStatus.CONFIRMED: (
        BookingStatus.COMPLETED,
        BookingStatus.CANCELLED,
        BookingStatus.NO_SHOW,
    ),
    BookingStatus.COMPLETED: (),
    BookingStatus.CANCELLED: (),
    BookingStatus.NO_SHOW: (),
}


def can_transition(current: BookingStatus, new: BookingStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[current]


def update_booking_status(
    db: Session,
    booking_id: int,
    new_status: BookingStatus,
    cancel_reason: str | None = None,
    vendor_notes: str | None = None,
) -> Bookings:
    booking = db.get(Bookings, booking_id)
    if not booking:
        raise NotFound("Booking not found")

    current = BookingStatus(booking.status)
    if not can_transition(current, new_status):
        raise InvalidStatusTransition(
            f"Cannot change status from {current.name} to {new_status.name}"
        )

    booking.status = new_status.value
    if new_status == BookingStatus.CANCELLED:
        booking.cancel_reason = cancel_reason
    if vendor_notes is not None:
        booking.vendor_notes = vendor_notes
    booking.updated_at = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    db.commit()
    db.refresh(booking)

    logger.info(f"Booking {booking.id} status: {current.value} → {new_status.value}")

    emit_event("booking_status_changed", {
        "booking_id": booking.id,
        "vendor_id": booking.vendor_id,
        "old_status": current.value,
        "new_status": new_status.value,
    })

    return booking
