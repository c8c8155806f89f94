# backend/slotbook/routers/slots.py
"""
Slots API endpoints.

GET /vendors/{vendor_id}/slots - Bookable slots of a service for a day
"""

from datetime import date, datetime
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import BookingError
from ..redis_client import redis_client
from ..schemas.slots import SlotsDayResponse
from ..services.slots import calculate_service_availability, get_booking_config


router = APIRouter(prefix="/vendors", tags=["slots"])


def get_now() -> datetime:
    """Current wall-clock time; overridden in tests."""
    return datetime.now()


@router.get("/{vendor_id}/slots", response_model=SlotsDayResponse)
def get_slots_day(
    vendor_id: int,
    service_id: int,
    target_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Get available time slots for a service on a specific day."""
    try:
        result = calculate_service_availability(
            db=db,
            vendor_id=vendor_id,
            service_id=service_id,
            target_date=target_date,
            now=now,
            config=get_booking_config(),
            redis=redis_client,
        )
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return SlotsDayResponse(**result)
