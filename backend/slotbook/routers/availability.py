# backend/slotbook/routers/availability.py
# Weekly schedule of a vendor. Writes are upserts on (vendor_id, day_of_week).

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.generated import Availability as DBAvailability, Vendors as DBVendors
from ..redis_client import redis_client
from ..schemas.availability import (
    AvailabilityRead,
    AvailabilityUpsert,
    ScheduleBulkUpdate,
)
from ..services.slots import invalidate_vendor_cache
from ..services.slots.config import is_valid_time_str, normalize_time_str

router = APIRouter(prefix="/vendors", tags=["availability"])

# Hours stored for a day that is created already inactive
DEFAULT_START = "09:00"
DEFAULT_END = "17:00"


@router.get("/{vendor_id}/availability", response_model=list[AvailabilityRead])
def list_availability(vendor_id: int, db: Session = Depends(get_db)):
    _get_vendor_or_404(db, vendor_id)
    return (
        db.query(DBAvailability)
        .filter(DBAvailability.vendor_id == vendor_id)
        .order_by(DBAvailability.day_of_week)
        .all()
    )


@router.post(
    "/{vendor_id}/availability",
    response_model=AvailabilityRead,
    status_code=status.HTTP_201_CREATED,
)
def upsert_availability(
    vendor_id: int,
    data: AvailabilityUpsert,
    response: Response,
    db: Session = Depends(get_db),
):
    """201 when the day is created, 200 when an existing day is replaced."""
    _get_vendor_or_404(db, vendor_id)
    if _get_day(db, vendor_id, data.day_of_week) is not None:
        response.status_code = status.HTTP_200_OK
    obj = _upsert_day(
        db, vendor_id, data.day_of_week, data.start_time, data.end_time, data.is_active
    )
    db.commit()
    db.refresh(obj)

    invalidate_vendor_cache(redis_client, vendor_id)
    return obj


@router.put("/{vendor_id}/availability", response_model=list[AvailabilityRead])
def bulk_update_availability(
    vendor_id: int,
    data: ScheduleBulkUpdate,
    db: Session = Depends(get_db),
):
    """Replace the weekly schedule day by day; invalid entries are skipped."""
    _get_vendor_or_404(db, vendor_id)

    results = []
    for day in data.schedule:
        if day.day_of_week < 0 or day.day_of_week > 6:
            continue

        if not day.is_active:
            # Inactive days keep whatever hours they had
            existing = _get_day(db, vendor_id, day.day_of_week)
            if existing is not None:
                existing.is_active = 0
                results.append(existing)
            else:
                results.append(_upsert_day(
                    db, vendor_id, day.day_of_week, DEFAULT_START, DEFAULT_END, False
                ))
            continue

        if not is_valid_time_str(day.start_time) or not is_valid_time_str(day.end_time):
            continue

        start_time = normalize_time_str(day.start_time)
        end_time = normalize_time_str(day.end_time)
        if start_time >= end_time:
            continue

        results.append(_upsert_day(db, vendor_id, day.day_of_week, start_time, end_time, True))

    db.commit()
    for obj in results:
        db.refresh(obj)

    invalidate_vendor_cache(redis_client, vendor_id)
    return results


# ── Helpers ──────────────────────────────────────────────────────────────


def _get_vendor_or_404(db: Session, vendor_id: int) -> DBVendors:
    vendor = db.get(DBVendors, vendor_id)
    if not vendor:
        raise HTTPException(status_code=404, detail="Vendor not found")
    return vendor


def _get_day(db: Session, vendor_id: int, day_of_week: int):
    return (
        db.query(DBAvailability)
        .filter(
            DBAvailability.vendor_id == vendor_id,
            DBAvailability.day_of_week == day_of_week,
        )
        .first()
    )


def _upsert_day(
    db: Session,
    vendor_id: int,
    day_of_week: int,
    start_time: str,
    end_time: str,
    is_active: bool,
) -> DBAvailability:
    obj = _get_day(db, vendor_id, day_of_week)
    if obj is None:
        obj = DBAvailability(vendor_id=vendor_id, day_of_week=day_of_week)
        db.add(obj)

    obj.start_time = start_time
    obj.end_time = end_time
    obj.is_active = 1 if is_active else 0
    db.flush()
    return obj
