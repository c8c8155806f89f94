# backend/slotbook/routers/bookings.py
# POST = admission (409 on conflict), PATCH /{id}/status = transitions, DELETE = 405

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import BookingError
from ..models.enums import BookingStatus
from ..models.generated import Bookings as DBBookings
from ..schemas.bookings import (
    BookingCreate,
    BookingRead,
    BookingStatusUpdate,
)
from ..services.booking_admission import admit_booking
from ..services.booking_status import update_booking_status

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("/", response_model=list[BookingRead])
def list_bookings(
    vendor_id: Optional[int] = None,
    target_date: Optional[date] = Query(None, alias="date"),
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    query = db.query(DBBookings)
    if vendor_id is not None:
        query = query.filter(DBBookings.vendor_id == vendor_id)
    if target_date is not None:
        query = query.filter(DBBookings.date == target_date.isoformat())
    if status_filter is not None:
        query = query.filter(DBBookings.status == status_filter.value)
    return query.order_by(DBBookings.date, DBBookings.start_time).all()


@router.get("/{id}", response_model=BookingRead)
def get_booking(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBBookings, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.post("/", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    db: Session = Depends(get_db),
):
    try:
        return admit_booking(
            db,
            vendor_id=data.vendor_id,
            service_id=data.service_id,
            customer_id=data.customer_id,
            target_date=data.date,
            start_time=data.start_time,
            customer_notes=data.customer_notes,
        )
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.patch("/{id}/status", response_model=BookingRead)
def change_booking_status(
    id: int,
    data: BookingStatusUpdate,
    db: Session = Depends(get_db),
):
    try:
        return update_booking_status(
            db,
            booking_id=id,
            new_status=data.status,
            cancel_reason=data.cancel_reason,
            vendor_notes=data.vendor_notes,
        )
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{id}")
def delete_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )
