# backend/slotbook/routers/vendor_exceptions.py
# Date exceptions of a vendor. POST = upsert on (vendor_id, date), DELETE = hard.

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.generated import Vendors as DBVendors, VendorExceptions as DBVendorExceptions
from ..redis_client import redis_client
from ..schemas.vendor_exceptions import (
    VendorExceptionRead,
    VendorExceptionUpsert,
)
from ..services.slots import invalidate_vendor_cache

router = APIRouter(prefix="/vendors", tags=["vendor_exceptions"])


@router.get("/{vendor_id}/exceptions", response_model=list[VendorExceptionRead])
def list_exceptions(
    vendor_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db),
):
    _get_vendor_or_404(db, vendor_id)

    query = db.query(DBVendorExceptions).filter(DBVendorExceptions.vendor_id == vendor_id)
    if start_date is not None:
        query = query.filter(DBVendorExceptions.date >= start_date.isoformat())
    if end_date is not None:
        query = query.filter(DBVendorExceptions.date <= end_date.isoformat())
    return query.order_by(DBVendorExceptions.date).all()


@router.post(
    "/{vendor_id}/exceptions",
    response_model=VendorExceptionRead,
    status_code=status.HTTP_201_CREATED,
)
def upsert_exception(
    vendor_id: int,
    data: VendorExceptionUpsert,
    response: Response,
    db: Session = Depends(get_db),
):
    _get_vendor_or_404(db, vendor_id)

    obj = _get_exception(db, vendor_id, data.date)
    if obj is None:
        obj = DBVendorExceptions(vendor_id=vendor_id, date=data.date.isoformat())
        db.add(obj)
    else:
        response.status_code = status.HTTP_200_OK

    obj.is_closed = 1 if data.is_closed else 0
    obj.start_time = data.start_time
    obj.end_time = data.end_time
    obj.reason = data.reason or None

    db.commit()
    db.refresh(obj)

    invalidate_vendor_cache(redis_client, vendor_id, [data.date])
    return obj


@router.delete("/{vendor_id}/exceptions")
def delete_exception(
    vendor_id: int,
    target_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
):
    _get_vendor_or_404(db, vendor_id)

    obj = _get_exception(db, vendor_id, target_date)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    db.delete(obj)
    db.commit()

    invalidate_vendor_cache(redis_client, vendor_id, [target_date])
    return {"message": "Exception deleted successfully"}


def _get_vendor_or_404(db: Session, vendor_id: int) -> DBVendors:
    vendor = db.get(DBVendors, vendor_id)
    if not vendor:
        raise HTTPException(status_code=404, detail="Vendor not found")
    return vendor


def _get_exception(db: Session, vendor_id: int, target_date: date):
    return (
        db.query(DBVendorExceptions)
        .filter(
            DBVendorExceptions.vendor_id == vendor_id,
            DBVendorExceptions.date == target_date.isoformat(),
        )
        .first()
    )
