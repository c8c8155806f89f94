# backend/slotbook/schemas/bookings.py

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field

from ..models.enums import BookingStatus


class BookingCreate(BaseModel):
    vendor_id: int
    service_id: int
    customer_id: int

    date: date
    start_time: str = Field(description="Time in HH:MM format")

    customer_notes: Optional[str] = None

    model_config = {"from_attributes": True}


class BookingStatusUpdate(BaseModel):
    status: BookingStatus
    cancel_reason: Optional[str] = None
    vendor_notes: Optional[str] = None


class BookingRead(BaseModel):
    id: int

    vendor_id: int
    service_id: int
    customer_id: int

    date: date
    start_time: str
    end_time: str

    status: BookingStatus
    customer_notes: Optional[str] = None
    vendor_notes: Optional[str] = None
    cancel_reason: Optional[str] = None

    created_at: str
    updated_at: str

    model_config = {"from_attributes": True}
