# backend/slotbook/schemas/slots.py
"""
Pydantic schemas for slots API.
"""

from datetime import date
from pydantic import BaseModel, Field


class TimeSlotRead(BaseModel):
    """One bookable opening."""
    start_time: str  # "HH:MM"
    end_time: str    # "HH:MM"

    model_config = {"from_attributes": True}


class SlotsDayResponse(BaseModel):
    """Bookable slots of a service for one day."""
    vendor_id: int
    service_id: int
    date: date
    service_duration_min: int
    slots: list[TimeSlotRead]
    message: str | None = Field(
        None,
        description="Why there are no slots (closed day, fully booked). Set only when slots is empty.",
    )

    model_config = {"from_attributes": True}
