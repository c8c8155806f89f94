# backend/slotbook/schemas/vendor_exceptions.py

from datetime import date
from typing import Optional
from pydantic import BaseModel, model_validator

from ..services.slots.config import is_valid_time_str, normalize_time_str


class VendorExceptionUpsert(BaseModel):
    date: date
    is_closed: bool = True
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    reason: Optional[str] = None

    @model_validator(mode="after")
    def validate_hours(self):
        if self.is_closed:
            # Closed days carry no hours
            self.start_time = None
            self.end_time = None
            return self

        if not self.start_time or not self.end_time:
            raise ValueError("Start and end times required for modified hours")
        if not is_valid_time_str(self.start_time) or not is_valid_time_str(self.end_time):
            raise ValueError("Invalid time format. Use HH:MM")

        self.start_time = normalize_time_str(self.start_time)
        self.end_time = normalize_time_str(self.end_time)
        if self.start_time >= self.end_time:
            raise ValueError("Start time must be before end time")
        return self


class VendorExceptionRead(BaseModel):
    id: int
    vendor_id: int
    date: date
    is_closed: bool
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    reason: Optional[str] = None

    model_config = {"from_attributes": True}
