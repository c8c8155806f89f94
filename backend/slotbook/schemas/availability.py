# backend/slotbook/schemas/availability.py

from pydantic import BaseModel, Field, field_validator, model_validator

from ..services.slots.config import is_valid_time_str, normalize_time_str


def _check_time(v: str) -> str:
    if not is_valid_time_str(v):
        raise ValueError("Invalid time format. Use HH:MM (e.g., 09:00)")
    return normalize_time_str(v)


class AvailabilityUpsert(BaseModel):
    day_of_week: int = Field(ge=0, le=6, description="0 = Sunday .. 6 = Saturday")
    start_time: str
    end_time: str
    is_active: bool = True

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        return _check_time(v)

    @model_validator(mode="after")
    def validate_range(self):
        if self.start_time >= self.end_time:
            raise ValueError("Start time must be before end time")
        return self


class ScheduleDay(BaseModel):
    """
    One entry of a bulk weekly update.

    Loosely typed: invalid active days are skipped, not rejected.
    """
    day_of_week: int
    start_time: str | None = None
    end_time: str | None = None
    is_active: bool = True


class ScheduleBulkUpdate(BaseModel):
    schedule: list[ScheduleDay]


class AvailabilityRead(BaseModel):
    id: int
    vendor_id: int
    day_of_week: int
    start_time: str
    end_time: str
    is_active: bool

    model_config = {"from_attributes": True}
