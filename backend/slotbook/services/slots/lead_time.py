# backend/slotbook/services/slots/lead_time.py
"""
Same-day minimum notice.

Only today's slots are trimmed; future dates pass through unchanged.
"""

from datetime import date, datetime

from .calculator import TimeSlot
from .config import time_str_to_minutes


def lead_time_cutoff(now: datetime, min_lead_hours: int) -> int:
    """Earliest bookable minute-of-day today."""
    return now.hour * 60 + now.minute + min_lead_hours * 60


def filter_by_lead_time(
    slots: list[TimeSlot],
    requested_date: date,
    now: datetime,
    min_lead_hours: int,
) -> list[TimeSlot]:
    if requested_date != now.date():
        return list(slots)

    cutoff = lead_time_cutoff(now, min_lead_hours)
    return [slot for slot in slots if time_str_to_minutes(slot.start_time) >= cutoff]
