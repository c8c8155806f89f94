# backend/slotbook/services/slots/__init__.py
"""
Slots calculation module.

Resolver: effective opening window per (vendor, date), cached in Redis
Calculator: 15-minute candidate grid minus existing bookings
Lead time: same-day minimum notice
"""

from .config import BookingConfig, get_booking_config, time_str_to_minutes, minutes_to_time_str
from .calculator import TimeSlot, generate_slots, intervals_overlap
from .lead_time import filter_by_lead_time
from .resolver import DayWindow, resolve_day_window, resolve_window
from .redis_store import SlotsRedisStore
from .invalidator import invalidate_vendor_cache
from .availability import calculate_service_availability

__all__ = [
    "BookingConfig",
    "get_booking_config",
    "time_str_to_minutes",
    "minutes_to_time_str",
    "TimeSlot",
    "generate_slots",
    "intervals_overlap",
    "filter_by_lead_time",
    "DayWindow",
    "resolve_day_window",
    "resolve_window",
    "SlotsRedisStore",
    "invalidate_vendor_cache",
    "calculate_service_availability",
]
