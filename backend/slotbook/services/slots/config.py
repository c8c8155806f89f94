# backend/slotbook/services/slots/config.py
"""
Slot engine configuration and "HH:MM" clock arithmetic.

All times are wall-clock minutes-of-day in the vendor's local time.
No timezone conversion, no spans across midnight.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from ...errors import InvalidSlot, InvalidTimeFormat

TIME_RE = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")

MINUTES_PER_DAY = 24 * 60
LAST_MINUTE = MINUTES_PER_DAY - 1  # 23:59


@dataclass(frozen=True)
class BookingConfig:
    """
    Configuration for the slot engine.

    Attributes:
        slot_step_minutes: Candidate grid step. Fixed policy, always 15.
        cache_ttl_seconds: Redis TTL for resolved day windows
    """
    slot_step_minutes: int = 15
    cache_ttl_seconds: int = 86400  # 24 hours

    def __post_init__(self):
        """Validate configuration."""
        if self.slot_step_minutes != 15:
            raise ValueError(f"slot_step_minutes must be 15, got {self.slot_step_minutes}")

    @property
    def slots_per_day(self) -> int:
        """Upper bound on candidates in a day (96)."""
        return MINUTES_PER_DAY // self.slot_step_minutes


@lru_cache
def get_booking_config() -> BookingConfig:
    """Get booking configuration (singleton)."""
    return BookingConfig()


def is_valid_time_str(value) -> bool:
    return isinstance(value, str) and TIME_RE.match(value) is not None


def time_str_to_minutes(value: str) -> int:
    """Parse "HH:MM" into minutes since midnight (0..1439)."""
    if not is_valid_time_str(value):
        raise InvalidTimeFormat(f"Invalid time format: {value!r}. Use HH:MM (e.g., 09:00)")
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time_str(minutes: int) -> str:
    """Format minutes since midnight as zero-padded "HH:MM"."""
    if minutes < 0 or minutes > LAST_MINUTE:
        raise InvalidSlot(f"Time {minutes} min is outside a single day (00:00-23:59)")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_time_str(value: str) -> str:
    """Zero-pad a valid "H:MM" into "HH:MM"."""
    return minutes_to_time_str(time_str_to_minutes(value))
