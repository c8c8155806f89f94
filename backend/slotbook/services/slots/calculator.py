# backend/slotbook/services/slots/calculator.py
"""
Candidate slot generation for one open window.

Grid:
  Fixed 15-minute cadence anchored at window start.
  A candidate [t, t + duration) must end at or before window end.

Blocking:
  Each existing booking occupies [start, end + buffer).
  The buffer pads only the tail of existing bookings, never the candidate.
"""

from dataclasses import dataclass
from typing import Iterable

from ...errors import InvalidSlot
from .config import BookingConfig, get_booking_config, time_str_to_minutes, minutes_to_time_str


@dataclass(frozen=True)
class TimeSlot:
    start_time: str
    end_time: str


def intervals_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Half-open overlap of [a_start, a_end) and [b_start, b_end)."""
    return not (a_end <= b_start or a_start >= b_end)


def blocked_intervals(
    existing: Iterable[tuple[str, str]],
    buffer_minutes: int,
) -> list[tuple[int, int]]:
    """Minute ranges occupied by existing bookings, padded by buffer at the end."""
    return [
        (time_str_to_minutes(start), time_str_to_minutes(end) + buffer_minutes)
        for start, end in existing
    ]


def generate_slots(
    window_start: str,
    window_end: str,
    service_duration: int,
    buffer_minutes: int,
    existing: Iterable[tuple[str, str]],
    config: BookingConfig | None = None,
) -> list[TimeSlot]:
    """
    Generate all free slots in the window, ascending.

    Args:
        window_start: Opening time "HH:MM"
        window_end: Closing time "HH:MM"
        service_duration: Service length in minutes
        buffer_minutes: Vendor padding after each existing booking
        existing: (start_time, end_time) of PENDING/CONFIRMED bookings

    Returns:
        List of TimeSlot. Empty list = nothing fits.
    """
    config = config or get_booking_config()

    if service_duration <= 0:
        raise InvalidSlot(f"Service duration must be positive, got {service_duration}")
    if buffer_minutes < 0:
        raise InvalidSlot(f"Buffer must not be negative, got {buffer_minutes}")

    start_min = time_str_to_minutes(window_start)
    end_min = time_str_to_minutes(window_end)
    blocked = blocked_intervals(existing, buffer_minutes)

    slots: list[TimeSlot] = []
    t = start_min
    while t + service_duration <= end_min:
        slot_end = t + service_duration
        if not any(intervals_overlap(t, slot_end, b_start, b_end) for b_start, b_end in blocked):
            slots.append(TimeSlot(minutes_to_time_str(t), minutes_to_time_str(slot_end)))
        t += config.slot_step_minutes

    return slots
