# backend/slotbook/services/slots/resolver.py
"""
Effective opening window of a vendor for one calendar date.

Date exceptions always win over the weekly schedule:
✓ closed exception → closed, even if the weekday is open
✓ open exception with hours → those hours, even if the weekday is closed
✗ no exception → weekly record for the weekday, if present and active
"""

from dataclasses import dataclass
from datetime import date

from redis import Redis
from sqlalchemy.orm import Session

from .config import BookingConfig, get_booking_config
from .redis_store import SlotsRedisStore


CLOSED_ON_DATE = "Closed on this date"
NOT_AVAILABLE_ON_DAY = "Not available on this day"


@dataclass(frozen=True)
class DayWindow:
    is_open: bool
    start_time: str | None = None
    end_time: str | None = None
    reason: str | None = None

    @classmethod
    def open(cls, start_time: str, end_time: str) -> "DayWindow":
        return cls(is_open=True, start_time=start_time, end_time=end_time)

    @classmethod
    def closed(cls, reason: str) -> "DayWindow":
        return cls(is_open=False, reason=reason)

    def to_dict(self) -> dict:
        return {
            "is_open": self.is_open,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "reason": self.reason,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DayWindow":
        return cls(
            is_open=bool(data["is_open"]),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            reason=data.get("reason"),
        )


def day_of_week(target_date: date) -> int:
    """Civil weekday with Sunday = 0 .. Saturday = 6."""
    return target_date.isoweekday() % 7


def resolve_window(weekly, exception) -> DayWindow:
    """
    Merge one weekly record and one date exception (either may be None).

    An open exception without both times falls back to the weekly record.
    """
    if exception is not None:
        if exception.is_closed:
            return DayWindow.closed(exception.reason or CLOSED_ON_DATE)
        if exception.start_time and exception.end_time:
            return DayWindow.open(exception.start_time, exception.end_time)

    if weekly is None or not weekly.is_active:
        return DayWindow.closed(NOT_AVAILABLE_ON_DAY)

    return DayWindow.open(weekly.start_time, weekly.end_time)


def resolve_day_window(
    db: Session,
    vendor_id: int,
    target_date: date,
    config: BookingConfig | None = None,
    redis: Redis | None = None,
) -> DayWindow:
    """Resolve the window for (vendor, date), using the Redis cache when available."""
    config = config or get_booking_config()

    store = SlotsRedisStore(redis, config) if redis is not None else None
    if store is not None:
        cached = store.get_day_window(vendor_id, target_date)
        if cached is not None:
            return DayWindow.from_dict(cached)

    window = resolve_window(
        _get_weekly(db, vendor_id, day_of_week(target_date)),
        _get_exception(db, vendor_id, target_date),
    )

    if store is not None:
        store.store_day_window(vendor_id, target_date, window.to_dict())

    return window


# ── Database helpers ─────────────────────────────────────────────────────


def _get_weekly(db: Session, vendor_id: int, weekday: int):
    """Get weekly availability record for vendor and weekday."""
    from ...models.generated import Availability

    return (
        db.query(Availability)
        .filter(
            Availability.vendor_id == vendor_id,
            Availability.day_of_week == weekday,
        )
        .first()
    )


def _get_exception(db: Session, vendor_id: int, target_date: date):
    """Get date exception for vendor on date."""
    from ...models.generated import VendorExceptions

    return (
        db.query(VendorExceptions)
        .filter(
            VendorExceptions.vendor_id == vendor_id,
            VendorExceptions.date == target_date.isoformat(),
        )
        .first()
    )
