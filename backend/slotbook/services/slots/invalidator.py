# backend/slotbook/services/slots/invalidator.py
"""
Cache invalidation for vendor day windows.

Triggers:
✓ Weekly availability changed → invalidate all dates of the vendor
✓ Date exception created/updated/deleted → invalidate that date

Does NOT trigger:
✗ Booking created/cancelled (bookings are never cached)
"""

from datetime import date
from redis import Redis

from .redis_store import SlotsRedisStore


def invalidate_vendor_cache(
    redis: Redis | None,
    vendor_id: int,
    dates: list[date] | None = None,
) -> int:
    """
    Invalidate cached windows for vendor.

    Args:
        redis: Redis client, or None when caching is disabled
        vendor_id: Vendor ID
        dates: List of specific dates to invalidate,
               or None to invalidate all cached dates

    Returns:
        Number of deleted cache keys
    """
    if redis is None:
        return 0
    store = SlotsRedisStore(redis)
    return store.delete_day_windows(vendor_id, dates)
