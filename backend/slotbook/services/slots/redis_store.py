# backend/slotbook/services/slots/redis_store.py
"""
Redis cache for resolved day windows.

Key format: slots:window:{vendor_id}:{date}
Value: JSON {"is_open", "start_time", "end_time", "reason"}

Only the vendor's opening window is cached. Bookings are always read fresh,
so a cached window never hides a new booking or a cancellation.
Redis errors are logged and treated as a cache miss.
"""

import json
import logging
from datetime import date

from redis import Redis, RedisError

from .config import BookingConfig, get_booking_config

logger = logging.getLogger(__name__)


class SlotsRedisStore:
    """Redis storage wrapper for per-day window data."""

    KEY_PREFIX = "slots:window"

    def __init__(self, redis: Redis, config: BookingConfig | None = None):
        self.redis = redis
        self.config = config or get_booking_config()

    def _key(self, vendor_id: int, dt: date) -> str:
        return f"{self.KEY_PREFIX}:{vendor_id}:{dt.isoformat()}"

    # ── Write ────────────────────────────────────────────────────────────

    def store_day_window(self, vendor_id: int, dt: date, window: dict) -> None:
        key = self._key(vendor_id, dt)
        try:
            self.redis.set(key, json.dumps(window), ex=self.config.cache_ttl_seconds)
        except RedisError as e:
            logger.warning(f"Failed to cache window {key}: {e}")

    # ── Read ─────────────────────────────────────────────────────────────

    def get_day_window(self, vendor_id: int, dt: date) -> dict | None:
        """
        Get cached window for a day.

        Returns:
            Window dict, or None on cache miss.
        """
        key = self._key(vendor_id, dt)
        try:
            raw = self.redis.get(key)
        except RedisError as e:
            logger.warning(f"Failed to read cached window {key}: {e}")
            return None

        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode()
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Corrupt cached window {key}, ignoring")
            return None

    # ── Delete ───────────────────────────────────────────────────────────

    def delete_day_windows(
        self,
        vendor_id: int,
        dates: list[date] | None = None,
    ) -> int:
        """
        Delete cached windows.

        Args:
            vendor_id: Vendor ID
            dates: Specific dates, or None to delete all for vendor.

        Returns:
            Number of deleted keys.
        """
        try:
            if dates:
                keys = [self._key(vendor_id, dt) for dt in dates]
            else:
                pattern = f"{self.KEY_PREFIX}:{vendor_id}:*"
                keys = list(self.redis.scan_iter(match=pattern))

            if not keys:
                return 0

            return self.redis.delete(*keys)
        except RedisError as e:
            logger.error(f"Failed to invalidate windows for vendor {vendor_id}: {e}")
            return 0
