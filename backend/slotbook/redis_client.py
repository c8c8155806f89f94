# backend/slotbook/redis_client.py
"""
Shared Redis connection.

None when REDIS_URL is not configured: the window cache and the event
queue both degrade to no-ops.
"""

from redis import Redis

from .config import settings


def make_redis(url: str | None) -> Redis | None:
    if not url:
        return None
    return Redis.from_url(url, decode_responses=True)


redis_client = make_redis(settings.redis_url)
