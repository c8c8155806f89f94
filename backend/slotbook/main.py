import logging

from fastapi import FastAPI
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from redis import RedisError

from .config import settings
from .database import engine
from .redis_client import redis_client
from .routers import availability, bookings, slots, vendor_exceptions

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Slotbook API")

app.include_router(slots.router)
app.include_router(bookings.router)
app.include_router(availability.router)
app.include_router(vendor_exceptions.router)


@app.get("/health")
def health():
    result = {"database": True, "redis": None}

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        result["database"] = False

    if redis_client is not None:
        try:
            result["redis"] = bool(redis_client.ping())
        except RedisError as e:
            logger.warning(f"Redis health check failed: {e}")
            result["redis"] = False

    return result
