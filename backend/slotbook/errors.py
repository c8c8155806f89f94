# backend/slotbook/errors.py
"""
Domain errors raised by the slot engine and booking admission.

Every error is terminal for the current request; nothing here is retried
internally. Routers map `status_code` onto an HTTPException.
"""


class BookingError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidTimeFormat(BookingError):
    """Malformed "HH:MM" input."""
    status_code = 400


class InvalidSlot(BookingError):
    """Derived time range is invalid (crosses midnight, start >= end)."""
    status_code = 400


class NotFound(BookingError):
    """Vendor or service missing, inactive or deleted."""
    status_code = 404


class SlotUnavailable(BookingError):
    """
    Admission-time conflict.

    Retryable from the caller's side: re-fetch slots and let the user pick
    again.
    """
    status_code = 409


class InvalidStatusTransition(BookingError):
    status_code = 400
