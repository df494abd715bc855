"""Booking domain errors.

Every error carries a stable machine-readable ``kind`` and a human-readable
message. The API layer renders them as structured JSON (see
``cabin_rentals.api.errors``). Database and driver exceptions are not
wrapped here; they propagate to the caller unchanged.
"""

from typing import Any


class BookingError(Exception):
    """Base class for errors raised by the booking core and services."""

    kind: str = "booking_error"
    status_code: int = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"kind": self.kind, "detail": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(BookingError):
    """Malformed or logically invalid input (bad dates, start >= end, illegal status change)."""

    kind = "validation_error"
    status_code = 400


class ConflictError(BookingError):
    """The requested cabin/range is taken by an active reservation. Retry with other dates."""

    kind = "conflict"
    status_code = 409


class NotFoundError(BookingError):
    """A referenced cabin or reservation does not exist."""

    kind = "not_found"
    status_code = 404
