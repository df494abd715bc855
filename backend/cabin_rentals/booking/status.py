"""Reservation status lifecycle."""

from enum import StrEnum

from cabin_rentals.errors import ValidationError


class ReservationStatus(StrEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


RESERVATION_STATUSES: tuple[str, ...] = tuple(s.value for s in ReservationStatus)

ACTIVE_STATUSES: frozenset[str] = frozenset({ReservationStatus.PENDING, ReservationStatus.CONFIRMED})

_ALLOWED_STATUS_TRANSITIONS: dict[ReservationStatus, set[ReservationStatus]] = {
    ReservationStatus.PENDING: {ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED},
    ReservationStatus.CONFIRMED: {ReservationStatus.CANCELLED},
    ReservationStatus.CANCELLED: set(),
}


def check_transition(current: str, target: str) -> bool:
    """Validate a status change and report whether anything changes.

    Returns ``False`` when ``target`` equals ``current`` (re-cancelling is a
    no-op), ``True`` for an allowed transition.

    Raises:
        ValidationError: For unknown statuses or a forbidden transition.
    """
    try:
        current_status = ReservationStatus(current)
        target_status = ReservationStatus(target)
    except ValueError:
        raise ValidationError(
            f"Unknown reservation status {target!r}",
            details={"allowed": list(RESERVATION_STATUSES)},
        ) from None

    if current_status == target_status:
        return False
    if target_status not in _ALLOWED_STATUS_TRANSITIONS[current_status]:
        raise ValidationError(
            f"Cannot change reservation status from {current_status} to {target_status}",
            details={"current": current_status.value, "requested": target_status.value},
        )
    return True
