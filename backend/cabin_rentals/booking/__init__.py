"""Reservation availability rules shared by the services and the API."""

from cabin_rentals.booking.availability import (
    CANCELLED,
    conflicting_reservations,
    conflicts,
    find_available_cabins,
    is_active,
    occupied_cabin_ids,
    occupied_nights,
)
from cabin_rentals.booking.status import (
    ACTIVE_STATUSES,
    RESERVATION_STATUSES,
    ReservationStatus,
    check_transition,
)

__all__ = [
    "ACTIVE_STATUSES",
    "CANCELLED",
    "RESERVATION_STATUSES",
    "ReservationStatus",
    "check_transition",
    "conflicting_reservations",
    "conflicts",
    "find_available_cabins",
    "is_active",
    "occupied_cabin_ids",
    "occupied_nights",
]
