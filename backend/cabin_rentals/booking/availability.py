"""Availability resolver — which cabins are free for a date range.

Works on any objects exposing the attributes of the ORM models (``Cabin.id``;
``Reservation.cabin_id/start_date/end_date/status``), so callers can pass
rows loaded from the database or plain test doubles. A linear scan over the
active reservations is enough for a handful of cabins; a larger fleet would
want a per-cabin interval index instead.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Sequence
from datetime import date
from typing import Protocol, TypeVar

from cabin_rentals.booking.status import ReservationStatus
from cabin_rentals.dates import DateRange
from cabin_rentals.errors import ValidationError

CANCELLED = ReservationStatus.CANCELLED.value


class CabinLike(Protocol):
    id: uuid.UUID


class ReservationLike(Protocol):
    cabin_id: uuid.UUID
    start_date: date
    end_date: date
    status: str


CabinT = TypeVar("CabinT", bound=CabinLike)
ReservationT = TypeVar("ReservationT", bound=ReservationLike)


def is_active(reservation: ReservationLike) -> bool:
    return reservation.status != CANCELLED


def conflicts(reservation: ReservationLike, date_range: DateRange) -> bool:
    """True when an active reservation overlaps ``date_range`` (half-open)."""
    return is_active(reservation) and date_range.overlaps(reservation.start_date, reservation.end_date)


def conflicting_reservations(
    date_range: DateRange,
    reservations: Iterable[ReservationT],
    cabin_id: uuid.UUID | None = None,
) -> list[ReservationT]:
    """Active reservations overlapping ``date_range``, optionally for a single cabin."""
    return [
        r
        for r in reservations
        if (cabin_id is None or r.cabin_id == cabin_id) and conflicts(r, date_range)
    ]


def occupied_cabin_ids(date_range: DateRange, reservations: Iterable[ReservationLike]) -> set[uuid.UUID]:
    return {r.cabin_id for r in conflicting_reservations(date_range, reservations)}


def find_available_cabins(
    date_range: DateRange,
    cabins: Sequence[CabinT],
    reservations: Iterable[ReservationLike],
) -> list[CabinT]:
    """Cabins with no active reservation overlapping ``date_range``, in input order."""
    if date_range.start >= date_range.end:
        raise ValidationError("End date must be after start date")
    occupied = occupied_cabin_ids(date_range, reservations)
    return [cabin for cabin in cabins if cabin.id not in occupied]


def occupied_nights(
    reservations: Iterable[ReservationLike],
    cabin_id: uuid.UUID | None = None,
    window: DateRange | None = None,
) -> list[date]:
    """Sorted nights taken by active reservations, for calendar hints.

    A reservation occupies ``start_date`` up to, not including, ``end_date``;
    the checkout day stays bookable. ``window`` clips the result the same way.
    """
    nights: set[date] = set()
    for reservation in reservations:
        if not is_active(reservation):
            continue
        if cabin_id is not None and reservation.cabin_id != cabin_id:
            continue
        stay = DateRange(reservation.start_date, reservation.end_date)
        for night in stay.nights_iter():
            if window is None or window.start <= night < window.end:
                nights.add(night)
    return sorted(nights)
