"""Reservation service — reservation store and the guarded booking path.

Booking is check-then-act: read the cabin's active reservations, then insert.
Both steps run in the caller's transaction after locking the cabin row, so
two concurrent requests for the same cabin cannot both pass the check. On
PostgreSQL the ``ex_reservations_no_overlap`` exclusion constraint rejects
anything that slips through; that failure is reported as a ConflictError.
"""

import logging
import uuid

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cabin_rentals.booking import ReservationStatus, check_transition, conflicting_reservations
from cabin_rentals.dates import DateRange
from cabin_rentals.errors import ConflictError, NotFoundError
from cabin_rentals.models.cabin import Cabin
from cabin_rentals.models.reservation import Reservation
from cabin_rentals.models.user import User
from cabin_rentals.pricing import HolidayCalendar, PriceQuote, Tariffs, quote
from cabin_rentals.schemas.reservation import GuestInfo, ReservationCreate, ReservationUpdate

logger = logging.getLogger(__name__)

OVERLAP_CONSTRAINT = "ex_reservations_no_overlap"


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def _active_query(window: DateRange | None = None, cabin_id: uuid.UUID | None = None) -> Select:
    query = select(Reservation).where(Reservation.status != ReservationStatus.CANCELLED.value)
    if window is not None:
        # Candidate set only; the availability rules make the final decision.
        query = query.where(Reservation.end_date > window.start, Reservation.start_date < window.end)
    if cabin_id is not None:
        query = query.where(Reservation.cabin_id == cabin_id)
    return query


async def list_active_reservations(
    db: AsyncSession,
    window: DateRange | None = None,
    cabin_id: uuid.UUID | None = None,
) -> list[Reservation]:
    """Non-cancelled reservations, optionally narrowed to a window and/or cabin."""
    result = await db.execute(_active_query(window, cabin_id).order_by(Reservation.start_date))
    return list(result.scalars().all())


async def list_by_cabin(db: AsyncSession, cabin_id: uuid.UUID) -> list[Reservation]:
    """All reservations of a cabin, cancelled ones included, oldest stay first."""
    result = await db.execute(
        select(Reservation).where(Reservation.cabin_id == cabin_id).order_by(Reservation.start_date)
    )
    return list(result.scalars().all())


async def list_reservations(
    db: AsyncSession,
    *,
    cabin_id: uuid.UUID | None = None,
    status: str | None = None,
    window: DateRange | None = None,
    created_by_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 50,
) -> tuple[list[Reservation], int]:
    """Return a filtered page of reservations (latest stay first) and the total count."""
    filters = []
    if cabin_id is not None:
        filters.append(Reservation.cabin_id == cabin_id)
    if status is not None:
        filters.append(Reservation.status == status)
    if window is not None:
        filters.append(Reservation.end_date > window.start)
        filters.append(Reservation.start_date < window.end)
    if created_by_id is not None:
        filters.append(Reservation.created_by_id == created_by_id)

    total = (await db.execute(select(func.count()).select_from(Reservation).where(*filters))).scalar_one()
    result = await db.execute(
        select(Reservation)
        .where(*filters)
        .order_by(Reservation.start_date.desc(), Reservation.id)
        .offset(skip)
        .limit(limit)
    )
    return list(result.scalars().all()), total


async def get_reservation(db: AsyncSession, reservation_id: uuid.UUID, with_cabin: bool = False) -> Reservation:
    """Fetch a reservation by id.

    Raises:
        NotFoundError: If no such reservation exists.
    """
    query = select(Reservation).where(Reservation.id == reservation_id)
    if with_cabin:
        query = query.options(selectinload(Reservation.cabin))
    reservation = (await db.execute(query)).scalar_one_or_none()
    if reservation is None:
        raise NotFoundError("Reservation not found", details={"reservation_id": str(reservation_id)})
    return reservation


# ---------------------------------------------------------------------------
# Booking path
# ---------------------------------------------------------------------------


async def _lock_cabin(db: AsyncSession, cabin_id: uuid.UUID) -> Cabin:
    result = await db.execute(select(Cabin).where(Cabin.id == cabin_id).with_for_update())
    cabin = result.scalar_one_or_none()
    if cabin is None:
        raise NotFoundError("Cabin not found", details={"cabin_id": str(cabin_id)})
    return cabin


async def ensure_available(
    db: AsyncSession,
    cabin_id: uuid.UUID,
    date_range: DateRange,
    exclude_reservation_id: uuid.UUID | None = None,
) -> None:
    """Raise ConflictError if an active reservation of the cabin overlaps ``date_range``."""
    candidates = await list_active_reservations(db, window=date_range, cabin_id=cabin_id)
    clashes = [
        r for r in conflicting_reservations(date_range, candidates, cabin_id) if r.id != exclude_reservation_id
    ]
    if clashes:
        clash = clashes[0]
        logger.warning(
            "Rejected booking of cabin %s for %s -> %s: overlaps reservation %s",
            cabin_id,
            date_range.start,
            date_range.end,
            clash.id,
        )
        raise ConflictError(
            "The cabin is already reserved for those dates",
            details={
                "reservation_id": str(clash.id),
                "start_date": clash.start_date.isoformat(),
                "end_date": clash.end_date.isoformat(),
            },
        )


async def _flush_booking(db: AsyncSession, reservation: Reservation) -> None:
    try:
        await db.flush()
    except IntegrityError as exc:
        if OVERLAP_CONSTRAINT in str(exc.orig):
            raise ConflictError("The cabin was booked for those dates by another request, try again") from exc
        raise
    await db.refresh(reservation)


def _guest_columns(guest: GuestInfo) -> dict[str, str]:
    return {
        "guest_first_name": guest.first_name,
        "guest_last_name": guest.last_name,
        "guest_document": guest.document,
        "guest_address": guest.address,
        "guest_phone": guest.phone,
        "guest_email": guest.email or "",
    }


async def create_reservation(
    db: AsyncSession,
    body: ReservationCreate,
    created_by: User | None = None,
    tariffs: Tariffs | None = None,
    calendar: HolidayCalendar | None = None,
) -> tuple[Reservation, PriceQuote]:
    """Book a cabin after checking availability; the total comes from the pricing engine.

    Raises:
        ValidationError: If the dates do not form a valid range.
        NotFoundError: If the cabin does not exist.
        ConflictError: If the cabin is taken for any night of the range.
    """
    date_range = DateRange(body.start_date, body.end_date)
    await _lock_cabin(db, body.cabin_id)
    await ensure_available(db, body.cabin_id, date_range)

    price = quote(date_range, tariffs=tariffs, calendar=calendar)
    reservation = Reservation(
        cabin_id=body.cabin_id,
        created_by_id=created_by.id if created_by is not None else None,
        start_date=date_range.start,
        end_date=date_range.end,
        status=body.status,
        total_price=price.total,
        paid=body.paid,
        **_guest_columns(body.guest),
    )
    db.add(reservation)
    await _flush_booking(db, reservation)
    logger.info(
        "Reserved cabin %s for %s -> %s (reservation %s, total %d)",
        reservation.cabin_id,
        reservation.start_date,
        reservation.end_date,
        reservation.id,
        reservation.total_price,
    )
    return reservation, price


async def update_reservation(
    db: AsyncSession,
    reservation_id: uuid.UUID,
    body: ReservationUpdate,
    tariffs: Tariffs | None = None,
    calendar: HolidayCalendar | None = None,
) -> Reservation:
    """Partially update a reservation.

    Moving the stay (dates or cabin) re-runs the availability check under the
    cabin lock and re-prices the stay. Status changes follow the lifecycle
    rules in :mod:`cabin_rentals.booking.status`.
    """
    reservation = await get_reservation(db, reservation_id)
    update_data = body.model_dump(exclude_unset=True)

    target_status = update_data.get("status", reservation.status)
    check_transition(reservation.status, target_status)

    date_range = DateRange(
        update_data.get("start_date") or reservation.start_date,
        update_data.get("end_date") or reservation.end_date,
    )
    cabin_id = update_data.get("cabin_id") or reservation.cabin_id
    moved = (
        date_range.start != reservation.start_date
        or date_range.end != reservation.end_date
        or cabin_id != reservation.cabin_id
    )

    if moved:
        await _lock_cabin(db, cabin_id)
        if target_status != ReservationStatus.CANCELLED:
            await ensure_available(db, cabin_id, date_range, exclude_reservation_id=reservation.id)
        reservation.cabin_id = cabin_id
        reservation.start_date = date_range.start
        reservation.end_date = date_range.end
        reservation.total_price = quote(date_range, tariffs=tariffs, calendar=calendar).total

    reservation.status = target_status
    if "paid" in update_data and update_data["paid"] is not None:
        reservation.paid = update_data["paid"]
    if body.guest is not None:
        for column, value in _guest_columns(body.guest).items():
            setattr(reservation, column, value)

    db.add(reservation)
    await _flush_booking(db, reservation)
    return reservation


async def set_status(db: AsyncSession, reservation_id: uuid.UUID, status: str) -> Reservation:
    """Move a reservation to ``status``; re-applying the current status changes nothing."""
    reservation = await get_reservation(db, reservation_id)
    if not check_transition(reservation.status, status):
        return reservation

    previous = reservation.status
    reservation.status = status
    db.add(reservation)
    await db.flush()
    await db.refresh(reservation)
    logger.info("Reservation %s: %s -> %s", reservation.id, previous, status)
    return reservation


async def cancel_reservation(db: AsyncSession, reservation_id: uuid.UUID) -> Reservation:
    """Cancel a reservation, freeing its nights. Idempotent."""
    return await set_status(db, reservation_id, ReservationStatus.CANCELLED.value)


async def delete_reservation(db: AsyncSession, reservation_id: uuid.UUID) -> None:
    """Physically remove a reservation (admin only)."""
    reservation = await get_reservation(db, reservation_id)
    await db.delete(reservation)
    await db.flush()
    logger.info("Deleted reservation %s", reservation_id)
