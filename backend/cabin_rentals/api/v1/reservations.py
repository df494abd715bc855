"""Reservations API router.

Administrators manage every reservation. Authenticated users can list the
reservations made on their account. Occupied nights are public so the
booking calendar can grey them out.
"""

import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from cabin_rentals.api.deps import get_current_active_user, get_db, optional_date_range_query, require_admin
from cabin_rentals.booking import occupied_nights
from cabin_rentals.dates import DateRange
from cabin_rentals.models.user import User
from cabin_rentals.schemas.auth import MessageResponse
from cabin_rentals.schemas.pricing import QuoteResponse
from cabin_rentals.schemas.reservation import (
    OccupiedNightsResponse,
    ReservationCreate,
    ReservationCreatedResponse,
    ReservationDetailResponse,
    ReservationListResponse,
    ReservationResponse,
    ReservationUpdate,
)
from cabin_rentals.services import reservation_service

router = APIRouter(prefix="/api/v1/reservations", tags=["reservations"])


@router.post(
    "",
    response_model=ReservationCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a reservation",
)
async def create_reservation(
    body: ReservationCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> ReservationCreatedResponse:
    """Book a cabin for a guest.

    Validates that:
    - The cabin exists.
    - No active reservation of the cabin overlaps the stay (409 otherwise).

    The total is always computed by the pricing engine.
    """
    reservation, price = await reservation_service.create_reservation(db, body, created_by=admin)
    return ReservationCreatedResponse(
        **ReservationResponse.model_validate(reservation).model_dump(),
        quote=QuoteResponse(**price.to_dict()),
    )


@router.get(
    "",
    response_model=ReservationListResponse,
    summary="List reservations",
)
async def list_reservations(
    cabin_id: uuid.UUID | None = Query(None, description="Filter by cabin"),
    status_filter: str | None = Query(
        None, alias="status", pattern="^(pending|confirmed|cancelled)$", description="Filter by status"
    ),
    window: DateRange | None = Depends(optional_date_range_query),
    skip: int = Query(0, ge=0, description="Pagination offset"),
    limit: int = Query(50, ge=1, le=100, description="Pagination limit"),
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> ReservationListResponse:
    """Reservations filtered by cabin, status and/or stays overlapping ``start``..``end``."""
    items, total = await reservation_service.list_reservations(
        db,
        cabin_id=cabin_id,
        status=status_filter,
        window=window,
        skip=skip,
        limit=limit,
    )
    return ReservationListResponse(
        items=[ReservationResponse.model_validate(r) for r in items],
        total=total,
    )


@router.get(
    "/mine",
    response_model=ReservationListResponse,
    summary="List reservations made by the current user",
)
async def list_my_reservations(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ReservationListResponse:
    items, total = await reservation_service.list_reservations(
        db, created_by_id=current_user.id, skip=skip, limit=limit
    )
    return ReservationListResponse(
        items=[ReservationResponse.model_validate(r) for r in items],
        total=total,
    )


@router.get(
    "/occupied",
    response_model=OccupiedNightsResponse,
    summary="Nights taken by active reservations",
)
async def get_occupied_nights(
    cabin_id: uuid.UUID | None = Query(None, description="Restrict to one cabin"),
    window: DateRange | None = Depends(optional_date_range_query),
    db: AsyncSession = Depends(get_db),
) -> OccupiedNightsResponse:
    """Check-in nights up to, not including, each checkout day."""
    reservations = await reservation_service.list_active_reservations(db, window=window, cabin_id=cabin_id)
    return OccupiedNightsResponse(
        cabin_id=cabin_id,
        nights=occupied_nights(reservations, cabin_id=cabin_id, window=window),
    )


@router.get(
    "/{reservation_id}",
    response_model=ReservationDetailResponse,
    summary="Get reservation detail with nested cabin",
)
async def get_reservation(
    reservation_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> ReservationDetailResponse:
    reservation = await reservation_service.get_reservation(db, reservation_id, with_cabin=True)
    return ReservationDetailResponse.model_validate(reservation)


@router.put(
    "/{reservation_id}",
    response_model=ReservationResponse,
    summary="Update a reservation",
)
async def update_reservation(
    reservation_id: uuid.UUID,
    body: ReservationUpdate,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> ReservationResponse:
    """Partially update a reservation.

    Changing the dates or the cabin re-checks availability and re-prices the
    stay.
    """
    reservation = await reservation_service.update_reservation(db, reservation_id, body)
    return ReservationResponse.model_validate(reservation)


@router.post(
    "/{reservation_id}/cancel",
    response_model=ReservationResponse,
    summary="Cancel a reservation",
)
async def cancel_reservation(
    reservation_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> ReservationResponse:
    """Cancel a reservation and free its nights. Cancelling twice is harmless."""
    reservation = await reservation_service.cancel_reservation(db, reservation_id)
    return ReservationResponse.model_validate(reservation)


@router.delete(
    "/{reservation_id}",
    response_model=MessageResponse,
    summary="Delete a reservation",
)
async def delete_reservation(
    reservation_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> MessageResponse:
    await reservation_service.delete_reservation(db, reservation_id)
    return MessageResponse(message="Reservation deleted")
