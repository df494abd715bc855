"""Cabins API routes — public catalogue and availability, admin-only management."""

import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from cabin_rentals.api.deps import date_range_query, get_db, require_admin
from cabin_rentals.dates import DateRange
from cabin_rentals.models.user import User
from cabin_rentals.schemas.auth import MessageResponse
from cabin_rentals.schemas.cabin import (
    AvailabilityMetadata,
    AvailableCabinsResponse,
    CabinCreate,
    CabinListResponse,
    CabinResponse,
    CabinUpdate,
)
from cabin_rentals.services import cabin_service

router = APIRouter(prefix="/api/v1/cabins", tags=["cabins"])


@router.get(
    "",
    response_model=CabinListResponse,
    summary="List cabins",
)
async def list_cabins(
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
) -> CabinListResponse:
    """Return a page of cabins ordered by name."""
    items, total = await cabin_service.list_cabins(db, skip=skip, limit=limit)
    return CabinListResponse(
        items=[CabinResponse.model_validate(c) for c in items],
        total=total,
    )


@router.get(
    "/available",
    response_model=AvailableCabinsResponse,
    summary="List cabins free for a date range",
)
async def list_available_cabins(
    date_range: DateRange = Depends(date_range_query),
    db: AsyncSession = Depends(get_db),
) -> AvailableCabinsResponse:
    """Cabins with no active reservation overlapping ``start``..``end``.

    ``end`` is the checkout day: a stay ending on ``start`` does not block the
    cabin.
    """
    available, total_cabins, occupied = await cabin_service.find_available(db, date_range)
    return AvailableCabinsResponse(
        items=[CabinResponse.model_validate(c) for c in available],
        count=len(available),
        metadata=AvailabilityMetadata(
            start=date_range.start.isoformat(),
            end=date_range.end.isoformat(),
            nights=date_range.nights,
            total_cabins=total_cabins,
            occupied_cabins=occupied,
        ),
    )


@router.get(
    "/amenities",
    response_model=list[str],
    summary="List amenities that can be assigned to cabins",
)
async def list_amenities(db: AsyncSession = Depends(get_db)) -> list[str]:
    return await cabin_service.list_amenities(db)


@router.get(
    "/{cabin_id}",
    response_model=CabinResponse,
    summary="Get a cabin by ID",
)
async def get_cabin(
    cabin_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> CabinResponse:
    cabin = await cabin_service.get_cabin(db, cabin_id)
    return CabinResponse.model_validate(cabin)


@router.post(
    "",
    response_model=CabinResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new cabin",
)
async def create_cabin(
    body: CabinCreate,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> CabinResponse:
    cabin = await cabin_service.create_cabin(db, body)
    return CabinResponse.model_validate(cabin)


@router.put(
    "/{cabin_id}",
    response_model=CabinResponse,
    summary="Update a cabin",
)
async def update_cabin(
    cabin_id: uuid.UUID,
    body: CabinUpdate,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> CabinResponse:
    """Partially update a cabin. Only explicitly set fields are changed."""
    cabin = await cabin_service.update_cabin(db, cabin_id, body)
    return CabinResponse.model_validate(cabin)


@router.delete(
    "/{cabin_id}",
    response_model=MessageResponse,
    summary="Delete a cabin",
)
async def delete_cabin(
    cabin_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> MessageResponse:
    """Delete a cabin and cascade-delete its reservations."""
    await cabin_service.delete_cabin(db, cabin_id)
    return MessageResponse(message="Cabin deleted")
