"""Cabin service — cabin store operations and availability lookups."""

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cabin_rentals.booking import find_available_cabins, occupied_cabin_ids
from cabin_rentals.dates import DateRange
from cabin_rentals.errors import NotFoundError
from cabin_rentals.models.cabin import Cabin
from cabin_rentals.schemas.cabin import CabinCreate, CabinUpdate
from cabin_rentals.services.reservation_service import list_active_reservations

logger = logging.getLogger(__name__)

DEFAULT_AMENITIES: tuple[str, ...] = (
    "Aire acondicionado",
    "Artículos de aseo",
    "Balcón o terraza",
    "Calefacción",
    "Cama doble",
    "Cocina equipada",
    "Ducha",
    "Estacionamiento",
    "Heladera",
    "Ingreso con llave o tarjeta",
    "Microondas",
    "Pava eléctrica",
    "Piscina",
    "Placard o armario",
    "Ropa de cama",
    "Secadora",
    "Seguridad (cámara o vigilancia)",
    "Sofá",
    "Solárium o reposeras",
    "Televisión",
    "Toallas",
    "Vajilla",
    "Ventiladores",
    "Wi-Fi",
)


async def list_cabins(db: AsyncSession, skip: int = 0, limit: int = 20) -> tuple[list[Cabin], int]:
    """Return a page of cabins ordered by name, plus the total count."""
    total = (await db.execute(select(func.count()).select_from(Cabin))).scalar_one()
    result = await db.execute(select(Cabin).order_by(Cabin.name, Cabin.id).offset(skip).limit(limit))
    return list(result.scalars().all()), total


async def list_all_cabins(db: AsyncSession) -> list[Cabin]:
    result = await db.execute(select(Cabin).order_by(Cabin.name, Cabin.id))
    return list(result.scalars().all())


async def get_cabin(db: AsyncSession, cabin_id: uuid.UUID) -> Cabin:
    """Fetch a cabin by id.

    Raises:
        NotFoundError: If the cabin does not exist.
    """
    cabin = (await db.execute(select(Cabin).where(Cabin.id == cabin_id))).scalar_one_or_none()
    if cabin is None:
        raise NotFoundError("Cabin not found", details={"cabin_id": str(cabin_id)})
    return cabin


async def create_cabin(db: AsyncSession, body: CabinCreate) -> Cabin:
    cabin = Cabin(**body.model_dump())
    db.add(cabin)
    await db.flush()
    await db.refresh(cabin)
    logger.info("Created cabin %s (%s)", cabin.id, cabin.name)
    return cabin


# Only the main image may be cleared with an explicit null.
NULLABLE_CABIN_FIELDS = frozenset({"main_image_id"})


async def update_cabin(db: AsyncSession, cabin_id: uuid.UUID, body: CabinUpdate) -> Cabin:
    """Partially update a cabin. Only explicitly set, non-null fields are changed."""
    cabin = await get_cabin(db, cabin_id)
    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None and field not in NULLABLE_CABIN_FIELDS:
            continue
        setattr(cabin, field, value)
    db.add(cabin)
    await db.flush()
    await db.refresh(cabin)
    return cabin


async def delete_cabin(db: AsyncSession, cabin_id: uuid.UUID) -> None:
    """Delete a cabin and cascade-delete its reservations."""
    cabin = await get_cabin(db, cabin_id)
    await db.delete(cabin)
    await db.flush()
    logger.info("Deleted cabin %s", cabin_id)


async def list_amenities(db: AsyncSession) -> list[str]:
    """Amenities used by existing cabins merged with the default catalogue, sorted."""
    result = await db.execute(select(Cabin.amenities))
    in_use = {amenity for amenities in result.scalars().all() for amenity in (amenities or [])}
    return sorted(in_use | set(DEFAULT_AMENITIES))


async def find_available(db: AsyncSession, date_range: DateRange) -> tuple[list[Cabin], int, int]:
    """Cabins free for ``date_range``.

    Reads the current cabins and active reservations on every call; nothing is
    cached. Returns ``(available, total_cabins, occupied_cabins)``.
    """
    cabins = await list_all_cabins(db)
    reservations = await list_active_reservations(db, window=date_range)
    available = find_available_cabins(date_range, cabins, reservations)
    occupied = len(occupied_cabin_ids(date_range, reservations))
    logger.info(
        "Availability %s -> %s: %d of %d cabins free",
        date_range.start,
        date_range.end,
        len(available),
        len(cabins),
    )
    return available, len(cabins), occupied
