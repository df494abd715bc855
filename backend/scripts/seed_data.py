"""Seed the database with an administrator, sample cabins and reservations.

Creates the tables if needed, wipes existing cabins/reservations and books
through the reservation service so totals come from the pricing engine.

Run from the backend directory:
    python -m scripts.seed_data
"""

import asyncio
import sys
from datetime import timedelta
from pathlib import Path

# Add backend to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete, select

from cabin_rentals.auth.passwords import hash_password
from cabin_rentals.database import Base, async_session_factory, engine
from cabin_rentals.dates import today
from cabin_rentals.models import Cabin, Reservation, User
from cabin_rentals.schemas.reservation import GuestInfo, ReservationCreate
from cabin_rentals.services.reservation_service import cancel_reservation, create_reservation

ADMIN_USER = {
    "email": "admin@cabanas.local",
    "password": "admin1234",
    "name": "Administración",
}

CABINS = [
    {
        "name": "Cabaña del Lago",
        "description": "Frente al lago, con deck y parrilla propia.",
        "capacity": 4,
        "base_price": 150000,
        "amenities": ["Wi-Fi", "Calefacción", "Cocina equipada", "Balcón o terraza"],
    },
    {
        "name": "Cabaña del Bosque",
        "description": "Entre pinos, ideal para parejas.",
        "capacity": 2,
        "base_price": 150000,
        "amenities": ["Wi-Fi", "Cama doble", "Pava eléctrica"],
    },
    {
        "name": "Cabaña Familiar",
        "description": "Dos dormitorios y living amplio.",
        "capacity": 6,
        "base_price": 180000,
        "amenities": ["Wi-Fi", "Piscina", "Estacionamiento", "Televisión", "Microondas"],
    },
]

GUESTS = [
    GuestInfo(first_name="Lucía", last_name="Fernández", document="30111222", phone="+5492944000001"),
    GuestInfo(first_name="Martín", last_name="Gómez", document="28999888", email="martin@example.com"),
    GuestInfo(first_name="Sofía", last_name="Pérez", document="35444555"),
]


async def seed() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        await session.execute(delete(Reservation))
        await session.execute(delete(Cabin))

        admin = (await session.execute(select(User).where(User.email == ADMIN_USER["email"]))).scalar_one_or_none()
        if admin is None:
            admin = User(
                email=ADMIN_USER["email"],
                hashed_password=hash_password(ADMIN_USER["password"]),
                name=ADMIN_USER["name"],
                role="admin",
            )
            session.add(admin)
            await session.flush()
        print(f"Admin: {admin.email}")

        cabins = []
        for data in CABINS:
            cabin = Cabin(**data)
            session.add(cabin)
            cabins.append(cabin)
        await session.flush()
        print(f"Created {len(cabins)} cabins")

        start = today() + timedelta(days=7)
        stays = [
            (cabins[0], GUESTS[0], start, 3, "confirmed"),
            (cabins[0], GUESTS[1], start + timedelta(days=3), 2, "pending"),
            (cabins[1], GUESTS[2], start + timedelta(days=1), 4, "confirmed"),
            (cabins[2], GUESTS[1], start + timedelta(days=10), 5, "confirmed"),
        ]
        created = []
        for cabin, guest, check_in, nights, status in stays:
            body = ReservationCreate(
                cabin_id=cabin.id,
                start_date=check_in,
                end_date=check_in + timedelta(days=nights),
                guest=guest,
                status=status,
            )
            reservation, price = await create_reservation(session, body, created_by=admin)
            created.append(reservation)
            print(f"  {cabin.name}: {reservation.start_date} -> {reservation.end_date} total {price.total}")

        # One cancelled stay, so its nights show as free again
        await cancel_reservation(session, created[-1].id)

        await session.commit()

    print(f"Done. Log in as {ADMIN_USER['email']} / {ADMIN_USER['password']}")


if __name__ == "__main__":
    asyncio.run(seed())
