"""SQLAlchemy models for the cabin rentals backend.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from cabin_rentals.models.cabin import Cabin
from cabin_rentals.models.reservation import Reservation
from cabin_rentals.models.user import User

__all__ = [
    "Cabin",
    "Reservation",
    "User",
]
