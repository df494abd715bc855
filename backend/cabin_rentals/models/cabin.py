"""Cabin model — the rentable units."""

from sqlalchemy import JSON, CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cabin_rentals.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Cabin(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A cabin guests can reserve.

    Images live in the media store; a cabin only keeps their identifiers, in
    display order, plus an optional main image.
    """

    __tablename__ = "cabins"

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    base_price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    amenities: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    image_ids: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    main_image_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    # Relationships
    reservations: Mapped[list["Reservation"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="cabin", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_cabins_capacity_positive"),
        CheckConstraint("base_price >= 0", name="ck_cabins_base_price_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Cabin(id={self.id}, name={self.name!r}, capacity={self.capacity})>"
