"""Reservation model — occupancy of one cabin for a range of nights."""

import uuid
from datetime import date

from sqlalchemy import Boolean, CheckConstraint, Date, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cabin_rentals.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Reservation(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A booking of a cabin from ``start_date`` (check-in) to ``end_date`` (checkout, exclusive)."""

    __tablename__ = "reservations"

    cabin_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("cabins.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_by_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        default="pending",
        index=True,
    )  # pending, confirmed, cancelled
    total_price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Guest contact record
    guest_first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    guest_last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    guest_document: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    guest_address: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    guest_phone: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    guest_email: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    # Relationships
    cabin: Mapped["Cabin"] = relationship(back_populates="reservations", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821
    created_by: Mapped["User | None"] = relationship(back_populates="reservations", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821

    __table_args__ = (
        CheckConstraint("start_date < end_date", name="ck_reservations_dates_ordered"),
        CheckConstraint("total_price >= 0", name="ck_reservations_total_non_negative"),
        Index("ix_reservations_cabin_dates", "cabin_id", "start_date", "end_date"),
    )

    @property
    def guest(self) -> dict[str, str]:
        return {
            "first_name": self.guest_first_name,
            "last_name": self.guest_last_name,
            "document": self.guest_document,
            "address": self.guest_address,
            "phone": self.guest_phone,
            "email": self.guest_email,
        }

    def __repr__(self) -> str:
        return (
            f"<Reservation(id={self.id}, cabin_id={self.cabin_id}, "
            f"{self.start_date}->{self.end_date}, status={self.status})>"
        )
