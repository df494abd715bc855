"""Pydantic v2 request/response schemas for reservation endpoints."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from cabin_rentals.schemas.cabin import CabinResponse
from cabin_rentals.schemas.pricing import QuoteResponse

_STATUS_PATTERN = "^(pending|confirmed|cancelled)$"

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class GuestInfo(BaseModel):
    """Contact record of the guest staying in the cabin."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    document: str = Field(..., min_length=1, max_length=20, pattern=r"^\d+$")
    address: str = Field("", max_length=255)
    phone: str = Field("", max_length=50)
    email: EmailStr | None = None

    @field_validator("first_name", "last_name", "document", "address", "phone", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class ReservationCreate(BaseModel):
    """Schema for creating a reservation. The price is always computed server-side."""

    cabin_id: uuid.UUID
    start_date: date
    end_date: date
    guest: GuestInfo
    status: str = Field("confirmed", pattern="^(pending|confirmed)$")
    paid: bool = False

    @model_validator(mode="after")
    def check_dates(self) -> "ReservationCreate":
        """Validate that end_date is strictly after start_date."""
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class ReservationUpdate(BaseModel):
    """Schema for partially updating a reservation. All fields optional."""

    cabin_id: uuid.UUID | None = None
    start_date: date | None = None
    end_date: date | None = None
    status: str | None = Field(None, pattern=_STATUS_PATTERN)
    paid: bool | None = None
    guest: GuestInfo | None = None

    @model_validator(mode="after")
    def check_dates(self) -> "ReservationUpdate":
        """If both dates are provided, validate end_date > start_date."""
        if self.start_date is not None and self.end_date is not None and self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class GuestResponse(BaseModel):
    first_name: str
    last_name: str
    document: str
    address: str
    phone: str
    email: str


class ReservationResponse(BaseModel):
    """Standard reservation response returned from CRUD operations."""

    id: uuid.UUID
    cabin_id: uuid.UUID
    created_by_id: uuid.UUID | None = None
    start_date: date
    end_date: date
    status: str
    total_price: int
    paid: bool
    guest: GuestResponse
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReservationDetailResponse(ReservationResponse):
    """Reservation with its nested cabin, used for single-reservation views."""

    cabin: CabinResponse | None = None


class ReservationCreatedResponse(ReservationResponse):
    """Created reservation plus the quote its total was taken from."""

    quote: QuoteResponse


class ReservationListResponse(BaseModel):
    """Paginated list of reservations."""

    items: list[ReservationResponse]
    total: int


class OccupiedNightsResponse(BaseModel):
    cabin_id: uuid.UUID | None = None
    nights: list[date]
