"""Pydantic v2 request/response schemas for cabin endpoints."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from cabin_rentals.config import settings


def image_url(image_id: str) -> str:
    """Absolute URL of an image served by the media store."""
    if image_id.startswith("http"):
        return image_id
    return f"{settings.public_api_url.rstrip('/')}/api/images/{image_id}"


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CabinCreate(BaseModel):
    """Schema for creating a new cabin."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field("", max_length=500)
    capacity: int = Field(..., ge=1, le=20)
    base_price: int = Field(0, ge=0)
    amenities: list[str] = Field(default_factory=list, max_length=20)
    image_ids: list[str] = Field(default_factory=list)
    main_image_id: str | None = None


class CabinUpdate(BaseModel):
    """Schema for partially updating a cabin. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    capacity: int | None = Field(None, ge=1, le=20)
    base_price: int | None = Field(None, ge=0)
    amenities: list[str] | None = Field(None, max_length=20)
    image_ids: list[str] | None = None
    main_image_id: str | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class CabinResponse(BaseModel):
    """Public cabin information returned from the API."""

    id: uuid.UUID
    name: str
    description: str
    capacity: int
    base_price: int
    amenities: list[str]
    image_ids: list[str]
    main_image_id: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def main_image_url(self) -> str:
        """Main image, else the first image, else the site-wide placeholder."""
        if self.main_image_id:
            return image_url(self.main_image_id)
        if self.image_ids:
            return image_url(self.image_ids[0])
        return f"{settings.public_api_url.rstrip('/')}{settings.default_image_path}"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def image_urls(self) -> list[str]:
        return [image_url(image_id) for image_id in self.image_ids]


class CabinListResponse(BaseModel):
    """Paginated list of cabins."""

    items: list[CabinResponse]
    total: int


class AvailabilityMetadata(BaseModel):
    start: str
    end: str
    nights: int
    total_cabins: int
    occupied_cabins: int


class AvailableCabinsResponse(BaseModel):
    """Cabins free for the requested range."""

    items: list[CabinResponse]
    count: int
    metadata: AvailabilityMetadata
