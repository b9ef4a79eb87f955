"""Pydantic v2 schemas for property listings."""

from decimal import Decimal

from pydantic import Field

from rentverse.config import settings
from rentverse.models.enums import FurnishedType, ListingStatus, PropertyTypeName
from rentverse.schemas.auth import User
from rentverse.schemas.base import CamelModel, Pagination

# ---------------------------------------------------------------------------
# Nested records
# ---------------------------------------------------------------------------


class PropertyType(CamelModel):
    """Property type category from the core service catalogue."""

    id: str
    code: str = ""
    name: str
    description: str | None = None
    icon: str | None = None
    is_active: bool = True
    property_count: int | None = None


class Amenity(CamelModel):
    id: str
    name: str
    category: str | None = None


# ---------------------------------------------------------------------------
# Property record
# ---------------------------------------------------------------------------


class Property(CamelModel):
    """A listing owned by exactly one user (``owner_id``).

    ``is_favorite`` is a per-viewer overlay filled in by the core service for
    the authenticated user, not part of the listing itself.
    """

    id: str
    title: str
    description: str | None = None
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = "Malaysia"
    price: Decimal = Field(..., gt=0)
    currency_code: str = Field(default_factory=lambda: settings.currency_code)
    bedrooms: int = Field(..., ge=1)
    bathrooms: int = Field(..., ge=1)
    area_sqm: float | None = None
    furnished: FurnishedType | bool = FurnishedType.UNFURNISHED
    is_available: bool = True
    images: list[str] = Field(default_factory=list)
    latitude: float | None = None
    longitude: float | None = None
    place_id: str | None = None
    project_name: str | None = None
    developer: str | None = None
    code: str = ""
    status: ListingStatus = ListingStatus.PENDING_REVIEW
    created_at: str | None = None
    updated_at: str | None = None
    owner_id: str
    property_type_id: str | None = None
    property_type: PropertyType | None = None
    amenities: list[Amenity] | None = None
    owner: User | None = None
    is_favorite: bool | None = None
    rating: float | None = None
    view_count: int | None = None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PropertyCreate(CamelModel):
    """Payload for creating a listing. Run ``validate_listing_data`` first."""

    title: str
    description: str | None = None
    address: str
    city: str
    state: str
    zip_code: str | None = None
    country: str | None = None
    price: float
    bedrooms: int
    bathrooms: int
    area_sqm: float | None = None
    furnished: FurnishedType | bool
    property_type_id: str
    images: list[str] | None = None
    amenity_ids: list[str] | None = None
    latitude: float | None = None
    longitude: float | None = None
    status: ListingStatus | None = None


class PropertyUpdate(CamelModel):
    """Partial update. All fields optional."""

    title: str | None = None
    description: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    price: float | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    area_sqm: float | None = None
    furnished: FurnishedType | bool | None = None
    property_type_id: str | None = None
    images: list[str] | None = None
    amenity_ids: list[str] | None = None
    latitude: float | None = None
    longitude: float | None = None
    status: ListingStatus | None = None


class PropertyFilters(CamelModel):
    """Query parameters for ``GET /properties``."""

    search: str | None = None
    category: PropertyTypeName | None = None
    property_type_id: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    furnished: FurnishedType | None = None
    city: str | None = None
    state: str | None = None
    is_available: bool | None = None
    page: int | None = None
    limit: int | None = None

    def to_params(self) -> dict[str, str]:
        """Query-string parameters for the core service; ``category`` is client-side only."""
        params: dict[str, str] = {}
        for key, value in self.model_dump(mode="json", by_alias=True, exclude_none=True).items():
            if key == "category" or value == "":
                continue
            if isinstance(value, bool):
                params[key] = "true" if value else "false"
            else:
                params[key] = str(value)
        return params


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PropertyListResponse(CamelModel):
    """Paginated list of properties."""

    success: bool = True
    data: list[Property] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)


class PropertySummary(CamelModel):
    """Owner summary statistics returned alongside ``my-properties``."""

    total_listings: int = 0
    active_listings: int = 0
    occupied_listings: int = 0
    occupancy_rate: float = 0
    total_revenue: Decimal | None = None


class MyPropertiesResponse(CamelModel):
    properties: list[Property] = Field(default_factory=list)
    summary: PropertySummary | None = None
