"""Pydantic v2 schemas for bookings (leases on the core service)."""

from decimal import Decimal

from pydantic import Field

from rentverse.config import settings
from rentverse.models.enums import BookingRole, BookingStatus
from rentverse.schemas.auth import User
from rentverse.schemas.base import CamelModel, Pagination
from rentverse.schemas.property import Property

# ---------------------------------------------------------------------------
# Booking record
# ---------------------------------------------------------------------------


class Booking(CamelModel):
    """A tenancy request between a tenant and a property owner.

    Dates and timestamps are kept as the ISO-8601 strings the core service
    sends. ``end_date`` after ``start_date`` is enforced when the booking is
    requested (see ``validate_booking_dates``), not re-checked here.
    """

    id: str
    property_id: str
    property: Property | None = None
    tenant_id: str
    tenant: User | None = None
    landlord_id: str
    landlord: User | None = None
    start_date: str
    end_date: str
    rent_amount: Decimal = Field(..., gt=0)
    currency_code: str = Field(default_factory=lambda: settings.currency_code)
    security_deposit: Decimal | None = None
    status: BookingStatus = BookingStatus.PENDING
    notes: str | None = None
    created_at: str
    updated_at: str


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(CamelModel):
    """Create-booking payload.

    ``message`` stays ``None`` when the tenant wrote nothing, and ``to_wire``
    drops it so the key is absent from the request body.
    """

    property_id: str
    start_date: str
    end_date: str
    message: str | None = None


class CancelBookingRequest(CamelModel):
    reason: str | None = None


class BookingFilters(CamelModel):
    """Query parameters for ``GET /bookings``."""

    status: BookingStatus | None = None
    role: BookingRole | None = None
    page: int | None = Field(None, ge=1)
    limit: int | None = Field(None, ge=1)

    def to_params(self) -> dict[str, str]:
        return {
            key: str(value)
            for key, value in self.model_dump(mode="json", exclude_none=True).items()
        }


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingListResponse(CamelModel):
    """Paginated list of bookings."""

    success: bool = True
    data: list[Booking] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)


class BookingDateValidation(CamelModel):
    """Outcome of ``validate_booking_dates``."""

    is_valid: bool
    error: str | None = None
