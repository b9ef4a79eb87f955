"""Booking lifecycle — guards, pure transitions and the remote booking calls.

State machine over ``Booking.status``::

    PENDING  --approve-->           APPROVED
    PENDING  --reject(reason?)-->   REJECTED
    PENDING  --cancel (tenant)-->   REJECTED   (notes = reason)
    APPROVED --cancel (tenant)-->   CANCELLED
    ACTIVE   --cancel (tenant)-->   CANCELLED
    APPROVED --term starts-->       ACTIVE      (core service, not here)
    ACTIVE   --term ends-->         COMPLETED   (core service, not here)

The pure ``apply_*`` functions let a screen reflect a decision before or
without a round trip. When a guard fails they return the booking they were
given, unchanged; an illegal transition is a no-op, not an error.
"""

import logging
from datetime import date, datetime, time, tzinfo

from rentverse.api.client import ApiClient, response_data
from rentverse.models.enums import TERMINAL_BOOKING_STATUSES, BookingRole, BookingStatus
from rentverse.schemas.base import Pagination
from rentverse.schemas.booking import (
    Booking,
    BookingCreate,
    BookingDateValidation,
    BookingFilters,
    BookingListResponse,
    CancelBookingRequest,
)
from rentverse.utils.formatting import to_iso_string, utc_now_iso

logger = logging.getLogger(__name__)

DEFAULT_CANCEL_REASON = "Cancelled by tenant"


# ---------------------------------------------------------------------------
# Guards
# ---------------------------------------------------------------------------


def can_approve(booking: Booking) -> bool:
    return booking.status == BookingStatus.PENDING


def can_reject(booking: Booking) -> bool:
    return booking.status == BookingStatus.PENDING


def can_cancel(booking: Booking, tenant_id: str | None = None) -> bool:
    """A tenant may cancel their own booking while it is not in a terminal state."""
    if booking.status in TERMINAL_BOOKING_STATUSES:
        return False
    return tenant_id is None or booking.tenant_id == tenant_id


# ---------------------------------------------------------------------------
# Pure transitions
# ---------------------------------------------------------------------------


def _transition(booking: Booking, now: str | None, **changes: object) -> Booking:
    return booking.model_copy(update={**changes, "updated_at": now or utc_now_iso()})


def apply_approval(booking: Booking, now: str | None = None) -> Booking:
    """Return an APPROVED copy of a PENDING booking; anything else is returned as is."""
    if not can_approve(booking):
        return booking
    return _transition(booking, now, status=BookingStatus.APPROVED)


def apply_rejection(booking: Booking, reason: str | None = None, now: str | None = None) -> Booking:
    """Return a REJECTED copy of a PENDING booking.

    ``notes`` becomes ``reason`` when one is given and is kept otherwise.
    """
    if not can_reject(booking):
        return booking
    return _transition(
        booking,
        now,
        status=BookingStatus.REJECTED,
        notes=reason or booking.notes,
    )


def apply_cancellation(
    booking: Booking,
    reason: str | None = DEFAULT_CANCEL_REASON,
    tenant_id: str | None = None,
    now: str | None = None,
) -> Booking:
    """Reflect a tenant cancellation.

    A request that was never decided (PENDING) is withdrawn, which the core
    service records as REJECTED with the reason in ``notes``. An APPROVED or
    ACTIVE booking becomes CANCELLED.
    """
    if not can_cancel(booking, tenant_id):
        return booking
    if booking.status == BookingStatus.PENDING:
        return _transition(
            booking,
            now,
            status=BookingStatus.REJECTED,
            notes=reason or booking.notes,
        )
    return _transition(booking, now, status=BookingStatus.CANCELLED)


def tenant_display_status(booking: Booking) -> BookingStatus:
    """Status as shown to the tenant: a withdrawn (REJECTED) request reads CANCELLED."""
    if booking.status == BookingStatus.REJECTED:
        return BookingStatus.CANCELLED
    return booking.status


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------


def create_booking_payload(
    property_id: str,
    start_date: date | datetime,
    end_date: date | datetime,
    message: str | None = None,
) -> BookingCreate:
    """Build the create-booking payload; an empty message is left out entirely."""
    return BookingCreate(
        property_id=property_id,
        start_date=to_iso_string(start_date),
        end_date=to_iso_string(end_date),
        message=message or None,
    )


def _as_datetime(value: date | datetime, tz: tzinfo | None) -> datetime:
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None and tz is not None:
        return value.replace(tzinfo=tz)
    return value


def validate_booking_dates(
    start_date: date | datetime,
    end_date: date | datetime,
    today: date | None = None,
) -> BookingDateValidation:
    """Reject a start before today (midnight) and an end not strictly after the start.

    "Midnight" is taken in the start's own offset when it carries one, so a
    ``+08:00`` start later today is accepted wherever the process runs. Naive
    values are wall-clock times in that same frame.
    """
    today = today or date.today()
    tz = next(
        (v.tzinfo for v in (start_date, end_date) if isinstance(v, datetime) and v.tzinfo is not None),
        None,
    )
    start = _as_datetime(start_date, tz)
    end = _as_datetime(end_date, tz)

    if start < datetime.combine(today, time.min, tzinfo=tz):
        return BookingDateValidation(is_valid=False, error="Start date cannot be in the past")
    if end <= start:
        return BookingDateValidation(is_valid=False, error="End date must be after start date")
    return BookingDateValidation(is_valid=True)


# ---------------------------------------------------------------------------
# Remote calls
# ---------------------------------------------------------------------------


class BookingService:
    """Booking endpoints of the core service.

    Every method returns the server's record, which is authoritative over any
    optimistic state produced by the ``apply_*`` functions.
    """

    def __init__(self, api: ApiClient) -> None:
        self.api = api

    async def get_bookings(self, filters: BookingFilters | None = None) -> BookingListResponse:
        params = filters.to_params() if filters is not None else None
        body = await self.api.get("/bookings", params=params or None)
        data = response_data(body) or {}
        return BookingListResponse(
            success=bool(body.get("success", True)) if isinstance(body, dict) else True,
            data=data.get("bookings") or [],
            pagination=data.get("pagination") or Pagination(),
        )

    async def get_booking(self, booking_id: str) -> Booking:
        body = await self.api.get(f"/bookings/{booking_id}")
        return Booking.model_validate(response_data(body))

    async def create_booking(self, payload: BookingCreate) -> Booking:
        logger.info("Requesting booking for property %s", payload.property_id)
        body = await self.api.post("/bookings", json=payload.to_wire())
        booking = Booking.model_validate(response_data(body))
        logger.info("Created booking %s (%s)", booking.id, booking.status.value)
        return booking

    async def cancel_booking(self, booking_id: str, reason: str | None = None) -> Booking:
        logger.info("Cancelling booking %s", booking_id)
        body = await self.api.post(
            f"/bookings/{booking_id}/cancel",
            json=CancelBookingRequest(reason=reason).to_wire(),
        )
        return Booking.model_validate(response_data(body))

    async def approve_booking(self, booking_id: str) -> Booking:
        logger.info("Approving booking %s", booking_id)
        body = await self.api.post(f"/bookings/{booking_id}/approve")
        return Booking.model_validate(response_data(body))

    async def reject_booking(self, booking_id: str, reason: str | None = None) -> Booking:
        logger.info("Rejecting booking %s", booking_id)
        body = await self.api.post(
            f"/bookings/{booking_id}/reject",
            json={"reason": reason} if reason else {},
        )
        return Booking.model_validate(response_data(body))

    async def get_tenant_bookings(self, status: BookingStatus | None = None) -> BookingListResponse:
        return await self.get_bookings(BookingFilters(role=BookingRole.TENANT, status=status))

    async def get_owner_bookings(
        self,
        status: BookingStatus | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> BookingListResponse:
        return await self.get_bookings(
            BookingFilters(role=BookingRole.OWNER, status=status, page=page, limit=limit)
        )
