"""Client-side filters and derived state over property and booking lists.

All functions are pure: they keep input order, never mutate their arguments
and always return a new list.
"""

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Protocol, TypeVar

from rentverse.models.enums import BookingStatus, FurnishedType, ListingStatus, PropertyTypeName
from rentverse.schemas.booking import Booking
from rentverse.schemas.property import Property
from rentverse.utils.formatting import parse_date

SEARCH_FIELDS = ("title", "address", "city", "state")


class HasStatus(Protocol):
    status: BookingStatus | ListingStatus


StatusT = TypeVar("StatusT", bound=HasStatus)


# ---------------------------------------------------------------------------
# Property filters
# ---------------------------------------------------------------------------


def filter_by_search(properties: Sequence[Property], query: str | None) -> list[Property]:
    """Case-insensitive substring match on title, address, city or state.

    An absent or blank query matches everything.
    """
    if not query or not query.strip():
        return list(properties)

    needle = query.strip().lower()
    return [
        prop
        for prop in properties
        if any(needle in (getattr(prop, field) or "").lower() for field in SEARCH_FIELDS)
    ]


def filter_by_category(properties: Sequence[Property], category: PropertyTypeName | str) -> list[Property]:
    """Exact match on the nested property type name."""
    return [
        prop
        for prop in properties
        if prop.property_type is not None and prop.property_type.name == category
    ]


def filter_by_price_range(
    properties: Sequence[Property],
    min_price: Decimal | float | None = None,
    max_price: Decimal | float | None = None,
) -> list[Property]:
    """Inclusive price bounds; an omitted bound is unbounded on that side."""
    return [
        prop
        for prop in properties
        if (min_price is None or prop.price >= min_price)
        and (max_price is None or prop.price <= max_price)
    ]


def filter_by_status(records: Sequence[StatusT], status: BookingStatus | ListingStatus | str) -> list[StatusT]:
    """Exact match on ``status``; works for bookings and listings alike."""
    return [record for record in records if record.status == status]


def filter_bookings_by_status(bookings: Sequence[Booking], status: BookingStatus | str) -> list[Booking]:
    return filter_by_status(bookings, status)


# ---------------------------------------------------------------------------
# Booking summaries
# ---------------------------------------------------------------------------


def count_by_status(bookings: Iterable[Booking]) -> dict[BookingStatus, int]:
    """Number of bookings per status; every status is present, zero included."""
    counts = Counter(booking.status for booking in bookings)
    return {status: counts.get(status, 0) for status in BookingStatus}


def _as_utc(value: date | datetime) -> datetime:
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _in_term(booking: Booking, now: datetime) -> bool:
    start = parse_date(booking.start_date)
    end = parse_date(booking.end_date)
    if start is None or end is None:
        return False
    return _as_utc(start) <= now <= _as_utc(end)


def summarize_owner_bookings(bookings: Sequence[Booking], now: datetime | None = None) -> dict[str, int]:
    """Dashboard counters for a provider.

    ``pending`` counts bookings awaiting a decision; ``active`` counts
    APPROVED or ACTIVE bookings whose term contains ``now``.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    occupying = (BookingStatus.APPROVED, BookingStatus.ACTIVE)
    return {
        "pending": sum(1 for b in bookings if b.status == BookingStatus.PENDING),
        "active": sum(1 for b in bookings if b.status in occupying and _in_term(b, now)),
    }


# ---------------------------------------------------------------------------
# Favorites overlay and display helpers
# ---------------------------------------------------------------------------


def toggle_favorite(prop: Property) -> Property:
    """Flip the viewer's favorite flag on a copy of ``prop``."""
    return prop.model_copy(update={"is_favorite": not prop.is_favorite})


def update_favorite_in_list(properties: Sequence[Property], property_id: str) -> list[Property]:
    """Toggle the favorite flag of one property in a list; others are untouched."""
    return [toggle_favorite(prop) if prop.id == property_id else prop for prop in properties]


def format_location(prop: Property) -> str:
    return ", ".join(part for part in (prop.address, prop.city, prop.state) if part)


def furnished_display(prop: Property) -> str:
    """Display text for ``furnished``; legacy listings store a boolean."""
    if isinstance(prop.furnished, bool):
        return "Furnished" if prop.furnished else FurnishedType.UNFURNISHED.value
    return FurnishedType(prop.furnished).value
