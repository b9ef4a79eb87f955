"""Closed value sets shared by the core and AI services, plus furnished mappings."""

from enum import Enum


class PropertyTypeName(str, Enum):
    """Property types accepted by the AI price-prediction service.

    Must match the AI service's set exactly; a superset or subset breaks the
    prediction request contract.
    """

    APARTMENT = "Apartment"
    CONDOMINIUM = "Condominium"
    SERVICE_RESIDENCE = "Service Residence"
    TOWNHOUSE = "Townhouse"


class FurnishedType(str, Enum):
    """Furnished status as shown in the app and stored by the core service."""

    FULLY_FURNISHED = "Fully Furnished"
    PARTIALLY_FURNISHED = "Partially Furnished"
    UNFURNISHED = "Unfurnished"


class AIFurnishedType(str, Enum):
    """Furnished status vocabulary expected by the AI service."""

    YES = "Yes"
    PARTIALLY = "Partially"
    NO = "No"


class BookingStatus(str, Enum):
    """Lifecycle status of a booking (a lease on the core service)."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    ACTIVE = "ACTIVE"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


class ListingStatus(str, Enum):
    """Review status of a property listing."""

    PENDING_REVIEW = "PENDING_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class UserRole(str, Enum):
    """USER is a tenant looking for property; ADMIN is a provider/owner."""

    USER = "USER"
    ADMIN = "ADMIN"


class BookingRole(str, Enum):
    """Which side of a booking the caller is fetching as."""

    TENANT = "tenant"
    OWNER = "owner"


PROPERTY_TYPES: tuple[str, ...] = tuple(member.value for member in PropertyTypeName)
FURNISHED_TYPES: tuple[str, ...] = tuple(member.value for member in FurnishedType)
AI_FURNISHED_TYPES: tuple[str, ...] = tuple(member.value for member in AIFurnishedType)
BOOKING_STATUSES: tuple[str, ...] = tuple(member.value for member in BookingStatus)

TERMINAL_BOOKING_STATUSES: frozenset[BookingStatus] = frozenset(
    {BookingStatus.REJECTED, BookingStatus.CANCELLED, BookingStatus.COMPLETED}
)

FURNISHED_TO_AI_MAP: dict[FurnishedType, AIFurnishedType] = {
    FurnishedType.FULLY_FURNISHED: AIFurnishedType.YES,
    FurnishedType.PARTIALLY_FURNISHED: AIFurnishedType.PARTIALLY,
    FurnishedType.UNFURNISHED: AIFurnishedType.NO,
}

AI_TO_FURNISHED_MAP: dict[AIFurnishedType, FurnishedType] = {
    ai_value: app_value for app_value, ai_value in FURNISHED_TO_AI_MAP.items()
}


# ---------------------------------------------------------------------------
# Type guards
# ---------------------------------------------------------------------------


def _is_member(value: object, allowed: tuple[str, ...]) -> bool:
    return isinstance(value, str) and value in allowed


def is_valid_property_type(value: object) -> bool:
    """Return True if ``value`` is one of the four AI-supported property types."""
    return _is_member(value, PROPERTY_TYPES)


def is_valid_furnished_type(value: object) -> bool:
    """Return True if ``value`` is an app-facing furnished value."""
    return _is_member(value, FURNISHED_TYPES)


def is_valid_ai_furnished_type(value: object) -> bool:
    """Return True if ``value`` is an AI-facing furnished value."""
    return _is_member(value, AI_FURNISHED_TYPES)


def is_valid_booking_status(value: object) -> bool:
    """Return True if ``value`` is a booking status."""
    return _is_member(value, BOOKING_STATUSES)


# ---------------------------------------------------------------------------
# Furnished translation
# ---------------------------------------------------------------------------


def to_ai_furnished(furnished: FurnishedType | str) -> AIFurnishedType:
    """Translate an app-facing furnished value into the AI vocabulary.

    Raises:
        ValueError: If ``furnished`` is not an app-facing furnished value.
    """
    return FURNISHED_TO_AI_MAP[FurnishedType(furnished)]


def from_ai_furnished(furnished: AIFurnishedType | str) -> FurnishedType:
    """Translate an AI-facing furnished value back into the app vocabulary.

    Raises:
        ValueError: If ``furnished`` is not an AI-facing furnished value.
    """
    return AI_TO_FURNISHED_MAP[AIFurnishedType(furnished)]
