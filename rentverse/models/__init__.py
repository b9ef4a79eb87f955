"""Domain value sets for Rentverse.

Everything else in the package depends on these closed sets; import them from
here rather than from the submodule.
"""

from rentverse.models.enums import (
    AI_FURNISHED_TYPES,
    AI_TO_FURNISHED_MAP,
    BOOKING_STATUSES,
    FURNISHED_TO_AI_MAP,
    FURNISHED_TYPES,
    PROPERTY_TYPES,
    TERMINAL_BOOKING_STATUSES,
    AIFurnishedType,
    BookingRole,
    BookingStatus,
    FurnishedType,
    ListingStatus,
    PropertyTypeName,
    UserRole,
    from_ai_furnished,
    is_valid_ai_furnished_type,
    is_valid_booking_status,
    is_valid_furnished_type,
    is_valid_property_type,
    to_ai_furnished,
)

__all__ = [
    "AI_FURNISHED_TYPES",
    "AI_TO_FURNISHED_MAP",
    "BOOKING_STATUSES",
    "FURNISHED_TO_AI_MAP",
    "FURNISHED_TYPES",
    "PROPERTY_TYPES",
    "TERMINAL_BOOKING_STATUSES",
    "AIFurnishedType",
    "BookingRole",
    "BookingStatus",
    "FurnishedType",
    "ListingStatus",
    "PropertyTypeName",
    "UserRole",
    "from_ai_furnished",
    "is_valid_ai_furnished_type",
    "is_valid_booking_status",
    "is_valid_furnished_type",
    "is_valid_property_type",
    "to_ai_furnished",
]
