"""Field-level validation for auth, listing and AI prediction input.

Each validator parses a loosely-typed candidate (a mapping from a form, or a
request model) into a typed pydantic model. Every field is checked, so one
record can carry several errors; pydantic's ``ValidationError`` is then turned
into a ``ValidationResult`` / ``FieldValidationResult``. Validators never raise
for bad input.

Missing fields and wrong-typed values are reported with the same message as
blank or out-of-range values for that field.
"""

import math
import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Annotated, Any, NoReturn, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from rentverse.errors import ValidationFailedError
from rentverse.models.enums import (
    AI_FURNISHED_TYPES,
    PROPERTY_TYPES,
    AIFurnishedType,
    PropertyTypeName,
    UserRole,
    is_valid_ai_furnished_type,
    is_valid_property_type,
)
from rentverse.schemas.auth import LoginRequest, RegisterRequest
from rentverse.schemas.prediction import PredictionRequest
from rentverse.schemas.validation import FieldValidationResult, ValidationResult

EMAIL_PATTERN = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)
MIN_PASSWORD_LENGTH = 6

ModelT = TypeVar("ModelT", bound=BaseModel)


def is_valid_email(email: object) -> bool:
    """Permissive ``local@domain.tld`` check, case-insensitive."""
    return isinstance(email, str) and EMAIL_PATTERN.fullmatch(email) is not None


# ---------------------------------------------------------------------------
# Field checks
# ---------------------------------------------------------------------------


def _fail(error_type: str, message: str) -> PydanticCustomError:
    return PydanticCustomError(error_type, message)


def _is_blank(value: object) -> bool:
    return not isinstance(value, str) or not value.strip()


def _as_number(value: object) -> float | None:
    """Coerce numbers and numeric strings; anything else (bools included) is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def required_text(message: str) -> BeforeValidator:
    def check(value: object) -> str:
        if _is_blank(value):
            raise _fail("required", message)
        return value  # type: ignore[return-value]

    return BeforeValidator(check)


def greater_than_zero(message: str) -> BeforeValidator:
    def check(value: object) -> float:
        number = _as_number(value)
        if number is None or number <= 0:
            raise _fail("not_positive", message)
        return number

    return BeforeValidator(check)


def at_least_one(message: str) -> BeforeValidator:
    """Whole-number count of at least 1 (prediction bedrooms and bathrooms)."""

    def check(value: object) -> int:
        number = _as_number(value)
        if number is None or number < 1 or not number.is_integer():
            raise _fail("too_small", message)
        return int(number)

    return BeforeValidator(check)


def not_less_than_one(message: str) -> BeforeValidator:
    """Any number of at least 1; half bathrooms such as 1.5 are allowed."""

    def check(value: object) -> float:
        number = _as_number(value)
        if number is None or number < 1:
            raise _fail("too_small", message)
        return number

    return BeforeValidator(check)


def _check_email(value: object) -> str:
    if _is_blank(value):
        raise _fail("required", "Email is required")
    if not is_valid_email(value):
        raise _fail("email_format", "Invalid email format")
    return value  # type: ignore[return-value]


def _check_password(value: object) -> str:
    if _is_blank(value):
        raise _fail("required", "Password is required")
    # Length is measured on the raw string, surrounding whitespace included.
    if len(value) < MIN_PASSWORD_LENGTH:  # type: ignore[arg-type]
        raise _fail("too_short", f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return value  # type: ignore[return-value]


def _check_property_type(value: object) -> str:
    if not is_valid_property_type(value):
        raise _fail("property_type", f"Property type must be one of: {', '.join(PROPERTY_TYPES)}")
    return value  # type: ignore[return-value]


def _check_ai_furnished(value: object) -> str:
    if not is_valid_ai_furnished_type(value):
        raise _fail("furnished", f"Furnished must be one of: {', '.join(AI_FURNISHED_TYPES)}")
    return value  # type: ignore[return-value]


# ---------------------------------------------------------------------------
# Candidate models
# ---------------------------------------------------------------------------


class _Candidate(BaseModel):
    """Absent fields default to None and still go through their validators."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
        extra="ignore",
    )


Email = Annotated[str, BeforeValidator(_check_email)]
Password = Annotated[str, BeforeValidator(_check_password)]


class LoginCandidate(_Candidate):
    email: Email = None
    password: Password = None


class RegisterCandidate(LoginCandidate):
    first_name: Annotated[str, required_text("First name is required")] = None
    last_name: Annotated[str, required_text("Last name is required")] = None
    date_of_birth: Annotated[str, required_text("Date of birth is required")] = None
    phone: Annotated[str, required_text("Phone number is required")] = None
    role: UserRole | None = None


class ListingCandidate(_Candidate):
    title: Annotated[str, required_text("Title is required")] = None
    price: Annotated[float, greater_than_zero("Price must be greater than 0")] = None
    bedrooms: Annotated[float, not_less_than_one("At least 1 bedroom is required")] = None
    bathrooms: Annotated[float, not_less_than_one("At least 1 bathroom is required")] = None
    area_sqm: Annotated[float, greater_than_zero("Area must be greater than 0")] = None
    property_type_id: Annotated[str, required_text("Property type is required")] = None
    address: Annotated[str, required_text("Address is required")] = None
    city: Annotated[str, required_text("City is required")] = None
    state: Annotated[str, required_text("State is required")] = None
    zip_code: Annotated[str, required_text("Zip code is required")] = None


class PredictionCandidate(_Candidate):
    # The AI service is snake_case; no camel aliases here.
    model_config = ConfigDict(alias_generator=None)

    property_type: Annotated[PropertyTypeName, BeforeValidator(_check_property_type)] = None
    bedrooms: Annotated[int, at_least_one("Bedrooms must be at least 1")] = None
    bathrooms: Annotated[int, at_least_one("Bathrooms must be at least 1")] = None
    area: Annotated[float, greater_than_zero("Area must be greater than 0")] = None
    furnished: Annotated[AIFurnishedType, BeforeValidator(_check_ai_furnished)] = None
    location: Annotated[str, required_text("Location is required")] = None


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _as_mapping(data: Any) -> dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump()
    if isinstance(data, Mapping):
        return dict(data)
    return {}


def _field_name(candidate: type[BaseModel], loc: tuple[int | str, ...]) -> str:
    if not loc:
        return "__root__"
    key = str(loc[0])
    if key in candidate.model_fields:
        return key
    for name, field in candidate.model_fields.items():
        if field.alias == key:
            return name
    return key


def parse_candidate(candidate: type[ModelT], data: Any) -> tuple[ModelT | None, list[tuple[str, str]]]:
    """Build ``candidate`` from ``data``.

    Returns the typed model and no errors, or ``None`` and a ``(field, message)``
    pair for every failing field in declaration order.
    """
    try:
        return candidate.model_validate(_as_mapping(data)), []
    except ValidationError as exc:
        return None, [(_field_name(candidate, err["loc"]), err["msg"]) for err in exc.errors()]


def _messages(errors: list[tuple[str, str]]) -> list[str]:
    return [message for _, message in errors]


def _raise_first(errors: list[tuple[str, str]]) -> NoReturn:
    messages = _messages(errors)
    raise ValidationFailedError(messages[0], messages)


# ---------------------------------------------------------------------------
# Public validators
# ---------------------------------------------------------------------------


def validate_login_request(data: Any) -> ValidationResult:
    _, errors = parse_candidate(LoginCandidate, data)
    return ValidationResult(errors=_messages(errors))


def validate_register_request(data: Any) -> ValidationResult:
    _, errors = parse_candidate(RegisterCandidate, data)
    return ValidationResult(errors=_messages(errors))


def validate_listing_data(data: Any) -> FieldValidationResult:
    """Check a listing form. Errors are keyed by field name (``area_sqm``, ``zip_code``...)."""
    _, errors = parse_candidate(ListingCandidate, data)
    field_errors: dict[str, str] = {}
    for field, message in errors:
        field_errors.setdefault(field, message)
    return FieldValidationResult(errors=field_errors)


def validate_prediction_request(data: Any) -> ValidationResult:
    _, errors = parse_candidate(PredictionCandidate, data)
    return ValidationResult(errors=_messages(errors))


def parse_login_request(data: Any) -> LoginRequest:
    """Return a typed login request or raise ``ValidationFailedError`` with the first message."""
    candidate, errors = parse_candidate(LoginCandidate, data)
    if candidate is None:
        _raise_first(errors)
    return LoginRequest(email=candidate.email, password=candidate.password)


def parse_register_request(data: Any) -> RegisterRequest:
    candidate, errors = parse_candidate(RegisterCandidate, data)
    if candidate is None:
        _raise_first(errors)
    return RegisterRequest(**candidate.model_dump())


def parse_prediction_request(data: Any) -> PredictionRequest:
    candidate, errors = parse_candidate(PredictionCandidate, data)
    if candidate is None:
        _raise_first(errors)
    return PredictionRequest(**candidate.model_dump())
