"""Pydantic v2 schemas for authentication and user records."""

from rentverse.models.enums import UserRole
from rentverse.schemas.base import CamelModel

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class LoginRequest(CamelModel):
    """Schema for email/password login."""

    email: str
    password: str


class RegisterRequest(CamelModel):
    """Schema for user registration."""

    email: str
    password: str
    first_name: str
    last_name: str
    date_of_birth: str
    phone: str
    role: UserRole | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class User(CamelModel):
    """User profile as returned by the core service."""

    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    name: str = ""
    date_of_birth: str | None = None
    phone: str | None = None
    profile_picture: str | None = None
    role: UserRole = UserRole.USER
    is_active: bool = True
    created_at: str | None = None
    updated_at: str | None = None


class AuthData(CamelModel):
    """User + token pair inside an auth response."""

    user: User
    token: str | None = None


class AuthResponse(CamelModel):
    """Response to login, register and token refresh."""

    success: bool = True
    message: str = ""
    data: AuthData | None = None
