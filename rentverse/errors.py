"""Typed errors for remote calls and boundary validation.

Every failure coming out of the HTTP layer is classified by whether a response
arrived:

- a response with a status code -> that status plus the server's message or a
  default message for the status;
- a request that got no response -> status ``0`` (``NETWORK_ERROR``);
- anything else -> status ``-1`` (``UNKNOWN_ERROR``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

NETWORK_ERROR = "NETWORK_ERROR"
UNKNOWN_ERROR = "UNKNOWN_ERROR"
VALIDATION_ERROR = "VALIDATION_ERROR"
INVALID_RESPONSE = "INVALID_RESPONSE"

_DEFAULT_MESSAGES: dict[int, str] = {
    400: "Invalid request. Please check your input.",
    401: "Authentication failed. Please login again.",
    403: "You do not have permission to perform this action.",
    404: "The requested resource was not found.",
    409: "A conflict occurred. The resource may already exist.",
    422: "Validation failed. Please check your input.",
    500: "Server error. Please try again later.",
    503: "Service unavailable. Please try again later.",
}
_FALLBACK_MESSAGE = "An error occurred. Please try again."


@dataclass(eq=False)
class ApiError(Exception):
    """Error surfaced to callers of the remote services."""

    status: int
    message: str
    code: str | None = None
    details: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if not self.message:
            self.message = get_default_error_message(self.status)
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"status": self.status, "message": self.message}
        if self.code is not None:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationFailedError(ApiError):
    """Raised at the auth/prediction boundary before any request is sent."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(
            status=400,
            message=message,
            code=VALIDATION_ERROR,
            details={"errors": errors} if errors else None,
        )


def get_default_error_message(status: int) -> str:
    """Human-readable message for an HTTP status when the server sent none."""
    return _DEFAULT_MESSAGES.get(status, _FALLBACK_MESSAGE)


def _response_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def handle_api_error(error: BaseException) -> ApiError:
    """Translate an exception raised by the HTTP layer into an ``ApiError``."""
    if isinstance(error, ApiError):
        return error

    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        body = _response_body(response)
        message = body.get("message")
        return ApiError(
            status=response.status_code,
            message=message if isinstance(message, str) and message else get_default_error_message(response.status_code),
            code=body.get("code"),
        )

    if isinstance(error, httpx.RequestError):
        logger.warning("No response from %s: %s", _request_url(error), error)
        return ApiError(
            status=0,
            message="Network error. Please check your connection.",
            code=NETWORK_ERROR,
        )

    logger.warning("Unexpected error during remote call", exc_info=error)
    return ApiError(status=-1, message="An unexpected error occurred", code=UNKNOWN_ERROR)


def _request_url(error: httpx.RequestError) -> str:
    try:
        return str(error.request.url)
    except RuntimeError:
        # Raised when the error was created without a request attached.
        return "<unknown>"
