"""Expected, user-facing failures and their HTTP status codes.

Services raise these; the application registers a single handler that turns
them into JSON responses. Anything not derived from ``CoursePassError`` is an
internal error and is reported as a 500.
"""

from __future__ import annotations

from typing import Any

from fastapi import status


class CoursePassError(Exception):
    """Base class for recoverable failures surfaced to API clients."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_detail: str = "Request could not be processed"

    def __init__(self, detail: str | None = None, **extra: Any) -> None:
        self.detail = detail or self.default_detail
        self.extra = extra
        super().__init__(self.detail)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body sent to the client."""
        return {"detail": self.detail, **self.extra}


class ExpiredChallengeError(CoursePassError):
    """The client timestamp is outside the accepted window."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request timestamp has expired"


class InvalidAddressError(CoursePassError):
    """A wallet address is not a 20-byte hex string."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid wallet address format"


class NonceInvalidError(CoursePassError):
    """The nonce is unknown, already consumed, expired, or bound to another wallet."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Nonce is invalid or has expired"


class SignatureMalformedError(CoursePassError):
    """The signature could not be parsed or no address could be recovered."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid signature format"


class SignatureMismatchError(CoursePassError):
    """The recovered signer differs from the claimed address."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Signature verification failed"


class UnauthorizedError(CoursePassError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Session expired or invalid"


class ForbiddenError(CoursePassError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You have not purchased this course"


class NotFoundError(CoursePassError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"


class ConflictError(CoursePassError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists"
