"""Shared API dependencies for authentication and common functionality."""

from dataclasses import dataclass
from datetime import timedelta
from typing import Annotated

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from coursepass.core.errors import UnauthorizedError
from coursepass.core.settings import settings
from coursepass.db.session import get_db
from coursepass.services.access_oracle import DatabaseAccessOracle
from coursepass.services.access_service import AccessAuthorizationService
from coursepass.services.auth_service import AuthenticationService
from coursepass.services.course_access_cache import CourseAccessCache
from coursepass.services.nonce_store import NonceStore
from coursepass.services.session_store import SessionStore

# Bearer scheme; a missing header is handled by the dependencies below
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


@dataclass(frozen=True)
class AuthenticatedUser:
    """Wallet resolved from a live session token."""

    address: str
    session_token: str


def get_nonce_store(request: Request) -> NonceStore:
    """Return the process-wide nonce store owned by the application."""
    return request.app.state.nonce_store


NonceStoreDep = Annotated[NonceStore, Depends(get_nonce_store)]


def get_session_store(db: SessionDep) -> SessionStore:
    return SessionStore(db)


SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]


def get_auth_service(
    nonce_store: NonceStoreDep,
    session_store: SessionStoreDep,
) -> AuthenticationService:
    return AuthenticationService(
        nonce_store,
        session_store,
        session_ttl_hours=settings.session_ttl_hours,
        challenge_window=timedelta(seconds=settings.challenge_window_seconds),
        require_nonce=settings.auth_require_nonce,
    )


AuthServiceDep = Annotated[AuthenticationService, Depends(get_auth_service)]


def get_access_service(db: SessionDep) -> AccessAuthorizationService:
    return AccessAuthorizationService(
        DatabaseAccessOracle(db),
        CourseAccessCache(db, ttl=timedelta(hours=settings.course_access_ttl_hours)),
        challenge_window=timedelta(seconds=settings.challenge_window_seconds),
    )


AccessServiceDep = Annotated[AccessAuthorizationService, Depends(get_access_service)]


def _extract_token(
    credentials: HTTPAuthorizationCredentials | None,
    query_token: str | None,
) -> str | None:
    if credentials is not None and credentials.scheme.lower() == "bearer" and credentials.credentials:
        return credentials.credentials
    return query_token or None


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    session_store: SessionStoreDep,
    session_token: Annotated[str | None, Query(alias="sessionToken")] = None,
) -> AuthenticatedUser | None:
    """Resolve the caller if a valid session token was sent; never rejects the request."""
    token = _extract_token(credentials, session_token)
    if token is None:
        return None
    address = session_store.validate(token)
    if address is None:
        return None
    return AuthenticatedUser(address=address, session_token=token)


OptionalUserDep = Annotated[AuthenticatedUser | None, Depends(get_optional_user)]


def require_user(user: OptionalUserDep) -> AuthenticatedUser:
    """Resolve the caller or fail the request with 401.

    Raises:
        UnauthorizedError: If no token was sent or the session is unknown or expired.
    """
    if user is None:
        raise UnauthorizedError()
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[AuthenticatedUser, Depends(require_user)]
