"""Service layer for CoursePass."""

from .access_service import AccessAuthorizationService, AccessChallenge
from .auth_service import (
    AuthenticationService,
    LoginResult,
    NonceChallenge,
    SessionStatus,
    TimestampChallenge,
)
from .course_access_cache import CourseAccessCache
from .nonce_store import NonceStore
from .session_store import SessionStore
from .signature import SignatureVerifier

__all__ = [
    "AccessAuthorizationService",
    "AccessChallenge",
    "AuthenticationService",
    "CourseAccessCache",
    "LoginResult",
    "NonceChallenge",
    "NonceStore",
    "SessionStatus",
    "SessionStore",
    "SignatureVerifier",
    "TimestampChallenge",
]
