"""Course access verification: challenge issue, signature check and caching."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from coursepass.core.errors import ForbiddenError, SignatureMalformedError
from coursepass.db.time import from_millis, to_millis, utcnow, within_window
from coursepass.services.access_oracle import AccessCheck, AccessOracle, check_access
from coursepass.services.auth_service import DEFAULT_CHALLENGE_WINDOW
from coursepass.services.course_access_cache import CourseAccessCache
from coursepass.services.messages import course_access_expiry, course_access_message
from coursepass.services.signature import SignatureVerifier, addresses_match

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessChallenge:
    """Message a purchaser signs to unlock a course for two hours."""

    message: str
    timestamp: int
    course_id: int
    user_address: str
    expires_at: str


def forbidden_for(check: AccessCheck) -> ForbiddenError:
    """Build the 403 carrying enough context for the client to pick upsell or owner UI."""
    return ForbiddenError(
        hasPurchased=check.is_purchased,
        isInstructor=check.is_instructor,
    )


class AccessAuthorizationService:
    """Decide whether a wallet may view a course's gated content.

    A verified signature is cached per (user, course). Presenting the same
    signature string again while the receipt is live is accepted without
    recovering the signer; any other signature goes through full verification.
    """

    def __init__(
        self,
        oracle: AccessOracle,
        cache: CourseAccessCache,
        verifier: SignatureVerifier | None = None,
        *,
        challenge_window: timedelta = DEFAULT_CHALLENGE_WINDOW,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._oracle = oracle
        self._cache = cache
        self._verifier = verifier or SignatureVerifier()
        self._window = challenge_window
        self._clock = clock

    def check_course_access(self, user_address: str, course_id: int) -> AccessCheck:
        """Always read fresh purchase and ownership facts."""
        check = check_access(self._oracle, user_address, course_id)
        logger.debug(
            "Access check for %s on course %s: purchased=%s instructor=%s",
            user_address.lower(),
            course_id,
            check.is_purchased,
            check.is_instructor,
        )
        return check

    def generate_challenge(self, course_id: int, user_address: str) -> AccessChallenge:
        """Issue the deterministic access message for a user who owns or bought the course.

        Raises:
            ForbiddenError: If the user neither purchased nor teaches the course.
        """
        check = self.check_course_access(user_address, course_id)
        if not check.has_access:
            raise forbidden_for(check)

        timestamp = to_millis(self._clock())
        expiry = course_access_expiry(timestamp)
        return AccessChallenge(
            message=course_access_message(course_id, timestamp),
            timestamp=timestamp,
            course_id=course_id,
            user_address=user_address.lower(),
            expires_at=from_millis(expiry)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z"),
        )

    def validate_access(
        self,
        user_address: str,
        course_id: int,
        signature: str,
        timestamp: int,
    ) -> bool:
        """Return True if ``signature`` proves the user's access to the course."""
        cached = self._cache.find(user_address, course_id)
        if cached is not None and cached.signature == signature:
            logger.debug("Access receipt hit for %s on course %s", user_address.lower(), course_id)
            return True

        if not within_window(timestamp, self._clock(), self._window):
            logger.info("Access signature timestamp outside window for %s", user_address.lower())
            return False

        expected_message = course_access_message(course_id, timestamp)
        try:
            recovered = self._verifier.recover(expected_message, signature)
        except SignatureMalformedError:
            logger.info("Malformed access signature from %s", user_address.lower())
            return False

        if not addresses_match(recovered, user_address):
            logger.info(
                "Access signature signer %s does not match %s", recovered, user_address.lower()
            )
            return False

        self._cache.upsert(user_address, course_id, signature, expected_message)
        return True
