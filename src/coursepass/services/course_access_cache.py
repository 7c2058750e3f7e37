"""Time-boxed cache of verified course access signatures."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from threading import Lock
from typing import Final

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from coursepass.db.time import utcnow
from coursepass.models import CourseAccessToken

logger = logging.getLogger(__name__)

DEFAULT_ACCESS_TTL: Final[timedelta] = timedelta(hours=2)

# Upserts for the same (user, course) pair must not interleave; stripes keep
# the lock table bounded while unrelated pairs rarely contend.
_LOCK_STRIPES: Final[tuple[Lock, ...]] = tuple(Lock() for _ in range(64))


def _lock_for(user_address: str, course_id: int) -> Lock:
    return _LOCK_STRIPES[hash((user_address, course_id)) % len(_LOCK_STRIPES)]


class CourseAccessCache:
    """Store one live access receipt per (user, course) pair."""

    def __init__(
        self,
        db: Session,
        *,
        ttl: timedelta = DEFAULT_ACCESS_TTL,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._db = db
        self._ttl = ttl
        self._clock = clock

    def find(self, user_address: str, course_id: int) -> CourseAccessToken | None:
        """Return the non-expired receipt for the pair, if any."""
        stmt = select(CourseAccessToken).where(
            CourseAccessToken.user_address == user_address.lower(),
            CourseAccessToken.course_id == course_id,
            CourseAccessToken.expires_at > self._clock(),
        )
        return self._db.execute(stmt).scalar_one_or_none()

    def upsert(
        self,
        user_address: str,
        course_id: int,
        signature: str,
        signed_message: str,
    ) -> CourseAccessToken:
        """Insert or replace the receipt for the pair with a fresh expiry."""
        address = user_address.lower()
        expires_at = self._clock() + self._ttl
        with _lock_for(address, course_id):
            token = self._db.get(CourseAccessToken, (address, course_id))
            if token is None:
                token = CourseAccessToken(user_address=address, course_id=course_id)
                self._db.add(token)
            token.signature = signature
            token.signed_message = signed_message
            token.expires_at = expires_at
            self._db.commit()
        logger.info(
            "Stored access receipt for course %s, user %s, valid until %s",
            course_id,
            address,
            expires_at.isoformat(),
        )
        return token

    def revoke(self, user_address: str, course_id: int) -> bool:
        """Remove the receipt for the pair; return True if one existed."""
        result = self._db.execute(
            delete(CourseAccessToken).where(
                CourseAccessToken.user_address == user_address.lower(),
                CourseAccessToken.course_id == course_id,
            )
        )
        self._db.commit()
        return bool(result.rowcount)

    def sweep_expired(self) -> int:
        """Delete expired receipts and return how many were removed."""
        result = self._db.execute(
            delete(CourseAccessToken)
            .where(CourseAccessToken.expires_at <= self._clock())
            .execution_options(synchronize_session=False)
        )
        self._db.commit()
        self._db.expire_all()
        removed = int(result.rowcount or 0)
        if removed:
            logger.info("Swept %d expired course access receipts", removed)
        return removed
