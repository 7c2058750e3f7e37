"""Persistent bearer sessions bound to wallet addresses."""

from __future__ import annotations

import logging
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Final

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from coursepass.db.time import utcnow
from coursepass.models import UserSession

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL_HOURS: Final[int] = 24
SESSION_TOKEN_BYTES: Final[int] = 64


class SessionStore:
    """Issue, validate and revoke session tokens.

    Issuing a session deletes every earlier session for the same address
    before inserting the new one. The two statements are not atomic across
    concurrent logins for one address, so two simultaneous logins can both
    succeed briefly; the later ``create`` still removes whatever it finds.
    """

    def __init__(self, db: Session, *, clock: Callable[[], datetime] = utcnow) -> None:
        self._db = db
        self._clock = clock

    @staticmethod
    def _generate_token() -> str:
        return secrets.token_hex(SESSION_TOKEN_BYTES)

    def create(self, user_address: str, ttl_hours: int = DEFAULT_SESSION_TTL_HOURS) -> str:
        """Create a session for ``user_address`` and return its token."""
        address = user_address.lower()
        token = self._generate_token()
        now = self._clock()
        expires_at = now + timedelta(hours=ttl_hours)

        self._db.execute(delete(UserSession).where(UserSession.user_address == address))
        self._db.add(
            UserSession(
                session_token=token,
                user_address=address,
                created_at=now,
                expires_at=expires_at,
            )
        )
        self._db.commit()
        logger.info("Created session for %s, valid until %s", address, expires_at.isoformat())
        return token

    def validate(self, token: str) -> str | None:
        """Return the address bound to ``token`` if the session is still live."""
        if not token:
            return None
        stmt = select(UserSession.user_address).where(
            UserSession.session_token == token,
            UserSession.expires_at > self._clock(),
        )
        return self._db.execute(stmt).scalar_one_or_none()

    def revoke(self, token: str) -> None:
        """Delete the session for ``token``; unknown tokens are ignored."""
        self._db.execute(delete(UserSession).where(UserSession.session_token == token))
        self._db.commit()

    def sweep_expired(self) -> int:
        """Delete all expired sessions and return how many were removed."""
        result = self._db.execute(
            delete(UserSession)
            .where(UserSession.expires_at <= self._clock())
            .execution_options(synchronize_session=False)
        )
        self._db.commit()
        self._db.expire_all()
        removed = int(result.rowcount or 0)
        if removed:
            logger.info("Swept %d expired sessions", removed)
        return removed
