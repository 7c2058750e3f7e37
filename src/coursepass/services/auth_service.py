"""Login and logout orchestration."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Final

from coursepass.core.errors import (
    ExpiredChallengeError,
    NonceInvalidError,
    SignatureMismatchError,
)
from coursepass.db.time import utcnow, within_window
from coursepass.services.nonce_store import NonceStore
from coursepass.services.session_store import DEFAULT_SESSION_TTL_HOURS, SessionStore
from coursepass.services.signature import SignatureVerifier, addresses_match, normalize_address

logger = logging.getLogger(__name__)

DEFAULT_CHALLENGE_WINDOW: Final[timedelta] = timedelta(minutes=5)


@dataclass(frozen=True)
class TimestampChallenge:
    """A signed request accepted on timestamp window and signature alone."""

    wallet_address: str
    signature: str
    message: str
    timestamp: int


@dataclass(frozen=True)
class NonceChallenge:
    """A signed request that also spends a server-issued nonce."""

    wallet_address: str
    signature: str
    message: str
    timestamp: int
    nonce: str


LoginChallenge = NonceChallenge | TimestampChallenge


def build_challenge(
    wallet_address: str,
    signature: str,
    message: str,
    timestamp: int,
    nonce: str | None = None,
) -> LoginChallenge:
    """Pick the challenge variant from whether the client sent a nonce."""
    if nonce:
        return NonceChallenge(wallet_address, signature, message, timestamp, nonce)
    return TimestampChallenge(wallet_address, signature, message, timestamp)


@dataclass(frozen=True)
class LoginResult:
    session_token: str
    wallet_address: str
    expires_in: int  # milliseconds


@dataclass(frozen=True)
class SessionStatus:
    user_address: str
    is_valid: bool


def check_replay_guard(
    challenge: LoginChallenge,
    nonce_store: NonceStore,
    *,
    require_nonce: bool,
) -> None:
    """Spend the nonce of a NonceChallenge, or decide whether a bare timestamp is enough.

    Raises:
        NonceInvalidError: If the nonce does not validate, or no nonce was sent
            while nonces are mandatory.
    """
    if isinstance(challenge, NonceChallenge):
        if not nonce_store.consume(challenge.nonce, challenge.wallet_address):
            raise NonceInvalidError()
    elif isinstance(challenge, TimestampChallenge):
        if require_nonce:
            raise NonceInvalidError("A nonce is required for this request")
    else:  # pragma: no cover - exhaustive over LoginChallenge
        raise TypeError(f"Unsupported challenge type: {type(challenge).__name__}")


class AuthenticationService:
    """Turn a signed wallet challenge into a session, and end sessions."""

    def __init__(
        self,
        nonce_store: NonceStore,
        session_store: SessionStore,
        verifier: SignatureVerifier | None = None,
        *,
        session_ttl_hours: int = DEFAULT_SESSION_TTL_HOURS,
        challenge_window: timedelta = DEFAULT_CHALLENGE_WINDOW,
        require_nonce: bool = False,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._nonces = nonce_store
        self._sessions = session_store
        self._verifier = verifier or SignatureVerifier()
        self._session_ttl_hours = session_ttl_hours
        self._window = challenge_window
        self._require_nonce = require_nonce
        self._clock = clock

    def login(self, challenge: LoginChallenge) -> LoginResult:
        """Validate the signed challenge and open a session for the signer."""
        if not within_window(challenge.timestamp, self._clock(), self._window):
            raise ExpiredChallengeError("Login request has expired")

        check_replay_guard(challenge, self._nonces, require_nonce=self._require_nonce)

        wallet_address = normalize_address(challenge.wallet_address)
        recovered = self._verifier.recover(challenge.message, challenge.signature)
        if not addresses_match(recovered, wallet_address):
            logger.info("Login rejected: signer %s does not match %s", recovered, wallet_address)
            raise SignatureMismatchError()

        token = self._sessions.create(wallet_address, self._session_ttl_hours)
        logger.info("Login succeeded for %s", wallet_address)
        return LoginResult(
            session_token=token,
            wallet_address=wallet_address,
            expires_in=self._session_ttl_hours * 60 * 60 * 1000,
        )

    def verify_session(self, token: str) -> SessionStatus:
        user_address = self._sessions.validate(token)
        return SessionStatus(user_address=user_address or "", is_valid=user_address is not None)

    def logout(self, token: str | None = None) -> None:
        if token:
            self._sessions.revoke(token)
