"""Tests for login orchestration."""

from __future__ import annotations

from datetime import timedelta

import pytest

from coursepass.core.errors import (
    ExpiredChallengeError,
    InvalidAddressError,
    NonceInvalidError,
    SignatureMalformedError,
    SignatureMismatchError,
)
from coursepass.services.auth_service import (
    AuthenticationService,
    NonceChallenge,
    TimestampChallenge,
    build_challenge,
)
from coursepass.services.messages import login_message
from coursepass.services.nonce_store import NonceStore
from coursepass.services.session_store import SessionStore
from tests.helpers import FrozenClock, sign_message


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture()
def nonce_store(clock: FrozenClock) -> NonceStore:
    return NonceStore(clock=clock)


@pytest.fixture()
def service(db_session, nonce_store: NonceStore, clock: FrozenClock) -> AuthenticationService:
    return AuthenticationService(nonce_store, SessionStore(db_session, clock=clock), clock=clock)


def _timestamp_challenge(wallet, ts: int, address: str | None = None) -> TimestampChallenge:
    message = login_message(ts)
    return TimestampChallenge(
        wallet_address=address or wallet.address,
        signature=sign_message(wallet, message),
        message=message,
        timestamp=ts,
    )


def _nonce_challenge(wallet, ts: int, nonce: str) -> NonceChallenge:
    message = login_message(ts, nonce)
    return NonceChallenge(
        wallet_address=wallet.address,
        signature=sign_message(wallet, message),
        message=message,
        timestamp=ts,
        nonce=nonce,
    )


def test_build_challenge_picks_variant() -> None:
    assert isinstance(build_challenge("0x1", "0x2", "m", 1, None), TimestampChallenge)
    assert isinstance(build_challenge("0x1", "0x2", "m", 1, ""), TimestampChallenge)
    assert isinstance(build_challenge("0x1", "0x2", "m", 1, "abc"), NonceChallenge)


def test_timestamp_login_creates_session(service, wallet, clock, db_session) -> None:
    result = service.login(_timestamp_challenge(wallet, clock.millis))

    assert result.wallet_address == wallet.address.lower()
    assert result.expires_in == 24 * 60 * 60 * 1000
    status = service.verify_session(result.session_token)
    assert status.is_valid
    assert status.user_address == wallet.address.lower()


def test_nonce_login_consumes_nonce(service, wallet, clock, nonce_store) -> None:
    nonce = nonce_store.issue(wallet.address)
    challenge = _nonce_challenge(wallet, clock.millis, nonce)

    service.login(challenge)
    with pytest.raises(NonceInvalidError):
        service.login(challenge)


def test_nonce_bound_to_other_wallet_is_rejected(service, wallet, other_wallet, clock, nonce_store) -> None:
    nonce = nonce_store.issue(other_wallet.address)
    with pytest.raises(NonceInvalidError):
        service.login(_nonce_challenge(wallet, clock.millis, nonce))


@pytest.mark.parametrize("offset", [timedelta(minutes=-6), timedelta(minutes=6)])
def test_timestamp_outside_window(service, wallet, clock, offset) -> None:
    ts = clock.millis + int(offset.total_seconds() * 1000)
    with pytest.raises(ExpiredChallengeError):
        service.login(_timestamp_challenge(wallet, ts))


def test_timestamp_at_window_edge_is_accepted(service, wallet, clock) -> None:
    ts = clock.millis - 5 * 60 * 1000
    service.login(_timestamp_challenge(wallet, ts))


def test_signature_from_other_wallet(service, wallet, other_wallet, clock) -> None:
    challenge = _timestamp_challenge(other_wallet, clock.millis, address=wallet.address)
    with pytest.raises(SignatureMismatchError):
        service.login(challenge)


def test_malformed_signature(service, wallet, clock) -> None:
    challenge = TimestampChallenge(
        wallet_address=wallet.address,
        signature="0xdeadbeef",
        message=login_message(clock.millis),
        timestamp=clock.millis,
    )
    with pytest.raises(SignatureMalformedError):
        service.login(challenge)


def test_invalid_address(service, wallet, clock) -> None:
    with pytest.raises(InvalidAddressError):
        service.login(_timestamp_challenge(wallet, clock.millis, address="0x1234"))


def test_require_nonce_rejects_timestamp_only(db_session, nonce_store, wallet, clock) -> None:
    service = AuthenticationService(
        nonce_store,
        SessionStore(db_session, clock=clock),
        require_nonce=True,
        clock=clock,
    )
    with pytest.raises(NonceInvalidError):
        service.login(_timestamp_challenge(wallet, clock.millis))

    nonce = nonce_store.issue(wallet.address)
    assert service.login(_nonce_challenge(wallet, clock.millis, nonce)).session_token


def test_second_login_revokes_first(service, wallet, clock) -> None:
    first = service.login(_timestamp_challenge(wallet, clock.millis))
    clock.advance(seconds=1)
    second = service.login(_timestamp_challenge(wallet, clock.millis))

    assert not service.verify_session(first.session_token).is_valid
    assert service.verify_session(second.session_token).is_valid


def test_logout(service, wallet, clock) -> None:
    result = service.login(_timestamp_challenge(wallet, clock.millis))
    service.logout(result.session_token)
    service.logout(None)

    status = service.verify_session(result.session_token)
    assert status.is_valid is False
    assert status.user_address == ""
