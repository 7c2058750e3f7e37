"""CRUD-style helpers for wallet users and signed profile edits."""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from coursepass.core.errors import ExpiredChallengeError, NotFoundError, SignatureMismatchError
from coursepass.db.time import utcnow, within_window
from coursepass.models.user import User
from coursepass.services.auth_service import (
    DEFAULT_CHALLENGE_WINDOW,
    build_challenge,
    check_replay_guard,
)
from coursepass.services.messages import profile_update_message
from coursepass.services.nonce_store import NonceStore
from coursepass.services.signature import SignatureVerifier, addresses_match, normalize_address

logger = logging.getLogger(__name__)

__all__ = [
    "ProfileUpdate",
    "get_or_create_user",
    "get_user",
    "update_profile",
]


@dataclass(frozen=True)
class ProfileUpdate:
    user_address: str
    signature: str
    timestamp: int
    nickname: str | None = None
    bio: str | None = None
    nonce: str | None = None


def get_user(db: Session, wallet_address: str) -> User | None:
    """Return a single user by wallet address."""
    stmt = select(User).where(User.wallet_address == wallet_address.lower())
    return db.execute(stmt).scalar_one_or_none()


def get_or_create_user(db: Session, wallet_address: str) -> User:
    """Return the user for ``wallet_address``, creating an empty profile on first sight."""
    address = normalize_address(wallet_address)
    user = get_user(db, address)
    if user is not None:
        return user

    user = User(wallet_address=address)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another request created the same wallet between the lookup and the insert.
        db.rollback()
        existing = get_user(db, address)
        if existing is None:
            raise
        return existing
    db.refresh(user)
    logger.info("Created user %s", address)
    return user


def update_profile(
    db: Session,
    update: ProfileUpdate,
    nonce_store: NonceStore,
    verifier: SignatureVerifier | None = None,
    *,
    challenge_window: timedelta = DEFAULT_CHALLENGE_WINDOW,
    require_nonce: bool = False,
    clock: Callable[[], datetime] = utcnow,
) -> User:
    """Apply a nickname/bio change signed by the profile's own wallet.

    The signed text is rebuilt from the submitted fields, so any edit to them
    after signing invalidates the signature.
    """
    if not within_window(update.timestamp, clock(), challenge_window):
        raise ExpiredChallengeError("Profile update request has expired")

    message = profile_update_message(update.nickname, update.bio, update.timestamp, update.nonce)
    challenge = build_challenge(
        update.user_address,
        update.signature,
        message,
        update.timestamp,
        update.nonce,
    )
    check_replay_guard(challenge, nonce_store, require_nonce=require_nonce)

    address = normalize_address(update.user_address)
    user = get_user(db, address)
    if user is None:
        raise NotFoundError("User not found")

    recovered = (verifier or SignatureVerifier()).recover(message, update.signature)
    if not addresses_match(recovered, address):
        raise SignatureMismatchError()

    user.nickname = update.nickname
    user.bio = update.bio
    db.commit()
    db.refresh(user)
    logger.info("Updated profile for %s", address)
    return user
