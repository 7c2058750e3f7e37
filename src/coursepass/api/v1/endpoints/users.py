"""User profile endpoints."""

from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter

from coursepass.api.v1.dependencies import NonceStoreDep, SessionDep
from coursepass.core.settings import settings
from coursepass.schemas.user import ProfileUpdateRequest, UserResponse
from coursepass.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{address}", response_model=UserResponse)
def get_user(address: str, db: SessionDep) -> UserResponse:
    """Return the profile for a wallet, creating an empty one on first lookup."""
    return UserResponse.model_validate(user_service.get_or_create_user(db, address))


@router.post("/profile", response_model=UserResponse)
def update_profile(
    payload: ProfileUpdateRequest,
    db: SessionDep,
    nonce_store: NonceStoreDep,
) -> UserResponse:
    user = user_service.update_profile(
        db,
        user_service.ProfileUpdate(
            user_address=payload.user_address,
            signature=payload.signature,
            timestamp=payload.timestamp,
            nickname=payload.nickname,
            bio=payload.bio,
            nonce=payload.nonce,
        ),
        nonce_store,
        challenge_window=timedelta(seconds=settings.challenge_window_seconds),
        require_nonce=settings.auth_require_nonce,
    )
    return UserResponse.model_validate(user)
