"""Authentication endpoints for the CoursePass API."""

from __future__ import annotations

from fastapi import APIRouter

from coursepass.api.v1.dependencies import AuthServiceDep
from coursepass.core.errors import UnauthorizedError
from coursepass.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    SessionStatusResponse,
    SessionTokenRequest,
)
from coursepass.services.auth_service import build_challenge

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, auth_service: AuthServiceDep) -> LoginResponse:
    """Exchange a signed wallet challenge for a session token."""
    challenge = build_challenge(
        payload.wallet_address,
        payload.signature,
        payload.message,
        payload.timestamp,
        payload.nonce,
    )
    result = auth_service.login(challenge)
    return LoginResponse(
        session_token=result.session_token,
        wallet_address=result.wallet_address,
        expires_in=result.expires_in,
    )


@router.post("/verify-session", response_model=SessionStatusResponse)
def verify_session(
    payload: SessionTokenRequest,
    auth_service: AuthServiceDep,
) -> SessionStatusResponse:
    status = auth_service.verify_session(payload.session_token)
    if not status.is_valid:
        raise UnauthorizedError()
    return SessionStatusResponse(user_address=status.user_address, is_valid=True)


@router.post("/logout")
def logout(payload: LogoutRequest, auth_service: AuthServiceDep) -> dict[str, str]:
    auth_service.logout(payload.session_token)
    return {}
