"""Authentication request and response schemas."""

from pydantic import Field

from coursepass.schemas.common import CamelModel


class LoginRequest(CamelModel):
    """Signed login challenge submitted by a wallet."""

    wallet_address: str = Field(..., description="Claimed 0x-prefixed wallet address")
    signature: str = Field(..., min_length=1, description="Hex personal-message signature")
    message: str = Field(..., min_length=1, description="Exact text the wallet signed")
    timestamp: int = Field(..., description="Client time in epoch milliseconds")
    nonce: str | None = Field(None, description="Server-issued nonce, when one was requested")


class LoginResponse(CamelModel):
    session_token: str = Field(..., description="Opaque bearer token")
    wallet_address: str = Field(..., description="Lowercase wallet address")
    expires_in: int = Field(..., description="Session lifetime in milliseconds")


class SessionTokenRequest(CamelModel):
    session_token: str = Field(..., description="Bearer token returned by login")


class LogoutRequest(CamelModel):
    session_token: str | None = Field(None, description="Token to revoke, if any")


class SessionStatusResponse(CamelModel):
    user_address: str
    is_valid: bool
