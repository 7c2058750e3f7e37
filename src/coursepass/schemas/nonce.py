"""Nonce request and response schemas."""

from pydantic import Field

from coursepass.schemas.common import CamelModel


class NonceRequest(CamelModel):
    wallet_address: str = Field(..., description="Wallet the nonce will be bound to")


class NonceResponse(CamelModel):
    nonce: str
    expires_in: int = Field(..., description="Nonce lifetime in seconds")
    message: str = Field(..., description="Suggested login text embedding the nonce")


class NonceStatsResponse(CamelModel):
    total: int
    expired_but_not_swept: int
