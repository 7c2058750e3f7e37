"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import ConfigDict, Field

from coursepass.schemas.common import CamelModel


class UserResponse(CamelModel):
    id: int
    wallet_address: str
    nickname: str | None
    bio: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdateRequest(CamelModel):
    """Signed nickname/bio change."""

    user_address: str = Field(..., description="Wallet whose profile is edited")
    nickname: str | None = Field(None, max_length=50)
    bio: str | None = Field(None, max_length=1000)
    signature: str = Field(..., min_length=1)
    timestamp: int = Field(..., description="Epoch milliseconds embedded in the signed text")
    nonce: str | None = None
