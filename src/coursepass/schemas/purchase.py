"""Purchase-related Pydantic schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict, Field

from coursepass.schemas.common import CamelModel


class PurchaseCreate(CamelModel):
    course_id: int = Field(..., ge=0)
    tx_hash: str = Field(..., min_length=1, max_length=66, description="Purchase transaction hash")
    price_paid: Decimal | None = Field(None, ge=0)


class PurchaseResponse(CamelModel):
    id: int
    user_address: str
    course_id: int
    tx_hash: str
    price_paid: Decimal | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PurchaseWithCourse(PurchaseResponse):
    title: str | None = None
    description: str | None = None
    price: Decimal | None = None
