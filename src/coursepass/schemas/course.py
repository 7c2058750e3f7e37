"""Course-related Pydantic schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import ConfigDict, Field

from coursepass.schemas.common import CamelModel, Pagination


class CourseCreate(CamelModel):
    """Schema for creating or updating a course owned by the caller."""

    course_id: int = Field(..., ge=0, description="On-chain course identifier")
    title: str | None = Field(None, max_length=200)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0)
    category: str | None = Field(None, max_length=50)
    cover_image_url: str | None = Field(None, max_length=500)
    tx_hash: str | None = Field(None, max_length=66)
    content: dict[str, Any] | None = Field(None, description="Gated lessons and resources")


class CourseResponse(CamelModel):
    """Public course information, without gated content."""

    course_id: int
    title: str | None
    description: str | None
    price: Decimal | None
    instructor_address: str
    category: str
    cover_image_url: str | None
    tx_hash: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CourseListItem(CourseResponse):
    has_purchased: bool = False


class CourseListResponse(CamelModel):
    courses: list[CourseListItem]
    pagination: Pagination
    user_address: str | None = None


class CourseExtrasResponse(CamelModel):
    course_id: int
    category: str
    cover_image_url: str | None
    tx_hash: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AccessMessageResponse(CamelModel):
    message: str
    timestamp: int
    course_id: int
    user_address: str
    expires_at: str


class CourseDetailsRequest(CamelModel):
    """Course access proof presented by the viewer."""

    user_address: str = Field(..., description="Viewer wallet address")
    signature: str = Field(..., min_length=1, description="Signature over the access message")
    timestamp: int = Field(..., description="Timestamp from the generated access message")


class CourseDetailsResponse(CourseResponse):
    has_purchased: bool = True
    content: dict[str, Any] = Field(default_factory=dict)
