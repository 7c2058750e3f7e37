"""
Pydantic schemas for API request/response models.

All payloads are exchanged as camelCase JSON.
"""

from .auth import LoginRequest, LoginResponse, LogoutRequest, SessionStatusResponse, SessionTokenRequest
from .course import (
    AccessMessageResponse,
    CourseCreate,
    CourseDetailsRequest,
    CourseDetailsResponse,
    CourseExtrasResponse,
    CourseListItem,
    CourseListResponse,
    CourseResponse,
)
from .nonce import NonceRequest, NonceResponse, NonceStatsResponse
from .purchase import PurchaseCreate, PurchaseResponse, PurchaseWithCourse
from .user import ProfileUpdateRequest, UserResponse

__all__ = [
    "AccessMessageResponse",
    "CourseCreate",
    "CourseDetailsRequest",
    "CourseDetailsResponse",
    "CourseExtrasResponse",
    "CourseListItem",
    "CourseListResponse",
    "CourseResponse",
    "LoginRequest",
    "LoginResponse",
    "LogoutRequest",
    "NonceRequest",
    "NonceResponse",
    "NonceStatsResponse",
    "ProfileUpdateRequest",
    "PurchaseCreate",
    "PurchaseResponse",
    "PurchaseWithCourse",
    "SessionStatusResponse",
    "SessionTokenRequest",
    "UserResponse",
]
