"""SQLAlchemy models for the CoursePass application."""

from .course import Course
from .course_access import CourseAccessToken
from .purchase import Purchase
from .user import User
from .user_session import UserSession

__all__ = [
    "Course",
    "CourseAccessToken",
    "Purchase",
    "User",
    "UserSession",
]
