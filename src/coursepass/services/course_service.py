"""Course catalogue queries and instructor-owned course writes."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from coursepass.core.errors import ForbiddenError, NotFoundError
from coursepass.models import Course, Purchase

logger = logging.getLogger(__name__)

__all__ = [
    "CoursePage",
    "create_or_update_course",
    "get_course",
    "get_course_details",
    "get_course_extras",
    "list_courses",
]


@dataclass(frozen=True)
class CoursePage:
    courses: Sequence[Course]
    purchased_ids: frozenset[int]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def get_course(db: Session, course_id: int) -> Course:
    """Return the course or raise :class:`NotFoundError`."""
    course = db.get(Course, course_id)
    if course is None:
        raise NotFoundError("Course not found")
    return course


def create_or_update_course(
    db: Session,
    *,
    course_id: int,
    instructor_address: str,
    title: str | None = None,
    description: str | None = None,
    price: Decimal | None = None,
    category: str | None = None,
    cover_image_url: str | None = None,
    tx_hash: str | None = None,
    content: dict[str, Any] | None = None,
) -> Course:
    """Insert a course, or update it when the caller already teaches it.

    Raises:
        ForbiddenError: If the course exists and belongs to another instructor.
    """
    instructor = instructor_address.lower()
    course = db.get(Course, course_id)
    if course is None:
        course = Course(course_id=course_id, instructor_address=instructor)
        db.add(course)
    elif course.instructor_address != instructor:
        raise ForbiddenError("Course belongs to another instructor")

    course.title = title
    course.description = description
    course.price = price
    course.category = category or "Web3"
    course.cover_image_url = cover_image_url
    course.tx_hash = tx_hash
    if content is not None:
        course.content = content
    db.commit()
    db.refresh(course)
    logger.info("Saved course %s for instructor %s", course_id, instructor)
    return course


def list_courses(
    db: Session,
    *,
    page: int = 1,
    limit: int = 10,
    user_address: str | None = None,
) -> CoursePage:
    """Return one page of courses, newest first, with the viewer's purchases."""
    offset = (page - 1) * limit
    courses = (
        db.execute(
            select(Course)
            .order_by(Course.created_at.desc(), Course.course_id.desc())
            .offset(offset)
            .limit(limit)
        )
        .scalars()
        .all()
    )
    total = db.execute(select(func.count()).select_from(Course)).scalar_one()

    purchased: frozenset[int] = frozenset()
    if user_address:
        rows = db.execute(
            select(Purchase.course_id).where(Purchase.user_address == user_address.lower())
        ).scalars()
        purchased = frozenset(rows)

    return CoursePage(
        courses=courses,
        purchased_ids=purchased,
        page=page,
        limit=limit,
        total=int(total),
    )


def get_course_extras(db: Session, course_id: int) -> Course:
    return get_course(db, course_id)


def get_course_details(db: Session, course_id: int) -> Course:
    """Return the course including its gated content.

    Callers must have authorized the viewer first.
    """
    return get_course(db, course_id)
