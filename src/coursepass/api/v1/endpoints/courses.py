"""Course catalogue and gated-content endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, status

from coursepass.api.v1.dependencies import (
    AccessServiceDep,
    CurrentUserDep,
    OptionalUserDep,
    SessionDep,
)
from coursepass.core.errors import UnauthorizedError
from coursepass.schemas.common import Pagination
from coursepass.schemas.course import (
    AccessMessageResponse,
    CourseCreate,
    CourseDetailsRequest,
    CourseDetailsResponse,
    CourseExtrasResponse,
    CourseListItem,
    CourseListResponse,
    CourseResponse,
)
from coursepass.services import course_service
from coursepass.services.access_service import forbidden_for
from coursepass.services.signature import normalize_address

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("", response_model=CourseListResponse)
def list_courses(
    db: SessionDep,
    user: OptionalUserDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> CourseListResponse:
    """List courses; signed-in callers also see which ones they bought."""
    user_address = user.address if user else None
    result = course_service.list_courses(db, page=page, limit=limit, user_address=user_address)
    items = [
        CourseListItem.model_validate(course).model_copy(
            update={"has_purchased": course.course_id in result.purchased_ids}
        )
        for course in result.courses
    ]
    return CourseListResponse(
        courses=items,
        pagination=Pagination(
            page=result.page,
            limit=result.limit,
            total=result.total,
            total_pages=result.total_pages,
        ),
        user_address=user_address,
    )


@router.post("", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
def create_course(payload: CourseCreate, db: SessionDep, user: CurrentUserDep) -> CourseResponse:
    """Create a course taught by the caller, or update one they already teach."""
    course = course_service.create_or_update_course(
        db,
        course_id=payload.course_id,
        instructor_address=user.address,
        title=payload.title,
        description=payload.description,
        price=payload.price,
        category=payload.category,
        cover_image_url=payload.cover_image_url,
        tx_hash=payload.tx_hash,
        content=payload.content,
    )
    return CourseResponse.model_validate(course)


@router.get("/{course_id}/extras", response_model=CourseExtrasResponse)
def get_course_extras(course_id: int, db: SessionDep) -> CourseExtrasResponse:
    course = course_service.get_course_extras(db, course_id)
    return CourseExtrasResponse.model_validate(course)


@router.post("/{course_id}/generate-access-message", response_model=AccessMessageResponse)
def generate_access_message(
    course_id: int,
    db: SessionDep,
    user: CurrentUserDep,
    access_service: AccessServiceDep,
) -> AccessMessageResponse:
    """Issue the message the caller must sign to open the course's content."""
    course_service.get_course(db, course_id)
    challenge = access_service.generate_challenge(course_id, user.address)
    return AccessMessageResponse(
        message=challenge.message,
        timestamp=challenge.timestamp,
        course_id=challenge.course_id,
        user_address=challenge.user_address,
        expires_at=challenge.expires_at,
    )


@router.post("/{course_id}/details", response_model=CourseDetailsResponse)
def get_course_details(
    course_id: int,
    payload: CourseDetailsRequest,
    db: SessionDep,
    access_service: AccessServiceDep,
) -> CourseDetailsResponse:
    """Release the course content to a viewer holding a valid access signature."""
    user_address = normalize_address(payload.user_address)
    course = course_service.get_course_details(db, course_id)

    check = access_service.check_course_access(user_address, course_id)
    if not check.has_access:
        raise forbidden_for(check)

    if not access_service.validate_access(
        user_address, course_id, payload.signature, payload.timestamp
    ):
        raise UnauthorizedError(
            "Access signature rejected, generate a new access message",
            hasPurchased=check.is_purchased,
            needsNewSignature=True,
        )

    return CourseDetailsResponse.model_validate(course).model_copy(update={"has_purchased": True})
