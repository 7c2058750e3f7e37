"""Purchase recording endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from coursepass.api.v1.dependencies import CurrentUserDep, SessionDep
from coursepass.schemas.purchase import PurchaseCreate, PurchaseResponse, PurchaseWithCourse
from coursepass.services import purchase_service
from coursepass.services.signature import normalize_address

router = APIRouter(prefix="/purchases", tags=["purchases"])


@router.post("", response_model=PurchaseResponse, status_code=status.HTTP_201_CREATED)
def record_purchase(
    payload: PurchaseCreate,
    db: SessionDep,
    user: CurrentUserDep,
) -> PurchaseResponse:
    """Record a course purchase made by the signed-in wallet."""
    purchase = purchase_service.record_purchase(
        db,
        user_address=user.address,
        course_id=payload.course_id,
        tx_hash=payload.tx_hash,
        price_paid=payload.price_paid,
    )
    return PurchaseResponse.model_validate(purchase)


@router.get("/user/{address}", response_model=list[PurchaseWithCourse])
def list_user_purchases(address: str, db: SessionDep) -> list[PurchaseWithCourse]:
    rows = purchase_service.list_user_purchases(db, normalize_address(address))
    return [
        PurchaseWithCourse.model_validate(purchase).model_copy(
            update={
                "title": course.title,
                "description": course.description,
                "price": course.price,
            }
        )
        for purchase, course in rows
    ]
