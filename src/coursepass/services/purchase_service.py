"""Recording and listing course purchases."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from coursepass.core.errors import ConflictError, NotFoundError
from coursepass.models import Course, Purchase
from coursepass.services.user_service import get_or_create_user

logger = logging.getLogger(__name__)

__all__ = ["list_user_purchases", "record_purchase"]


def record_purchase(
    db: Session,
    *,
    user_address: str,
    course_id: int,
    tx_hash: str,
    price_paid: Decimal | None = None,
) -> Purchase:
    """Persist a purchase, creating the buyer's user row if needed.

    Raises:
        NotFoundError: If the course is unknown.
        ConflictError: If the transaction hash was already recorded.
    """
    address = user_address.lower()
    existing = db.execute(select(Purchase).where(Purchase.tx_hash == tx_hash)).scalar_one_or_none()
    if existing is not None:
        raise ConflictError("Transaction already recorded")
    if db.get(Course, course_id) is None:
        raise NotFoundError("Course not found")

    get_or_create_user(db, address)
    purchase = Purchase(
        user_address=address,
        course_id=course_id,
        tx_hash=tx_hash,
        price_paid=price_paid,
    )
    db.add(purchase)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError("Transaction already recorded") from err
    db.refresh(purchase)
    logger.info("Recorded purchase of course %s by %s", course_id, address)
    return purchase


def list_user_purchases(db: Session, user_address: str) -> Sequence[tuple[Purchase, Course]]:
    """Return the user's purchases joined with their courses, newest first."""
    stmt = (
        select(Purchase, Course)
        .join(Course, Course.course_id == Purchase.course_id)
        .where(Purchase.user_address == user_address.lower())
        .order_by(Purchase.created_at.desc(), Purchase.id.desc())
    )
    return [(purchase, course) for purchase, course in db.execute(stmt).all()]
