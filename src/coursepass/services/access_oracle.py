"""Read-only purchase and ownership facts used for access decisions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from coursepass.models import Course, Purchase


@dataclass(frozen=True)
class AccessCheck:
    """Result of asking the oracle about one (user, course) pair."""

    is_purchased: bool
    is_instructor: bool

    @property
    def has_access(self) -> bool:
        return self.is_purchased or self.is_instructor


class AccessOracle(Protocol):
    """Source of truth for who bought or owns a course."""

    def has_purchased(self, user_address: str, course_id: int) -> bool: ...

    def is_instructor(self, user_address: str, course_id: int) -> bool: ...


class DatabaseAccessOracle:
    """Answer authorization questions from the purchases and courses tables."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def has_purchased(self, user_address: str, course_id: int) -> bool:
        stmt = select(
            exists().where(
                Purchase.user_address == user_address.lower(),
                Purchase.course_id == course_id,
            )
        )
        return bool(self._db.execute(stmt).scalar())

    def is_instructor(self, user_address: str, course_id: int) -> bool:
        stmt = select(
            exists().where(
                Course.course_id == course_id,
                Course.instructor_address == user_address.lower(),
            )
        )
        return bool(self._db.execute(stmt).scalar())


def check_access(oracle: AccessOracle, user_address: str, course_id: int) -> AccessCheck:
    """Query both authorization facts for the pair."""
    return AccessCheck(
        is_purchased=oracle.has_purchased(user_address, course_id),
        is_instructor=oracle.is_instructor(user_address, course_id),
    )
