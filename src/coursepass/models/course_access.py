"""Cached course access receipts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from coursepass.db.session import Base


class CourseAccessToken(Base):
    """A previously verified access signature for a (user, course) pair.

    The composite primary key keeps at most one receipt per pair; a newer valid
    signature replaces the stored one.
    """

    __tablename__ = "course_access_tokens"

    user_address: Mapped[str] = mapped_column(String(42), primary_key=True)
    course_id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    signature: Mapped[str] = mapped_column(Text, nullable=False)
    signed_message: Mapped[str] = mapped_column(Text, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
