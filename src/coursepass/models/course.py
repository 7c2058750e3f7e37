"""Course catalogue rows mirrored from the course contract."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import JSON, BigInteger, DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from coursepass.db.session import Base
from coursepass.db.time import utcnow


class Course(Base):
    """Course metadata plus the gated content released to authorized viewers."""

    __tablename__ = "courses"

    course_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal | None] = mapped_column(Numeric(18, 8), nullable=True)
    instructor_address: Mapped[str] = mapped_column(String(42), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False, default="Web3")
    cover_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    tx_hash: Mapped[str | None] = mapped_column(String(66), nullable=True)
    # {"lessons": [...], "resources": [...]}; only released after access checks.
    content: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
