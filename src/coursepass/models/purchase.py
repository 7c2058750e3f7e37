"""Purchase records backing the has-purchased authorization fact."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, DateTime, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from coursepass.db.session import Base
from coursepass.db.time import utcnow


class Purchase(Base):
    """A course bought by a wallet, identified by its on-chain transaction."""

    __tablename__ = "purchases"
    __table_args__ = (Index("ix_purchases_user_course", "user_address", "course_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_address: Mapped[str] = mapped_column(String(42), nullable=False)
    course_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("courses.course_id", ondelete="CASCADE"), nullable=False
    )
    tx_hash: Mapped[str] = mapped_column(String(66), nullable=False, unique=True)
    price_paid: Mapped[Decimal | None] = mapped_column(Numeric(18, 8), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
