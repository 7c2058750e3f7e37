"""Bearer sessions issued after a successful wallet-signature login."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from coursepass.db.session import Base
from coursepass.db.time import utcnow


class UserSession(Base):
    """One live session per address; older rows are removed when a new one is issued."""

    __tablename__ = "user_sessions"

    session_token: Mapped[str] = mapped_column(String(128), primary_key=True)
    user_address: Mapped[str] = mapped_column(String(42), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
