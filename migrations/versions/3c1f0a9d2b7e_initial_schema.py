"""initial schema

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2b7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, courses, purchases, sessions and access receipts."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("wallet_address", sa.String(length=42), nullable=False),
        sa.Column("nickname", sa.String(length=50), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("wallet_address"),
    )
    op.create_table(
        "courses",
        sa.Column("course_id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("title", sa.String(length=200), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(precision=18, scale=8), nullable=True),
        sa.Column("instructor_address", sa.String(length=42), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("cover_image_url", sa.String(length=500), nullable=True),
        sa.Column("tx_hash", sa.String(length=66), nullable=True),
        sa.Column("content", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("course_id"),
    )
    op.create_index(
        op.f("ix_courses_instructor_address"), "courses", ["instructor_address"], unique=False
    )
    op.create_table(
        "purchases",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_address", sa.String(length=42), nullable=False),
        sa.Column("course_id", sa.BigInteger(), nullable=False),
        sa.Column("tx_hash", sa.String(length=66), nullable=False),
        sa.Column("price_paid", sa.Numeric(precision=18, scale=8), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["course_id"], ["courses.course_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tx_hash"),
    )
    op.create_index("ix_purchases_user_course", "purchases", ["user_address", "course_id"])
    op.create_table(
        "user_sessions",
        sa.Column("session_token", sa.String(length=128), nullable=False),
        sa.Column("user_address", sa.String(length=42), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("session_token"),
    )
    op.create_index(
        op.f("ix_user_sessions_user_address"), "user_sessions", ["user_address"], unique=False
    )
    op.create_index(
        op.f("ix_user_sessions_expires_at"), "user_sessions", ["expires_at"], unique=False
    )
    op.create_table(
        "course_access_tokens",
        sa.Column("user_address", sa.String(length=42), nullable=False),
        sa.Column("course_id", sa.BigInteger(), nullable=False),
        sa.Column("signature", sa.Text(), nullable=False),
        sa.Column("signed_message", sa.Text(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("user_address", "course_id"),
    )
    op.create_index(
        op.f("ix_course_access_tokens_expires_at"),
        "course_access_tokens",
        ["expires_at"],
        unique=False,
    )


def downgrade() -> None:
    """Drop every table created by this revision."""
    op.drop_index(op.f("ix_course_access_tokens_expires_at"), table_name="course_access_tokens")
    op.drop_table("course_access_tokens")
    op.drop_index(op.f("ix_user_sessions_expires_at"), table_name="user_sessions")
    op.drop_index(op.f("ix_user_sessions_user_address"), table_name="user_sessions")
    op.drop_table("user_sessions")
    op.drop_index("ix_purchases_user_course", table_name="purchases")
    op.drop_table("purchases")
    op.drop_index(op.f("ix_courses_instructor_address"), table_name="courses")
    op.drop_table("courses")
    op.drop_table("users")
