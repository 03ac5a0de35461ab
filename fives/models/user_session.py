"""
models/user_session.py — SQLAlchemy ORM model for per-session progress state.

Table: user_sessions
One row per session_id (primary key), written by onboarding and area switches.
The row is the persisted form of the Onboarding | Active tagged state in
fives/progress/state.py.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from fives.database import Base


class UserSessionORM(Base):
    """ORM model for which area a session focuses on and which step it is in."""
    __tablename__ = "user_sessions"
    __table_args__ = (
        CheckConstraint(
            "current_step IN ('s1', 's2', 's3', 's4', 's5')",
            name="ck_user_sessions_current_step",
        ),
    )

    session_id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="Client-generated session identifier (opaque bearer key)",
    )
    current_area_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("life_areas.id"),
        nullable=True,
        comment="Area the session is focused on; NULL until onboarding completes",
    )
    current_step: Mapped[str] = mapped_column(
        String(2),
        nullable=False,
        default="s1",
    )
    onboarding_completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
