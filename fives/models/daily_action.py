"""
models/daily_action.py — SQLAlchemy ORM model for generated daily actions.

Table: daily_actions
Three canned prompts per (session, area, day), generated on first access.
The composite unique key (session_id, area_id, action_date, position) makes a
second concurrent generator fail on insert instead of duplicating the day.
"""
import uuid
from datetime import date, datetime, timezone

from sqlalchemy import CheckConstraint, Date, DateTime, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from fives.database import Base


class DailyActionORM(Base):
    """
    ORM model for one daily prompt.

    position: 0-based index in the prompt list — fixes display order and
              is part of the uniqueness key.
    status:   'pending' | 'done' | 'skipped' — any transition is allowed.
    """
    __tablename__ = "daily_actions"
    __table_args__ = (
        UniqueConstraint(
            "session_id", "area_id", "action_date", "position",
            name="uq_daily_actions_session_area_date_position",
        ),
        CheckConstraint(
            "status IN ('pending', 'done', 'skipped')",
            name="ck_daily_actions_status",
        ),
        Index("ix_daily_actions_session_area_date", "session_id", "area_id", "action_date"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="UUID row identifier",
    )
    session_id: Mapped[str] = mapped_column(String(64), nullable=False)
    area_id: Mapped[str] = mapped_column(String(36), nullable=False)
    action_text: Mapped[str] = mapped_column(Text, nullable=False)
    action_date: Mapped[date] = mapped_column(Date, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(10), nullable=False, default="pending")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
