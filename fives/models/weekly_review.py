"""
models/weekly_review.py — SQLAlchemy ORM model for weekly reflections.

Table: weekly_reviews
One row per (session_id, week_start_date). week_start_date is always the
Monday of the ISO week (see fives/review/weeks.py).
"""
import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from fives.database import Base


class WeeklyReviewORM(Base):
    __tablename__ = "weekly_reviews"
    __table_args__ = (
        UniqueConstraint("session_id", "week_start_date", name="uq_weekly_reviews_session_week"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="UUID row identifier",
    )
    session_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    week_start_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Monday of the reviewed week",
    )
    what_clearer: Mapped[str] = mapped_column(Text, nullable=False, default="")
    what_lighter: Mapped[str] = mapped_column(Text, nullable=False, default="")
    what_adjust: Mapped[str] = mapped_column(Text, nullable=False, default="")
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
