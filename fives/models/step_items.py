"""
models/step_items.py — SQLAlchemy ORM models for the five 5S step lists.

Tables:
  s1_filter_items       keep / remove decisions
  s2_organize_items     prioritised items with a fixed position
  s3_clean_reflections  dated journal entries with a remedial action
  s4_standards          trigger -> action rules
  s5_sustain_reminders  motivational "why" statements

Every row is scoped to (session_id, area_id) as it was when the row was
created. Switching areas never re-scopes existing rows.
"""
import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fives.database import Base


class AreaScopedMixin:
    """Columns shared by every step table."""

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="UUID row identifier",
    )
    session_id: Mapped[str] = mapped_column(String(64), nullable=False)
    area_id: Mapped[str] = mapped_column(String(36), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


class FilterItemORM(AreaScopedMixin, Base):
    __tablename__ = "s1_filter_items"
    __table_args__ = (
        Index("ix_s1_filter_items_session_area", "session_id", "area_id"),
    )

    item_text: Mapped[str] = mapped_column(Text, nullable=False)
    should_keep: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class OrganizeItemORM(AreaScopedMixin, Base):
    __tablename__ = "s2_organize_items"
    __table_args__ = (
        Index("ix_s2_organize_items_session_area", "session_id", "area_id"),
        CheckConstraint(
            "priority_level IN ('high', 'medium', 'low')",
            name="ck_s2_organize_items_priority_level",
        ),
    )

    item_text: Mapped[str] = mapped_column(Text, nullable=False)
    priority_level: Mapped[str] = mapped_column(String(6), nullable=False, default="medium")
    fixed_position: Mapped[str] = mapped_column(Text, nullable=False, default="")


class CleanReflectionORM(AreaScopedMixin, Base):
    __tablename__ = "s3_clean_reflections"
    __table_args__ = (
        Index("ix_s3_clean_reflections_session_area", "session_id", "area_id"),
    )

    reflection_text: Mapped[str] = mapped_column(Text, nullable=False)
    action_taken: Mapped[str] = mapped_column(Text, nullable=False, default="")
    reflection_date: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)


class StandardORM(AreaScopedMixin, Base):
    __tablename__ = "s4_standards"
    __table_args__ = (
        Index("ix_s4_standards_session_area", "session_id", "area_id"),
    )

    trigger: Mapped[str] = mapped_column(Text, nullable=False)
    action: Mapped[str] = mapped_column(Text, nullable=False)


class SustainReminderORM(AreaScopedMixin, Base):
    __tablename__ = "s5_sustain_reminders"
    __table_args__ = (
        Index("ix_s5_sustain_reminders_session_area", "session_id", "area_id"),
    )

    why_text: Mapped[str] = mapped_column(Text, nullable=False)
