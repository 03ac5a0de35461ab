"""initial_schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-12 09:00:00.000000 UTC

Creates every table:
  - life_areas            (read-only catalog, seeded by 002)
  - user_sessions         (one progress row per session_id)
  - s1..s5 step tables    (scoped by session_id + area_id)
  - daily_actions         (unique per session/area/date/position)
  - weekly_reviews        (unique per session/week_start_date)
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _scoped_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.String(length=36), nullable=False, comment="UUID row identifier"),
        sa.Column("session_id", sa.String(length=64), nullable=False),
        sa.Column("area_id", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    # --- life_areas ---
    op.create_table(
        "life_areas",
        sa.Column("id", sa.String(length=36), nullable=False, comment="UUID primary key"),
        sa.Column("name", sa.String(length=50), nullable=False, comment="Slug used in step page routes, e.g. 'work'"),
        sa.Column("display_name", sa.String(length=100), nullable=False),
        sa.Column("emoji", sa.String(length=16), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    # --- user_sessions ---
    op.create_table(
        "user_sessions",
        sa.Column("session_id", sa.String(length=64), nullable=False, comment="Client-generated session identifier (opaque bearer key)"),
        sa.Column("current_area_id", sa.String(length=36), nullable=True, comment="Area the session is focused on; NULL until onboarding completes"),
        sa.Column("current_step", sa.String(length=2), nullable=False),
        sa.Column("onboarding_completed", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("session_id"),
        sa.ForeignKeyConstraint(["current_area_id"], ["life_areas.id"]),
        sa.CheckConstraint(
            "current_step IN ('s1', 's2', 's3', 's4', 's5')",
            name="ck_user_sessions_current_step",
        ),
    )

    # --- step tables ---
    op.create_table(
        "s1_filter_items",
        *_scoped_columns(),
        sa.Column("item_text", sa.Text(), nullable=False),
        sa.Column("should_keep", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "s2_organize_items",
        *_scoped_columns(),
        sa.Column("item_text", sa.Text(), nullable=False),
        sa.Column("priority_level", sa.String(length=6), nullable=False),
        sa.Column("fixed_position", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "priority_level IN ('high', 'medium', 'low')",
            name="ck_s2_organize_items_priority_level",
        ),
    )
    op.create_table(
        "s3_clean_reflections",
        *_scoped_columns(),
        sa.Column("reflection_text", sa.Text(), nullable=False),
        sa.Column("action_taken", sa.Text(), nullable=False),
        sa.Column("reflection_date", sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "s4_standards",
        *_scoped_columns(),
        sa.Column("trigger", sa.Text(), nullable=False),
        sa.Column("action", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "s5_sustain_reminders",
        *_scoped_columns(),
        sa.Column("why_text", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    for table in (
        "s1_filter_items",
        "s2_organize_items",
        "s3_clean_reflections",
        "s4_standards",
        "s5_sustain_reminders",
    ):
        op.create_index(f"ix_{table}_session_area", table, ["session_id", "area_id"])

    # --- daily_actions ---
    op.create_table(
        "daily_actions",
        sa.Column("id", sa.String(length=36), nullable=False, comment="UUID row identifier"),
        sa.Column("session_id", sa.String(length=64), nullable=False),
        sa.Column("area_id", sa.String(length=36), nullable=False),
        sa.Column("action_text", sa.Text(), nullable=False),
        sa.Column("action_date", sa.Date(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=10), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "session_id", "area_id", "action_date", "position",
            name="uq_daily_actions_session_area_date_position",
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'done', 'skipped')",
            name="ck_daily_actions_status",
        ),
    )
    op.create_index(
        "ix_daily_actions_session_area_date",
        "daily_actions",
        ["session_id", "area_id", "action_date"],
    )

    # --- weekly_reviews ---
    op.create_table(
        "weekly_reviews",
        sa.Column("id", sa.String(length=36), nullable=False, comment="UUID row identifier"),
        sa.Column("session_id", sa.String(length=64), nullable=False),
        sa.Column("week_start_date", sa.Date(), nullable=False, comment="Monday of the reviewed week"),
        sa.Column("what_clearer", sa.Text(), nullable=False),
        sa.Column("what_lighter", sa.Text(), nullable=False),
        sa.Column("what_adjust", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("session_id", "week_start_date", name="uq_weekly_reviews_session_week"),
    )
    op.create_index(op.f("ix_weekly_reviews_session_id"), "weekly_reviews", ["session_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_weekly_reviews_session_id"), table_name="weekly_reviews")
    op.drop_table("weekly_reviews")
    op.drop_index("ix_daily_actions_session_area_date", table_name="daily_actions")
    op.drop_table("daily_actions")
    for table in (
        "s5_sustain_reminders",
        "s4_standards",
        "s3_clean_reflections",
        "s2_organize_items",
        "s1_filter_items",
    ):
        op.drop_index(f"ix_{table}_session_area", table_name=table)
        op.drop_table(table)
    op.drop_table("user_sessions")
    op.drop_table("life_areas")
