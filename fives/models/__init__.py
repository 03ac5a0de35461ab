"""
models/__init__.py — imports all ORM models so Alembic's env.py
sees them via Base.metadata when generating migrations.

Import order matters for FK dependencies: user_sessions references life_areas.
"""
from fives.models.life_area import LifeAreaORM
from fives.models.user_session import UserSessionORM
from fives.models.step_items import (
    CleanReflectionORM,
    FilterItemORM,
    OrganizeItemORM,
    StandardORM,
    SustainReminderORM,
)
from fives.models.daily_action import DailyActionORM
from fives.models.weekly_review import WeeklyReviewORM

__all__ = [
    "LifeAreaORM",
    "UserSessionORM",
    "FilterItemORM",
    "OrganizeItemORM",
    "CleanReflectionORM",
    "StandardORM",
    "SustainReminderORM",
    "DailyActionORM",
    "WeeklyReviewORM",
]
