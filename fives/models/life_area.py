"""
models/life_area.py — SQLAlchemy ORM model for the life-area catalog.

Table: life_areas
Read-only from the application's point of view. Rows are seeded by the
002_seed_life_areas migration; no route creates, edits or deletes them.
"""
import uuid

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fives.database import Base


# Default catalog for seed_life_areas and test fixtures. Must match the rows
# frozen in the 002_seed_life_areas migration.
DEFAULT_LIFE_AREAS: list[dict] = [
    {
        "name": "work",
        "display_name": "Work",
        "emoji": "💼",
        "description": "Tasks, projects, meetings and the desk you do them at",
        "sort_order": 1,
    },
    {
        "name": "home",
        "display_name": "Home",
        "emoji": "🏠",
        "description": "Rooms, belongings and the chores that keep them running",
        "sort_order": 2,
    },
    {
        "name": "health",
        "display_name": "Health",
        "emoji": "🌿",
        "description": "Sleep, food, movement and rest",
        "sort_order": 3,
    },
    {
        "name": "finance",
        "display_name": "Finance",
        "emoji": "💰",
        "description": "Spending, subscriptions, savings and paperwork",
        "sort_order": 4,
    },
    {
        "name": "relationships",
        "display_name": "Relationships",
        "emoji": "🤝",
        "description": "Family, friends and the time you give them",
        "sort_order": 5,
    },
    {
        "name": "mind",
        "display_name": "Mind",
        "emoji": "🧠",
        "description": "Attention, worries, notifications and information intake",
        "sort_order": 6,
    },
]


class LifeAreaORM(Base):
    """
    ORM model for one improvable domain of life.

    name: URL slug used in step routes (/area/{name}/s1).
    """
    __tablename__ = "life_areas"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="UUID primary key",
    )
    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        comment="Slug used in step page routes, e.g. 'work'",
    )
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    emoji: Mapped[str] = mapped_column(String(16), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
