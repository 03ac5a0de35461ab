"""seed_life_areas

Revision ID: 002_seed_life_areas
Revises: 001_initial_schema
Create Date: 2026-10-12 09:30:00.000000 UTC

Seeds the read-only life_areas catalog. The application never writes this
table; new areas ship as new data migrations. Rows are frozen here so later
edits to application code cannot change what this revision inserts.
"""
import uuid
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "002_seed_life_areas"
down_revision: Union[str, None] = "001_initial_schema"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

life_areas = sa.table(
    "life_areas",
    sa.column("id", sa.String),
    sa.column("name", sa.String),
    sa.column("display_name", sa.String),
    sa.column("emoji", sa.String),
    sa.column("description", sa.Text),
    sa.column("sort_order", sa.Integer),
)

SEED_ROWS = [
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


def upgrade() -> None:
    op.bulk_insert(
        life_areas,
        [{"id": str(uuid.uuid4()), **row} for row in SEED_ROWS],
    )


def downgrade() -> None:
    names = [row["name"] for row in SEED_ROWS]
    op.execute(life_areas.delete().where(life_areas.c.name.in_(names)))
