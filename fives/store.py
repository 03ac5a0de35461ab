"""
store.py — Data access facade for the 5S tracker.

Provides a consistent, high-level API for persisting and retrieving domain objects.
All routes use these functions — no route touches SQLAlchemy directly.

Design principles:
  - All functions are async and accept an AsyncSession parameter
  - No raw SQL: ORM-only queries
  - Every per-session query filters by session_id — the session id is the only tenant key
  - Logs only ids and counts — never the free text users write into their lists
  - Returns domain Pydantic objects (or plain dicts for step rows) so callers are
    persistence-agnostic
  - Uses flush() (not commit()) — the get_db() dependency handles commit
"""
import logging
from datetime import date, datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fives.daily.schemas import ActionStatus, DailyAction
from fives.models.daily_action import DailyActionORM
from fives.models.life_area import DEFAULT_LIFE_AREAS, LifeAreaORM
from fives.models.user_session import UserSessionORM
from fives.models.weekly_review import WeeklyReviewORM
from fives.progress.schemas import LifeArea, ProgressRecord
from fives.progress.state import Step
from fives.review.schemas import WeeklyReview
from fives.steps.registry import StageSpec

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Life area catalog (read-only)
# ---------------------------------------------------------------------------

async def list_life_areas(db: AsyncSession) -> list[LifeArea]:
    """Return the whole catalog ordered by sort_order."""
    result = await db.execute(
        select(LifeAreaORM).order_by(LifeAreaORM.sort_order.asc(), LifeAreaORM.name.asc())
    )
    return [LifeArea.model_validate(row) for row in result.scalars().all()]


async def get_life_area(db: AsyncSession, area_id: Optional[str]) -> Optional[LifeArea]:
    """Returns None for a missing id — callers treat the area as unknown."""
    if not area_id:
        return None
    result = await db.execute(select(LifeAreaORM).where(LifeAreaORM.id == area_id))
    orm = result.scalar_one_or_none()
    return LifeArea.model_validate(orm) if orm is not None else None


async def get_life_area_by_name(db: AsyncSession, name: str) -> Optional[LifeArea]:
    result = await db.execute(select(LifeAreaORM).where(LifeAreaORM.name == name))
    orm = result.scalar_one_or_none()
    return LifeArea.model_validate(orm) if orm is not None else None


async def seed_life_areas(
    db: AsyncSession,
    areas: Optional[list[dict]] = None,
) -> int:
    """
    Insert catalog entries whose slug is not present yet.
    Used for local development databases and tests; production catalogs come
    from the 002_seed_life_areas migration. Returns the number of rows inserted.
    """
    areas = DEFAULT_LIFE_AREAS if areas is None else areas
    existing = set((await db.execute(select(LifeAreaORM.name))).scalars().all())
    inserted = 0
    for area in areas:
        if area["name"] in existing:
            continue
        db.add(LifeAreaORM(**area))
        inserted += 1
    await db.flush()
    logger.info("Seeded life areas inserted=%d", inserted)
    return inserted


# ---------------------------------------------------------------------------
# Progress state (user_sessions)
# ---------------------------------------------------------------------------

async def get_progress(db: AsyncSession, session_id: str) -> Optional[ProgressRecord]:
    """Zero or one row per session. Returns None when the session never onboarded."""
    result = await db.execute(
        select(UserSessionORM).where(UserSessionORM.session_id == session_id)
    )
    orm = result.scalar_one_or_none()
    if orm is None:
        return None
    return ProgressRecord.model_validate(orm)


async def upsert_progress(
    db: AsyncSession,
    session_id: str,
    current_area_id: str,
    current_step: Step,
    onboarding_completed: bool,
) -> ProgressRecord:
    """
    Insert or update the session's progress row (conflict key: session_id).
    updated_at is reset on every write.
    """
    values = {
        "current_area_id": current_area_id,
        "current_step": Step(current_step).value,
        "onboarding_completed": onboarding_completed,
        "updated_at": _utcnow(),
    }
    result = await db.execute(
        select(UserSessionORM).where(UserSessionORM.session_id == session_id)
    )
    orm = result.scalar_one_or_none()

    if orm is None:
        try:
            async with db.begin_nested():
                orm = UserSessionORM(session_id=session_id, **values)
                db.add(orm)
        except IntegrityError:
            # Another request created the row first; update that row instead
            logger.info("Progress row created concurrently session_id=%s", session_id)
            result = await db.execute(
                select(UserSessionORM).where(UserSessionORM.session_id == session_id)
            )
            orm = result.scalar_one()
            for key, value in values.items():
                setattr(orm, key, value)
    else:
        for key, value in values.items():
            setattr(orm, key, value)

    await db.flush()
    logger.info(
        "Upserted progress session_id=%s area_id=%s step=%s completed=%s",
        session_id, current_area_id, values["current_step"], onboarding_completed,
    )
    return ProgressRecord.model_validate(orm)


async def update_progress(
    db: AsyncSession,
    session_id: str,
    **fields: Any,
) -> Optional[ProgressRecord]:
    """
    Targeted update of an existing progress row.
    Returns None if the session has no row (nothing is created).
    """
    result = await db.execute(
        select(UserSessionORM).where(UserSessionORM.session_id == session_id)
    )
    orm = result.scalar_one_or_none()
    if orm is None:
        return None
    for key, value in fields.items():
        setattr(orm, key, value.value if isinstance(value, Step) else value)
    orm.updated_at = _utcnow()
    await db.flush()
    logger.info("Updated progress session_id=%s fields=%s", session_id, sorted(fields))
    return ProgressRecord.model_validate(orm)


# ---------------------------------------------------------------------------
# Step items (S1–S5) — generic over StageSpec
# ---------------------------------------------------------------------------

def _step_row(stage: StageSpec, orm: Any) -> dict:
    return stage.item_schema.model_validate(orm).model_dump(mode="json")


async def list_step_items(
    db: AsyncSession,
    stage: StageSpec,
    session_id: str,
    area_id: str,
) -> list[dict]:
    """
    All rows for (session, area), newest first.
    S3 orders by reflection_date; every other stage by created_at.
    """
    model = stage.orm
    result = await db.execute(
        select(model)
        .where(model.session_id == session_id, model.area_id == area_id)
        .order_by(getattr(model, stage.order_by).desc(), model.created_at.desc())
    )
    return [_step_row(stage, row) for row in result.scalars().all()]


async def create_step_item(
    db: AsyncSession,
    stage: StageSpec,
    session_id: str,
    area_id: str,
    payload: BaseModel,
) -> dict:
    values = payload.model_dump(exclude_none=True)
    orm = stage.orm(session_id=session_id, area_id=area_id, **values)
    db.add(orm)
    await db.flush()
    await db.refresh(orm)
    logger.info(
        "Created %s row id=%s session_id=%s area_id=%s",
        stage.collection, orm.id, session_id, area_id,
    )
    return _step_row(stage, orm)


async def update_step_item(
    db: AsyncSession,
    stage: StageSpec,
    session_id: str,
    area_id: str,
    item_id: str,
    changes: dict,
) -> Optional[dict]:
    """Partial update by row id. Returns None unless the row belongs to (session, area)."""
    model = stage.orm
    result = await db.execute(
        select(model).where(
            model.id == item_id,
            model.session_id == session_id,
            model.area_id == area_id,
        )
    )
    orm = result.scalar_one_or_none()
    if orm is None:
        return None
    for key, value in changes.items():
        setattr(orm, key, value)
    await db.flush()
    logger.info(
        "Updated %s row id=%s fields=%s", stage.collection, item_id, sorted(changes)
    )
    return _step_row(stage, orm)


async def delete_step_item(
    db: AsyncSession,
    stage: StageSpec,
    session_id: str,
    area_id: str,
    item_id: str,
) -> bool:
    model = stage.orm
    result = await db.execute(
        delete(model).where(
            model.id == item_id,
            model.session_id == session_id,
            model.area_id == area_id,
        )
    )
    deleted = result.rowcount > 0
    logger.info("Deleted %s row id=%s deleted=%s", stage.collection, item_id, deleted)
    return deleted


# ---------------------------------------------------------------------------
# Daily actions
# ---------------------------------------------------------------------------

async def list_daily_actions(
    db: AsyncSession,
    session_id: str,
    area_id: str,
    action_date: date,
) -> list[DailyAction]:
    """Actions for one (session, area, day) in prompt order."""
    result = await db.execute(
        select(DailyActionORM)
        .where(
            DailyActionORM.session_id == session_id,
            DailyActionORM.area_id == area_id,
            DailyActionORM.action_date == action_date,
        )
        .order_by(DailyActionORM.position.asc(), DailyActionORM.created_at.asc())
    )
    return [DailyAction.model_validate(row) for row in result.scalars().all()]


async def insert_daily_actions(
    db: AsyncSession,
    session_id: str,
    area_id: str,
    action_date: date,
    texts: list[str],
) -> None:
    """
    Insert one pending action per text, in order, inside a savepoint.

    Raises IntegrityError (savepoint already rolled back) when another writer
    generated the same day first — the unique key on
    (session_id, area_id, action_date, position) rejects the duplicates.
    """
    async with db.begin_nested():
        for position, text in enumerate(texts):
            db.add(
                DailyActionORM(
                    session_id=session_id,
                    area_id=area_id,
                    action_text=text,
                    action_date=action_date,
                    position=position,
                    status=ActionStatus.pending.value,
                )
            )
    logger.info(
        "Inserted daily actions session_id=%s area_id=%s date=%s count=%d",
        session_id, area_id, action_date.isoformat(), len(texts),
    )


async def update_daily_action_status(
    db: AsyncSession,
    session_id: str,
    action_id: str,
    status: ActionStatus,
) -> Optional[DailyAction]:
    result = await db.execute(
        select(DailyActionORM).where(
            DailyActionORM.id == action_id,
            DailyActionORM.session_id == session_id,
        )
    )
    orm = result.scalar_one_or_none()
    if orm is None:
        return None
    orm.status = ActionStatus(status).value
    await db.flush()
    logger.info("Daily action status id=%s status=%s", action_id, orm.status)
    return DailyAction.model_validate(orm)


# ---------------------------------------------------------------------------
# Weekly reviews
# ---------------------------------------------------------------------------

async def get_weekly_review(
    db: AsyncSession,
    session_id: str,
    week_start: date,
) -> Optional[WeeklyReview]:
    result = await db.execute(
        select(WeeklyReviewORM).where(
            WeeklyReviewORM.session_id == session_id,
            WeeklyReviewORM.week_start_date == week_start,
        )
    )
    orm = result.scalar_one_or_none()
    return WeeklyReview.model_validate(orm) if orm is not None else None


async def list_recent_reviews(
    db: AsyncSession,
    session_id: str,
    limit: int = 5,
) -> list[WeeklyReview]:
    """Most recent reviews across all weeks, newest week first."""
    result = await db.execute(
        select(WeeklyReviewORM)
        .where(WeeklyReviewORM.session_id == session_id)
        .order_by(WeeklyReviewORM.week_start_date.desc())
        .limit(limit)
    )
    return [WeeklyReview.model_validate(row) for row in result.scalars().all()]


async def save_weekly_review(
    db: AsyncSession,
    session_id: str,
    week_start: date,
    what_clearer: str,
    what_lighter: str,
    what_adjust: str,
) -> WeeklyReview:
    """
    Update the week's review if it exists, otherwise insert it.
    One row per (session_id, week_start_date) — a concurrent insert loses on
    the unique key and is turned into an update of the winner's row.
    """
    answers = {
        "what_clearer": what_clearer,
        "what_lighter": what_lighter,
        "what_adjust": what_adjust,
    }
    query = select(WeeklyReviewORM).where(
        WeeklyReviewORM.session_id == session_id,
        WeeklyReviewORM.week_start_date == week_start,
    )
    orm = (await db.execute(query)).scalar_one_or_none()

    if orm is None:
        try:
            async with db.begin_nested():
                orm = WeeklyReviewORM(session_id=session_id, week_start_date=week_start, **answers)
                db.add(orm)
        except IntegrityError:
            logger.info(
                "Weekly review created concurrently session_id=%s week=%s",
                session_id, week_start.isoformat(),
            )
            orm = (await db.execute(query)).scalar_one()
            for key, value in answers.items():
                setattr(orm, key, value)
    else:
        for key, value in answers.items():
            setattr(orm, key, value)

    await db.flush()
    await db.refresh(orm)
    logger.info("Saved weekly review session_id=%s week=%s", session_id, week_start.isoformat())
    return WeeklyReview.model_validate(orm)
