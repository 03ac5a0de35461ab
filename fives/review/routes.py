"""
Weekly review HTTP routes — GET /api/review
                             PUT /api/review

Only the review of the week containing `on` (default: today) is ever
written. Past weeks are listed read-only in `recent`.
"""
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fives.database import get_db
from fives.progress.dependencies import get_session_id, require_active_progress
from fives.review.schemas import WeeklyReviewSave, WeeklyReviewState
from fives.review.weeks import get_week_start
from fives.store import get_weekly_review, list_recent_reviews, save_weekly_review

router = APIRouter(
    prefix="/api",
    tags=["review"],
    dependencies=[Depends(require_active_progress)],
)
logger = logging.getLogger(__name__)

RECENT_REVIEWS_LIMIT = 5


async def load_review_state(
    db: AsyncSession,
    session_id: str,
    on: Optional[date] = None,
) -> WeeklyReviewState:
    week_start = get_week_start(on)
    current = await get_weekly_review(db, session_id, date.fromisoformat(week_start))
    recent = await list_recent_reviews(db, session_id, limit=RECENT_REVIEWS_LIMIT)
    return WeeklyReviewState(week_start=week_start, current=current, recent=recent)


@router.get("/review", response_model=WeeklyReviewState)
async def read_review(
    on: Optional[date] = Query(default=None, description="Client's local date (YYYY-MM-DD)"),
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db),
) -> WeeklyReviewState:
    return await load_review_state(db, session_id, on)


@router.put("/review", response_model=WeeklyReviewState)
async def save_review(
    body: WeeklyReviewSave,
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db),
) -> WeeklyReviewState:
    """Update this week's review or create it, then return the reloaded state."""
    week_start = date.fromisoformat(get_week_start(body.on))
    await save_weekly_review(
        db,
        session_id,
        week_start,
        what_clearer=body.what_clearer,
        what_lighter=body.what_lighter,
        what_adjust=body.what_adjust,
    )
    logger.info("Weekly review saved session_id=%s week=%s", session_id, week_start.isoformat())
    return await load_review_state(db, session_id, body.on)
