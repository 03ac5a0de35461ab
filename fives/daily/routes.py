"""
Daily HTTP routes — GET   /api/dashboard
                     GET   /api/daily
                     PATCH /api/daily/{action_id}

Both read endpoints trigger the Daily Action Generator for the active area,
so the first visit of the day creates the actions and later visits reuse them.
"""
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fives.daily.generator import count_completed, ensure_daily_actions
from fives.daily.schemas import (
    ActionStatusUpdate,
    DailyAction,
    DailyActionsResponse,
    DashboardResponse,
    StepLink,
)
from fives.database import get_db
from fives.progress.dependencies import get_session_id, require_active_progress
from fives.progress.schemas import LifeArea
from fives.progress.state import STEP_TITLES, Active, Step
from fives.store import list_life_areas, update_daily_action_status

router = APIRouter(prefix="/api", tags=["daily"])
logger = logging.getLogger(__name__)


def build_step_links(area: Optional[LifeArea]) -> list[StepLink]:
    """The five step page links for an area; none when the area is unknown."""
    if area is None:
        return []
    return [
        StepLink(step=step, title=STEP_TITLES[step], path=f"/area/{area.name}/{step.value}")
        for step in Step
    ]


async def _load_today(
    db: AsyncSession,
    session_id: str,
    progress: Active,
    on: Optional[date],
) -> tuple[list[LifeArea], Optional[LifeArea], DailyActionsResponse]:
    areas = await list_life_areas(db)
    area = next((a for a in areas if a.id == progress.area_id), None)
    action_date = on or date.today()
    actions = await ensure_daily_actions(db, session_id, progress.area_id, action_date)
    completed, total = count_completed(actions)
    response = DailyActionsResponse(
        action_date=action_date,
        area=area,
        actions=actions,
        completed=completed,
        total=total,
        progress_label=f"{completed}/{total}",
    )
    return areas, area, response


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    on: Optional[date] = Query(default=None, description="Client's local date (YYYY-MM-DD)"),
    session_id: str = Depends(get_session_id),
    progress: Active = Depends(require_active_progress),
    db: AsyncSession = Depends(get_db),
) -> DashboardResponse:
    """Focus area, catalog for the area switcher, today's actions and step links."""
    areas, area, today = await _load_today(db, session_id, progress, on)
    logger.info(
        "Dashboard session_id=%s area_id=%s progress=%s",
        session_id, progress.area_id, today.progress_label,
    )
    return DashboardResponse(
        **today.model_dump(),
        current_step=progress.step,
        areas=areas,
        step_links=build_step_links(area),
    )


@router.get("/daily", response_model=DailyActionsResponse)
async def daily_mode(
    on: Optional[date] = Query(default=None, description="Client's local date (YYYY-MM-DD)"),
    session_id: str = Depends(get_session_id),
    progress: Active = Depends(require_active_progress),
    db: AsyncSession = Depends(get_db),
) -> DailyActionsResponse:
    _, _, today = await _load_today(db, session_id, progress, on)
    return today


@router.patch(
    "/daily/{action_id}",
    response_model=DailyAction,
    dependencies=[Depends(require_active_progress)],
)
async def set_action_status(
    action_id: str,
    body: ActionStatusUpdate,
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db),
) -> DailyAction:
    """pending -> done | skipped, and back to pending; no transition is blocked."""
    action = await update_daily_action_status(db, session_id, action_id, body.status)
    if action is None:
        raise HTTPException(status_code=404, detail=f"Daily action '{action_id}' not found")
    return action
