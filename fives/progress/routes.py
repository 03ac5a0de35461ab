"""
Progress HTTP routes — GET  /api/areas
                        GET  /api/progress
                        POST /api/onboarding
                        PATCH /api/progress/area
                        POST /api/progress/advance

The persisted user_sessions row is read into the Onboarding | Active tagged
state (progress/state.py), a transition is applied, and the result is written
back. No JWT authentication: the X-Session-Id header is the tenant key.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from fives.daily.generator import ensure_daily_actions
from fives.database import get_db
from fives.errors import OnboardingRequiredError
from fives.progress import state as machine
from fives.progress.dependencies import get_session_id
from fives.progress.schemas import (
    AreaSwitchRequest,
    LifeArea,
    OnboardingRequest,
    ProgressRecord,
    ProgressResponse,
)
from fives.store import (
    get_life_area,
    get_progress,
    list_life_areas,
    update_progress,
    upsert_progress,
)

router = APIRouter(prefix="/api", tags=["progress"])
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _state_of(record: ProgressRecord | None) -> machine.ProgressState:
    if record is None:
        return machine.Onboarding()
    return machine.from_record(
        record.current_area_id, record.current_step, record.onboarding_completed
    )


async def _build_response(
    db: AsyncSession,
    session_id: str,
    state: machine.ProgressState,
) -> ProgressResponse:
    if isinstance(state, machine.Active):
        # Unknown area ids resolve to area=None rather than an error
        area = await get_life_area(db, state.area_id)
        return ProgressResponse(
            session_id=session_id,
            state="active",
            needs_onboarding=False,
            current_area_id=state.area_id,
            current_step=state.step,
            area=area,
        )
    return ProgressResponse(session_id=session_id, state="onboarding", needs_onboarding=True)


async def _require_area(db: AsyncSession, area_id: str) -> LifeArea:
    area = await get_life_area(db, area_id)
    if area is None:
        raise HTTPException(status_code=404, detail=f"Life area '{area_id}' not found")
    return area


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/areas", response_model=list[LifeArea])
async def list_areas(db: AsyncSession = Depends(get_db)) -> list[LifeArea]:
    """Life-area catalog in display order. Needs no session."""
    return await list_life_areas(db)


@router.get("/progress", response_model=ProgressResponse)
async def read_progress(
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db),
) -> ProgressResponse:
    """
    Current tagged state for the session.
    needs_onboarding is true when no row exists or onboarding_completed is false.
    """
    record = await get_progress(db, session_id)
    return await _build_response(db, session_id, _state_of(record))


@router.post("/onboarding", response_model=ProgressResponse)
async def complete_onboarding(
    body: OnboardingRequest,
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db),
) -> ProgressResponse:
    """
    Complete onboarding on the chosen area.

    Flow:
      1. Validate the area exists (404 otherwise)
      2. Upsert progress: area, step s1, onboarding_completed, updated_at
      3. Generate today's daily actions for (session, area, day)

    A failure in step 2 propagates — nothing is generated and the client stays
    on the onboarding screen.
    """
    await _require_area(db, body.area_id)
    record = await get_progress(db, session_id)
    new_state = machine.complete_onboarding(_state_of(record), body.area_id)

    await upsert_progress(
        db,
        session_id,
        current_area_id=new_state.area_id,
        current_step=new_state.step,
        onboarding_completed=True,
    )
    actions = await ensure_daily_actions(db, session_id, new_state.area_id, body.on)
    logger.info(
        "Onboarding completed session_id=%s area_id=%s actions=%d",
        session_id, new_state.area_id, len(actions),
    )
    return await _build_response(db, session_id, new_state)


@router.patch("/progress/area", response_model=ProgressResponse)
async def switch_area(
    body: AreaSwitchRequest,
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db),
) -> ProgressResponse:
    """
    Change the focus area. Existing step items stay with their original area.
    The client reloads progress and every area-scoped view afterwards.
    """
    record = await get_progress(db, session_id)
    state = _state_of(record)
    if not isinstance(state, machine.Active):
        raise OnboardingRequiredError(session_id)
    await _require_area(db, body.area_id)

    new_state = machine.switch_area(state, body.area_id)
    await update_progress(db, session_id, current_area_id=new_state.area_id)
    logger.info("Area switched session_id=%s area_id=%s", session_id, new_state.area_id)
    return await _build_response(db, session_id, new_state)


@router.post("/progress/advance", response_model=ProgressResponse)
async def advance_step(
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db),
) -> ProgressResponse:
    """Move to the next 5S step; s5 stays at s5."""
    record = await get_progress(db, session_id)
    state = _state_of(record)
    if not isinstance(state, machine.Active):
        raise OnboardingRequiredError(session_id)

    new_state = machine.advance_step(state)
    await update_progress(db, session_id, current_step=new_state.step)
    logger.info("Step advanced session_id=%s step=%s", session_id, new_state.step.value)
    return await _build_response(db, session_id, new_state)
