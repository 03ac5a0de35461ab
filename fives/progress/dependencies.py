"""
dependencies.py — FastAPI dependencies for session scoping and the onboarding gate.

get_session_id          reads the X-Session-Id header (opaque bearer key, no auth)
require_active_progress loads progress and raises OnboardingRequiredError unless Active
"""
import logging

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from fives.database import get_db
from fives.errors import OnboardingRequiredError
from fives.progress.state import Active, from_record
from fives.store import get_progress

logger = logging.getLogger(__name__)


async def get_session_id(
    x_session_id: str = Header(
        ...,
        min_length=1,
        max_length=64,
        description="Client-generated session identifier",
    ),
) -> str:
    return x_session_id


async def require_active_progress(
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db),
) -> Active:
    """Gate for every protected endpoint: dashboard, daily, review and step pages."""
    record = await get_progress(db, session_id)
    if record is None:
        state = from_record(None, None, None)
    else:
        state = from_record(record.current_area_id, record.current_step, record.onboarding_completed)
    if not isinstance(state, Active):
        logger.info("Onboarding required session_id=%s", session_id)
        raise OnboardingRequiredError(session_id)
    return state
