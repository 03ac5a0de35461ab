"""
generator.py — Daily Action Generator.

Seeds the fixed list of daily prompts for (session, area, day) the first time
that day is looked at, and reuses the same rows on every later access.

Idempotence has two layers:
  1. existence check — the normal, sequential case
  2. unique key (session_id, area_id, action_date, position) — a concurrent
     second generator fails on insert; we then re-read the winner's rows
"""
import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fives.config import settings
from fives.daily.schemas import ActionStatus, DailyAction
from fives.store import insert_daily_actions, list_daily_actions

logger = logging.getLogger(__name__)

DAILY_PROMPTS: dict[str, list[str]] = {
    "en": [
        "Identify one unnecessary thing and remove it",
        "Clarify the single most important priority for today",
        "Spend 5 minutes reflecting on what is weighing on you",
    ],
    "vi": [
        "Xác định 1 thứ không cần thiết và loại bỏ",
        "Làm rõ 1 ưu tiên quan trọng nhất hôm nay",
        "Dành 5 phút suy ngẫm về điều gì đang làm bạn cảm thấy nặng nề",
    ],
}


def get_daily_prompts(locale: Optional[str] = None) -> list[str]:
    """Prompt list for a locale; unknown locales fall back to English."""
    locale = (locale or settings.daily_prompt_locale).lower()
    return list(DAILY_PROMPTS.get(locale, DAILY_PROMPTS["en"]))


async def ensure_daily_actions(
    db: AsyncSession,
    session_id: str,
    area_id: str,
    action_date: Optional[date] = None,
    prompts: Optional[list[str]] = None,
) -> list[DailyAction]:
    """
    Return the day's actions, generating them first if none exist yet.
    Calling this any number of times for the same day yields the same rows.
    """
    action_date = action_date or date.today()
    existing = await list_daily_actions(db, session_id, area_id, action_date)
    if existing:
        return existing

    texts = prompts if prompts is not None else get_daily_prompts()
    try:
        await insert_daily_actions(db, session_id, area_id, action_date, texts)
    except IntegrityError:
        logger.warning(
            "Daily actions already generated concurrently session_id=%s area_id=%s date=%s",
            session_id, area_id, action_date.isoformat(),
        )

    return await list_daily_actions(db, session_id, area_id, action_date)


def count_completed(actions: list[DailyAction]) -> tuple[int, int]:
    """(done, total) — skipped and pending both count as not completed."""
    done = sum(1 for action in actions if action.status == ActionStatus.done)
    return done, len(actions)
