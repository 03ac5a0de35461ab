"""
schemas.py — Weekly review Pydantic v2 data contracts.
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WeeklyReview(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    week_start_date: date
    what_clearer: str
    what_lighter: str
    what_adjust: str
    created_at: datetime
    updated_at: datetime


class WeeklyReviewSave(BaseModel):
    """
    Free-text answers for the current week. Empty answers are allowed.
    on: client's local date, used to pick the week. Defaults to server today.
    """
    model_config = ConfigDict(extra="forbid")

    what_clearer: str = ""
    what_lighter: str = ""
    what_adjust: str = ""
    on: Optional[date] = Field(default=None)


class WeeklyReviewState(BaseModel):
    """current is None until the week's review is first saved."""
    week_start: str
    current: Optional[WeeklyReview] = None
    recent: List[WeeklyReview] = []
