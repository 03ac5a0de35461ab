"""
schemas.py — Daily action / dashboard Pydantic v2 data contracts.
"""
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from fives.progress.schemas import LifeArea
from fives.progress.state import Step


class ActionStatus(str, Enum):
    pending = "pending"
    done = "done"
    skipped = "skipped"


class DailyAction(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    action_text: str
    action_date: date
    position: int
    status: ActionStatus
    created_at: datetime


class ActionStatusUpdate(BaseModel):
    """Any status may follow any other — resetting to pending included."""
    model_config = ConfigDict(extra="forbid")

    status: ActionStatus


class StepLink(BaseModel):
    step: Step
    title: str
    path: str


class DailyActionsResponse(BaseModel):
    """
    Today's actions for the active area.

    completed counts only 'done'; total counts every generated row.
    progress_label is "{completed}/{total}".
    """
    action_date: date
    area: Optional[LifeArea] = None
    actions: List[DailyAction] = []
    completed: int = 0
    total: int = 0
    progress_label: str = "0/0"


class DashboardResponse(DailyActionsResponse):
    current_step: Step
    areas: List[LifeArea] = []
    step_links: List[StepLink] = []
