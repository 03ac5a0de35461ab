"""
schemas.py — 5S step item Pydantic v2 data contracts.

For every stage there are three models:
  - <Item>          row as returned to the client
  - <Item>Create    insert payload (defaults mirror the screen defaults)
  - <Item>Update    partial update payload — only the stage's mutable fields

Create payloads strip whitespace and require non-empty text; the client
controllers already drop blank input before it reaches the API.
"""
from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from fives.progress.schemas import LifeArea
from fives.progress.state import Step

PriorityLevel = Literal["high", "medium", "low"]

_ROW_CONFIG = ConfigDict(from_attributes=True)
_WRITE_CONFIG = ConfigDict(extra="forbid", str_strip_whitespace=True)


# ---------------------------------------------------------------------------
# S1 — Filter
# ---------------------------------------------------------------------------

class FilterItem(BaseModel):
    model_config = _ROW_CONFIG

    id: str
    item_text: str
    should_keep: bool
    created_at: datetime


class FilterItemCreate(BaseModel):
    model_config = _WRITE_CONFIG

    item_text: str = Field(..., min_length=1)
    should_keep: bool = True


class FilterItemUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    should_keep: Optional[bool] = None


# ---------------------------------------------------------------------------
# S2 — Organize
# ---------------------------------------------------------------------------

class OrganizeItem(BaseModel):
    model_config = _ROW_CONFIG

    id: str
    item_text: str
    priority_level: PriorityLevel
    fixed_position: str
    created_at: datetime


class OrganizeItemCreate(BaseModel):
    model_config = _WRITE_CONFIG

    item_text: str = Field(..., min_length=1)
    priority_level: PriorityLevel = "medium"
    fixed_position: str = ""


class OrganizeItemUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    priority_level: Optional[PriorityLevel] = None
    # Free text; an empty string clears the position
    fixed_position: Optional[str] = None


# ---------------------------------------------------------------------------
# S3 — Clean
# ---------------------------------------------------------------------------

class CleanReflection(BaseModel):
    model_config = _ROW_CONFIG

    id: str
    reflection_text: str
    action_taken: str
    reflection_date: date
    created_at: datetime


class CleanReflectionCreate(BaseModel):
    model_config = _WRITE_CONFIG

    reflection_text: str = Field(..., min_length=1)
    action_taken: str = ""
    reflection_date: Optional[date] = Field(
        default=None,
        description="Client's local date. Defaults to server today.",
    )


class CleanReflectionUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    action_taken: Optional[str] = None


# ---------------------------------------------------------------------------
# S4 — Standardize
# ---------------------------------------------------------------------------

class Standard(BaseModel):
    model_config = _ROW_CONFIG

    id: str
    trigger: str
    action: str
    created_at: datetime


class StandardCreate(BaseModel):
    model_config = _WRITE_CONFIG

    trigger: str = Field(..., min_length=1)
    action: str = Field(..., min_length=1)


class StandardUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    trigger: Optional[str] = Field(default=None, min_length=1)
    action: Optional[str] = Field(default=None, min_length=1)


# ---------------------------------------------------------------------------
# S5 — Sustain
# ---------------------------------------------------------------------------

class SustainReminder(BaseModel):
    model_config = _ROW_CONFIG

    id: str
    why_text: str
    created_at: datetime


class SustainReminderCreate(BaseModel):
    model_config = _WRITE_CONFIG

    why_text: str = Field(..., min_length=1)


class SustainReminderUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    why_text: Optional[str] = Field(default=None, min_length=1)


# ---------------------------------------------------------------------------
# List response shared by all stages
# ---------------------------------------------------------------------------

class StageListResponse(BaseModel):
    """
    Items for one (session, area, stage).

    groups: S1 -> {"keep": [...], "remove": [...]}
            S2 -> {"high": [...], "medium": [...], "low": [...]}
            S3–S5 -> {}
    area:   None when the slug matched no catalog entry.
    """
    stage: Step
    area: Optional[LifeArea] = None
    items: List[Dict[str, Any]] = []
    groups: Dict[str, List[Dict[str, Any]]] = {}
