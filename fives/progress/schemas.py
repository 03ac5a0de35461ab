"""
schemas.py — Progress / onboarding Pydantic v2 data contracts.

Defines:
  - LifeArea              (catalog entry, read-only)
  - ProgressRecord        (persisted user_sessions row)
  - ProgressResponse      (tagged state + resolved area for the client)
  - OnboardingRequest     (area choice that completes onboarding)
  - AreaSwitchRequest     (focus change from the navigation shell)
"""
from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from fives.progress.state import Step


class LifeArea(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    display_name: str
    emoji: str = ""
    description: str = ""
    sort_order: int = 0


class ProgressRecord(BaseModel):
    """A user_sessions row as the rest of the code sees it."""
    model_config = ConfigDict(from_attributes=True)

    session_id: str
    current_area_id: Optional[str] = None
    current_step: Step = Step.s1
    onboarding_completed: bool = False


class ProgressResponse(BaseModel):
    """
    Current progress for a session.

    state:  'onboarding' | 'active'
    area:   None when onboarding, or when current_area_id has no catalog entry
            (the client renders without area labels in that case).
    """
    session_id: str
    state: Literal["onboarding", "active"]
    needs_onboarding: bool
    current_area_id: Optional[str] = None
    current_step: Optional[Step] = None
    area: Optional[LifeArea] = None


class OnboardingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    area_id: str = Field(..., min_length=1, description="Chosen life area id")
    on: Optional[date] = Field(
        default=None,
        description="Client's local calendar date; today's actions are generated for it. Defaults to server today.",
    )


class AreaSwitchRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    area_id: str = Field(..., min_length=1)
