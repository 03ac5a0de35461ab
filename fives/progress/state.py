"""
state.py — Progress state machine for a session.

A session is in exactly one of two states:

    Onboarding                  no user_sessions row, or onboarding not completed
    Active(area_id, step)       focused on one life area, working on step s1..s5

Transitions:
    complete_onboarding   Onboarding | Active  -> Active(area, s1)
    switch_area           Active               -> Active(new area, same step)
    advance_step          Active               -> Active(area, next step)  (s5 is terminal)

All transitions are pure: they return a new state and never touch storage.
The routes in progress/routes.py persist the result.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Step(str, Enum):
    s1 = "s1"   # Filter
    s2 = "s2"   # Organize
    s3 = "s3"   # Clean
    s4 = "s4"   # Standardize
    s5 = "s5"   # Sustain

    def next(self) -> "Step":
        members = list(Step)
        index = members.index(self)
        return members[min(index + 1, len(members) - 1)]


STEP_TITLES: dict[Step, str] = {
    Step.s1: "Filter",
    Step.s2: "Organize",
    Step.s3: "Clean",
    Step.s4: "Standardize",
    Step.s5: "Sustain",
}


class InvalidTransition(ValueError):
    """Raised when a transition is not allowed from the current state."""


@dataclass(frozen=True)
class Onboarding:
    needs_onboarding: bool = True


@dataclass(frozen=True)
class Active:
    area_id: str
    step: Step = Step.s1
    needs_onboarding: bool = False


ProgressState = Union[Onboarding, Active]


def from_record(
    current_area_id: Optional[str],
    current_step: Optional[str],
    onboarding_completed: Optional[bool],
) -> ProgressState:
    """
    Build the tagged state from a persisted user_sessions row.
    Pass all None when no row exists.
    """
    if not onboarding_completed or not current_area_id:
        return Onboarding()
    return Active(area_id=current_area_id, step=Step(current_step or Step.s1.value))


def complete_onboarding(state: ProgressState, area_id: str) -> Active:
    # Re-running onboarding from Active is allowed and restarts at s1
    return Active(area_id=area_id, step=Step.s1)


def switch_area(state: ProgressState, area_id: str) -> Active:
    if not isinstance(state, Active):
        raise InvalidTransition("Cannot switch area before onboarding is completed")
    return Active(area_id=area_id, step=state.step)


def advance_step(state: ProgressState) -> Active:
    if not isinstance(state, Active):
        raise InvalidTransition("Cannot advance step before onboarding is completed")
    return Active(area_id=state.area_id, step=state.step.next())
