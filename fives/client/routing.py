"""
routing.py — Client-side route table and the onboarding gate.

Routes:
    /                       -> /onboarding or /dashboard
    /onboarding             always reachable
    /dashboard /daily /review
    /area/<slug>/s1 .. s5   step pages

Every protected route resolves to /onboarding while onboarding is needed.
"""
import re
from typing import Optional

from fives.progress.state import Step

ROOT = "/"
ONBOARDING = "/onboarding"
DASHBOARD = "/dashboard"
DAILY = "/daily"
REVIEW = "/review"

PROTECTED_ROUTES = (DASHBOARD, DAILY, REVIEW)

_STEP_ROUTE = re.compile(r"^/area/(?P<area>[^/]+)/(?P<step>s[1-5])$")


def step_path(area_name: str, step: Step) -> str:
    return f"/area/{area_name}/{Step(step).value}"


def parse_step_path(path: str) -> Optional[tuple[str, Step]]:
    """(area slug, step) for a step page path, else None."""
    match = _STEP_ROUTE.match(path)
    if match is None:
        return None
    return match.group("area"), Step(match.group("step"))


def is_protected(path: str) -> bool:
    return path in PROTECTED_ROUTES or parse_step_path(path) is not None


def resolve_route(path: str, needs_onboarding: bool) -> str:
    """
    Return the route to actually render for a requested path.
    Unknown paths follow the root rule.
    """
    path = path.rstrip("/") or ROOT
    if path == ONBOARDING:
        return ONBOARDING
    if is_protected(path):
        return ONBOARDING if needs_onboarding else path
    return ONBOARDING if needs_onboarding else DASHBOARD
