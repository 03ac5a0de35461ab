"""
Client route table and onboarding gate.
"""
import pytest

from fives.client.routing import (
    DASHBOARD,
    ONBOARDING,
    is_protected,
    parse_step_path,
    resolve_route,
    step_path,
)
from fives.progress.state import Step


@pytest.mark.parametrize(
    "path",
    ["/dashboard", "/daily", "/review", "/area/work/s1", "/area/home/s5"],
)
def test_protected_routes_need_onboarding(path: str) -> None:
    assert is_protected(path)
    assert resolve_route(path, needs_onboarding=True) == ONBOARDING
    assert resolve_route(path, needs_onboarding=False) == path


@pytest.mark.parametrize("needs_onboarding", [True, False])
def test_onboarding_always_reachable(needs_onboarding: bool) -> None:
    assert resolve_route("/onboarding", needs_onboarding) == ONBOARDING


def test_root_redirects_by_state() -> None:
    assert resolve_route("/", needs_onboarding=True) == ONBOARDING
    assert resolve_route("/", needs_onboarding=False) == DASHBOARD


@pytest.mark.parametrize("path", ["/nowhere", "/area/work/s6", "/area/work", ""])
def test_unknown_paths_follow_root_rule(path: str) -> None:
    assert resolve_route(path, needs_onboarding=True) == ONBOARDING
    assert resolve_route(path, needs_onboarding=False) == DASHBOARD


def test_trailing_slash_is_ignored() -> None:
    assert resolve_route("/daily/", needs_onboarding=False) == "/daily"


def test_step_path_round_trip() -> None:
    path = step_path("finance", Step.s3)
    assert path == "/area/finance/s3"
    assert parse_step_path(path) == ("finance", Step.s3)
    assert parse_step_path("/dashboard") is None
