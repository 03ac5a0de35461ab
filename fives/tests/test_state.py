"""
Unit tests for the progress state machine (pure, no database).
"""
import pytest

from fives.progress.state import (
    Active,
    InvalidTransition,
    Onboarding,
    Step,
    advance_step,
    complete_onboarding,
    from_record,
    switch_area,
)


class TestFromRecord:
    def test_missing_row_is_onboarding(self):
        assert from_record(None, None, None) == Onboarding()

    def test_incomplete_onboarding_is_onboarding(self):
        state = from_record("area-1", "s3", False)
        assert isinstance(state, Onboarding)
        assert state.needs_onboarding is True

    def test_completed_without_area_is_onboarding(self):
        assert isinstance(from_record(None, "s1", True), Onboarding)

    def test_completed_row_is_active(self):
        state = from_record("area-1", "s2", True)
        assert state == Active(area_id="area-1", step=Step.s2)
        assert state.needs_onboarding is False


class TestTransitions:
    def test_complete_onboarding_starts_at_s1(self):
        assert complete_onboarding(Onboarding(), "area-1") == Active("area-1", Step.s1)

    def test_complete_onboarding_again_restarts(self):
        state = complete_onboarding(Active("area-1", Step.s4), "area-2")
        assert state == Active("area-2", Step.s1)

    def test_switch_area_keeps_step(self):
        assert switch_area(Active("area-1", Step.s3), "area-2") == Active("area-2", Step.s3)

    def test_switch_area_requires_active(self):
        with pytest.raises(InvalidTransition):
            switch_area(Onboarding(), "area-2")

    def test_advance_walks_every_step(self):
        state = Active("area-1")
        seen = [state.step]
        for _ in range(4):
            state = advance_step(state)
            seen.append(state.step)
        assert seen == [Step.s1, Step.s2, Step.s3, Step.s4, Step.s5]
        assert state.area_id == "area-1"

    def test_advance_from_s5_stays(self):
        assert advance_step(Active("area-1", Step.s5)).step == Step.s5

    def test_advance_requires_active(self):
        with pytest.raises(InvalidTransition):
            advance_step(Onboarding())

    def test_invalid_transition_is_a_value_error(self):
        # The API's ValueError handler turns it into 422
        assert issubclass(InvalidTransition, ValueError)
