"""Tests for the animation coordinator and transition curves"""

import copy

import pytest

from protocol_risk.core.analysis_client import SAMPLE_ASSESSMENT
from protocol_risk.core.animation import (
    PRESS_PULSE,
    AnimationCoordinator,
    AnimationDriver,
    AnimationState,
    Channel,
    Sequence,
    SnapDriver,
    Spring,
    Timing,
    plan_transition,
)
from protocol_risk.core.errors import AnalysisError
from protocol_risk.core.lifecycle import Failure, Idle, Submitting, Success
from protocol_risk.utils.schema import ProtocolQuery, RiskAssessment

QUERY = ProtocolQuery(value="uniswap-v3")


@pytest.fixture
def success():
    return Success(RiskAssessment.model_validate(copy.deepcopy(SAMPLE_ASSESSMENT)))


def _samples(transition, start, count=400):
    end = transition.settle_time
    return [transition.value_at(end * i / count, start) for i in range(count + 1)]


class TestCurves:
    def test_timing_midpoint_and_end(self):
        timing = Timing(1.0, duration=0.4)
        assert timing.value_at(0.0, 0.0) == 0.0
        assert timing.value_at(0.2, 0.0) == pytest.approx(0.5)
        assert timing.value_at(0.4, 0.0) == 1.0

    def test_default_spring_overshoots_then_settles(self):
        spring = Spring(1.0)
        assert spring.damping_ratio < 1

        values = _samples(spring, 0.0)

        assert max(values) > 1.0
        assert spring.value_at(spring.settle_time, 0.0) == pytest.approx(1.0, abs=0.01)

    def test_critically_damped_spring_does_not_overshoot(self):
        spring = Spring(1.0, damping=20.0, stiffness=100.0)
        assert spring.damping_ratio == pytest.approx(1.0)

        assert max(_samples(spring, 0.0)) <= 1.0

    def test_spring_starts_at_start_value(self):
        assert Spring(1.0).value_at(0.0, 0.25) == 0.25

    def test_sequence_plays_steps_in_order(self):
        sequence = Sequence((Timing(0.5, duration=0.1), Timing(2.0, duration=0.1)))

        assert sequence.target == 2.0
        assert sequence.settle_time == pytest.approx(0.2)
        assert sequence.value_at(0.1, 0.0) == pytest.approx(0.5)
        assert sequence.value_at(1.0, 0.0) == 2.0

    def test_press_pulse_dips_and_returns(self):
        values = _samples(PRESS_PULSE, 1.0)

        assert min(values) < 1.0
        assert PRESS_PULSE.target == 1.0
        assert PRESS_PULSE.value_at(PRESS_PULSE.settle_time + 1, 1.0) == 1.0


class TestPlanTransition:
    def test_entering_submitting_animates_search_bar_and_button(self):
        commands = plan_transition(Idle(), Submitting(QUERY), AnimationState())

        assert [c.channel for c in commands] == [Channel.SEARCH_BAR_WIDTH, Channel.BUTTON_SCALE]
        assert all(c.target == 1.0 for c in commands)

    def test_resubmitting_after_success(self, success):
        commands = plan_transition(success, Submitting(QUERY), AnimationState())
        assert [c.channel for c in commands] == [Channel.SEARCH_BAR_WIDTH, Channel.BUTTON_SCALE]

    def test_success_fades_in_results(self, success):
        state = AnimationState(result_opacity=0.0)

        commands = plan_transition(Submitting(QUERY), success, state)

        assert len(commands) == 1
        assert commands[0].channel is Channel.RESULT_OPACITY
        assert commands[0].start == 0.0
        assert commands[0].target == 1.0

    def test_failure_animates_nothing(self):
        failure = Failure(AnalysisError("down"))
        assert plan_transition(Submitting(QUERY), failure, AnimationState()) == []


class TestCoordinator:
    def test_targets_follow_lifecycle(self, success):
        driver = SnapDriver()
        coordinator = AnimationCoordinator(driver)

        coordinator.on_transition(Idle(), Submitting(QUERY))
        coordinator.on_transition(Submitting(QUERY), success)

        assert coordinator.state.as_dict() == {
            "search_bar_width": 1.0,
            "button_scale": 1.0,
            "result_opacity": 1.0,
        }
        assert [c.channel for c in driver.applied] == [
            Channel.SEARCH_BAR_WIDTH,
            Channel.BUTTON_SCALE,
            Channel.RESULT_OPACITY,
        ]

    def test_failure_keeps_results_hidden(self):
        coordinator = AnimationCoordinator()

        coordinator.on_transition(Idle(), Submitting(QUERY))
        coordinator.on_transition(Submitting(QUERY), Failure(AnalysisError("down")))

        assert coordinator.state.result_opacity == 0.0

    def test_driver_errors_are_contained(self, success):
        class BrokenDriver(AnimationDriver):
            def apply(self, command):
                raise RuntimeError("no screen")

        coordinator = AnimationCoordinator(BrokenDriver())
        coordinator.on_transition(Submitting(QUERY), success)

        assert coordinator.state.result_opacity == 1.0
