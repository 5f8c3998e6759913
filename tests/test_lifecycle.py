"""Tests for the request lifecycle state machine"""

import copy

import pytest

from protocol_risk.core.analysis_client import SAMPLE_ASSESSMENT
from protocol_risk.core.errors import AnalysisError, InvalidTransition
from protocol_risk.core.lifecycle import (
    Failure,
    Idle,
    RequestLifecycle,
    RequestStatus,
    Submitting,
    Success,
)
from protocol_risk.utils.schema import ProtocolQuery, RiskAssessment


@pytest.fixture
def query():
    return ProtocolQuery(value="uniswap-v3")


@pytest.fixture
def assessment():
    return RiskAssessment.model_validate(copy.deepcopy(SAMPLE_ASSESSMENT))


def test_starts_idle():
    lifecycle = RequestLifecycle()
    assert isinstance(lifecycle.state, Idle)
    assert lifecycle.status is RequestStatus.IDLE
    assert lifecycle.is_submitting is False


def test_submit_enters_submitting(query):
    lifecycle = RequestLifecycle()

    assert lifecycle.submit(query) is True
    assert lifecycle.state == Submitting(query)


def test_submit_while_submitting_is_noop(query):
    lifecycle = RequestLifecycle()
    lifecycle.submit(query)

    assert lifecycle.submit(ProtocolQuery(value="aave")) is False
    assert lifecycle.state == Submitting(query)


def test_resolve_enters_success(query, assessment):
    lifecycle = RequestLifecycle()
    lifecycle.submit(query)
    lifecycle.resolve(assessment)

    assert isinstance(lifecycle.state, Success)
    assert lifecycle.state.assessment is assessment


def test_reject_enters_failure(query):
    lifecycle = RequestLifecycle()
    error = AnalysisError("service unavailable")
    lifecycle.submit(query)
    lifecycle.reject(error)

    assert isinstance(lifecycle.state, Failure)
    assert lifecycle.state.error is error


def test_resolve_requires_submitting(assessment):
    lifecycle = RequestLifecycle()
    with pytest.raises(InvalidTransition):
        lifecycle.resolve(assessment)


def test_reject_requires_submitting(query, assessment):
    lifecycle = RequestLifecycle()
    lifecycle.submit(query)
    lifecycle.resolve(assessment)

    with pytest.raises(InvalidTransition):
        lifecycle.reject(AnalysisError("late"))


def test_resubmit_from_success_goes_straight_to_submitting(query, assessment):
    lifecycle = RequestLifecycle()
    lifecycle.submit(query)
    lifecycle.resolve(assessment)

    seen = []
    lifecycle.subscribe(lambda previous, current: seen.append((previous.status, current.status)))

    assert lifecycle.submit(query) is True
    assert seen == [(RequestStatus.SUCCESS, RequestStatus.SUBMITTING)]


def test_resubmit_from_failure(query):
    lifecycle = RequestLifecycle()
    lifecycle.submit(query)
    lifecycle.reject(AnalysisError("boom"))

    assert lifecycle.submit(query) is True
    assert lifecycle.status is RequestStatus.SUBMITTING


def test_listeners_receive_transitions(query, assessment):
    lifecycle = RequestLifecycle()
    seen = []
    lifecycle.subscribe(lambda previous, current: seen.append((previous.status, current.status)))

    lifecycle.submit(query)
    lifecycle.resolve(assessment)

    assert seen == [
        (RequestStatus.IDLE, RequestStatus.SUBMITTING),
        (RequestStatus.SUBMITTING, RequestStatus.SUCCESS),
    ]


def test_unsubscribe(query):
    lifecycle = RequestLifecycle()
    seen = []
    unsubscribe = lifecycle.subscribe(lambda previous, current: seen.append(current))

    unsubscribe()
    lifecycle.submit(query)

    assert seen == []


def test_failing_listener_does_not_break_transition(query):
    lifecycle = RequestLifecycle()

    def broken(previous, current):
        raise RuntimeError("listener bug")

    seen = []
    lifecycle.subscribe(broken)
    lifecycle.subscribe(lambda previous, current: seen.append(current))

    lifecycle.submit(query)

    assert lifecycle.status is RequestStatus.SUBMITTING
    assert len(seen) == 1
