"""
Request Lifecycle State Machine

Tracks a single assessment request through idle -> submitting -> success/failure.
The machine is long-lived: success and failure accept a new submission directly.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Union

from protocol_risk.core.errors import AnalysisError, InvalidTransition
from protocol_risk.utils.schema import ProtocolQuery, RiskAssessment

logger = logging.getLogger(__name__)


class RequestStatus(Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class Idle:
    status = RequestStatus.IDLE


@dataclass(frozen=True)
class Submitting:
    query: ProtocolQuery
    status = RequestStatus.SUBMITTING


@dataclass(frozen=True)
class Success:
    assessment: RiskAssessment
    status = RequestStatus.SUCCESS


@dataclass(frozen=True)
class Failure:
    error: AnalysisError
    status = RequestStatus.FAILURE


RequestState = Union[Idle, Submitting, Success, Failure]

TransitionListener = Callable[[RequestState, RequestState], None]


class RequestLifecycle:
    """Single source of truth for request progress."""

    def __init__(self) -> None:
        self._state: RequestState = Idle()
        self._listeners: List[TransitionListener] = []

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def status(self) -> RequestStatus:
        return self._state.status

    @property
    def is_submitting(self) -> bool:
        return isinstance(self._state, Submitting)

    def subscribe(self, listener: TransitionListener) -> Callable[[], None]:
        """Register a listener called with (previous, current) after each transition.

        Returns a callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear_listeners(self) -> None:
        self._listeners.clear()

    def submit(self, query: ProtocolQuery) -> bool:
        """Enter Submitting. Returns False while a request is already in flight."""
        if self.is_submitting:
            logger.debug("Ignoring submit while a request is in flight")
            return False
        self._transition(Submitting(query))
        return True

    def resolve(self, assessment: RiskAssessment) -> None:
        if not self.is_submitting:
            raise InvalidTransition(f"Cannot resolve from {self.status.value}")
        self._transition(Success(assessment))

    def reject(self, error: AnalysisError) -> None:
        if not self.is_submitting:
            raise InvalidTransition(f"Cannot reject from {self.status.value}")
        self._transition(Failure(error))

    def _transition(self, new_state: RequestState) -> None:
        previous = self._state
        self._state = new_state
        logger.debug(f"Request state: {previous.status.value} -> {new_state.status.value}")

        for listener in list(self._listeners):
            try:
                listener(previous, new_state)
            except Exception as e:
                logger.error(f"Lifecycle listener error: {e}")
