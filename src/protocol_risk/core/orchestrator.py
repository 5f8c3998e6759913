"""
Risk Assessment Orchestrator
Owns the request lifecycle for one mounted view: validates input, issues at most
one analysis request at a time, keeps animations in step with the lifecycle and
exposes the derived result view.
"""

import asyncio
import logging
from typing import Callable, Optional, Union

from protocol_risk.core import validator
from protocol_risk.core.analysis_client import AnalysisClient
from protocol_risk.core.animation import AnimationCoordinator, AnimationDriver, AnimationState
from protocol_risk.core.errors import AnalysisError, QueryValidationError
from protocol_risk.core.lifecycle import (
    RequestLifecycle,
    RequestState,
    RequestStatus,
    Success,
    TransitionListener,
)
from protocol_risk.core.tabs import ResultTab, TabSelector
from protocol_risk.core.view_model import ResultViewModel, build_view_model
from protocol_risk.utils.schema import ProtocolQuery, RiskAssessment

logger = logging.getLogger(__name__)


class RiskAssessmentOrchestrator:
    """Request and presentation state for a single risk assessment view."""

    def __init__(
        self,
        client: AnalysisClient,
        animation_driver: Optional[AnimationDriver] = None,
    ) -> None:
        self.client = client
        self.lifecycle = RequestLifecycle()
        self.animator = AnimationCoordinator(animation_driver)
        self.tabs = TabSelector()
        self.query = ""
        self._task: Optional[asyncio.Task] = None
        self._mounted = False
        self._generation = 0

    # Lifecycle

    @property
    def mounted(self) -> bool:
        return self._mounted

    def mount(self) -> None:
        if self._mounted:
            return
        self._mounted = True
        self.lifecycle.subscribe(self.animator.on_transition)
        logger.debug("Orchestrator mounted")

    def unmount(self) -> None:
        """Tear down: late responses are dropped and listeners released."""
        self._mounted = False
        self._generation += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self.lifecycle.clear_listeners()
        self.lifecycle = RequestLifecycle()
        self.animator.state = AnimationState()
        logger.debug("Orchestrator unmounted")

    # State

    @property
    def state(self) -> RequestState:
        return self.lifecycle.state

    @property
    def status(self) -> RequestStatus:
        return self.lifecycle.status

    @property
    def assessment(self) -> Optional[RiskAssessment]:
        state = self.lifecycle.state
        if isinstance(state, Success):
            return state.assessment
        return None

    @property
    def error(self) -> Optional[AnalysisError]:
        return getattr(self.lifecycle.state, "error", None)

    @property
    def animation(self) -> AnimationState:
        return self.animator.state

    @property
    def active_tab(self) -> ResultTab:
        return self.tabs.active

    @property
    def view_model(self) -> Optional[ResultViewModel]:
        assessment = self.assessment
        if assessment is None:
            return None
        return build_view_model(assessment, self.tabs.active)

    @property
    def can_submit(self) -> bool:
        return (
            self._mounted
            and not self.lifecycle.is_submitting
            and validator.is_valid(self.query)
        )

    def subscribe(self, listener: TransitionListener) -> Callable[[], None]:
        return self.lifecycle.subscribe(listener)

    # Actions

    def set_query(self, raw: str) -> None:
        self.query = raw

    def select_tab(self, tab: Union[ResultTab, str]) -> ResultTab:
        return self.tabs.select(tab)

    def submit(self, raw: Optional[str] = None) -> Optional[asyncio.Task]:
        """
        Start an assessment for the current (or given) identifier.

        Must be called from a running event loop.

        Returns:
            The task running the request, or None when the submission was refused
        """
        if raw is not None:
            self.query = raw

        if not self._mounted:
            logger.debug("Submit ignored, orchestrator is not mounted")
            return None
        if self.lifecycle.is_submitting:
            logger.debug("Submit ignored, a request is already in flight")
            return None

        try:
            query = validator.validate(self.query)
        except QueryValidationError as e:
            logger.debug(f"Submit refused: {e}")
            return None

        self.lifecycle.submit(query)
        logger.info(f"Analyzing protocol '{query.value}'")
        self._task = asyncio.get_running_loop().create_task(self._run(query, self._generation))
        return self._task

    async def wait(self) -> None:
        """Wait for the in-flight request, if any, to settle."""
        task = self._task
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def _run(self, query: ProtocolQuery, generation: int) -> None:
        try:
            result = await self.client.submit(query)
        except asyncio.CancelledError:
            raise
        except AnalysisError as e:
            self._settle(generation, error=e)
        except Exception as e:
            logger.exception("Unexpected error from analysis client")
            self._settle(generation, error=AnalysisError(f"Analysis failed: {e}", cause=e))
        else:
            self._settle(generation, result=result)

    def _settle(
        self,
        generation: int,
        result: Optional[RiskAssessment] = None,
        error: Optional[AnalysisError] = None,
    ) -> None:
        if not self._mounted or generation != self._generation:
            logger.debug("Dropping response for unmounted orchestrator")
            return

        self._task = None
        if error is not None:
            logger.warning(f"Risk analysis failed: {error}")
            self.lifecycle.reject(error)
        else:
            logger.info(f"Risk analysis complete: score {result.score} ({result.level.value})")
            self.lifecycle.resolve(result)
