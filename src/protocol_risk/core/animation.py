"""
Animation Coordinator

Visual feedback is expressed as "target value + transition curve" pairs that are
recomputed from lifecycle transitions alone. A driver decides how the curves are
played: the TUI hands them to Textual's animator, headless callers snap to the
final values.
"""

import logging
import math
from dataclasses import dataclass, fields
from enum import Enum
from typing import List, Optional, Tuple, Union

from protocol_risk.core.lifecycle import RequestState, RequestStatus

logger = logging.getLogger(__name__)

# Envelope amplitude below which a curve counts as settled
SETTLE_THRESHOLD = 0.001


class Channel(str, Enum):
    SEARCH_BAR_WIDTH = "search_bar_width"
    BUTTON_SCALE = "button_scale"
    RESULT_OPACITY = "result_opacity"


@dataclass(frozen=True)
class Timing:
    """Eased transition over a fixed duration."""

    target: float
    duration: float = 0.3

    @property
    def settle_time(self) -> float:
        return self.duration

    def value_at(self, t: float, start: float) -> float:
        if self.duration <= 0 or t >= self.duration:
            return self.target
        p = max(t, 0.0) / self.duration
        # ease in-out cubic
        eased = 4 * p**3 if p < 0.5 else 1 - (-2 * p + 2) ** 3 / 2
        return start + (self.target - start) * eased


@dataclass(frozen=True)
class Spring:
    """Damped spring starting at rest.

    The defaults are under-damped, so the value overshoots the target and settles.
    """

    target: float
    damping: float = 10.0
    stiffness: float = 100.0
    mass: float = 1.0

    @property
    def natural_frequency(self) -> float:
        return math.sqrt(self.stiffness / self.mass)

    @property
    def damping_ratio(self) -> float:
        return self.damping / (2 * math.sqrt(self.stiffness * self.mass))

    @property
    def settle_time(self) -> float:
        zeta = min(self.damping_ratio, 1.0)
        return math.log(1 / SETTLE_THRESHOLD) / (zeta * self.natural_frequency)

    def value_at(self, t: float, start: float) -> float:
        if t <= 0:
            return start
        delta = start - self.target
        omega = self.natural_frequency
        zeta = self.damping_ratio

        if zeta < 1:
            omega_d = omega * math.sqrt(1 - zeta**2)
            envelope = math.exp(-zeta * omega * t)
            offset = envelope * (
                math.cos(omega_d * t) + (zeta * omega / omega_d) * math.sin(omega_d * t)
            )
        else:
            offset = (1 + omega * t) * math.exp(-omega * t)

        return self.target + delta * offset


@dataclass(frozen=True)
class Sequence:
    """Steps played back to back, each starting where the previous one ended."""

    steps: Tuple[Union[Timing, Spring], ...]

    @property
    def target(self) -> float:
        return self.steps[-1].target

    @property
    def settle_time(self) -> float:
        return sum(step.settle_time for step in self.steps)

    def value_at(self, t: float, start: float) -> float:
        for step in self.steps:
            if t < step.settle_time:
                return step.value_at(t, start)
            t -= step.settle_time
            start = step.target
        return self.target


Transition = Union[Timing, Spring, Sequence]


@dataclass(frozen=True)
class AnimationCommand:
    channel: Channel
    transition: Transition
    start: float

    @property
    def target(self) -> float:
        return self.transition.target

    def value_at(self, t: float) -> float:
        return self.transition.value_at(t, self.start)


@dataclass
class AnimationState:
    """Target value of each animated channel. Purely visual."""

    search_bar_width: float = 1.0
    button_scale: float = 1.0
    result_opacity: float = 0.0

    def get(self, channel: Channel) -> float:
        return getattr(self, channel.value)

    def set(self, channel: Channel, value: float) -> None:
        setattr(self, channel.value, value)

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


PRESS_PULSE = Sequence(
    (Spring(0.95, damping=20.0, stiffness=400.0), Spring(1.0, damping=20.0, stiffness=400.0))
)
SEARCH_BAR_REST = Spring(1.0)
RESULT_FADE_IN = Spring(1.0)


def plan_transition(
    previous: RequestState, current: RequestState, state: AnimationState
) -> List[AnimationCommand]:
    """Animation commands for a lifecycle transition.

    Depends only on the two states and the channels' current values.
    """
    commands: List[AnimationCommand] = []

    if current.status is RequestStatus.SUBMITTING and previous.status is not RequestStatus.SUBMITTING:
        commands.append(
            AnimationCommand(Channel.SEARCH_BAR_WIDTH, SEARCH_BAR_REST, state.search_bar_width)
        )
        commands.append(
            AnimationCommand(Channel.BUTTON_SCALE, PRESS_PULSE, state.button_scale)
        )
    elif previous.status is RequestStatus.SUBMITTING and current.status is RequestStatus.SUCCESS:
        commands.append(
            AnimationCommand(Channel.RESULT_OPACITY, RESULT_FADE_IN, state.result_opacity)
        )

    return commands


class AnimationDriver:
    """Plays animation commands. The base driver snaps to final values."""

    def apply(self, command: AnimationCommand) -> None:
        pass


class SnapDriver(AnimationDriver):
    """Headless driver that records commands and jumps to their targets."""

    def __init__(self) -> None:
        self.applied: List[AnimationCommand] = []

    def apply(self, command: AnimationCommand) -> None:
        self.applied.append(command)


class AnimationCoordinator:
    """Keeps animation targets in lockstep with lifecycle transitions."""

    def __init__(self, driver: Optional[AnimationDriver] = None) -> None:
        self.driver = driver or SnapDriver()
        self.state = AnimationState()

    def on_transition(self, previous: RequestState, current: RequestState) -> None:
        for command in plan_transition(previous, current, self.state):
            self.state.set(command.channel, command.target)
            try:
                self.driver.apply(command)
            except Exception as e:
                # Visual only
                logger.warning(f"Animation on {command.channel.value} failed: {e}")
