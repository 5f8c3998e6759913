"""
Plays animation commands on the TUI widgets with Textual's animator.
"""

import logging
from typing import List, Tuple

from textual.app import App

from protocol_risk.core.animation import (
    AnimationCommand,
    AnimationDriver,
    Channel,
    Sequence,
    Spring,
    Timing,
)

from .widgets import PulseButton, ResultPanel, SearchBar

logger = logging.getLogger(__name__)

# Spring settle times are long for a terminal; cap what we hand to Textual
MAX_DURATION = 0.6


def _easing(step) -> str:
    if isinstance(step, Spring):
        return "out_back" if step.damping_ratio < 1 else "out_cubic"
    return "in_out_cubic"


def to_steps(transition) -> List[Tuple[float, float, str]]:
    """Flatten a transition into (target, duration, easing) steps."""
    if isinstance(transition, Sequence):
        steps = list(transition.steps)
    else:
        steps = [transition]
    return [
        (step.target, min(step.settle_time, MAX_DURATION), _easing(step))
        for step in steps
        if isinstance(step, (Spring, Timing))
    ]


class TextualAnimationDriver(AnimationDriver):
    """Animates the search bar, Analyze button and result panel."""

    def __init__(self, app: App, enabled: bool = True) -> None:
        self.app = app
        self.enabled = enabled

    def apply(self, command: AnimationCommand) -> None:
        steps = to_steps(command.transition)

        if command.channel is Channel.RESULT_OPACITY:
            panel = self.app.query_one(ResultPanel)
            if self.enabled:
                target, duration, easing = steps[-1]
                panel.styles.animate("opacity", value=target, duration=duration, easing=easing)
            else:
                panel.styles.opacity = command.target

        elif command.channel is Channel.BUTTON_SCALE:
            button = self.app.query_one("#analyze-btn", PulseButton)
            if self.enabled:
                button.pulse(steps)
            else:
                button.scale = command.target

        elif command.channel is Channel.SEARCH_BAR_WIDTH:
            search_bar = self.app.query_one(SearchBar)
            if self.enabled:
                target, duration, easing = steps[-1]
                search_bar.animate("width_fraction", value=target, duration=duration, easing=easing)
            else:
                search_bar.width_fraction = command.target

        else:
            logger.debug(f"No widget for animation channel {command.channel}")
