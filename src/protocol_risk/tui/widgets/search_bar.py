"""
Search Bar Widget
Protocol identifier input with the animated Analyze button.
"""

from typing import Callable, List, Optional

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.reactive import reactive
from textual.widgets import Button, Input

ANALYZE_LABEL = "Analyze →"
LOADING_LABEL = "Analyzing…"


class PulseButton(Button):
    """Button whose scale can be animated for press feedback."""

    DEFAULT_CSS = """
    PulseButton.-pressed {
        text-style: bold reverse;
    }
    """

    scale = reactive(1.0)

    def watch_scale(self, value: float) -> None:
        self.set_class(value < 0.99, "-pressed")

    def pulse(self, steps: List[tuple], on_done: Optional[Callable[[], None]] = None) -> None:
        """Play (target, duration, easing) steps one after another."""
        if not steps:
            if on_done is not None:
                on_done()
            return

        target, duration, easing = steps[0]
        self.animate(
            "scale",
            value=target,
            duration=duration,
            easing=easing,
            on_complete=lambda: self.pulse(steps[1:], on_done),
        )


class SearchBar(Horizontal):
    """Input and submit control for a protocol identifier."""

    DEFAULT_CSS = """
    SearchBar {
        height: auto;
        padding: 1 2;
    }

    SearchBar Input {
        width: 1fr;
        background: #2c2d31;
        border: tall #2c2d31;
    }

    SearchBar Input:focus {
        border: tall #6366f1;
    }

    SearchBar PulseButton {
        margin-left: 1;
        min-width: 14;
        background: #6366f1;
        color: #ffffff;
        text-style: bold;
    }

    SearchBar PulseButton:disabled {
        opacity: 0.5;
    }
    """

    width_fraction = reactive(1.0)

    def compose(self) -> ComposeResult:
        yield Input(placeholder="Enter protocol address or name", id="protocol-input")
        yield PulseButton(ANALYZE_LABEL, id="analyze-btn", disabled=True)

    def watch_width_fraction(self, value: float) -> None:
        self.styles.width = f"{max(0.0, min(value, 1.0)) * 100:.0f}%"

    @property
    def button(self) -> PulseButton:
        return self.query_one("#analyze-btn", PulseButton)

    def set_state(self, can_submit: bool, loading: bool) -> None:
        """Reflect the orchestrator's state on the submit control."""
        button = self.button
        button.label = LOADING_LABEL if loading else ANALYZE_LABEL
        button.disabled = loading or not can_submit
