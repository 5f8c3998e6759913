"""
Custom Message Types
Message-passing between the orchestrator and the TUI.
"""

from textual.message import Message

from protocol_risk.core.lifecycle import RequestState


class LifecycleChanged(Message):
    """Posted after every request lifecycle transition."""

    def __init__(self, previous: RequestState, current: RequestState) -> None:
        self.previous = previous
        self.current = current
        super().__init__()
