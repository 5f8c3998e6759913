"""
TUI Widgets
Reusable widgets for the protocol-risk TUI.
"""

from .messages import LifecycleChanged
from .metrics_panel import MetricsPanel, ScorePanel
from .result_panel import ResultPanel
from .result_tabs import ResultTabs
from .search_bar import PulseButton, SearchBar

__all__ = [
    # Messages
    "LifecycleChanged",
    # Widgets
    "PulseButton",
    "SearchBar",
    "ScorePanel",
    "MetricsPanel",
    "ResultTabs",
    "ResultPanel",
]
