"""
Result Panel Widget
Everything shown once an assessment is available. Hidden until the first result.
"""

from textual.app import ComposeResult
from textual.containers import Vertical

from protocol_risk.core.view_model import ResultViewModel

from .metrics_panel import MetricsPanel, ScorePanel
from .result_tabs import ResultTabs


class ResultPanel(Vertical):
    """Score, metrics and tabbed findings/recommendations."""

    DEFAULT_CSS = """
    ResultPanel {
        height: auto;
        display: none;
        opacity: 0;
    }

    ResultPanel.-visible {
        display: block;
    }
    """

    def compose(self) -> ComposeResult:
        yield ScorePanel(id="score-panel")
        yield MetricsPanel(id="metrics-panel")
        yield ResultTabs(id="result-tabs")

    async def show(self, view_model: ResultViewModel) -> None:
        self.add_class("-visible")
        self.query_one(ScorePanel).show(view_model)
        self.query_one(MetricsPanel).show(view_model)
        await self.query_one(ResultTabs).show(view_model)
