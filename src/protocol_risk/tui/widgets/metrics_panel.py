"""
Metrics Panel Widget
Score badge and the four protocol metrics tiles.
"""

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Static

from protocol_risk.core.view_model import ResultViewModel
from protocol_risk.tui.theme import COLORS


class ScorePanel(Static):
    """Risk score colored by risk level."""

    DEFAULT_CSS = """
    ScorePanel {
        height: auto;
        padding: 1 2;
        margin: 0 2 1 2;
        background: #2c2d31;
        text-align: center;
        content-align: center middle;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__("", **kwargs)
        self.score: int = 0
        self.level_label: str = ""

    def show(self, view_model: ResultViewModel) -> None:
        self.score = view_model.score
        self.level_label = view_model.level_label

        text = Text(justify="center")
        text.append("Risk Score\n", style=COLORS["text"])
        text.append(f"{view_model.score}\n", style=f"bold {view_model.level_color}")
        text.append(view_model.level_label, style=f"bold {view_model.level_color}")
        self.update(text)


class MetricsPanel(Horizontal):
    """TVL, holders, transactions and age tiles."""

    DEFAULT_CSS = """
    MetricsPanel {
        height: auto;
        padding: 0 2;
        margin: 0 0 1 0;
    }

    MetricsPanel .metric-item {
        width: 1fr;
        height: 4;
        margin: 0 1 0 0;
        background: #2c2d31;
        text-align: center;
        content-align: center middle;
    }
    """

    TILE_IDS = ("tvl", "holders", "transactions", "age")

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.values: dict = {}

    def compose(self) -> ComposeResult:
        for tile_id in self.TILE_IDS:
            yield Static("--", classes="metric-item", id=f"{tile_id}-value")

    def show(self, view_model: ResultViewModel) -> None:
        for tile_id, tile in zip(self.TILE_IDS, view_model.metrics):
            self.values[tile_id] = tile.value

            text = Text(justify="center")
            text.append(f"{tile.value}\n", style=f"bold {COLORS['accent']}")
            text.append(tile.label, style=COLORS["muted"])
            self.query_one(f"#{tile_id}-value", Static).update(text)
