"""
Result Tabs Widget
Findings and recommendations, one tab each, in service order.
"""

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container, Vertical, VerticalScroll
from textual.widgets import Static, TabbedContent, TabPane

from protocol_risk.core.tabs import ResultTab
from protocol_risk.core.view_model import FindingCard, RecommendationCard, ResultViewModel
from protocol_risk.tui.theme import COLORS, severity_label


class ResultTabs(Container):
    """Tabbed findings / recommendations view."""

    DEFAULT_CSS = """
    ResultTabs {
        height: auto;
        padding: 0 2;
    }

    ResultTabs TabbedContent {
        height: auto;
    }

    ResultTabs Tab.-active {
        color: #6366f1;
        text-style: bold;
    }

    ResultTabs VerticalScroll {
        height: auto;
        max-height: 30;
    }

    ResultTabs .card {
        height: auto;
        padding: 1 2;
        margin: 1 0 0 0;
        background: #2c2d31;
    }

    ResultTabs .finding-card {
        border-left: thick #71717a;
    }
    """

    def compose(self) -> ComposeResult:
        with TabbedContent(initial=ResultTab.FINDINGS.value):
            with TabPane("Findings", id=ResultTab.FINDINGS.value):
                yield VerticalScroll(id="findings-list")
            with TabPane("Recommendations", id=ResultTab.RECOMMENDATIONS.value):
                yield VerticalScroll(id="recommendations-list")

    @property
    def active(self) -> str:
        return self.query_one(TabbedContent).active

    def activate(self, tab: ResultTab) -> None:
        tabs = self.query_one(TabbedContent)
        if tabs.active != tab.value:
            tabs.active = tab.value

    async def show(self, view_model: ResultViewModel) -> None:
        findings = self.query_one("#findings-list", VerticalScroll)
        await findings.remove_children()
        await findings.mount_all(self._finding_card(card) for card in view_model.findings)

        recommendations = self.query_one("#recommendations-list", VerticalScroll)
        await recommendations.remove_children()
        await recommendations.mount_all(
            self._recommendation_card(card) for card in view_model.recommendations
        )

        self.activate(view_model.active_tab)

    def _finding_card(self, card: FindingCard) -> Vertical:
        title = Text()
        title.append("▌ ", style=card.color)
        title.append(card.title, style=f"bold {COLORS['text']}")
        title.append(f"  {severity_label(card.severity)}", style=card.color)

        widget = Vertical(
            Static(title),
            Static(Text(card.description, style=COLORS["muted"])),
            classes="card finding-card",
        )
        widget.styles.border_left = ("thick", card.color)
        return widget

    def _recommendation_card(self, card: RecommendationCard) -> Vertical:
        return Vertical(
            Static(Text(card.title, style=f"bold {COLORS['text']}")),
            Static(Text(card.description, style=COLORS["muted"])),
            classes="card recommendation-card",
        )
