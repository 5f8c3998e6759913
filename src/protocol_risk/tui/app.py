#!/usr/bin/env python3
"""
protocol-risk TUI
Submit a protocol identifier and browse the resulting risk assessment.
"""

import logging
from typing import Optional

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Button, Footer, Input, Static, TabbedContent

from protocol_risk import __version__
from protocol_risk.core.analysis_client import AnalysisClient, create_client
from protocol_risk.core.lifecycle import Failure, Submitting, Success
from protocol_risk.core.orchestrator import RiskAssessmentOrchestrator
from protocol_risk.core.tabs import ResultTab
from protocol_risk.utils.config_file import ClientConfig
from protocol_risk.utils.credentials import get_api_key
from protocol_risk.utils.http_client import close_async_client

from .driver import TextualAnimationDriver
from .theme import COLORS, MAIN_CSS
from .widgets import LifecycleChanged, ResultPanel, ResultTabs, SearchBar

logger = logging.getLogger(__name__)


class ProtocolRiskTUI(App):
    """Protocol risk assessment screen."""

    CSS = MAIN_CSS

    TITLE = "Protocol Risk Assessment"
    SUB_TITLE = "AI-powered analysis of protocol security and risks"

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("ctrl+r", "analyze", "Analyze", show=True),
        Binding("t", "toggle_tab", "Toggle tab", show=True),
        Binding("1", "select_tab('findings')", "Findings", show=False),
        Binding("2", "select_tab('recommendations')", "Recommendations", show=False),
    ]

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        client: Optional[AnalysisClient] = None,
    ) -> None:
        super().__init__()
        self.config = config or ClientConfig()
        self.client = client or create_client(self.config, api_key=get_api_key())
        self.orchestrator = RiskAssessmentOrchestrator(
            self.client,
            TextualAnimationDriver(self, enabled=self.config.animations),
        )

    def compose(self) -> ComposeResult:
        header = Text(justify="center")
        header.append("◆ ", style=COLORS["accent"])
        header.append(f"{self.TITLE}\n", style=f"bold {COLORS['text']}")
        header.append(self.SUB_TITLE, style=COLORS["muted"])
        yield Static(header, id="header")

        with VerticalScroll(id="body"):
            yield SearchBar(id="search-bar")
            yield Static("", id="status-line")
            yield ResultPanel(id="result-panel")

        yield Footer()

    def on_mount(self) -> None:
        self.orchestrator.mount()
        self.orchestrator.subscribe(
            lambda previous, current: self.post_message(LifecycleChanged(previous, current))
        )
        self.query_one("#protocol-input", Input).focus()
        logger.debug(f"protocol-risk v{__version__} TUI mounted")

    async def on_unmount(self) -> None:
        self.orchestrator.unmount()
        await self.client.aclose()
        await close_async_client()

    def set_status(self, message: str, error: bool = False) -> None:
        status = self.query_one("#status-line", Static)
        status.update(Text(message))
        status.set_class(error, "-error")

    def _refresh_controls(self) -> None:
        self.query_one(SearchBar).set_state(
            can_submit=self.orchestrator.can_submit,
            loading=self.orchestrator.lifecycle.is_submitting,
        )

    @on(Input.Changed, "#protocol-input")
    def on_query_changed(self, event: Input.Changed) -> None:
        self.orchestrator.set_query(event.value)
        self._refresh_controls()

    @on(Input.Submitted, "#protocol-input")
    def on_query_submitted(self, event: Input.Submitted) -> None:
        self.action_analyze()

    @on(Button.Pressed, "#analyze-btn")
    def on_analyze_button(self, event: Button.Pressed) -> None:
        self.action_analyze()

    @on(TabbedContent.TabActivated)
    def on_result_tab_changed(self, event: TabbedContent.TabActivated) -> None:
        pane_id = event.tabbed_content.active
        if pane_id in (ResultTab.FINDINGS.value, ResultTab.RECOMMENDATIONS.value):
            self.orchestrator.select_tab(pane_id)

    def action_analyze(self) -> None:
        """Submit the current protocol identifier."""
        if self.orchestrator.lifecycle.is_submitting:
            return

        if self.orchestrator.submit() is None:
            self.set_status("Enter a protocol address or name to analyze", error=True)

    def action_select_tab(self, tab: str) -> None:
        self.orchestrator.select_tab(tab)
        self.query_one(ResultTabs).activate(self.orchestrator.active_tab)

    def action_toggle_tab(self) -> None:
        self.action_select_tab(self.orchestrator.tabs.toggle().value)

    async def on_lifecycle_changed(self, message: LifecycleChanged) -> None:
        state = message.current
        self._refresh_controls()

        if isinstance(state, Submitting):
            self.set_status(f"Analyzing {state.query.value}…")

        elif isinstance(state, Success):
            self.set_status("")
            view_model = self.orchestrator.view_model
            if view_model is not None:
                await self.query_one(ResultPanel).show(view_model)

        elif isinstance(state, Failure):
            self.set_status(f"Analysis failed: {state.error}. Try again.", error=True)


def run_tui(config: Optional[ClientConfig] = None) -> None:
    """Run the protocol-risk TUI."""
    app = ProtocolRiskTUI(config=config)
    app.run()


if __name__ == "__main__":
    run_tui()
