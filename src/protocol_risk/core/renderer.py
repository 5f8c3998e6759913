"""
Terminal rendering of an assessment for the headless CLI.
"""

from typing import Optional

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .tabs import ResultTab
from .view_model import MUTED_COLOR, ResultViewModel


def render_score(view_model: ResultViewModel) -> Panel:
    body = Text(justify="center")
    body.append(f"{view_model.score}\n", style=f"bold {view_model.level_color}")
    body.append(view_model.level_label, style=f"bold {view_model.level_color}")
    return Panel(body, title="Risk Score", expand=False, padding=(1, 6))


def render_metrics(view_model: ResultViewModel) -> Table:
    table = Table(show_header=True, header_style=MUTED_COLOR, expand=True)
    for tile in view_model.metrics:
        table.add_column(tile.label, justify="center")
    table.add_row(*[f"[bold]{escape(tile.value)}[/bold]" for tile in view_model.metrics])
    return table


def render_findings(view_model: ResultViewModel) -> Table:
    table = Table(title="Findings", show_lines=True, expand=True)
    table.add_column("", width=1)
    table.add_column("Severity", no_wrap=True)
    table.add_column("Finding", ratio=1)

    for card in view_model.findings:
        table.add_row(
            Text("▌", style=card.color),
            Text(card.severity.upper(), style=f"bold {card.color}"),
            Group(Text(card.title, style="bold"), Text(card.description, style=MUTED_COLOR)),
        )
    return table


def render_recommendations(view_model: ResultViewModel) -> Table:
    table = Table(title="Recommendations", show_lines=True, expand=True)
    table.add_column("#", justify="right", width=3)
    table.add_column("Recommendation", ratio=1)

    for index, card in enumerate(view_model.recommendations, 1):
        table.add_row(
            str(index),
            Group(Text(card.title, style="bold"), Text(card.description, style=MUTED_COLOR)),
        )
    return table


def print_assessment(
    view_model: ResultViewModel,
    protocol: str,
    console: Optional[Console] = None,
    show_all: bool = True,
) -> None:
    """
    Print an assessment. With show_all False only the active tab's section is shown.
    """
    console = console or Console()
    console.print(f"\n[bold]Protocol Risk Assessment[/bold] [dim]for[/dim] [cyan]{escape(protocol)}[/cyan]\n")
    console.print(render_score(view_model))
    console.print(render_metrics(view_model))

    if show_all or view_model.active_tab is ResultTab.FINDINGS:
        console.print(render_findings(view_model))
    if show_all or view_model.active_tab is ResultTab.RECOMMENDATIONS:
        console.print(render_recommendations(view_model))
