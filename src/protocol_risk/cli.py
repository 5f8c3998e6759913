"""
Command line interface for protocol-risk.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from protocol_risk import __version__
from protocol_risk.core.analysis_client import AnalysisClient, create_client
from protocol_risk.core.animation import SnapDriver
from protocol_risk.core.errors import QueryValidationError
from protocol_risk.core.lifecycle import Failure, RequestState, Success
from protocol_risk.core.orchestrator import RiskAssessmentOrchestrator
from protocol_risk.core.renderer import print_assessment
from protocol_risk.core.tabs import ResultTab
from protocol_risk.core.validator import validate
from protocol_risk.core.view_model import build_view_model
from protocol_risk.utils import config_file, credentials, logging_config
from protocol_risk.utils.http_client import close_async_client

logger = logging.getLogger(__name__)

console = Console()

app = typer.Typer(
    name="protocol-risk",
    help="Risk assessment client for DeFi protocols",
    add_completion=False,
    no_args_is_help=True,
)

# Exit codes
EXIT_ANALYSIS_FAILED = 1
EXIT_INVALID_INPUT = 2


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"protocol-risk version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="Configuration file (.yml, .yaml or pyproject.toml)",
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="DEBUG, INFO, WARNING, ERROR, CRITICAL"
    ),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write logs to this file"),
):
    """protocol-risk: analyze the risk profile of a DeFi protocol"""
    ctx.obj = {
        "config_path": config_path,
        "log_level": log_level,
        "log_file": log_file,
    }


def _load_config(ctx: typer.Context, tui: bool = False, **overrides) -> config_file.ClientConfig:
    options = ctx.obj or {}
    overrides["log_level"] = options.get("log_level")
    try:
        config = config_file.load_config(options.get("config_path"), overrides=overrides)
    except ValueError as e:
        console.print(f"[bold red]ERROR: {escape(str(e))}[/bold red]")
        raise typer.Exit(code=EXIT_INVALID_INPUT)

    logging_config.setup_logging(config.log_level, options.get("log_file"), tui=tui)
    return config


async def run_assessment(client: AnalysisClient, protocol: str) -> RequestState:
    """Drive one assessment through the orchestrator without a UI."""
    orchestrator = RiskAssessmentOrchestrator(client, SnapDriver())
    orchestrator.mount()
    try:
        orchestrator.submit(protocol)
        await orchestrator.wait()
        return orchestrator.state
    finally:
        orchestrator.unmount()
        await client.aclose()
        await close_async_client()


@app.command("analyze")
def analyze_command(
    ctx: typer.Context,
    protocol: str = typer.Argument(..., help="Protocol address or name"),
    simulate: Optional[bool] = typer.Option(
        None,
        "--simulate/--no-simulate",
        help="Use the built-in simulated service instead of the configured one",
    ),
    service_url: Optional[str] = typer.Option(
        None, "--service-url", help="Base URL of the risk scoring service"
    ),
    tab: Optional[ResultTab] = typer.Option(
        None, "--only", case_sensitive=False, help="Show only findings or recommendations"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the raw assessment as JSON"),
):
    """Analyze a protocol and print its risk assessment."""
    try:
        query = validate(protocol)
    except QueryValidationError as e:
        console.print(f"[bold red]ERROR: {escape(str(e))}[/bold red]")
        raise typer.Exit(code=EXIT_INVALID_INPUT)

    config = _load_config(ctx, simulate=simulate, service_url=service_url)
    client = create_client(config, api_key=credentials.get_api_key())
    logger.debug(f"Using {type(client).__name__}")

    with console.status(f"[cyan]Analyzing {escape(query.value)}...[/cyan]", spinner="dots"):
        state = asyncio.run(run_assessment(client, query.value))

    if isinstance(state, Failure):
        console.print(f"[bold red]Analysis failed:[/bold red] {escape(str(state.error))}")
        raise typer.Exit(code=EXIT_ANALYSIS_FAILED)
    if not isinstance(state, Success):
        console.print("[bold red]Analysis did not complete[/bold red]")
        raise typer.Exit(code=EXIT_ANALYSIS_FAILED)

    if as_json:
        console.print_json(json.dumps(state.assessment.model_dump(mode="json")))
        return

    view_model = build_view_model(state.assessment, tab or ResultTab.FINDINGS)
    print_assessment(view_model, query.value, console=console, show_all=tab is None)


@app.command("tui")
def tui_command(
    ctx: typer.Context,
    simulate: Optional[bool] = typer.Option(None, "--simulate/--no-simulate"),
    service_url: Optional[str] = typer.Option(None, "--service-url"),
    no_animations: bool = typer.Option(False, "--no-animations", help="Disable TUI animations"),
):
    """Launch the interactive terminal interface."""
    config = _load_config(
        ctx,
        tui=True,
        simulate=simulate,
        service_url=service_url,
        animations=False if no_animations else None,
    )

    from protocol_risk.tui import run_tui

    run_tui(config)


@app.command("init-config")
def init_config_command(
    path: Path = typer.Argument(
        Path(".protocol-risk.yml"), help="Where to write the sample configuration"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
):
    """Write a sample configuration file."""
    if path.exists() and not force:
        console.print(f"[yellow]{escape(str(path))} already exists, use --force to overwrite[/yellow]")
        raise typer.Exit(code=1)

    config_file.save_sample_config(path)
    console.print(f"[green]Created {escape(str(path))}[/green]")
    console.print("[dim]Or configure through pyproject.toml:[/dim]")
    console.print(config_file.PYPROJECT_TOML_EXAMPLE, markup=False, highlight=False)


@app.command("set-key")
def set_key_command(
    delete: bool = typer.Option(False, "--delete", help="Remove the stored key"),
):
    """Store the analysis service API key in the OS keyring."""
    if delete:
        if credentials.delete_api_key():
            console.print("[green]API key removed[/green]")
        else:
            console.print("[yellow]No API key stored[/yellow]")
        return

    api_key = typer.prompt("Analysis service API key", hide_input=True)
    if not api_key.strip():
        console.print("[bold red]ERROR: API key cannot be empty[/bold red]")
        raise typer.Exit(code=EXIT_INVALID_INPUT)

    if not credentials.save_api_key(api_key.strip()):
        console.print("[bold red]ERROR: Could not store API key in keyring[/bold red]")
        raise typer.Exit(code=1)
    console.print("[green]API key saved to keyring[/green]")


if __name__ == "__main__":
    app()
