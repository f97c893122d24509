"""CLI interface for softassert using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from softassert import __description__, __version__
from softassert.config import LogLevel, load_config
from softassert.diagnostics import ReportFormatter, load_failure_report, load_report_index

app = typer.Typer(
    name="softassert",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)
report_app = typer.Typer(help="Inspect saved failure reports")
app.add_typer(report_app, name="report")

console = Console()

_LOG_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
    LogLevel.TRACE.value: logging.DEBUG,
}


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=_LOG_LEVELS.get(level, logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"softassert version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """softassert - Assertion error aggregation for soft and hard assertions."""


@app.command("config")
def show_config(
    path: Annotated[
        Path,
        typer.Option("--path", "-p", help="Configuration file path (default: search for .softassert.json)")
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the configuration as JSON")
    ] = False,
) -> None:
    """Show the resolved configuration."""
    try:
        config = load_config(path)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    _setup_logging(config.logging.level)

    if as_json:
        typer.echo(jsonlib.dumps(config.model_dump(mode="json", by_alias=True), indent=2))
        return

    table = Table(title="softassert configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("collection.defaultMode", config.collection.default_mode.value)
    table.add_row("collection.collector", config.collection.collector.value)
    table.add_row("stacktraces.clean", str(config.stacktraces.clean))
    table.add_row("stacktraces.hiddenModules", ", ".join(config.hidden_modules))
    table.add_row("reports.dir", config.reports.dir)
    table.add_row("reports.maxReports", str(config.reports.max_reports))
    table.add_row("logging.level", config.logging.level)
    console.print(table)


@report_app.command("show")
def show_report(
    report_file: Annotated[
        Path,
        typer.Argument(help="Path to a failure report JSON file")
    ],
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the raw report as JSON")
    ] = False,
    traceback: Annotated[
        bool,
        typer.Option("--traceback", "-t", help="Include stored tracebacks")
    ] = False,
) -> None:
    """Render a saved failure report."""
    try:
        report = load_failure_report(report_file)
    except FileNotFoundError:
        console.print(f"[red]Error:[/red] Report not found: {report_file}")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(jsonlib.dumps(report.to_dict(), indent=2, ensure_ascii=False))
        return

    ReportFormatter(console).format_report(report, show_traceback=traceback)


@report_app.command("list")
def list_reports(
    reports_dir: Annotated[
        Path,
        typer.Option("--dir", "-d", help="Reports directory (default: reports.dir from configuration)")
    ] = None,
) -> None:
    """List failure reports recorded in the reports index."""
    if reports_dir is None:
        try:
            reports_dir = Path(load_config().reports.dir)
        except ValueError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)

    ReportFormatter(console).format_index(load_report_index(reports_dir))


if __name__ == "__main__":
    app()
