"""Rich console formatting for failure reports."""

from typing import Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .report import FailureReport


class ReportFormatter:
    """Formats failure reports for rich console display."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def format_report(self, report: FailureReport, show_traceback: bool = False) -> None:
        """Display one report: header panel followed by its failures."""
        noun = "failure" if report.total_failures == 1 else "failures"
        header = (
            f"[bold]{report.name}[/bold] "
            f"[red]{report.total_failures} {noun}[/red]\n"
            f"[dim]{report.report_id} at {report.created_at}[/dim]"
        )
        self.console.print(Panel(header, title="Failure Report", expand=False))

        table = Table(box=box.SIMPLE)
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Type", style="magenta")
        table.add_column("Message")
        table.add_column("Location", style="dim")

        for failure in report.failures:
            table.add_row(
                str(failure.index),
                failure.error_type,
                failure.message,
                failure.location or "-",
            )
        self.console.print(table)

        if show_traceback:
            for failure in report.failures:
                if failure.traceback_lines:
                    self.console.print(f"[cyan]{failure.index})[/cyan] {failure.error_type}")
                    self.console.print("\n".join(failure.traceback_lines), markup=False)

    def format_index(self, index_data: dict[str, Any]) -> None:
        """Display the reports index as a table, most recent first."""
        reports = index_data.get("reports", [])
        if not reports:
            self.console.print("[dim]No failure reports found[/dim]")
            return

        table = Table(title=f"Failure Reports ({len(reports)})", box=box.SIMPLE)
        table.add_column("Report", style="cyan")
        table.add_column("Name")
        table.add_column("Failures", justify="right", style="red")
        table.add_column("Created", style="dim")

        for entry in reports:
            table.add_row(
                entry["report_id"],
                entry.get("name", ""),
                str(entry.get("total_failures", 0)),
                entry.get("created_at", ""),
            )
        self.console.print(table)
