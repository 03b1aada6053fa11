"""
Console reporter for validation results.

Formats file reports using Rich for clear, colored output.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cyclingdata.validation.core import FileReport
from cyclingdata.validation.result import ValidationResult


class ConsoleReporter:
    """Formats and displays validation reports to the console."""

    def __init__(self, console: Console) -> None:
        """
        Initialize console reporter.

        Args:
            console: Rich Console instance for output.
        """
        self.console = console

    def print_reports(self, reports: list[FileReport]) -> None:
        """
        Print a status table, per-file details and the overall summary.

        Args:
            reports: One report per checked file.
        """
        table = Table(title="Cycling Data Validation Report", show_header=True)
        table.add_column("File", style="cyan", no_wrap=True)
        table.add_column("Status", justify="center")
        table.add_column("Errors", justify="right")
        table.add_column("Warnings", justify="right")

        for report in reports:
            table.add_row(
                escape(str(report.file)),
                self._format_status(report.valid),
                str(report.error_count),
                str(report.warning_count),
            )

        self.console.print(table)

        for report in reports:
            self._print_details(report)

        self._print_summary(reports)

    def print_result(self, title: str, result: ValidationResult) -> None:
        """Print a single validation result under a heading."""
        self.console.print(f"[bold]{escape(title)}[/bold]: {self._format_status(result.valid)}")
        self._print_messages("Errors", result.errors, "red")
        self._print_messages("Warnings", result.warnings, "yellow")

    def _format_status(self, valid: bool) -> str:
        """Format validity with color."""
        return "[green]✓ VALID[/green]" if valid else "[red]✗ INVALID[/red]"

    def _print_details(self, report: FileReport) -> None:
        """Print errors and warnings for one file, if it has any."""
        if not report.errors and not report.warnings:
            return

        self.console.print()
        self.console.print(f"[bold]{escape(str(report.file))}[/bold]")
        self._print_messages("Errors", report.errors, "red")
        self._print_messages("Warnings", report.warnings, "yellow")

    def _print_messages(self, heading: str, messages: list[str], color: str) -> None:
        if not messages:
            return
        self.console.print(f"  [{color}]{heading}:[/{color}]")
        for message in messages:
            self.console.print(f"    - {escape(message)}")

    def _print_summary(self, reports: list[FileReport]) -> None:
        """
        Print aggregate counts and the list of invalid files.

        Args:
            reports: List of file reports.
        """
        invalid = [r for r in reports if not r.valid]

        self.console.print()
        self.console.print("[bold]Summary:[/bold]")
        self.console.print(f"  Total files checked: {len(reports)}")
        self.console.print(f"  [green]Valid files: {len(reports) - len(invalid)}[/green]")
        self.console.print(f"  [red]Invalid files: {len(invalid)}[/red]")
        self.console.print(f"  Total errors: {sum(r.error_count for r in reports)}")
        self.console.print(f"  Total warnings: {sum(r.warning_count for r in reports)}")

        if invalid:
            self.console.print()
            self.console.print("[bold red]Invalid files:[/bold red]")
            for report in invalid:
                self.console.print(f"  - {escape(str(report.file))}")
