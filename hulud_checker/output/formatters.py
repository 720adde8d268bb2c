"""Output formatters for hulud-checker results."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..core.index import VulnerabilityIndex
from ..core.scanner import MatchResult, ScanSummary
from ..utils.logging import get_logger

NO_LOCKFILES_MESSAGE = "No lockfiles found to scan"


class ConsoleFormatter:
    """Rich console formatter for scan progress and results."""

    def __init__(self, console: Optional[Console] = None, quiet: bool = False) -> None:
        """Initialize the console formatter.

        Args:
            console: Rich console instance
            quiet: Suppress banner and progress output
        """
        self.console = console or Console()
        self.quiet = quiet

    def print_header(self) -> None:
        """Print the tool banner."""
        if self.quiet:
            return
        self.console.print("[bold]SHA1 Hulud Checker[/bold] - Lockfile Scanner\n")

    def print_dataset_stats(self, index: VulnerabilityIndex, dataset_path: Path) -> None:
        """Print what the loaded dataset contains.

        Args:
            index: Loaded vulnerability index
            dataset_path: Where it was loaded from
        """
        if self.quiet:
            return
        self.console.print(f"Loading affected packages from: {escape(str(dataset_path))}")
        self.console.print(
            f"   Found {index.package_count} unique packages with "
            f"{index.version_count} affected versions\n"
        )

    def print_scan_start(self, lockfile_count: int) -> None:
        """Announce how many lockfiles will be scanned."""
        if self.quiet:
            return
        self.console.print(f"Scanning {lockfile_count} lockfile(s):\n")

    def print_file_result(self, result: MatchResult) -> None:
        """Print the per-file progress line.

        Args:
            result: Result for one lockfile
        """
        if self.quiet:
            return

        self.console.print(f"   {result.path or result.lockfile}", markup=False)
        if result.error:
            self.console.print(f"      [yellow]✗ Could not be parsed: {escape(result.error)}[/yellow]")
        elif result.has_issues:
            self.console.print(f"      [red]Found {len(result.matches)} affected package(s)[/red]")
        else:
            self.console.print("      [green]✓ No affected packages found[/green]")

    def print_no_lockfiles(self) -> None:
        """Report that the search came up empty."""
        self.console.print(f"[red]{NO_LOCKFILES_MESSAGE}[/red]")

    def format_summary(self, summary: ScanSummary) -> None:
        """Print the end-of-run summary.

        Args:
            summary: Results of the scan
        """
        self.console.print()
        self.console.rule("[bold]SUMMARY[/bold]")

        if summary.total_affected_packages == 0:
            self.console.print(Panel("No affected packages found in any lockfile!", style="green"))
            return

        self.console.print(Panel(
            f"Found {summary.total_affected_packages} affected package(s) "
            f"across {summary.lockfiles_with_issues} lockfile(s)",
            style="red"
        ))

        for result in summary.results_with_issues:
            self.console.print(self._create_result_table(result))

    def _create_result_table(self, result: MatchResult) -> Table:
        """Create the table listing one lockfile's affected packages.

        Args:
            result: Result with at least one match

        Returns:
            Rich table with one row per affected package
        """
        table = Table(title=escape(result.lockfile), title_justify="left")
        table.add_column("Package", style="cyan", no_wrap=True)
        table.add_column("Version", style="red")

        for match in result.matches:
            table.add_row(escape(match.name), escape(match.version))

        return table


class JSONFormatter:
    """JSON formatter for machine-readable scan reports."""

    def __init__(self, output_file: Optional[Path] = None) -> None:
        """Initialize the JSON formatter.

        Args:
            output_file: File to save reports to
        """
        self.output_file = output_file
        self.logger = get_logger("JSONFormatter")

    def format_scan_results(self, summary: ScanSummary) -> Dict[str, Any]:
        """Build the report for a finished scan.

        Only lockfiles with affected packages are listed under ``results``.

        Args:
            summary: Results of the scan

        Returns:
            Report dictionary
        """
        return {
            "totalAffectedPackages": summary.total_affected_packages,
            "lockfilesScanned": summary.lockfiles_scanned,
            "lockfilesWithIssues": summary.lockfiles_with_issues,
            "results": [result.to_dict() for result in summary.results_with_issues],
        }

    def format_no_lockfiles(self) -> Dict[str, Any]:
        """Build the report for a search that found no lockfiles."""
        return {"error": NO_LOCKFILES_MESSAGE, "results": []}

    def render(self, report: Dict[str, Any]) -> str:
        """Render a report as indented JSON text."""
        return json.dumps(report, indent=2)

    def save_results(self, report: Dict[str, Any]) -> None:
        """Save a report to the configured output file.

        Args:
            report: Report dictionary

        Raises:
            ValueError: If no output file was configured
        """
        if not self.output_file:
            raise ValueError("No output file specified")

        self.output_file.parent.mkdir(parents=True, exist_ok=True)
        self.output_file.write_text(self.render(report) + "\n", encoding="utf-8")
        self.logger.info(f"Results saved to: {self.output_file}")
