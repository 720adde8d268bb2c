"""Main CLI interface for hulud-checker."""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ..config import DATASET_ENV_VAR, DEFAULT_DATASET, WORKERS_ENV_VAR, ScanConfig
from ..core.exceptions import DatasetError
from ..core.extractors import registry as extractor_registry
from ..core.index import VulnerabilityIndex, load_index
from ..core.scanner import LockfileScanner
from ..output.formatters import ConsoleFormatter, JSONFormatter
from ..utils.logging import get_logger, setup_logging
from ..utils.path_utils import COMMON_LOCKFILES, SKIP_DIRS, resolve_lockfiles

EXIT_CLEAN = 0
EXIT_AFFECTED = 1
EXIT_FATAL = 2

app = typer.Typer(
    name="hulud-checker",
    help="Scan dependency lockfiles for known-compromised package versions",
    add_completion=False
)

console = Console()
err_console = Console(stderr=True)
logger = get_logger("CLI")


def _dataset_option() -> Path:
    return typer.Option(
        DEFAULT_DATASET,
        "--dataset",
        "-d",
        envvar=DATASET_ENV_VAR,
        help="Semicolon-delimited file of affected \"name\";\"version\" pairs"
    )


def _load_index_or_exit(dataset_path: Path) -> VulnerabilityIndex:
    try:
        return load_index(dataset_path)
    except DatasetError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_FATAL)


@app.command()
def scan(
    path: Optional[Path] = typer.Argument(
        None,
        help="Lockfile, project folder, or directory of lockfiles (default: ./locks)"
    ),
    dataset: Path = _dataset_option(),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only output results, no progress messages"
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output results as JSON"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Also write the JSON report to this file"
    ),
    recursive: bool = typer.Option(
        True,
        "--recursive/--no-recursive",
        help="Search subdirectories of a project folder"
    ),
    ignore_patterns: Optional[List[str]] = typer.Option(
        None,
        "--ignore",
        help="Additional glob patterns to skip"
    ),
    workers: int = typer.Option(
        1,
        "--workers",
        "-w",
        envvar=WORKERS_ENV_VAR,
        help="Number of lockfiles scanned in parallel"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    )
) -> None:
    """Scan lockfiles for affected packages.

    Exits with 1 when affected packages are found or no lockfile exists,
    and with 2 when the dataset or the path cannot be used.
    """
    setup_logging(level=logging.WARNING, verbose=verbose)

    try:
        config = ScanConfig(
            dataset_path=dataset,
            target=path,
            recursive=recursive,
            max_workers=workers,
            ignore_patterns=ignore_patterns or [],
            quiet=quiet,
            json_output=json_output,
            output_file=output,
        )
    except ValueError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_FATAL)

    progress = ConsoleFormatter(console, quiet=config.quiet or config.json_output)
    json_formatter = JSONFormatter(config.output_file)

    progress.print_header()
    index = _load_index_or_exit(config.dataset_path)
    progress.print_dataset_stats(index, config.dataset_path)

    try:
        lockfiles = resolve_lockfiles(config.target, config.recursive, config.ignore_patterns)
    except OSError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_FATAL)

    if not lockfiles:
        if config.json_output:
            typer.echo(json_formatter.render(json_formatter.format_no_lockfiles()))
        else:
            progress.print_no_lockfiles()
        raise typer.Exit(EXIT_AFFECTED)

    progress.print_scan_start(len(lockfiles))

    scanner = LockfileScanner(index, max_workers=config.max_workers)
    summary = scanner.scan_files(lockfiles)

    for result in summary.results:
        progress.print_file_result(result)

    report = json_formatter.format_scan_results(summary)
    if config.json_output:
        typer.echo(json_formatter.render(report))
    else:
        ConsoleFormatter(console).format_summary(summary)

    if config.output_file:
        json_formatter.save_results(report)

    if summary.lockfiles_with_errors:
        logger.warning(f"{summary.lockfiles_with_errors} lockfile(s) could not be parsed")

    raise typer.Exit(EXIT_AFFECTED if summary.total_affected_packages else EXIT_CLEAN)


@app.command()
def check(
    package: str = typer.Argument(..., help="Package name, exactly as written in lockfiles"),
    version: str = typer.Argument(..., help="Resolved package version"),
    dataset: Path = _dataset_option()
) -> None:
    """Check a single package version against the dataset."""
    setup_logging(level=logging.WARNING)
    index = _load_index_or_exit(dataset)

    if index.has(package, version):
        console.print(f"[red]{escape(package)}@{escape(version)} is affected[/red]", highlight=False)
        raise typer.Exit(EXIT_AFFECTED)

    if package in index:
        affected = ", ".join(sorted(index.versions_for(package)))
        console.print(
            f"[green]{escape(package)}@{escape(version)} is not affected[/green] (affected versions: {escape(affected)})",
            highlight=False
        )
    else:
        console.print(f"[green]{escape(package)} is not in the dataset[/green]", highlight=False)


@app.command()
def info(
    dataset: Path = _dataset_option()
) -> None:
    """Show dataset statistics and supported lockfiles."""
    setup_logging(level=logging.WARNING)

    console.print(Panel.fit(
        "[bold blue]SHA1 Hulud Checker[/bold blue]\n"
        "Scans dependency lockfiles for known-compromised package versions",
        title="Information"
    ))

    index = _load_index_or_exit(dataset)
    console.print(f"\n[bold]Dataset:[/bold] {escape(str(dataset))}")
    console.print(f"[bold]Unique packages:[/bold] {index.package_count}")
    console.print(f"[bold]Affected versions:[/bold] {index.version_count}")

    console.print(f"\n[bold]Supported lockfiles:[/bold] {', '.join(COMMON_LOCKFILES)}")
    console.print(f"[bold]Extraction strategies:[/bold] {', '.join(extractor_registry.get_supported_formats())}")
    console.print(f"[bold]Skipped directories:[/bold] {', '.join(sorted(SKIP_DIRS))}")


def main() -> None:
    """Main entry point for the hulud-checker CLI."""
    app()


if __name__ == "__main__":
    main()
