"""Command-line interface for xmldupes."""

import logging
import sys

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from xmldupes import __version__
from xmldupes.analyzer import DuplicateAnalyzer
from xmldupes.config import ConfigurationError, XmlDupesConfig
from xmldupes.models import AnalysisReport, DuplicateResult
from xmldupes.progress import ProgressError, ReviewSession, load, save
from xmldupes.scanner import ScanError

app = typer.Typer(
    name="xmldupes",
    help="Find duplicated ObjectId values in ViewObject XML files",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

# Help text constants
VERBOSE_OUTPUT_HELP = "Verbose output"
ENV_FILE_HELP = "Path to custom environment file (default: .env.xmldupes or .env)"
SNAPSHOT_HELP = "Path to progress snapshot file"


def setup_logging(verbose: bool) -> None:
    """Setup logging configuration.

    Log records go to stderr so they never mix with JSON output.

    Args:
        verbose: If True, enable debug logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
        force=True,
    )


def _results_table(title: str, items: list[DuplicateResult], start_index: int = 1, style: str = "red") -> Table:
    """Build a table of duplicates.

    Args:
        title: Table title
        items: Duplicates to list
        start_index: Number of the first row
        style: Style of the count column

    Returns:
        Rich table
    """
    table = Table(title=title, title_justify="left")
    table.add_column("#", justify="right")
    table.add_column("ObjectId", style="bold")
    table.add_column("Count", justify="right", style=style)
    table.add_column("Class")

    for index, item in enumerate(items, start_index):
        table.add_row(str(index), item.object_id, str(item.count), item.class_name or "N/A")

    return table


def _display_report(report: AnalysisReport) -> None:
    """Display a successful analysis.

    Args:
        report: Analysis report
    """
    console.print(f"[green]File analyzed successfully: {report.file_name}[/green]")

    if not report.has_duplicates:
        console.print("[green]No duplicates found[/green]")
        return

    console.print(_results_table(f"Duplicates ({len(report.duplicates)})", report.duplicates))


def _display_session(session: ReviewSession) -> None:
    """Display review progress with pending and completed items.

    Args:
        session: Review session to display
    """
    pending = session.pending
    completed = session.completed

    console.print(
        f"\n[bold]Progress:[/bold] {session.completed_count} of {session.total_items} "
        f"({round(session.progress_percentage)}% completed)"
    )

    if pending:
        console.print(_results_table(f"Pending Items ({len(pending)})", pending))
    else:
        console.print("[green]No pending items - excellent![/green]")

    if completed:
        console.print(_results_table(f"Completed Items ({len(completed)})", completed, len(pending) + 1, "green"))


def _handle_error(e: Exception, verbose: bool) -> None:
    """Print an error and exit.

    Args:
        e: The exception raised by the command
        verbose: Print a traceback for unexpected errors
    """
    if isinstance(e, ConfigurationError):
        console.print(f"[red]Configuration error: {e}[/red]")
    elif isinstance(e, (ScanError, ProgressError)):
        console.print(f"[red]{escape(str(e))}[/red]")
    else:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            console.print_exception()
    sys.exit(1)


def _analyze(file_path: str, env_file: str | None) -> AnalysisReport:
    """Load configuration and analyze a file, exiting on parse failure.

    Args:
        file_path: XML file to analyze
        env_file: Optional custom environment file

    Returns:
        Successful analysis report
    """
    config = XmlDupesConfig(env_file=env_file)
    report = DuplicateAnalyzer(config).analyze_file(file_path)

    if not report.success:
        console.print(f"[red]{escape(report.error or '')}[/red]")
        sys.exit(1)

    return report


@app.command()
def scan(
    file_path: str = typer.Argument(..., help="Path to XML file to analyze"),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the report as JSON",
    ),
    save_progress: str | None = typer.Option(
        None,
        "--save-progress",
        "-o",
        help="Write a progress snapshot with all duplicates pending",
    ),
    env_file: str | None = typer.Option(
        None,
        "--env-file",
        help=ENV_FILE_HELP,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help=VERBOSE_OUTPUT_HELP,
    ),
) -> None:
    """Find duplicated ObjectId values in an XML file."""
    setup_logging(verbose)

    try:
        report = _analyze(file_path, env_file)

        if json_output:
            typer.echo(report.model_dump_json(by_alias=True, indent=2))
        else:
            _display_report(report)

        if save_progress:
            save(save_progress, ReviewSession(report.duplicates).to_snapshot())
            if not json_output:
                console.print(f"[blue]Progress saved to {save_progress}[/blue]")

    except Exception as e:
        _handle_error(e, verbose)


@app.command()
def status(
    snapshot_path: str = typer.Argument(..., help=SNAPSHOT_HELP),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help=VERBOSE_OUTPUT_HELP,
    ),
) -> None:
    """Show review progress stored in a snapshot."""
    setup_logging(verbose)

    try:
        session = ReviewSession.from_snapshot(load(snapshot_path))
        _display_session(session)
    except Exception as e:
        _handle_error(e, verbose)


def _update_snapshot(snapshot_path: str, object_ids: list[str], completed: bool, verbose: bool) -> None:
    """Tick or untick ids in a snapshot file and save it.

    Args:
        snapshot_path: Snapshot file to update
        object_ids: Ids to change
        completed: New state of the ids
        verbose: Enable verbose output
    """
    setup_logging(verbose)

    try:
        session = ReviewSession.from_snapshot(load(snapshot_path))
        for object_id in object_ids:
            session.set_completed(object_id, completed)
        save(snapshot_path, session.to_snapshot())
        _display_session(session)
    except Exception as e:
        _handle_error(e, verbose)


@app.command()
def complete(
    snapshot_path: str = typer.Argument(..., help=SNAPSHOT_HELP),
    object_ids: list[str] = typer.Argument(..., help="ObjectId values to mark as reviewed"),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help=VERBOSE_OUTPUT_HELP,
    ),
) -> None:
    """Mark duplicates as reviewed."""
    _update_snapshot(snapshot_path, object_ids, True, verbose)


@app.command()
def reopen(
    snapshot_path: str = typer.Argument(..., help=SNAPSHOT_HELP),
    object_ids: list[str] = typer.Argument(..., help="ObjectId values to move back to pending"),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help=VERBOSE_OUTPUT_HELP,
    ),
) -> None:
    """Move reviewed duplicates back to pending."""
    _update_snapshot(snapshot_path, object_ids, False, verbose)


@app.command()
def resume(
    file_path: str = typer.Argument(..., help="Path to XML file to analyze"),
    snapshot_path: str = typer.Argument(..., help=SNAPSHOT_HELP),
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Where to write the updated snapshot (default: overwrite the snapshot)",
    ),
    env_file: str | None = typer.Option(
        None,
        "--env-file",
        help=ENV_FILE_HELP,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help=VERBOSE_OUTPUT_HELP,
    ),
) -> None:
    """Rescan an XML file and carry review progress over from a snapshot."""
    setup_logging(verbose)

    try:
        snapshot = load(snapshot_path)
        report = _analyze(file_path, env_file)

        session = ReviewSession(report.duplicates)
        missing = session.apply_snapshot(snapshot)
        for object_id in missing:
            console.print(f"[yellow]No longer duplicated: {escape(object_id)}[/yellow]")

        save(output or snapshot_path, session.to_snapshot())
        _display_session(session)
    except Exception as e:
        _handle_error(e, verbose)


@app.command()
def config(
    env_file: str | None = typer.Option(
        None,
        "--env-file",
        help=ENV_FILE_HELP,
    ),
) -> None:
    """Show current configuration."""
    try:
        cfg = XmlDupesConfig(env_file=env_file)
        console.print("[bold]Current Configuration:[/bold]\n")
        console.print(f"  View object tag: {cfg.view_object_tag}")
        console.print(f"  Property tag: {cfg.property_tag}")
        console.print(f"  Id property: {cfg.id_property}")
        console.print(f"  Class name attribute: {cfg.classname_attribute}")
        console.print(f"  Require .xml extension: {cfg.require_xml_extension}")
        console.print("\n[bold]Thresholds:[/bold]")
        console.print(f"  Default: count > {cfg.default_threshold}")
        for class_name, threshold in sorted(cfg.class_thresholds.items()):
            console.print(f"  {class_name}: count > {threshold}")
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"xmldupes version {__version__}")


if __name__ == "__main__":
    app()
