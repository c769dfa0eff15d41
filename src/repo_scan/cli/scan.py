import time
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from repo_scan.cli.logs import configure_logging
from repo_scan.config import MAX_LINE_LENGTH, RESULT_QUEUE_SIZE, get_repos_dir, load_queries
from repo_scan.core.coordinator import scan_repositories
from repo_scan.core.errors import ScanError
from repo_scan.report import write_results

console = Console()
err_console = Console(stderr=True)


def scan(
    queries_file: Annotated[str, typer.Option("--queries-file", "-q", help="Path to the queries JSON file.")],
    output: Annotated[str, typer.Option("--output", "-o", help="Path of the CSV report to write.")],
    repos_dir: Annotated[
        str | None,
        typer.Option(help="Directory whose subdirectories are scanned. Defaults to $REPO_SCAN_REPOS_DIR or ./repos."),
    ] = None,
    max_workers: Annotated[
        int | None, typer.Option(min=1, help="Max files scanned at once (default: unbounded).")
    ] = None,
    queue_size: Annotated[int, typer.Option(min=1, help="Pending results before scanners block.")] = RESULT_QUEUE_SIZE,
    max_line_length: Annotated[
        int, typer.Option(min=1, help="Longest line, in characters, before a file is abandoned.")
    ] = MAX_LINE_LENGTH,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log progress and skipped files.")] = False,
) -> None:
    """Scan every repository for the configured patterns and write a CSV report."""
    configure_logging(verbose, err_console)
    started = time.perf_counter()
    try:
        queries = load_queries(queries_file)
        report = scan_repositories(
            queries,
            get_repos_dir(repos_dir),
            queue_size=queue_size,
            max_line_length=max_line_length,
            max_workers=max_workers,
        )
        write_results(report.results, output)
    except ScanError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc

    stats = report.stats
    console.print(f"Execution completed in {time.perf_counter() - started:.3f}s")
    console.print(f"Total results: {len(report.results)}")
    console.print(f"Files scanned: {stats.files_scanned}")
    if stats.files_skipped or stats.files_aborted or stats.entries_skipped:
        console.print(
            f"[yellow]Skipped:[/yellow] {stats.files_skipped} unreadable file(s), "
            f"{stats.files_aborted} file(s) with an oversized line, "
            f"{stats.entries_skipped} untraversable entries"
        )
