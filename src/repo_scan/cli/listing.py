from collections.abc import Sequence
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from repo_scan.config import get_repos_dir, load_queries
from repo_scan.core.coordinator import discover_repositories
from repo_scan.core.errors import ScanError
from repo_scan.core.patterns import compile_patterns

console = Console()


def _render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(escape(str(v)) for v in row))
    console.print(table)
    console.print(f"({len(rows)} rows)")


def patterns(
    queries_file: Annotated[str, typer.Option("--queries-file", "-q", help="Path to the queries JSON file.")],
) -> None:
    """Show each query with its translated regular expression."""
    try:
        queries = load_queries(queries_file)
        compiled, _ = compile_patterns(queries)
    except ScanError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc

    rows = [
        (query.pattern, pattern.regex.pattern, ", ".join(query.extensions))
        for query, pattern in zip(queries, compiled, strict=True)
    ]
    _render_table(["query", "regex", "extensions"], rows)


def repos(
    repos_dir: Annotated[
        str | None,
        typer.Option(help="Directory whose subdirectories are scanned. Defaults to $REPO_SCAN_REPOS_DIR or ./repos."),
    ] = None,
) -> None:
    """List the repositories a scan would cover."""
    try:
        repositories = discover_repositories(get_repos_dir(repos_dir))
    except ScanError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc

    _render_table(["name", "path"], [(r.name, r.path) for r in repositories])
