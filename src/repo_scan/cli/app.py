import typer

from repo_scan.cli.listing import patterns, repos
from repo_scan.cli.scan import scan

app = typer.Typer(
    name="repo-scan",
    help="Repo Scan CLI: search repositories for wildcard patterns and export matches to CSV.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("scan")(scan)
app.command("patterns")(patterns)
app.command("repos")(repos)


def main() -> None:
    app()
