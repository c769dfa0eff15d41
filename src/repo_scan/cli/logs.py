import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool, console: Console | None = None) -> None:
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console or Console(stderr=True), show_path=False)],
        force=True,
    )
