import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

theme = Theme({
    "error": "red bold",
    "banner": "dim",
    "logging.level.debug": "dim",
})

console = Console(theme=theme)
err_console = Console(theme=theme, stderr=True)


def configure_logging(verbose: bool = False) -> None:
    """Route log records through Rich on stderr, keeping stdout for output."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose)],
    )
