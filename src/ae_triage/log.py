"""
Logging setup.

Module loggers are plain ``logging.getLogger(__name__)``; the CLI routes them
through rich so they share the console with tables and panels.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from ae_triage.config import settings


def configure_logging(level: str | None = None, console: Console | None = None) -> None:
    """
    Install a RichHandler on the ``ae_triage`` logger.

    Args:
        level: Log level name, defaults to ``settings.log_level``
        console: Console to render to (stderr by default)
    """
    logger = logging.getLogger("ae_triage")
    logger.setLevel(level or settings.log_level)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
