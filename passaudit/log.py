"""Logging setup for the command line: stdlib logging rendered through rich."""

import logging
import os
from typing import Optional

from rich.logging import RichHandler

DEFAULT_LOG_LEVEL = "WARNING"


def setup_logging(verbose: int = 0, level: Optional[str] = None) -> None:
    """
    Install a RichHandler on the root logger.
    -v gives INFO, -vv DEBUG; otherwise PASSAUDIT_LOG_LEVEL or WARNING.
    """
    if verbose >= 2:
        level = "DEBUG"
    elif verbose == 1:
        level = "INFO"
    level = level or os.getenv("PASSAUDIT_LOG_LEVEL", DEFAULT_LOG_LEVEL)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    handler = RichHandler(show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
