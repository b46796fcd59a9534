"""Logging configuration for the CLI process.

Library modules only create loggers; this is the one place that
attaches handlers.  Rich's handler is used when Rich is importable.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from yarn_ws.cli.console import get_rich_console
from yarn_ws.config import LOG_LEVEL_ENV
from yarn_ws.exceptions import EnvironmentError

LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(verbose: bool, environ: Mapping[str, str] | None = None) -> int:
    """``--verbose`` wins, then ``YARN_WS_LOG_LEVEL``, then WARNING."""
    if verbose:
        return logging.DEBUG
    env = os.environ if environ is None else environ
    name = env.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else logging.WARNING
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: int) -> None:
    """Attach a single stderr handler to the root logger."""
    try:
        from rich.logging import RichHandler

        rich_console = get_rich_console(stderr=True)
    except (ModuleNotFoundError, EnvironmentError):
        logging.basicConfig(format=LOG_FORMAT, level=level, force=True)
        return

    logging.basicConfig(
        format="%(message)s",
        datefmt="[%X]",
        level=level,
        handlers=[RichHandler(console=rich_console, show_path=False)],
        force=True,
    )
