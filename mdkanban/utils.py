"""
FILE: mdkanban/utils.py
PURPOSE: Shared utility functions for the CLI
EXPORTS:
  - resolve_board_path(explicit) -> Path
  - configure_logging(verbose, console) -> None
  - to_index(position, label) -> int
DEPENDENCIES:
  - rich (RichHandler for log output)
  - os, pathlib, logging (stdlib)
NOTES:
  - Board file precedence: --file option > $MDKANBAN_FILE > ./tasks.md
  - Library modules only create loggers; handlers are installed here
"""

import logging
import os
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .core.constants import BOARD_FILE_ENV, DEFAULT_BOARD_FILE
from .core.exceptions import InvalidInputError


def resolve_board_path(explicit: Optional[str] = None) -> Path:
    """
    Pick the board file to operate on.

    Args:
        explicit: Path given on the command line, if any

    Returns:
        Path to the board file (not checked for existence)
    """
    if explicit:
        return Path(explicit)
    from_env = os.environ.get(BOARD_FILE_ENV)
    if from_env:
        return Path(from_env)
    return Path.cwd() / DEFAULT_BOARD_FILE


def configure_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Route mdkanban log records to stderr through rich."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=verbose,
    )
    root = logging.getLogger("mdkanban")
    root.handlers = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.propagate = False


def to_index(position: int, label: str = "Position") -> int:
    """Convert a 1-based command-line position to a 0-based index."""
    if position < 1:
        raise InvalidInputError(f"{label} must be 1 or greater (got {position})")
    return position - 1
