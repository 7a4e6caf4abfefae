"""
FILE: mdkanban/cli/main.py
PURPOSE: Typer-based CLI for one-shot board commands
EXPORTS:
  - app (Typer application)
  - main() (entry point)
  - open_store() -> BoardStore for the selected board file
  - version() - Show version
  - show() - Print the board
  - add() - Create task
  - done() / undone() / toggle() - Change completion state
  - rm() - Delete task
  - mv() - Move task between/within columns
  - priority() - Change task priority
  - transfer() - Move task to another board file
  - comment_add() / comment_edit() / comment_rm() - Task comments
  - column_add() / column_rm() / column_mv() - Columns
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
  - mdkanban.core.board_store (BoardStore)
  - mdkanban.core.exceptions (error handling)
  - mdkanban.utils (board path resolution, logging setup)
NOTES:
  - Board file: --file > $MDKANBAN_FILE > ./tasks.md
  - Positions on the command line are 1-based
  - Commands that hit a missing task/column print a notice and exit 0
  - Error messages go to stderr
  - Exit codes: 0=success, 1=error
"""

import sys
from typing import Optional

# Fix Windows console encoding for Unicode characters
if sys.platform == "win32":
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

import typer
from rich.console import Console

from ..core.board_store import BoardStore
from ..utils import configure_logging, resolve_board_path

# Typer app setup
app = typer.Typer(
    name="mdkanban",
    help="Kanban board stored as a Markdown checklist",
    add_completion=False,
)

# Sub-command groups
column_app = typer.Typer(name="column", help="Column management commands")
comment_app = typer.Typer(name="comment", help="Task comment commands")
app.add_typer(column_app, name="column")
app.add_typer(comment_app, name="comment")

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)

# Version
__version__ = "0.1.0"

# Global options, filled in by the callback
state = {"board_file": None}


@app.callback()
def default_command(
    board_file: Optional[str] = typer.Option(
        None, "--file", "-f", help="Board Markdown file (default: $MDKANBAN_FILE or ./tasks.md)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
):
    """
    Kanban board stored as a Markdown checklist.

    Columns are "## Name" headings, tasks are "- [ ]" / "- [x]" lines.
    """
    configure_logging(verbose, error_console)
    state["board_file"] = resolve_board_path(board_file)


def open_store() -> BoardStore:
    """
    Open the selected board file.

    Exits with code 1 (after printing to stderr) if the file can't be read.
    """
    path = state["board_file"] or resolve_board_path()
    try:
        return BoardStore(path)
    except FileNotFoundError:
        error_console.print(f"[red]Error:[/red] Board file not found: {path}")
        raise typer.Exit(1)
    except OSError as e:
        error_console.print(f"[red]Error:[/red] Could not read {path}: {e}")
        raise typer.Exit(1)


# Import command modules to register commands with app
# Commands are decorated with @app.command() in their modules
from .commands import (
    # System commands
    version,
    # Task commands
    show,
    add,
    done,
    undone,
    toggle,
    rm,
    mv,
    priority,
    transfer,
    # Comment commands
    comment_add,
    comment_edit,
    comment_rm,
    # Column commands
    column_add,
    column_rm,
    column_mv,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
