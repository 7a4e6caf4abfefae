"""
FILE: mdkanban/cli/commands/columns.py
PURPOSE: Column management commands (column add, column rm, column mv)
"""

import typer
from rich.markup import escape

from ..main import column_app, console, error_console, open_store
from ...core.exceptions import InvalidInputError, KanbanError
from ...utils import to_index


def _report(changed: bool, message: str) -> None:
    if changed:
        console.print(f"[green]✓[/green] {message}")
    else:
        console.print("[yellow]Nothing changed[/yellow]")


@column_app.command("add")
def column_add(
    name: str = typer.Argument(..., help="Column name"),
):
    """
    Append an empty column to the board.

    Example:
        mdkanban column add Backlog
    """
    try:
        name = name.strip()
        if not name:
            raise InvalidInputError("Column name cannot be empty")
        _report(open_store().add_column(name), f"Added column {escape(name)}")

    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except (KanbanError, OSError) as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@column_app.command("rm")
def column_rm(
    name: str = typer.Argument(..., help="Column name"),
    force: bool = typer.Option(False, "--force", "-y", help="Skip confirmation"),
):
    """
    Delete a column and every task in it.

    Example:
        mdkanban column rm Backlog --force
    """
    try:
        store = open_store()
        column = store.get_tasks().get(name)
        if column is None:
            _report(False, "")
            return

        if column.tasks and not force:
            confirmed = typer.confirm(
                f"Column '{name}' has {len(column.tasks)} task(s). Delete them all?"
            )
            if not confirmed:
                console.print("[dim]Cancelled[/dim]")
                return

        _report(store.remove_column(name), f"Removed column {escape(name)}")

    except (KanbanError, OSError) as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@column_app.command("mv")
def column_mv(
    name: str = typer.Argument(..., help="Column name"),
    position: int = typer.Argument(..., help="New position (1-based)"),
):
    """
    Move a column to a new position, shifting the others.

    Example:
        mdkanban column mv Done 1
    """
    try:
        moved = open_store().move_column(name, to_index(position))
        _report(moved, f"Moved column {escape(name)} to position {position}")

    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except (KanbanError, OSError) as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)
