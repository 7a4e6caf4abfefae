"""
FILE: mdkanban/cli/commands/comments.py
PURPOSE: Task comment commands (comment add, comment edit, comment rm)
"""

import typer

from ..main import comment_app, error_console, open_store
from ...core.exceptions import InvalidInputError, KanbanError
from ...utils import to_index
from .tasks import report_task


def _clean_comment(comment: str) -> str:
    comment = comment.strip()
    if not comment:
        raise InvalidInputError("Comment cannot be empty")
    return comment


@comment_app.command("add")
def comment_add(
    column: str = typer.Argument(..., help="Column name"),
    position: int = typer.Argument(..., help="Task position (1-based)"),
    comment: str = typer.Argument(..., help="Comment text"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Add a comment to a task.

    Example:
        mdkanban comment add Todo 1 "Waiting on review"
    """
    try:
        task = open_store().add_task_comment(column, to_index(position), _clean_comment(comment))
        report_task(task, "Comment added", json_output, raw)

    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except (KanbanError, OSError) as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@comment_app.command("edit")
def comment_edit(
    column: str = typer.Argument(..., help="Column name"),
    position: int = typer.Argument(..., help="Task position (1-based)"),
    comment_number: int = typer.Argument(..., help="Comment number (1-based)"),
    comment: str = typer.Argument(..., help="New comment text"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """Replace the text of one comment."""
    try:
        task = open_store().update_task_comment(
            column,
            to_index(position),
            to_index(comment_number, "Comment number"),
            _clean_comment(comment),
        )
        report_task(task, "Comment updated", json_output, raw)

    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except (KanbanError, OSError) as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@comment_app.command("rm")
def comment_rm(
    column: str = typer.Argument(..., help="Column name"),
    position: int = typer.Argument(..., help="Task position (1-based)"),
    comment_number: int = typer.Argument(..., help="Comment number (1-based)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """Delete one comment from a task."""
    try:
        task = open_store().remove_task_comment(
            column, to_index(position), to_index(comment_number, "Comment number")
        )
        report_task(task, "Comment removed", json_output, raw)

    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except (KanbanError, OSError) as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)
