"""
FILE: mdkanban/cli/commands/tasks.py
PURPOSE: Task commands (show, add, done, undone, toggle, rm, mv, priority, transfer)
"""

from typing import Optional

import typer
from rich.markup import escape

from ..main import app, console, error_console, open_store, state
from ...core.constants import DEFAULT_COLUMN, DEFAULT_PRIORITY_NAME, PRIORITY_NAMES
from ...core.exceptions import InvalidInputError, KanbanError, SourceColumnNotFoundError
from ...core.models import Priority, Task
from ...core.transfer import transfer_task
from ...formatting import BoardFormatter
from ...utils import to_index


def parse_priority(value: str) -> Priority:
    """Strict priority lookup for user input (the file parser is lenient)."""
    if not Priority.is_valid(value):
        raise InvalidInputError(
            f"Invalid priority '{value}'. Must be one of: {', '.join(PRIORITY_NAMES)}"
        )
    return Priority.from_str(value)


def report_task(task: Optional[Task], message: str, json_output: bool = False, raw: bool = False) -> None:
    """Print the outcome of a task operation; None means nothing matched."""
    if task is None:
        if not json_output:
            console.print("[yellow]No such task, nothing changed[/yellow]")
        else:
            typer.echo("null")
        return

    if json_output:
        typer.echo(task.to_json())
    elif raw:
        typer.echo(f"{task.id}: {task.text}")
    else:
        console.print(f"[green]✓ {message}:[/green] {escape(task.text)}")


@app.command()
def show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
    ids: bool = typer.Option(True, "--ids/--no-ids", help="Show task ids"),
):
    """
    Print the board, one table per column.

    Example:
        mdkanban show
        mdkanban --file work.md show --json
    """
    board = open_store().get_tasks()

    if json_output:
        typer.echo(board.to_json())
    elif raw:
        for line in BoardFormatter.to_raw_lines(board):
            typer.echo(line)
    else:
        if not len(board):
            console.print("[dim]Board has no columns[/dim]")
            return
        for table in BoardFormatter.create_tables(board, show_ids=ids):
            console.print(table)
        console.print(f"\n[dim]Total: {board.task_count()} task(s) in {state['board_file']}[/dim]")


@app.command()
def add(
    text: str = typer.Argument(..., help="Task text"),
    column: str = typer.Option(DEFAULT_COLUMN, "--column", "-c", help="Column name (created if missing)"),
    priority: str = typer.Option(DEFAULT_PRIORITY_NAME, "--priority", "-p", help="Highest/High/Medium/Low/Lowest"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Notes (use \\n for line breaks)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Create a new task.

    Example:
        mdkanban add "Write documentation"
        mdkanban add "Fix bug" --column "In Progress" --priority High
    """
    try:
        text = text.strip()
        if not text:
            raise InvalidInputError("Task text cannot be empty")
        level = parse_priority(priority)
        if notes is not None:
            notes = notes.replace("\\n", "\n")

        task = open_store().add_task(column, text, level, notes)
        report_task(task, f"Added to {escape(column)}", json_output, raw)

    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except (KanbanError, OSError) as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


def _set_state(column: str, position: int, action: str, json_output: bool, raw: bool) -> None:
    """Shared body of done/undone/toggle."""
    try:
        index = to_index(position)
        store = open_store()
        operations = {
            "done": store.set_done,
            "undone": store.set_not_done,
            "toggle": store.toggle_done,
        }
        task = operations[action](column, index)
        if task is not None:
            label = "Done" if task.done else "Not done"
            report_task(task, label, json_output, raw)
        else:
            report_task(None, "", json_output, raw)

    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except (KanbanError, OSError) as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def done(
    column: str = typer.Argument(..., help="Column name"),
    position: int = typer.Argument(..., help="Task position (1-based)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Mark task as done.

    Example:
        mdkanban done Todo 1
    """
    _set_state(column, position, "done", json_output, raw)


@app.command()
def undone(
    column: str = typer.Argument(..., help="Column name"),
    position: int = typer.Argument(..., help="Task position (1-based)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """Mark task as not done."""
    _set_state(column, position, "undone", json_output, raw)


@app.command()
def toggle(
    column: str = typer.Argument(..., help="Column name"),
    position: int = typer.Argument(..., help="Task position (1-based)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """Flip a task between done and not done."""
    _set_state(column, position, "toggle", json_output, raw)


@app.command()
def rm(
    column: str = typer.Argument(..., help="Column name"),
    position: int = typer.Argument(..., help="Task position (1-based)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Delete a task.

    Example:
        mdkanban rm Done 3
    """
    try:
        task = open_store().remove_task(column, to_index(position))
        report_task(task, "Removed", json_output, raw)

    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except (KanbanError, OSError) as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def mv(
    from_column: str = typer.Argument(..., help="Source column"),
    position: int = typer.Argument(..., help="Task position in source column (1-based)"),
    to_column: str = typer.Argument(..., help="Target column (created if missing)"),
    to_position: Optional[int] = typer.Option(None, "--to", help="Position in target column (default: end)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Move a task to another column, or to another position in the same one.

    --to is the position the task should end up at.

    Example:
        mdkanban mv Todo 2 "In Progress"
        mdkanban mv Todo 1 Todo --to 3
    """
    try:
        from_index = to_index(position)
        target_index = to_index(to_position, "Target position") if to_position is not None else None

        task = open_store().move_task(from_column, to_column, from_index, target_index)
        report_task(task, f"Moved to {escape(to_column)}", json_output, raw)

    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except (KanbanError, OSError) as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def priority(
    column: str = typer.Argument(..., help="Column name"),
    position: int = typer.Argument(..., help="Task position (1-based)"),
    level: str = typer.Argument(..., help="Highest/High/Medium/Low/Lowest"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Change a task's priority.

    Example:
        mdkanban priority Todo 1 High
    """
    try:
        new_level = parse_priority(level)
        task = open_store().set_task_priority(column, to_index(position), new_level)
        report_task(task, f"Priority {new_level.value}", json_output, raw)

    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except (KanbanError, OSError) as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def transfer(
    task_id: str = typer.Argument(..., help="Id of the task to move"),
    source_column: str = typer.Argument(..., help="Column holding the task in this board"),
    target_file: str = typer.Argument(..., help="Board file to move the task to"),
    target_column: str = typer.Argument(..., help="Column in the target board (created if missing)"),
    to_position: Optional[int] = typer.Option(None, "--to", help="Position in target column (default: end)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Move a task, by id, from this board to another board file.

    Example:
        mdkanban --file work.md transfer 3f2c... Todo personal.md Todo
    """
    try:
        target_index = to_index(to_position, "Target position") if to_position is not None else None
        source_file = state["board_file"]

        task = transfer_task(source_file, source_column, task_id, target_file, target_column, target_index)
        if task is None:
            if json_output:
                typer.echo("null")
            else:
                console.print(f"[yellow]No task {escape(task_id)} in {escape(source_column)}, nothing changed[/yellow]")
            return
        report_task(task, f"Transferred to {escape(target_file)}", json_output, raw)

    except SourceColumnNotFoundError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except FileNotFoundError as e:
        error_console.print(f"[red]Error:[/red] Board file not found: {e.filename}")
        raise typer.Exit(1)
    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except (KanbanError, OSError) as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)
