"""
FILE: mdkanban/formatting.py
PURPOSE: Shared formatting utilities for CLI output
EXPORTS:
  - BoardFormatter: Class for formatting boards, columns and tasks
DEPENDENCIES:
  - rich (for table formatting)
  - mdkanban.core.models (Board, Column, Task, Priority)
NOTES:
  - Positions shown to the user are 1-based
  - User text is markup-escaped: task text may legitimately contain brackets
"""

from typing import List

from rich.markup import escape
from rich.table import Table

from .core.models import Board, Column, Priority, Task

PRIORITY_STYLES = {
    Priority.HIGHEST: "bold red",
    Priority.HIGH: "red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "blue",
    Priority.LOWEST: "dim",
}


class BoardFormatter:
    """Centralized board display formatting."""

    @staticmethod
    def short_id(task: Task) -> str:
        return (task.id or "-")[:8]

    @staticmethod
    def create_table(column: Column, show_ids: bool = True) -> Table:
        """
        Create Rich table for one column.

        Args:
            column: Column to display
            show_ids: Whether to show the (shortened) task id

        Returns:
            Rich Table object ready for display
        """
        table = Table(title=escape(column.name), show_header=True, header_style="bold cyan")
        table.add_column("#", style="cyan", width=4, no_wrap=True)
        table.add_column("Done", width=4)
        table.add_column("Task", style="white")
        table.add_column("Priority", width=8)
        if show_ids:
            table.add_column("ID", style="dim", width=8, no_wrap=True)

        for position, task in enumerate(column.tasks, start=1):
            style = PRIORITY_STYLES.get(task.priority, "white")
            text = escape(task.text)
            if task.notes:
                text += "\n" + "\n".join(f"[dim]{escape(line)}[/dim]" for line in task.notes.split("\n"))
            if task.comments:
                text += "\n" + "\n".join(f"[italic]> {escape(c)}[/italic]" for c in task.comments)

            row = [
                str(position),
                "[green]✓[/green]" if task.done else "○",
                text,
                f"[{style}]{task.priority.value}[/{style}]",
            ]
            if show_ids:
                row.append(BoardFormatter.short_id(task))
            table.add_row(*row)

        return table

    @staticmethod
    def create_tables(board: Board, show_ids: bool = True) -> List[Table]:
        return [BoardFormatter.create_table(column, show_ids) for column in board]

    @staticmethod
    def task_line(position: int, task: Task) -> str:
        marker = "x" if task.done else " "
        return f"{position}: [{marker}] {task.text} ({task.priority.value}) {task.id}"

    @staticmethod
    def to_raw_lines(board: Board) -> List[str]:
        """
        Convert board to plain text lines.

        Returns:
            "## Column" line per column followed by one line per task
        """
        lines = []
        for column in board:
            lines.append(f"## {column.name}")
            for position, task in enumerate(column.tasks, start=1):
                lines.append(BoardFormatter.task_line(position, task))
        return lines
