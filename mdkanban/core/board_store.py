"""
FILE: mdkanban/core/board_store.py
PURPOSE: Stateful owner of one board bound to one storage location
EXPORTS:
  - BoardStore
DEPENDENCIES:
  - mdkanban.core.codec (read_board, write_board)
  - mdkanban.core.models (Board, Task, Priority)
  - mdkanban.core.storage (as_storage, Location)
NOTES:
  - The board is read once, at construction; the store never re-reads.
    Build a new store to see external edits.
  - Every applied mutation writes the entire board before returning.
    No-ops write nothing.
  - Position-addressed operations never raise on a bad column/index:
    they return None (task ops) or False (column ops)
  - A failed write raises OSError but the in-memory change is kept,
    so memory can be ahead of storage afterwards
"""

from typing import Optional

from .codec import read_board, write_board
from .models import Board, IdFactory, Priority, Task, new_task_id
from .storage import Location, as_storage


class BoardStore:
    """Markdown-backed board; all operations persist immediately."""

    def __init__(self, location: Location, id_factory: IdFactory = new_task_id):
        """
        Load the board from a file path or a BoardStorage.

        Raises:
            OSError: If the storage can't be read
        """
        self.storage = as_storage(location)
        self._new_id = id_factory
        self._board: Board = read_board(self.storage, id_factory)

    def __repr__(self) -> str:
        return f"BoardStore({self.storage!r})"

    # --- internal helpers ---

    def _save(self) -> None:
        write_board(self.storage, self._board)

    def _task_at(self, column: str, index: int) -> Optional[Task]:
        col = self._board.get(column)
        if col is None:
            return None
        return col.task_at(index)

    # --- task operations ---

    def add_task(
        self,
        column: str,
        text: str,
        priority: Priority = Priority.MEDIUM,
        notes: Optional[str] = None,
    ) -> Task:
        """
        Append a new task to a column, creating the column if needed.

        Returns:
            The new Task (fresh id, done=False)
        """
        task = Task(
            text=text,
            done=False,
            priority=priority,
            notes=notes or None,
            id=self._new_id(),
        )
        self._board.ensure_column(column).tasks.append(task)
        self._save()
        return task

    def insert_task(self, column: str, index: int, task: Task) -> Task:
        """
        Insert a task at index, creating the column if needed.

        Notes:
            - Assigns a fresh id when the task has none
            - Out-of-range indices follow list.insert (clamped, negatives from the end)
        """
        if not task.id:
            task.id = self._new_id()
        self._board.ensure_column(column).tasks.insert(index, task)
        self._save()
        return task

    def remove_task(self, column: str, index: int) -> Optional[Task]:
        """Remove and return the task at index; None if there is no such task."""
        task = self._task_at(column, index)
        if task is None:
            return None
        del self._board.get(column).tasks[index]
        self._save()
        return task

    def move_task(
        self,
        from_column: str,
        to_column: str,
        from_index: int,
        to_index: Optional[int] = None,
    ) -> Optional[Task]:
        """
        Move a task between (or within) columns, keeping all its fields.

        Args:
            from_column: Source column
            to_column: Target column (created if absent)
            from_index: Task index in the source column
            to_index: Target index, checked against the target AFTER removal;
                out of range or None appends

        Returns:
            The moved Task, or None if the source task doesn't exist

        Notes:
            Removal happens first, so a same-column move downwards must be
            given to_index - 1 by the caller.
        """
        task = self._task_at(from_column, from_index)
        if task is None:
            return None

        del self._board.get(from_column).tasks[from_index]
        self._board.ensure_column(to_column).place(task, to_index)
        self._save()
        return task

    def toggle_done(self, column: str, index: int) -> Optional[Task]:
        task = self._task_at(column, index)
        if task is None:
            return None
        task.done = not task.done
        self._save()
        return task

    def set_done(self, column: str, index: int) -> Optional[Task]:
        task = self._task_at(column, index)
        if task is None:
            return None
        task.done = True
        self._save()
        return task

    def set_not_done(self, column: str, index: int) -> Optional[Task]:
        task = self._task_at(column, index)
        if task is None:
            return None
        task.done = False
        self._save()
        return task

    def set_task_priority(self, column: str, index: int, priority: Priority) -> Optional[Task]:
        task = self._task_at(column, index)
        if task is None:
            return None
        task.priority = priority
        self._save()
        return task

    # --- comment operations ---

    def add_task_comment(self, column: str, index: int, comment: str) -> Optional[Task]:
        """Append a comment (trimmed); blank comments are a no-op."""
        comment = comment.strip()
        task = self._task_at(column, index)
        if task is None or not comment:
            return None
        if task.comments is None:
            task.comments = []
        task.comments.append(comment)
        self._save()
        return task

    def update_task_comment(
        self, column: str, index: int, comment_index: int, comment: str
    ) -> Optional[Task]:
        """Replace one comment; no-op unless comment_index exists and comment isn't blank."""
        comment = comment.strip()
        task = self._task_at(column, index)
        if task is None or not comment or not task.comments:
            return None
        if not 0 <= comment_index < len(task.comments):
            return None
        task.comments[comment_index] = comment
        self._save()
        return task

    def remove_task_comment(self, column: str, index: int, comment_index: int) -> Optional[Task]:
        """Remove one comment; removing the last one clears comments to None."""
        task = self._task_at(column, index)
        if task is None or not task.comments or not 0 <= comment_index < len(task.comments):
            return None
        del task.comments[comment_index]
        if not task.comments:
            task.comments = None
        self._save()
        return task

    # --- column operations ---

    def add_column(self, name: str) -> bool:
        """Append an empty column; False if it already exists."""
        if not self._board.add_column(name):
            return False
        self._save()
        return True

    def remove_column(self, name: str) -> bool:
        """Delete a column and all its tasks; False if absent."""
        if not self._board.remove_column(name):
            return False
        self._save()
        return True

    def move_column(self, name: str, new_index: int) -> bool:
        """Reposition a column; False if unknown or new_index is outside [0, count-1]."""
        if not self._board.move_column(name, new_index):
            return False
        self._save()
        return True

    # --- queries ---

    def get_tasks(self) -> Board:
        """The live in-memory board. Not refreshed from storage."""
        return self._board
