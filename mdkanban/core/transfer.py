"""
FILE: mdkanban/core/transfer.py
PURPOSE: Move one task, by id, from one board file to another
EXPORTS:
  - transfer_task(source, source_column, task_id, target, target_column, to_index) -> Task | None
DEPENDENCIES:
  - mdkanban.core.codec (read_board, write_board)
  - mdkanban.core.exceptions (SourceColumnNotFoundError)
  - mdkanban.core.storage (as_storage, Location)
NOTES:
  - Both boards are loaded fresh from storage, ignoring any live BoardStore
  - Two separate read/modify/write cycles: NOT atomic. If the target side
    fails after the source was written, the task is gone from both.
  - Unknown source column raises; unknown task id returns None
"""

import logging
from typing import Optional

from .codec import read_board, write_board
from .exceptions import SourceColumnNotFoundError
from .models import IdFactory, Task, new_task_id
from .storage import Location, as_storage

logger = logging.getLogger(__name__)


def transfer_task(
    source: Location,
    source_column: str,
    task_id: str,
    target: Location,
    target_column: str,
    to_index: Optional[int] = None,
    id_factory: IdFactory = new_task_id,
) -> Optional[Task]:
    """
    Move a task and all of its fields between two boards.

    Args:
        source: Source board file path or storage
        source_column: Column holding the task in the source board
        task_id: Id of the task to move
        target: Target board file path or storage (may equal source)
        target_column: Column to put the task in (created if absent)
        to_index: Position in the target column; out of range or None appends
        id_factory: Used only to heal id-less tasks while loading either board

    Returns:
        The moved Task, or None if no task with task_id is in source_column

    Raises:
        SourceColumnNotFoundError: If source_column doesn't exist
        OSError: If either board can't be read or written
    """
    source_storage = as_storage(source)
    target_storage = as_storage(target)

    source_board = read_board(source_storage, id_factory)
    column = source_board.get(source_column)
    if column is None:
        raise SourceColumnNotFoundError(source_column, str(source_storage))

    index = next((i for i, t in enumerate(column.tasks) if t.id == task_id), None)
    if index is None:
        return None

    task = column.tasks.pop(index)
    write_board(source_storage, source_board)

    target_board = read_board(target_storage, id_factory)
    target_board.ensure_column(target_column).place(task, to_index)
    write_board(target_storage, target_board)

    logger.info(
        "Transferred task %s from %s [%s] to %s [%s]",
        task_id, source_storage, source_column, target_storage, target_column,
    )
    return task
