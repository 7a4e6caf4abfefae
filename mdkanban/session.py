"""
FILE: mdkanban/session.py
PURPOSE: Message-driven facade over a BoardStore for UI/host collaborators
EXPORTS:
  - BoardSession
DEPENDENCIES:
  - mdkanban.core.board_store (BoardStore)
  - mdkanban.core.transfer (transfer_task)
  - mdkanban.core.models (Priority)
NOTES:
  - handle() takes a UI message ({"command": ..., camelCase args}) and
    always answers with a full board snapshot
  - Messages missing required arguments are ignored (snapshot still returned)
  - Unknown commands are logged and ignored
  - Hard failures (I/O, unknown transfer source column) propagate
  - reload() rebuilds the store so external edits become visible
"""

import logging
from typing import Any, Callable, Dict, Optional

from .core.board_store import BoardStore
from .core.constants import DEFAULT_PRIORITY_NAME, DONE_COLUMN
from .core.models import IdFactory, Priority, new_task_id
from .core.storage import Location
from .core.transfer import transfer_task

logger = logging.getLogger(__name__)

Message = Dict[str, Any]


def _has(message: Message, *keys: str) -> bool:
    return all(message.get(key) is not None for key in keys)


class BoardSession:
    """One open board, driven by command messages."""

    def __init__(self, location: Location, id_factory: IdFactory = new_task_id):
        self.location = location
        self._id_factory = id_factory
        self.store = BoardStore(location, id_factory)

    def reload(self) -> None:
        """Rebuild the store from storage."""
        self.store = BoardStore(self.location, self._id_factory)

    def snapshot(self) -> Dict[str, Any]:
        return self.store.get_tasks().to_dict()

    def handle(self, message: Message) -> Dict[str, Any]:
        """
        Dispatch one message and return the resulting board snapshot.

        Args:
            message: Dict with a "command" key plus the command's arguments

        Returns:
            Board snapshot ({"columns": [{"name", "tasks"}, ...]})
        """
        command = message.get("command")
        handlers: Dict[str, Callable[[Message], None]] = {
            "toggle": self._toggle,
            "move": self._move,
            "add": self._add,
            "remove": self._remove,
            "setPriority": self._set_priority,
            "addColumn": self._add_column,
            "removeColumn": self._remove_column,
            "moveColumn": self._move_column,
            "addComment": self._add_comment,
            "updateComment": self._update_comment,
            "removeComment": self._remove_comment,
            "transfer": self._transfer,
        }

        handler = handlers.get(command)
        if handler:
            handler(message)
        else:
            logger.warning("Ignoring unknown board command %r", command)

        return self.snapshot()

    # --- handlers ---

    def _toggle(self, message: Message) -> None:
        if _has(message, "column", "index"):
            self.store.toggle_done(message["column"], message["index"])

    def _move(self, message: Message) -> None:
        if not _has(message, "fromColumn", "toColumn", "fromIndex"):
            return

        from_column = message["fromColumn"]
        to_column = message["toColumn"]
        from_index = message["fromIndex"]
        to_index: Optional[int] = message.get("toIndex")

        # Removal happens before insertion, so a downward move in the same
        # column lands one slot lower than the drop position
        if to_index is not None and from_column == to_column and from_index < to_index:
            to_index -= 1

        task = self.store.move_task(from_column, to_column, from_index, to_index)
        if task is None:
            return

        final_index = next(
            i for i, t in enumerate(self.store.get_tasks().get(to_column).tasks) if t is task
        )
        if to_column.lower() == DONE_COLUMN:
            self.store.set_done(to_column, final_index)
        else:
            self.store.set_not_done(to_column, final_index)

    def _add(self, message: Message) -> None:
        if not (message.get("column") and message.get("text")):
            return
        priority = Priority.from_str(message.get("priority") or DEFAULT_PRIORITY_NAME)
        self.store.add_task(message["column"], message["text"], priority, message.get("notes"))

    def _remove(self, message: Message) -> None:
        if _has(message, "column", "index"):
            self.store.remove_task(message["column"], message["index"])

    def _set_priority(self, message: Message) -> None:
        if _has(message, "column", "index") and message.get("priority"):
            self.store.set_task_priority(
                message["column"], message["index"], Priority.from_str(message["priority"])
            )

    def _add_column(self, message: Message) -> None:
        if message.get("name"):
            self.store.add_column(message["name"])

    def _remove_column(self, message: Message) -> None:
        if message.get("name"):
            self.store.remove_column(message["name"])

    def _move_column(self, message: Message) -> None:
        if _has(message, "columnName", "newIndex"):
            self.store.move_column(message["columnName"], message["newIndex"])

    def _add_comment(self, message: Message) -> None:
        if _has(message, "column", "index") and message.get("comment"):
            self.store.add_task_comment(message["column"], message["index"], message["comment"])

    def _update_comment(self, message: Message) -> None:
        if _has(message, "column", "index", "commentIndex") and message.get("comment"):
            self.store.update_task_comment(
                message["column"], message["index"], message["commentIndex"], message["comment"]
            )

    def _remove_comment(self, message: Message) -> None:
        if _has(message, "column", "index", "commentIndex"):
            self.store.remove_task_comment(
                message["column"], message["index"], message["commentIndex"]
            )

    def _transfer(self, message: Message) -> None:
        if not _has(message, "sourceFile", "sourceColumn", "taskId", "targetFile", "targetColumn"):
            return
        transfer_task(
            message["sourceFile"],
            message["sourceColumn"],
            message["taskId"],
            message["targetFile"],
            message["targetColumn"],
            message.get("toIndex"),
            id_factory=self._id_factory,
        )
        # Either side may be this board; the live store is stale now
        self.reload()
