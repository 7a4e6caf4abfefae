"""
FILE: mdkanban/core/models.py
PURPOSE: Domain models for tasks, columns, and boards
EXPORTS:
  - Priority (enum)
  - Task (dataclass)
  - Column (dataclass)
  - Board (dataclass)
  - new_task_id() -> str
DEPENDENCIES:
  - dataclasses (stdlib)
  - enum (stdlib)
  - json (stdlib)
  - uuid (stdlib)
  - typing (stdlib)
NOTES:
  - Board keeps its columns in a list: column order is meaningful
  - Optional fields use None as default; comments is never an empty list
  - All models have to_dict()/to_json() for snapshots and --json output
"""

import json
import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Any

from .constants import DEFAULT_PRIORITY_NAME

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


def new_task_id() -> str:
    """Generate a globally unique task identifier."""
    return str(uuid.uuid4())


class Priority(Enum):
    """Task priority, highest first."""
    HIGHEST = "Highest"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    LOWEST = "Lowest"

    @classmethod
    def from_str(cls, value: str) -> "Priority":
        """Case-insensitive lookup; unknown values fall back to Medium."""
        try:
            return cls[value.strip().upper()]
        except KeyError:
            logger.warning("Unknown priority %r, using %s", value, DEFAULT_PRIORITY_NAME)
            return cls(DEFAULT_PRIORITY_NAME)

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return value.strip().upper() in cls.__members__


@dataclass
class Task:
    """A single checklist item on the board."""

    text: str
    done: bool = False
    priority: Priority = Priority.MEDIUM
    notes: Optional[str] = None
    comments: Optional[List[str]] = None
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict; absent notes/comments are omitted rather than null."""
        data: Dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "done": self.done,
            "priority": self.priority.value,
        }
        if self.notes:
            data["notes"] = self.notes
        if self.comments:
            data["comments"] = list(self.comments)
        return data

    def to_json(self) -> str:
        """Serialize task to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


@dataclass
class Column:
    """A named, ordered list of tasks."""

    name: str
    tasks: List[Task] = field(default_factory=list)

    def task_at(self, index: int) -> Optional[Task]:
        """Task at a non-negative in-range index, else None."""
        if 0 <= index < len(self.tasks):
            return self.tasks[index]
        return None

    def place(self, task: Task, index: Optional[int] = None) -> int:
        """
        Insert task at index when it lies in [0, len], otherwise append.

        Returns:
            The position the task ended up at
        """
        if index is not None and 0 <= index <= len(self.tasks):
            self.tasks.insert(index, task)
            return index
        self.tasks.append(task)
        return len(self.tasks) - 1

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "tasks": [t.to_dict() for t in self.tasks]}


@dataclass
class Board:
    """
    Ordered collection of columns.

    Columns live in a list, so insertion order survives reads, writes and
    reorderings. Name lookups are linear; boards hold a handful of columns.
    """

    columns: List[Column] = field(default_factory=list)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __iter__(self) -> Iterator[Column]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    def get(self, name: str) -> Optional[Column]:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    def index_of(self, name: str) -> int:
        """Position of a column, -1 if absent."""
        for i, column in enumerate(self.columns):
            if column.name == name:
                return i
        return -1

    def ensure_column(self, name: str) -> Column:
        """Return the named column, appending an empty one if absent."""
        column = self.get(name)
        if column is None:
            column = Column(name)
            self.columns.append(column)
        return column

    def add_column(self, name: str) -> bool:
        if name in self:
            return False
        self.columns.append(Column(name))
        return True

    def remove_column(self, name: str) -> bool:
        index = self.index_of(name)
        if index == -1:
            return False
        del self.columns[index]
        return True

    def move_column(self, name: str, new_index: int) -> bool:
        """Reinsert a column at new_index; False if name or index is invalid."""
        current = self.index_of(name)
        if current == -1 or new_index < 0 or new_index >= len(self.columns):
            return False
        column = self.columns.pop(current)
        self.columns.insert(new_index, column)
        return True

    def find_task(self, task_id: str) -> Optional[Task]:
        for column in self.columns:
            for task in column.tasks:
                if task.id == task_id:
                    return task
        return None

    def task_count(self) -> int:
        return sum(len(c.tasks) for c in self.columns)

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot as an ordered list of columns (never a name->tasks mapping)."""
        return {"columns": [c.to_dict() for c in self.columns]}

    def to_json(self) -> str:
        """Serialize board to JSON string."""
        return json.dumps(self.to_dict(), indent=2)
