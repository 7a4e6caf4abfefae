"""
FILE: mdkanban/core/codec.py
PURPOSE: Parse board Markdown into a Board and serialize a Board back to Markdown
EXPORTS:
  - ParsedBoard (dataclass)
  - parse_board(text, id_factory) -> ParsedBoard
  - serialize_board(board) -> str
  - format_task_line(task) -> str
  - read_board(storage, id_factory) -> Board
  - write_board(storage, board) -> None
DEPENDENCIES:
  - re (stdlib)
  - logging (stdlib)
  - mdkanban.core.models (Board, Column, Task, Priority)
  - mdkanban.core.storage (BoardStorage)
NOTES:
  - Grammar: "## Name" starts a column, "- [ ] " / "- [x] " starts a task,
    four-space indented lines right below a task are its notes
  - Task tags: [id: ...] [Priority: ...] [Comments: a | b], read in that order,
    first of each kind wins
  - Everything outside the grammar is dropped on read (lossy by design of the format)
  - Tag-shaped text inside task text/notes is NOT escaped; it will be read back
    as a tag. Known limitation of the format.
  - read_board() writes the board back once when it had to generate ids,
    so later reads see the same ids
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .constants import (
    COMMENT_SEPARATOR,
    NOTE_INDENT,
    TAG_COMMENTS,
    TAG_ID,
    TAG_PRIORITY,
)
from .models import Board, IdFactory, Priority, Task, new_task_id
from .storage import BoardStorage

logger = logging.getLogger(__name__)

HEADING_RE = re.compile(r"^##\s+", re.MULTILINE)
CHECKBOX_RE = re.compile(r"^- \[( |x)\]")


def _tag_pattern(kind: str) -> "re.Pattern[str]":
    return re.compile(rf"\s*\[{kind}:\s*([^\]]+)\]", re.IGNORECASE)


# Extraction order: id, then Priority, then Comments
TAG_PATTERNS = [
    (TAG_ID.lower(), _tag_pattern(TAG_ID)),
    (TAG_PRIORITY.lower(), _tag_pattern(TAG_PRIORITY)),
    (TAG_COMMENTS.lower(), _tag_pattern(TAG_COMMENTS)),
]


@dataclass
class ParsedBoard:
    """Result of parsing: the board, and whether any ids had to be generated."""

    board: Board
    ids_generated: bool = False


# --- Parsing ---


def _extract_tags(tail: str) -> Tuple[Dict[str, str], str]:
    """
    Pull id, Priority and Comments tags out of a task tail, in that order.

    Args:
        tail: Task line after the checkbox prefix

    Returns:
        (raw tag values keyed by lowercase kind, remaining text trimmed)

    Notes:
        - Each kind takes the first match in what is left after the kinds
          before it were removed; repeats stay in the text
        - A tag needs at least one character between ':' and ']'
        - Whitespace directly before a consumed tag is removed with it
    """
    values: Dict[str, str] = {}
    for kind, pattern in TAG_PATTERNS:
        match = pattern.search(tail)
        if match is None:
            continue
        values[kind] = match.group(1)
        tail = tail[:match.start()] + tail[match.end():]
    return values, tail.strip()


def _parse_comments(raw: str) -> Optional[List[str]]:
    comments = [c.strip() for c in raw.split(COMMENT_SEPARATOR)]
    comments = [c for c in comments if c]
    return comments or None


def _parse_task_line(line: str, done: bool) -> Task:
    # "- [ ]" is five characters; the separating space is trimmed with the text
    values, text = _extract_tags(line[5:])

    task_id = values.get(TAG_ID.lower(), "").strip() or None
    raw_priority = values.get(TAG_PRIORITY.lower())
    priority = Priority.from_str(raw_priority) if raw_priority is not None else Priority.MEDIUM
    raw_comments = values.get(TAG_COMMENTS.lower())
    comments = _parse_comments(raw_comments) if raw_comments is not None else None

    return Task(
        text=text,
        done=done,
        priority=priority,
        comments=comments,
        id=task_id,
    )


def parse_board(text: str, id_factory: IdFactory = new_task_id) -> ParsedBoard:
    """
    Parse board Markdown.

    Args:
        text: Full content of a board file
        id_factory: Called once for every task that has no id tag

    Returns:
        ParsedBoard with the board and an ids_generated flag

    Notes:
        - Text before the first "## " heading is not a column and is dropped
        - Heading blocks without a name line are dropped
        - A repeated column name is merged into the first column of that name
        - A blank or unindented line ends the notes of the task above it
    """
    board = Board()
    ids_generated = False

    blocks = HEADING_RE.split(text.replace("\r\n", "\n"))
    for block in blocks[1:]:
        lines = block.split("\n")
        name_index = next((i for i, line in enumerate(lines) if line.strip()), None)
        if name_index is None:
            continue

        column = board.ensure_column(lines[name_index].strip())
        current: Optional[Task] = None
        note_lines: List[str] = []

        for line in lines[name_index + 1:]:
            marker = CHECKBOX_RE.match(line)
            if marker:
                _attach_notes(current, note_lines)
                current = _parse_task_line(line, done=marker.group(1) == "x")
                note_lines = []
                if current.id is None:
                    current.id = id_factory()
                    ids_generated = True
                column.tasks.append(current)
            elif current is not None and line.startswith(NOTE_INDENT):
                note_lines.append(line[len(NOTE_INDENT):])
            else:
                _attach_notes(current, note_lines)
                current = None
                note_lines = []

        _attach_notes(current, note_lines)

    return ParsedBoard(board=board, ids_generated=ids_generated)


def _attach_notes(task: Optional[Task], note_lines: List[str]) -> None:
    if task is not None and note_lines:
        task.notes = "\n".join(note_lines) or None


# --- Serialization ---


def format_task_line(task: Task) -> str:
    """Render one task line; tag order is always id, Priority, Comments."""
    line = f"- [{'x' if task.done else ' '}] {task.text}"
    if task.id:
        line += f" [{TAG_ID}: {task.id}]"
    line += f" [{TAG_PRIORITY}: {task.priority.value}]"
    if task.comments:
        joined = f" {COMMENT_SEPARATOR} ".join(task.comments)
        line += f" [{TAG_COMMENTS}: {joined}]"
    return line


def serialize_board(board: Board) -> str:
    """Render a board as Markdown, one blank line after each column."""
    lines: List[str] = []
    for column in board:
        lines.append(f"## {column.name}")
        for task in column.tasks:
            lines.append(format_task_line(task))
            if task.notes:
                lines.extend(NOTE_INDENT + note for note in task.notes.split("\n"))
        lines.append("")

    if not lines:
        return ""
    return "\n".join(lines) + "\n"


# --- Storage helpers ---


def write_board(storage: BoardStorage, board: Board) -> None:
    """Serialize the whole board and write it. OSError propagates."""
    storage.write(serialize_board(board))
    logger.debug("Wrote %d column(s) to %s", len(board), storage)


def read_board(storage: BoardStorage, id_factory: IdFactory = new_task_id) -> Board:
    """
    Read and parse a board, healing missing ids.

    Raises:
        OSError: If the storage can't be read (e.g. FileNotFoundError)

    Notes:
        When any task lacked an id, the board is written back once with the
        generated ids so the next read sees the same ones.
    """
    parsed = parse_board(storage.read(), id_factory)
    if parsed.ids_generated:
        logger.info("Assigned missing task ids in %s, writing board back", storage)
        write_board(storage, parsed.board)
    return parsed.board
