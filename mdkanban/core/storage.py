"""
FILE: mdkanban/core/storage.py
PURPOSE: Storage port for board text and its file-backed implementation
EXPORTS:
  - BoardStorage (Protocol)
  - FileStorage
  - as_storage(location) -> BoardStorage
DEPENDENCIES:
  - pathlib (stdlib)
  - typing (stdlib)
NOTES:
  - read() on a missing file raises FileNotFoundError (hard failure)
  - write() replaces the whole file; OSError propagates to the caller
  - No locking, no buffering: every write() hits the disk before returning
"""

import os
from pathlib import Path
from typing import Protocol, Union, runtime_checkable


@runtime_checkable
class BoardStorage(Protocol):
    """Where one board's Markdown text lives."""

    def read(self) -> str:
        ...

    def write(self, text: str) -> None:
        ...


class FileStorage:
    """Board text stored in a UTF-8 Markdown file."""

    def __init__(self, path: Union[str, os.PathLike]):
        self.path = Path(path)

    def read(self) -> str:
        with open(self.path, "r", encoding="utf-8") as f:
            return f.read()

    def write(self, text: str) -> None:
        with open(self.path, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)

    def __str__(self) -> str:
        return str(self.path)

    def __repr__(self) -> str:
        return f"FileStorage({str(self.path)!r})"


Location = Union[str, os.PathLike, BoardStorage]


def as_storage(location: Location) -> BoardStorage:
    """Wrap a path in FileStorage; pass storage ports through unchanged."""
    if isinstance(location, (str, os.PathLike)):
        return FileStorage(location)
    return location
