"""Shared pytest configuration and fixtures for tests."""

import sys
import io
import itertools
from pathlib import Path

import pytest

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


DEFAULT_BOARD = "## Todo\n\n## In Progress\n\n## Done\n\n"


class MemoryStorage:
    """In-memory BoardStorage that records every write."""

    def __init__(self, text: str = ""):
        self.text = text
        self.writes = []
        self.fail_writes = False

    def read(self) -> str:
        return self.text

    def write(self, text: str) -> None:
        if self.fail_writes:
            raise OSError(28, "No space left on device")
        self.text = text
        self.writes.append(text)

    def __str__(self) -> str:
        return "<memory>"


@pytest.fixture
def make_ids():
    """Factory for deterministic id generators: t-1, t-2, ..."""
    def factory(prefix: str = "t"):
        counter = itertools.count(1)
        return lambda: f"{prefix}-{next(counter)}"
    return factory


@pytest.fixture
def memory_storage():
    """The MemoryStorage class, for building in-memory boards."""
    return MemoryStorage


@pytest.fixture
def board_file(tmp_path):
    """A tasks.md with the three default columns and no tasks."""
    path = tmp_path / "tasks.md"
    path.write_text(DEFAULT_BOARD, encoding="utf-8")
    return path
