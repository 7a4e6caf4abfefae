"""
Test suite for BoardStore.

Tests the mutation API and its persistence guarantees:
- Every applied mutation is written to the board file immediately
- Position-addressed operations are silent no-ops on bad column/index
- Comment list clearing, column ordering, move conservation
- Memory/storage divergence on write failure
"""

import re

import pytest

from mdkanban.core.board_store import BoardStore
from mdkanban.core.codec import read_board
from mdkanban.core.models import Priority, Task
from mdkanban.core.storage import FileStorage


def persisted(path):
    """Board as currently stored on disk."""
    return read_board(FileStorage(path))


# --- Construction ---

def test_missing_board_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        BoardStore(tmp_path / "nope.md")


def test_store_accepts_storage_port(memory_storage, make_ids):
    storage = memory_storage("## Todo\n")

    store = BoardStore(storage, make_ids())
    store.add_task("Todo", "x")

    assert "- [ ] x [id: t-1] [Priority: Medium]" in storage.text


# --- Scenario A and task state ---

def test_add_task_and_toggle_scenario(board_file):
    store = BoardStore(board_file)

    task = store.add_task("Todo", "write tests")

    todo = store.get_tasks().get("Todo").tasks
    assert len(todo) == 1
    assert todo[0].done is False
    assert todo[0].priority == Priority.MEDIUM
    assert todo[0].id == task.id

    store.toggle_done("Todo", 0)
    assert store.get_tasks().get("Todo").tasks[0].done is True

    content = board_file.read_text(encoding="utf-8")
    assert re.search(
        r"^- \[x\] write tests \[id: [0-9a-f-]{36}\] \[Priority: Medium\]$", content, re.MULTILINE
    )


def test_toggle_twice_restores_done(board_file):
    store = BoardStore(board_file)
    store.add_task("Todo", "flip me")

    store.toggle_done("Todo", 0)
    store.toggle_done("Todo", 0)

    assert store.get_tasks().get("Todo").tasks[0].done is False
    assert persisted(board_file).get("Todo").tasks[0].done is False


def test_set_done_set_not_done_and_remove(board_file):
    store = BoardStore(board_file)
    store.add_task("Todo", "write tests")
    store.add_task("Todo", "refactor")

    store.toggle_done("Todo", 0)
    store.set_not_done("Todo", 0)
    assert store.get_tasks().get("Todo").tasks[0].done is False

    store.set_done("Todo", 1)
    assert store.get_tasks().get("Todo").tasks[1].done is True

    removed = store.remove_task("Todo", 0)
    assert removed.text == "write tests"

    remaining = persisted(board_file).get("Todo").tasks
    assert len(remaining) == 1
    assert remaining[0].text == "refactor"
    assert remaining[0].done is True
    assert remaining[0].priority == Priority.MEDIUM


def test_add_task_creates_missing_column(board_file):
    store = BoardStore(board_file)

    store.add_task("Backlog", "idea", Priority.LOW, "Line 1\nLine 2")

    assert store.get_tasks().column_names() == ["Todo", "In Progress", "Done", "Backlog"]
    content = board_file.read_text(encoding="utf-8")
    assert "## Backlog\n- [ ] idea [id: " in content
    assert "[Priority: Low]\n    Line 1\n    Line 2\n" in content


def test_add_task_empty_notes_is_no_notes(board_file):
    store = BoardStore(board_file)

    task = store.add_task("Todo", "x", notes="")

    assert task.notes is None


def test_get_tasks_is_live_board(board_file):
    store = BoardStore(board_file)
    task = store.add_task("In Progress", "find me")

    board = store.get_tasks()

    assert board is store.get_tasks()
    assert board.find_task(task.id) is task
    assert board.find_task("missing") is None
    assert board.task_count() == 1


def test_set_task_priority(board_file):
    store = BoardStore(board_file)
    store.add_task("Todo", "x")

    store.set_task_priority("Todo", 0, Priority.HIGHEST)

    assert persisted(board_file).get("Todo").tasks[0].priority == Priority.HIGHEST


# --- No-op policy ---

@pytest.mark.parametrize("call", [
    lambda s: s.remove_task("Nope", 0),
    lambda s: s.remove_task("Todo", 5),
    lambda s: s.remove_task("Todo", -1),
    lambda s: s.toggle_done("Todo", 1),
    lambda s: s.set_done("Nope", 0),
    lambda s: s.set_not_done("Todo", -1),
    lambda s: s.set_task_priority("Todo", 9, Priority.HIGH),
    lambda s: s.move_task("Todo", "Done", 3),
    lambda s: s.move_task("Nope", "Done", 0),
    lambda s: s.add_task_comment("Todo", 2, "c"),
    lambda s: s.update_task_comment("Todo", 0, 0, "c"),
    lambda s: s.remove_task_comment("Todo", 0, 0),
])
def test_position_operations_are_noops_when_target_missing(board_file, call):
    store = BoardStore(board_file)
    store.add_task("Todo", "only task")
    before = board_file.read_bytes()

    result = call(store)

    assert result is None
    assert board_file.read_bytes() == before
    assert store.get_tasks().get("Todo").tasks[0].text == "only task"


# --- insert_task ---

def test_insert_task_assigns_id_and_position(board_file):
    store = BoardStore(board_file)
    store.add_task("Todo", "a")
    store.add_task("Todo", "c")

    inserted = store.insert_task("Todo", 1, Task("b", priority=Priority.HIGH))

    assert inserted.id
    assert [t.text for t in persisted(board_file).get("Todo").tasks] == ["a", "b", "c"]


def test_insert_task_keeps_existing_id(board_file):
    store = BoardStore(board_file)

    store.insert_task("New", 0, Task("x", id="fixed"))

    assert persisted(board_file).get("New").tasks[0].id == "fixed"


def test_insert_task_out_of_range_follows_list_insert(board_file):
    store = BoardStore(board_file)
    store.add_task("Todo", "a")
    store.add_task("Todo", "b")

    store.insert_task("Todo", 100, Task("end"))
    store.insert_task("Todo", -1, Task("before-last"))

    assert [t.text for t in store.get_tasks().get("Todo").tasks] == ["a", "b", "before-last", "end"]


# --- move_task ---

def test_move_task_between_columns_persists(board_file):
    store = BoardStore(board_file)
    store.add_task("Todo", "task 1")
    store.add_task("Todo", "task 2")

    moved = store.move_task("Todo", "In Progress", 0)

    board = store.get_tasks()
    assert len(board.get("Todo").tasks) == 1
    assert board.get("In Progress").tasks == [moved]

    on_disk = persisted(board_file)
    assert len(on_disk.get("In Progress").tasks) == 1
    assert on_disk.get("In Progress").tasks[0].text == "task 1"


def test_move_task_conserves_count_and_fields(board_file):
    store = BoardStore(board_file)
    store.add_task("Todo", "keep me", Priority.HIGH, "some\nnotes")
    store.add_task_comment("Todo", 0, "c1")
    store.add_task("Done", "other")
    original = Task(**vars(store.get_tasks().get("Todo").tasks[0]))
    original.comments = list(original.comments)

    store.move_task("Todo", "Done", 0, 0)

    board = store.get_tasks()
    assert len(board.get("Todo").tasks) + len(board.get("Done").tasks) == 2
    assert board.get("Done").tasks[0] == original
    assert persisted(board_file).get("Done").tasks[0] == original


def test_move_task_creates_target_and_appends_on_bad_index(board_file):
    store = BoardStore(board_file)
    store.add_task("Todo", "a")
    store.add_task("Archive", "old")

    store.move_task("Todo", "Archive", 0, 42)
    store.add_task("Todo", "b")
    store.move_task("Todo", "Later", 0, -1)

    board = store.get_tasks()
    assert [t.text for t in board.get("Archive").tasks] == ["old", "a"]
    assert [t.text for t in board.get("Later").tasks] == ["b"]


def test_move_task_same_column_uses_post_removal_index(board_file):
    store = BoardStore(board_file)
    for text in ("a", "b", "c"):
        store.add_task("Todo", text)

    # Caller wants "a" dropped before "c" (slot 2); removal shifts it to 1
    store.move_task("Todo", "Todo", 0, 2 - 1)

    assert [t.text for t in persisted(board_file).get("Todo").tasks] == ["b", "a", "c"]


# --- Comments ---

def test_comment_add_update_remove(board_file):
    store = BoardStore(board_file)
    store.add_task("Todo", "task with comments", Priority.HIGH, "Some notes")

    store.add_task_comment("Todo", 0, "First comment")
    assert store.get_tasks().get("Todo").tasks[0].comments == ["First comment"]

    store.add_task_comment("Todo", 0, "Second comment")
    store.update_task_comment("Todo", 0, 0, "Updated first comment")
    assert store.get_tasks().get("Todo").tasks[0].comments == ["Updated first comment", "Second comment"]

    store.remove_task_comment("Todo", 0, 1)
    assert store.get_tasks().get("Todo").tasks[0].comments == ["Updated first comment"]
    assert "[Comments: Updated first comment]" in board_file.read_text(encoding="utf-8")

    store.remove_task_comment("Todo", 0, 0)
    assert store.get_tasks().get("Todo").tasks[0].comments is None
    assert persisted(board_file).get("Todo").tasks[0].comments is None
    assert "[Comments:" not in board_file.read_text(encoding="utf-8")


def test_comment_index_out_of_range_is_noop(board_file):
    store = BoardStore(board_file)
    store.add_task("Todo", "x")
    store.add_task_comment("Todo", 0, "only")
    before = board_file.read_bytes()

    assert store.update_task_comment("Todo", 0, 1, "nope") is None
    assert store.update_task_comment("Todo", 0, -1, "nope") is None
    assert store.remove_task_comment("Todo", 0, 3) is None
    assert board_file.read_bytes() == before


@pytest.mark.parametrize("blank", ["", "   "])
def test_blank_comment_is_noop(board_file, blank):
    store = BoardStore(board_file)
    store.add_task("Todo", "x")
    store.add_task_comment("Todo", 0, "kept")
    before = board_file.read_bytes()

    assert store.add_task_comment("Todo", 0, blank) is None
    assert store.update_task_comment("Todo", 0, 0, blank) is None
    assert store.get_tasks().get("Todo").tasks[0].comments == ["kept"]
    assert board_file.read_bytes() == before


def test_comment_is_trimmed_and_survives_reload(board_file):
    store = BoardStore(board_file)
    store.add_task("Todo", "x")

    store.add_task_comment("Todo", 0, "  spaced  ")

    assert store.get_tasks().get("Todo").tasks[0].comments == ["spaced"]
    assert persisted(board_file).get("Todo").tasks[0].comments == ["spaced"]


# --- Columns ---

def test_add_and_remove_column(board_file):
    store = BoardStore(board_file)

    assert store.add_column("Backlog") is True
    store.add_task("Backlog", "idea")
    assert len(persisted(board_file).get("Backlog").tasks) == 1

    assert store.remove_column("Backlog") is True
    assert "Backlog" not in store.get_tasks()
    assert "Backlog" not in persisted(board_file)


def test_add_existing_column_and_remove_unknown_are_noops(board_file):
    store = BoardStore(board_file)
    before = board_file.read_bytes()

    assert store.add_column("Todo") is False
    assert store.remove_column("Nope") is False
    assert board_file.read_bytes() == before


def test_move_column_scenario(board_file):
    store = BoardStore(board_file)
    store.add_task("Todo", "t")
    store.add_task("Done", "d")

    assert store.move_column("Done", 0) is True

    assert store.get_tasks().column_names() == ["Done", "Todo", "In Progress"]
    on_disk = persisted(board_file)
    assert on_disk.column_names() == ["Done", "Todo", "In Progress"]
    assert [t.text for t in on_disk.get("Todo").tasks] == ["t"]
    assert [t.text for t in on_disk.get("Done").tasks] == ["d"]


@pytest.mark.parametrize("name, index", [("Nope", 0), ("Done", 3), ("Done", -1)])
def test_move_column_noop_leaves_file_unchanged(board_file, name, index):
    store = BoardStore(board_file)
    store.add_task("Todo", "t")
    before = board_file.read_bytes()

    assert store.move_column(name, index) is False
    assert board_file.read_bytes() == before
    assert store.get_tasks().column_names() == ["Todo", "In Progress", "Done"]


# --- Persistence model ---

def test_store_does_not_reread_and_last_writer_wins(board_file):
    store = BoardStore(board_file)
    board_file.write_text("## External\n- [ ] edit [id: ext]\n", encoding="utf-8")

    assert "External" not in store.get_tasks()

    store.add_column("Backlog")
    on_disk = persisted(board_file)
    assert "External" not in on_disk
    assert on_disk.column_names() == ["Todo", "In Progress", "Done", "Backlog"]


def test_write_failure_keeps_memory_ahead_of_storage(memory_storage, make_ids):
    storage = memory_storage("## Todo\n")
    store = BoardStore(storage, make_ids())
    storage.fail_writes = True

    with pytest.raises(OSError):
        store.add_task("Todo", "unsaved")

    assert [t.text for t in store.get_tasks().get("Todo").tasks] == ["unsaved"]
    assert storage.text == "## Todo\n"


def test_each_mutation_writes_once(memory_storage, make_ids):
    storage = memory_storage("## Todo\n")
    store = BoardStore(storage, make_ids())

    store.add_task("Todo", "a")
    store.move_task("Todo", "Done", 0)
    store.toggle_done("Done", 0)

    assert len(storage.writes) == 3
