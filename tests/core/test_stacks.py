import pytest

from history_engine.core.commands import HistoryEntry, HistoryStacks
from history_engine.core.commands.entry import generate_scoped_id


def _entry(desc: str) -> HistoryEntry:
    class _Command:
        description = desc

    return HistoryEntry.create(_Command(), 0.0)


@pytest.fixture
def stacks():
    return HistoryStacks()


def test_scoped_id_format():
    entry_id = generate_scoped_id("cmd")
    prefix, suffix = entry_id.split("_")
    assert prefix == "cmd"
    assert len(suffix) == 10
    assert suffix.isalnum()


def test_entry_is_immutable():
    entry = _entry("a")
    with pytest.raises(AttributeError):
        entry.description = "b"


def test_push_and_pop_undo(stacks):
    a, b = _entry("a"), _entry("b")
    stacks.push_undo(a)
    stacks.push_undo(b)

    assert stacks.undo_size == 2
    assert stacks.peek_undo() is b
    assert stacks.pop_undo() is b
    assert stacks.pop_undo() is a
    assert stacks.pop_undo() is None
    assert stacks.peek_undo() is None


def test_push_undo_evicts_oldest(stacks):
    entries = [_entry(str(i)) for i in range(4)]
    evicted = []
    for entry in entries:
        evicted.extend(stacks.push_undo(entry, max_history=3))

    assert evicted == [entries[0]]
    assert stacks.undo_entries() == tuple(entries[1:])


def test_truncate_undo_keeps_most_recent(stacks):
    entries = [_entry(str(i)) for i in range(5)]
    for entry in entries:
        stacks.push_undo(entry)

    evicted = stacks.truncate_undo(2)

    assert evicted == entries[:3]
    assert stacks.undo_entries() == tuple(entries[3:])
    assert stacks.truncate_undo(10) == []


def test_redo_stack(stacks):
    a, b = _entry("a"), _entry("b")
    stacks.push_redo(a)
    stacks.push_redo(b)

    assert stacks.redo_size == 2
    assert stacks.peek_redo() is b
    assert stacks.index_in_redo(a.id) == 0

    stacks.clear_redo()
    assert stacks.redo_size == 0
    assert stacks.pop_redo() is None


def test_index_lookup(stacks):
    a, b = _entry("a"), _entry("b")
    stacks.push_undo(a)
    stacks.push_undo(b)

    assert stacks.index_in_undo(b.id) == 1
    assert stacks.index_in_undo("missing") is None
    assert stacks.index_in_redo(a.id) is None


def test_clear(stacks):
    stacks.push_undo(_entry("a"))
    stacks.push_redo(_entry("b"))

    stacks.clear()

    assert stacks.undo_size == 0
    assert stacks.redo_size == 0
