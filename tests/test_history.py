import pytest

from notespace.history import HistoryEntry, HistoryStore


class Counter:
    """Live state the history store applies snapshots to."""

    def __init__(self) -> None:
        self.value = 0

    def set(self, value) -> None:
        self.value = value

    def change(self, history: HistoryStore, value) -> None:
        history.record(HistoryEntry('set', before=self.value, after=value))
        self.value = value


@pytest.fixture
def counter() -> Counter:
    return Counter()


def test_undo_and_redo_walk_the_stacks(counter) -> None:
    history = HistoryStore(counter.set)
    for value in (1, 2, 3):
        counter.change(history, value)

    assert history.undo().after == 3
    assert counter.value == 2
    history.undo()
    assert counter.value == 1
    assert history.can_redo

    history.redo()
    assert counter.value == 2
    history.redo()
    assert counter.value == 3
    assert not history.can_redo


def test_empty_stacks_are_noops(counter) -> None:
    history = HistoryStore(counter.set)
    assert history.undo() is None
    assert history.redo() is None
    assert not history.can_undo
    assert not history.can_redo
    assert counter.value == 0


def test_new_action_truncates_redo(counter) -> None:
    history = HistoryStore(counter.set)
    counter.change(history, 1)
    counter.change(history, 2)
    history.undo()

    counter.change(history, 5)

    assert not history.can_redo
    assert history.redo() is None
    history.undo()
    assert counter.value == 1


def test_oldest_entries_are_evicted(counter) -> None:
    history = HistoryStore(counter.set, limit=3)
    for value in range(1, 6):
        counter.change(history, value)

    assert len(history) == 3
    while history.undo():
        pass
    assert counter.value == 2


def test_changed_signal_and_kinds(counter) -> None:
    history = HistoryStore(counter.set)
    events = []
    history.connect('changed', lambda h: events.append((h.can_undo, h.can_redo)))

    counter.change(history, 1)
    assert history.undo_kind == 'set'
    history.undo()
    assert history.redo_kind == 'set'
    history.clear()

    assert events == [(True, False), (False, True), (False, False)]


def test_limit_must_be_positive(counter) -> None:
    with pytest.raises(ValueError):
        HistoryStore(counter.set, limit=0)
