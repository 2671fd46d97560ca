from notespace.auto_save import AutoSave, EditorSession
from notespace.constants import INBOX_ID


def test_autosave_debounces(wait) -> None:
    calls = []
    auto_save = AutoSave(lambda: calls.append(True), delay_ms=30)

    for _ in range(5):
        auto_save.trigger()
    assert auto_save.pending
    wait(80)

    assert calls == [True]
    assert not auto_save.pending


def test_autosave_cancel_and_save_now(wait) -> None:
    calls = []
    auto_save = AutoSave(lambda: calls.append(True), delay_ms=20)

    auto_save.trigger()
    auto_save.cancel()
    wait(50)
    assert calls == []

    auto_save.trigger()
    auto_save.save_now()
    wait(50)
    assert calls == [True]


def test_editor_coalesces_keystrokes_into_one_silent_write(store, saved, wait) -> None:
    note = store.add_note(title='Draft').value
    store.history.clear()
    saved.clear()

    editor = store.open_editor(note.id).value
    for text in ('h', 'he', 'hel', 'hello'):
        editor.edit(text)
    assert store.get_note(note.id).content == ''
    wait(80)

    assert store.get_note(note.id).content == 'hello'
    assert len(saved) == 1
    assert not store.can_undo
    assert not editor.dirty


def test_closing_editor_flushes(store) -> None:
    note = store.add_note(title='Draft').value

    with EditorSession(store, note.id, delay_ms=10_000) as editor:
        editor.edit('unsaved')

    assert editor.closed
    assert store.get_note(note.id).content == 'unsaved'


def test_opening_another_note_flushes_the_first(store) -> None:
    first = store.add_note(title='One').value
    second = store.add_note(title='Two').value

    editor = store.open_editor(first.id).value
    editor.edit('typed')
    store.open_editor(second.id)

    assert editor.closed
    assert store.get_note(first.id).content == 'typed'
    assert store.editor.note_id == second.id


def test_undo_flushes_pending_edits(store) -> None:
    work = store.add_folder('Work').value
    note = store.add_note(title='x').value
    store.move_note(note.id, work.id)
    editor = store.open_editor(note.id).value
    editor.edit('keep me')

    store.undo()

    restored = store.get_note(note.id)
    assert restored.folder == INBOX_ID
    assert restored.content == 'keep me'
    assert editor.content == 'keep me'


def test_no_write_when_nothing_changed(store, saved) -> None:
    note = store.add_note(title='x', content='same').value
    saved.clear()

    editor = store.open_editor(note.id).value
    editor.edit('same')
    store.close_editor()

    assert saved == []
    assert store.editor is None


def test_open_editor_for_missing_note(store) -> None:
    assert not store.open_editor('missing').ok
