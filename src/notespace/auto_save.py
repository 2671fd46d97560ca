# SPDX-License-Identifier: GPL-3.0-or-later

import logging

from gi.repository import GLib

from notespace.constants import AUTOSAVE_DELAY_MS

log = logging.getLogger(__name__)


class AutoSave:
    """Debounced auto-save using GLib.timeout_add."""

    def __init__(self, save_callback, delay_ms=AUTOSAVE_DELAY_MS):
        self._save_callback = save_callback
        self._delay_ms = delay_ms
        self._timeout_id = None

    @property
    def pending(self) -> bool:
        return self._timeout_id is not None

    def trigger(self):
        """Schedule a save after the debounce delay. Resets if called again."""
        self.cancel()
        self._timeout_id = GLib.timeout_add(self._delay_ms, self._do_save)

    def cancel(self):
        """Cancel any pending save."""
        if self._timeout_id is not None:
            GLib.source_remove(self._timeout_id)
            self._timeout_id = None

    def save_now(self):
        """Save immediately, canceling any pending debounce."""
        self.cancel()
        self._save_callback()

    def _do_save(self):
        self._timeout_id = None
        self._save_callback()
        return GLib.SOURCE_REMOVE


class EditorSession:
    """
    An open note editor.

    Keystrokes call ``edit()``; the content reaches the store as one silent
    ``update_note`` per quiet period, so typing never fills the undo stack.
    Closing the session always flushes unsaved content. Use it as a context
    manager, or through ``WorkspaceStore.open_editor``.
    """

    def __init__(self, store, note_id, delay_ms=AUTOSAVE_DELAY_MS):
        note = store.get_note(note_id)
        if note is None:
            raise KeyError(note_id)
        self._store = store
        self.note_id = note_id
        self._saved_content = note.content
        self._content = note.content
        self._closed = False
        self._auto_save = AutoSave(self._save, delay_ms)

    @property
    def content(self) -> str:
        return self._content

    @property
    def dirty(self) -> bool:
        return self._content != self._saved_content

    @property
    def closed(self) -> bool:
        return self._closed

    def edit(self, content):
        if self._closed:
            raise RuntimeError(f'Editor for note {self.note_id} is closed')
        self._content = content
        self._auto_save.trigger()

    def flush(self):
        self._auto_save.save_now()

    def _save(self):
        if not self.dirty:
            return
        content = self._content
        result = self._store.update_note(self.note_id, {'content': content}, record_history=False)
        if result.ok:
            self._saved_content = content
        else:
            log.warning('Autosave of note %s failed: %s', self.note_id, result.message)

    def reload(self, content):
        """Follow a content change made behind the editor's back, e.g. undo."""
        if self.dirty:
            return
        self._content = self._saved_content = content

    def close(self):
        if self._closed:
            return
        self._closed = True
        self.flush()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
