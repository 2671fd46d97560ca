# SPDX-License-Identifier: GPL-3.0-or-later

import enum
import functools
import logging
import uuid
from dataclasses import dataclass, field, replace
from typing import Optional

from gi.repository import GObject

from notespace import folder_tree
from notespace.auto_save import EditorSession
from notespace.colors import resolve_color
from notespace.config import WorkspaceConfig, load_config
from notespace.constants import FOLDER_DRAG_TYPE, INBOX_ID, NOTE_DRAG_TYPE
from notespace.drag import DragCoordinator, DragSource, DropRouter, DropZone, HoldGate
from notespace.errors import (
    DuplicateName,
    InvalidMove,
    InvalidName,
    MutationResult,
    NotFound,
    ProtectedEntity,
    WorkspaceError,
)
from notespace.history import HistoryEntry, HistoryStore
from notespace.models import Folder, Note, Reminder, Tag, WorkspaceSnapshot, now_iso
from notespace.search import SearchResults, search

log = logging.getLogger(__name__)

COLLECTIONS = ('folders', 'notes', 'tags')
NOTE_FIELDS = frozenset({'title', 'content', 'folder', 'tags', 'archived', 'reminder'})


class ImportMode(enum.Enum):
    MERGE = 'merge'
    REPLACE = 'replace'


@dataclass(frozen=True)
class ImportResult:
    imported: int
    skipped: int


@dataclass(frozen=True)
class Changeset:
    """
    One side of a history entry.

    For every entity touched by an action, keyed by collection and id: its
    position and value on this side, or None if it does not exist here.
    ``keep_content`` lists notes whose content the action did not change;
    their live content survives undo and redo.
    """
    changes: dict = field(default_factory=dict)
    keep_content: frozenset = frozenset()


def _diff(before: WorkspaceSnapshot, after: WorkspaceSnapshot):
    before_side, after_side = {}, {}
    for name in COLLECTIONS:
        old_items = getattr(before, name)
        new_items = getattr(after, name)
        if old_items is new_items:
            continue
        old = {e.id: (i, e) for i, e in enumerate(old_items)}
        new = {e.id: (i, e) for i, e in enumerate(new_items)}
        changed = [
            i for i in old.keys() | new.keys()
            if old.get(i, (None, None))[1] != new.get(i, (None, None))[1]
        ]
        if changed:
            before_side[name] = {i: old.get(i) for i in changed}
            after_side[name] = {i: new.get(i) for i in changed}

    keep = frozenset(
        note_id for note_id, old in before_side.get('notes', {}).items()
        if old is not None
        and after_side['notes'][note_id] is not None
        and old[1].content == after_side['notes'][note_id][1].content
    )
    return Changeset(before_side, keep), Changeset(after_side, keep)


def _apply(state: WorkspaceSnapshot, changeset: Changeset) -> WorkspaceSnapshot:
    updates = {}
    for name, changes in changeset.changes.items():
        live = {e.id: e for e in getattr(state, name)}
        items = [e for e in getattr(state, name) if e.id not in changes]
        placed = sorted((v for v in changes.values() if v is not None), key=lambda v: v[0])
        for index, entity in placed:
            current = live.get(entity.id)
            if (name == 'notes' and current is not None
                    and entity.id in changeset.keep_content
                    and current.content != entity.content):
                entity = replace(entity, content=current.content, updated_at=current.updated_at)
            items.insert(index, entity)
        updates[name] = tuple(items)
    return state.evolve(**updates)


def _mutator(func):
    """Run a mutation, turning structural errors into a failed result."""
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            value = func(self, *args, **kwargs)
        except WorkspaceError as e:
            log.warning('%s rejected: %s', func.__name__, e)
            return MutationResult(error=e)
        return MutationResult(value=value)
    return wrapper


def _new_id() -> str:
    return str(uuid.uuid4())


def _clean_name(name) -> str:
    name = (name or '').strip()
    if not name:
        raise InvalidName('Name cannot be empty')
    return name


class WorkspaceStore(GObject.Object):
    """
    Single owner of the folders, notes and tags of a workspace.

    Readers get immutable snapshots. Every change goes through a mutator,
    which validates it, swaps in the new snapshot, records it for undo
    unless told to stay silent, emits the matching ``*-changed`` signal and
    hands the snapshot to ``save_callback``.
    """

    __gsignals__ = {
        'folders-changed': (GObject.SignalFlags.RUN_LAST, None, (str,)),
        'notes-changed': (GObject.SignalFlags.RUN_LAST, None, (str,)),
        'tags-changed': (GObject.SignalFlags.RUN_LAST, None, (str,)),
        'history-changed': (GObject.SignalFlags.RUN_LAST, None, ()),
    }

    def __init__(self, snapshot: Optional[WorkspaceSnapshot] = None,
                 config: Optional[WorkspaceConfig] = None, save_callback=None):
        super().__init__()
        self._config = config if config is not None else load_config()
        self._save_callback = save_callback
        self._state = self._normalized(snapshot or WorkspaceSnapshot.empty())
        self._history = HistoryStore(self._restore, self._config.history_limit)
        self._history.connect('changed', lambda history: self.emit('history-changed'))
        self._editor: Optional[EditorSession] = None
        self._removed_notes: dict[str, Note] = {}

    # --- Queries ---

    @property
    def config(self) -> WorkspaceConfig:
        return self._config

    @property
    def snapshot(self) -> WorkspaceSnapshot:
        return self._state

    @property
    def folders(self) -> tuple[Folder, ...]:
        return self._state.folders

    @property
    def notes(self) -> tuple[Note, ...]:
        return self._state.notes

    @property
    def tags(self) -> tuple[Tag, ...]:
        return self._state.tags

    @property
    def history(self) -> HistoryStore:
        return self._history

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def get_folder(self, folder_id) -> Optional[Folder]:
        return next((f for f in self._state.folders if f.id == folder_id), None)

    def get_note(self, note_id) -> Optional[Note]:
        return next((n for n in self._state.notes if n.id == note_id), None)

    def get_tag(self, tag_id) -> Optional[Tag]:
        return next((t for t in self._state.tags if t.id == tag_id), None)

    def resolve_tags(self, note: Note) -> list[Tag]:
        """Tags of a note, skipping ids of deleted tags."""
        by_id = {t.id: t for t in self._state.tags}
        return [by_id[t] for t in note.tags if t in by_id]

    def notes_in_folder(self, folder_id, recursive=False, include_archived=False) -> list[Note]:
        if recursive:
            ids = folder_tree.get_descendant_ids(self._state.folders, folder_id)
        else:
            ids = {folder_id}
        return [
            n for n in self._state.notes
            if n.folder in ids and (include_archived or not n.archived)
        ]

    def note_count(self, folder_id, recursive=True) -> int:
        return folder_tree.count_notes(self._state.folders, self._state.notes, folder_id, recursive)

    def tree(self, archived_view=False) -> list[folder_tree.FolderNode]:
        visible = folder_tree.visible_folders(self._state.folders, self._state.notes, archived_view)
        return folder_tree.build_tree([f for f in visible if f.id != INBOX_ID])

    def breadcrumb(self, folder_id) -> list[Folder]:
        return folder_tree.get_breadcrumb(self._state.folders, folder_id)

    def can_move_folder(self, source_id, target_id) -> bool:
        return folder_tree.can_move_folder(self._state.folders, source_id, target_id)

    def search(self, term, mode='all') -> SearchResults:
        return search(self._state.folders, self._state.notes, term, mode,
                      self._config.preview_length)

    # --- Internals ---

    def _require_folder(self, folder_id) -> Folder:
        folder = self.get_folder(folder_id)
        if folder is None:
            raise NotFound(f'No folder with id {folder_id!r}')
        return folder

    def _require_note(self, note_id) -> Note:
        note = self.get_note(note_id)
        if note is None:
            raise NotFound(f'No note with id {note_id!r}')
        return note

    def _require_tag(self, tag_id) -> Tag:
        tag = self.get_tag(tag_id)
        if tag is None:
            raise NotFound(f'No tag with id {tag_id!r}')
        return tag

    @staticmethod
    def _normalized(state: WorkspaceSnapshot) -> WorkspaceSnapshot:
        folders = folder_tree.normalize_folders(state.folders)
        known = {f.id for f in folders}
        notes = tuple(
            n if n.folder in known else replace(n, folder=INBOX_ID)
            for n in state.notes
        )
        return WorkspaceSnapshot(folders=folders, notes=notes, tags=tuple(state.tags))

    def _commit(self, kind, new_state: WorkspaceSnapshot, target_id='', record=True):
        before = self._state
        self._state = new_state
        if record:
            undo, redo = _diff(before, new_state)
            self._history.record(HistoryEntry(kind, undo, redo, target_id))
        log.debug('%s %s', kind, target_id)
        self._notify(before, target_id)
        self._save()

    def _restore(self, changeset: Changeset):
        before = self._state
        self._state = self._revive_content(before, _apply(before, changeset), changeset)
        self._notify(before, '')
        self._save()

    def _revive_content(self, before, state, changeset: Changeset) -> WorkspaceSnapshot:
        """
        Carry silently saved content across a note's removal and return.

        Undoing a note's creation drops the note together with anything the
        editor saved into it; redoing the creation brings that content back.
        """
        changes = changeset.changes.get('notes', {})
        live = {n.id: n for n in before.notes}
        for note_id, value in changes.items():
            if value is None and note_id in live:
                self._removed_notes[note_id] = live[note_id]

        revived = {}
        for note_id, value in changes.items():
            if value is None or note_id in live or note_id not in self._removed_notes:
                continue
            removed = self._removed_notes.pop(note_id)
            if removed.content != value[1].content:
                revived[note_id] = removed
        if not revived:
            return state
        return state.evolve(notes=tuple(
            replace(n, content=revived[n.id].content, updated_at=revived[n.id].updated_at)
            if n.id in revived else n
            for n in state.notes
        ))

    def _notify(self, before: WorkspaceSnapshot, target_id):
        if before.folders is not self._state.folders:
            self.emit('folders-changed', target_id)
        if before.notes is not self._state.notes:
            self.emit('notes-changed', target_id)
        if before.tags is not self._state.tags:
            self.emit('tags-changed', target_id)

    def _save(self):
        if self._save_callback is not None:
            self._save_callback(self._state)

    def _replace_folder(self, folder: Folder) -> tuple[Folder, ...]:
        return tuple(folder if f.id == folder.id else f for f in self._state.folders)

    def _replace_note(self, note: Note) -> tuple[Note, ...]:
        return tuple(note if n.id == note.id else n for n in self._state.notes)

    def _replace_tag(self, tag: Tag) -> tuple[Tag, ...]:
        return tuple(tag if t.id == tag.id else t for t in self._state.tags)

    def _flush_editor(self, note_id=None):
        if self._editor is not None and note_id in (None, self._editor.note_id):
            self._editor.flush()

    # --- Folders ---

    @_mutator
    def add_folder(self, name, parent_id=None, icon=None) -> Folder:
        name = _clean_name(name)
        folders = self._state.folders
        if parent_id == INBOX_ID:
            raise InvalidMove('The Inbox cannot contain folders')
        if parent_id is not None:
            self._require_folder(parent_id)
        folder_tree.validate_folder_name(folders, name, parent_id)

        folder = Folder(
            id=_new_id(),
            name=name,
            parent_id=parent_id,
            icon=icon,
            order=folder_tree.next_order(folders, parent_id),
        )
        self._commit('create-folder', self._state.evolve(folders=folders + (folder,)), folder.id)
        return folder

    @_mutator
    def update_folder(self, folder_id, name=None, icon=None) -> Folder:
        folder = self._require_folder(folder_id)
        changes = {}
        if name is not None:
            name = _clean_name(name)
            if name != folder.name:
                if folder.is_inbox:
                    raise ProtectedEntity('The Inbox cannot be renamed')
                folder_tree.validate_folder_name(
                    self._state.folders, name, folder.parent_id, exclude_id=folder_id)
                changes['name'] = name
        if icon is not None and icon != folder.icon:
            changes['icon'] = icon
        if not changes:
            return folder

        updated = replace(folder, updated_at=now_iso(), **changes)
        self._commit('update-folder', self._state.evolve(folders=self._replace_folder(updated)), folder_id)
        return updated

    @_mutator
    def delete_folder(self, folder_id) -> int:
        """Delete a folder and its subfolders. Returns how many notes went to the Inbox."""
        self._flush_editor()
        folders, notes = folder_tree.delete_folder(self._state.folders, self._state.notes, folder_id)
        moved = sum(1 for old, new in zip(self._state.notes, notes) if old is not new)
        self._commit('delete-folder', self._state.evolve(folders=folders, notes=notes), folder_id)
        return moved

    @_mutator
    def move_folder(self, source_id, target_id) -> Folder:
        folder = self._require_folder(source_id)
        if source_id == INBOX_ID:
            raise ProtectedEntity('The Inbox cannot be moved')
        if target_id is not None:
            self._require_folder(target_id)
        if not folder_tree.can_move_folder(self._state.folders, source_id, target_id):
            raise InvalidMove(f'Cannot move "{folder.name}" there')
        folder_tree.validate_folder_name(self._state.folders, folder.name, target_id, exclude_id=source_id)

        folders = folder_tree.move_folder(self._state.folders, source_id, target_id)
        self._commit('move-folder', self._state.evolve(folders=folders), source_id)
        return next(f for f in folders if f.id == source_id)

    def _set_folder_archived(self, folder_id, archived, kind) -> Folder:
        folder = self._require_folder(folder_id)
        if folder.is_inbox:
            raise ProtectedEntity('The Inbox cannot be archived')
        if folder.archived == archived:
            return folder
        updated = replace(folder, archived=archived, updated_at=now_iso())
        self._commit(kind, self._state.evolve(folders=self._replace_folder(updated)), folder_id)
        return updated

    @_mutator
    def archive_folder(self, folder_id) -> Folder:
        return self._set_folder_archived(folder_id, True, 'archive-folder')

    @_mutator
    def unarchive_folder(self, folder_id) -> Folder:
        return self._set_folder_archived(folder_id, False, 'unarchive-folder')

    @_mutator
    def reorder_folder(self, folder_id, index) -> Folder:
        """Move a folder to position ``index`` among its siblings."""
        folder = self._require_folder(folder_id)
        if folder.is_inbox:
            raise ProtectedEntity('The Inbox cannot be reordered')
        siblings = [f for f in folder_tree.get_children(self._state.folders, folder.parent_id)
                    if f.id != folder_id and not f.is_inbox]
        index = max(0, min(index, len(siblings)))
        siblings.insert(index, folder)
        orders = {f.id: i for i, f in enumerate(siblings)}
        folders = tuple(
            replace(f, order=orders[f.id]) if f.id in orders and f.order != orders[f.id] else f
            for f in self._state.folders
        )
        if folders == self._state.folders:
            return folder
        self._commit('reorder-folder', self._state.evolve(folders=folders), folder_id)
        return next(f for f in folders if f.id == folder_id)

    # --- Notes ---

    @_mutator
    def add_note(self, title='', content='', folder=INBOX_ID, tags=()) -> Note:
        self._require_folder(folder)
        now = now_iso()
        note = Note(
            id=_new_id(),
            title=title,
            content=content,
            folder=folder,
            tags=tuple(tags),
            created_at=now,
            updated_at=now,
        )
        self._commit('create-note', self._state.evolve(notes=self._state.notes + (note,)), note.id)
        return note

    @_mutator
    def update_note(self, note_id, patch: dict, record_history=True) -> Note:
        """
        Apply ``patch`` to a note.

        Editor autosave passes ``record_history=False`` so that typing never
        shows up in undo history.
        """
        unknown = set(patch) - NOTE_FIELDS
        if unknown:
            raise ValueError(f'Cannot update note fields: {", ".join(sorted(unknown))}')
        note = self._require_note(note_id)
        if 'folder' in patch:
            self._require_folder(patch['folder'])
        changes = dict(patch)
        if 'tags' in changes:
            changes['tags'] = tuple(changes['tags'])

        updated = replace(note, updated_at=now_iso(), **changes)
        self._commit('update-note', self._state.evolve(notes=self._replace_note(updated)),
                     note_id, record=record_history)
        return updated

    @_mutator
    def move_note(self, note_id, folder_id) -> Note:
        note = self._require_note(note_id)
        self._require_folder(folder_id)
        if note.folder == folder_id:
            return note
        updated = replace(note, folder=folder_id, updated_at=now_iso())
        self._commit('move-note', self._state.evolve(notes=self._replace_note(updated)), note_id)
        return updated

    def _set_note_archived(self, note_id, archived, kind) -> Note:
        note = self._require_note(note_id)
        if note.archived == archived:
            return note
        updated = replace(note, archived=archived, updated_at=now_iso())
        self._commit(kind, self._state.evolve(notes=self._replace_note(updated)), note_id)
        return updated

    @_mutator
    def archive_note(self, note_id) -> Note:
        return self._set_note_archived(note_id, True, 'archive-note')

    @_mutator
    def unarchive_note(self, note_id) -> Note:
        return self._set_note_archived(note_id, False, 'unarchive-note')

    @_mutator
    def delete_note(self, note_id) -> Note:
        self._flush_editor(note_id)
        note = self._require_note(note_id)
        if self._editor is not None and self._editor.note_id == note_id:
            self._editor.close()
            self._editor = None
        notes = tuple(n for n in self._state.notes if n.id != note_id)
        self._commit('delete-note', self._state.evolve(notes=notes), note_id)
        return note

    @_mutator
    def restore_note(self, note: Note) -> Note:
        """Put back a deleted or imported note, replacing one with the same id."""
        if self.get_folder(note.folder) is None:
            note = replace(note, folder=INBOX_ID)
        if self.get_note(note.id) is not None:
            notes = self._replace_note(note)
        else:
            notes = self._state.notes + (note,)
        self._commit('restore-note', self._state.evolve(notes=notes), note.id)
        return note

    def _set_tags_of(self, note, tags, kind) -> Note:
        tags = tuple(dict.fromkeys(tags))
        if tags == note.tags:
            return note
        updated = replace(note, tags=tags, updated_at=now_iso())
        self._commit(kind, self._state.evolve(notes=self._replace_note(updated)), note.id)
        return updated

    @_mutator
    def set_note_tags(self, note_id, tag_ids) -> Note:
        return self._set_tags_of(self._require_note(note_id), tag_ids, 'tag-note')

    @_mutator
    def add_tag_to_note(self, note_id, tag_id) -> Note:
        note = self._require_note(note_id)
        self._require_tag(tag_id)
        return self._set_tags_of(note, note.tags + (tag_id,), 'tag-note')

    @_mutator
    def remove_tag_from_note(self, note_id, tag_id) -> Note:
        note = self._require_note(note_id)
        return self._set_tags_of(note, [t for t in note.tags if t != tag_id], 'untag-note')

    @_mutator
    def set_reminder(self, note_id, reminder: Optional[Reminder]) -> Note:
        note = self._require_note(note_id)
        if note.reminder == reminder:
            return note
        updated = replace(note, reminder=reminder, updated_at=now_iso())
        self._commit('set-reminder', self._state.evolve(notes=self._replace_note(updated)), note_id)
        return updated

    # --- Tags ---

    def _validate_tag_name(self, name, exclude_id=None):
        for t in self._state.tags:
            if t.id != exclude_id and t.name.lower() == name.lower():
                raise DuplicateName(f'A tag named "{t.name}" already exists')

    @_mutator
    def add_tag(self, name, color=None, icon=None) -> Tag:
        name = _clean_name(name)
        self._validate_tag_name(name)
        tag = Tag(id=_new_id(), name=name, color=resolve_color(color), icon=icon)
        self._commit('create-tag', self._state.evolve(tags=self._state.tags + (tag,)), tag.id)
        return tag

    @_mutator
    def update_tag(self, tag_id, name=None, color=None, icon=None) -> Tag:
        tag = self._require_tag(tag_id)
        changes = {}
        if name is not None:
            name = _clean_name(name)
            if name != tag.name:
                self._validate_tag_name(name, exclude_id=tag_id)
                changes['name'] = name
        if color is not None and resolve_color(color) != tag.color:
            changes['color'] = resolve_color(color)
        if icon is not None and icon != tag.icon:
            changes['icon'] = icon
        if not changes:
            return tag
        updated = replace(tag, **changes)
        self._commit('update-tag', self._state.evolve(tags=self._replace_tag(updated)), tag_id)
        return updated

    @_mutator
    def delete_tag(self, tag_id) -> Tag:
        tag = self._require_tag(tag_id)
        tags = tuple(t for t in self._state.tags if t.id != tag_id)
        notes = tuple(
            replace(n, tags=tuple(t for t in n.tags if t != tag_id)) if tag_id in n.tags else n
            for n in self._state.notes
        )
        self._commit('delete-tag', self._state.evolve(tags=tags, notes=notes), tag_id)
        return tag

    # --- Undo / redo ---

    def undo(self) -> Optional[HistoryEntry]:
        self._flush_editor()
        entry = self._history.undo()
        self._reload_editor()
        return entry

    def redo(self) -> Optional[HistoryEntry]:
        self._flush_editor()
        entry = self._history.redo()
        self._reload_editor()
        return entry

    def _reload_editor(self):
        if self._editor is None:
            return
        note = self.get_note(self._editor.note_id)
        if note is not None:
            self._editor.reload(note.content)

    # --- Wholesale replacement, for backup import ---

    def set_folders(self, folders):
        """Replace every folder. Notes left without a folder go to the Inbox."""
        self._replace_state(self._state.evolve(folders=tuple(folders)))

    def set_notes(self, notes):
        self._replace_state(self._state.evolve(notes=tuple(notes)))

    def set_tags(self, tags):
        self._replace_state(self._state.evolve(tags=tuple(tags)))

    def _replace_state(self, state: WorkspaceSnapshot):
        if self._editor is not None:
            self._editor.close()
            self._editor = None
        before = self._state
        self._state = self._normalized(state)
        self._history.clear()
        self._removed_notes.clear()
        log.info('Workspace replaced: %d folders, %d notes, %d tags',
                 len(self._state.folders), len(self._state.notes), len(self._state.tags))
        self._notify(before, '')
        self._save()

    def import_notes(self, notes, mode=ImportMode.MERGE) -> ImportResult:
        mode = ImportMode(mode)
        notes = list(notes)
        if mode is ImportMode.REPLACE:
            self.set_notes(notes)
            return ImportResult(imported=len(notes), skipped=0)

        existing = {n.id for n in self._state.notes}
        known = {f.id for f in self._state.folders}
        added = []
        for note in notes:
            if note.id in existing:
                continue
            existing.add(note.id)
            added.append(note if note.folder in known else replace(note, folder=INBOX_ID))
        if added:
            self._commit('import-notes', self._state.evolve(notes=self._state.notes + tuple(added)))
        log.info('Imported %d notes, skipped %d', len(added), len(notes) - len(added))
        return ImportResult(imported=len(added), skipped=len(notes) - len(added))

    # --- Editor ---

    @property
    def editor(self) -> Optional[EditorSession]:
        return self._editor

    @_mutator
    def open_editor(self, note_id) -> EditorSession:
        """Open ``note_id`` for editing, flushing and closing any other editor."""
        self._require_note(note_id)
        self.close_editor()
        self._editor = EditorSession(self, note_id, self._config.autosave_delay_ms)
        return self._editor

    def close_editor(self):
        if self._editor is not None:
            editor, self._editor = self._editor, None
            editor.close()

    # --- Drag and drop wiring ---

    def note_drag_source(self, coordinator: DragCoordinator, note_id) -> DragSource[Note]:
        note = self.get_note(note_id)
        return coordinator.draggable(NOTE_DRAG_TYPE, note_id, note)

    def folder_drag_source(self, coordinator: DragCoordinator, folder_id) -> DragSource[Folder]:
        """Folder rows need a press-and-hold before they may be dragged."""
        folder = self.get_folder(folder_id)
        gate = HoldGate(self._config.drag_hold_delay_ms, enabled=lambda: folder_id != INBOX_ID)
        return coordinator.draggable(FOLDER_DRAG_TYPE, folder_id, folder,
                                     disabled=folder_id == INBOX_ID, gate=gate)

    def folder_drop_target(self, coordinator: DragCoordinator, folder_id) -> DropRouter:
        """A folder row: notes are filed into it, folders become its children."""
        router = DropRouter(coordinator)
        router.add(
            NOTE_DRAG_TYPE,
            on_drop=lambda item: self.move_note(item.id, folder_id),
            can_drop=lambda item: item.data.folder != folder_id,
        )
        router.add(
            FOLDER_DRAG_TYPE,
            on_drop=lambda item: self.move_folder(item.id, folder_id),
            can_drop=lambda item: self.can_move_folder(item.id, folder_id),
        )
        return router

    def root_drop_zone(self, coordinator: DragCoordinator) -> DropZone[Folder]:
        return coordinator.drop_zone(
            [FOLDER_DRAG_TYPE],
            on_drop=lambda item: self.move_folder(item.id, None),
            can_drop=lambda item: self.can_move_folder(item.id, None),
        )
