# SPDX-License-Identifier: GPL-3.0-or-later
"""
Pure functions over a flat collection of folders.

Folders form a forest through ``parent_id``. Nothing here mutates its
arguments: every operation returns a fresh tuple, or raises one of the
structural errors from ``notespace.errors`` and leaves the input untouched.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Optional, Sequence

from notespace.constants import INBOX_ID, INBOX_NAME
from notespace.errors import (
    DuplicateName,
    InvalidMove,
    NotFound,
    ProtectedEntity,
)
from notespace.models import Folder, Note, make_inbox, now_iso

log = logging.getLogger(__name__)


@dataclass
class FolderNode:
    folder: Folder
    children: list['FolderNode'] = field(default_factory=list)
    depth: int = 0


def _by_id(folders):
    return {f.id: f for f in folders}


def _children_map(folders):
    children = {}
    for f in folders:
        children.setdefault(f.parent_id, []).append(f)
    for siblings in children.values():
        siblings.sort(key=lambda f: f.order)
    return children


def build_tree(folders: Sequence[Folder], parent_id=None, depth=0) -> list[FolderNode]:
    children = _children_map(folders)

    def build(pid, d, seen):
        nodes = []
        for f in children.get(pid, []):
            if f.id in seen:
                continue
            nodes.append(FolderNode(f, build(f.id, d + 1, seen | {f.id}), d))
        return nodes

    return build(parent_id, depth, frozenset())


def get_children(folders: Sequence[Folder], folder_id) -> list[Folder]:
    return _children_map(folders).get(folder_id, [])


def get_descendant_ids(folders: Sequence[Folder], folder_id) -> set[str]:
    """Ids of the whole subtree rooted at ``folder_id``, itself included."""
    children = _children_map(folders)
    result = {folder_id}
    stack = [folder_id]
    while stack:
        current = stack.pop()
        for child in children.get(current, []):
            if child.id not in result:
                result.add(child.id)
                stack.append(child.id)
    return result


def get_ancestors(folders: Sequence[Folder], folder_id) -> list[Folder]:
    """Ancestors nearest first."""
    index = _by_id(folders)
    ancestors = []
    seen = {folder_id}
    current = index.get(folder_id)
    while current is not None and current.parent_id is not None:
        if current.parent_id in seen:
            break
        parent = index.get(current.parent_id)
        if parent is None:
            break
        ancestors.append(parent)
        seen.add(parent.id)
        current = parent
    return ancestors


def get_breadcrumb(folders: Sequence[Folder], folder_id) -> list[Folder]:
    folder = _by_id(folders).get(folder_id)
    path = list(reversed(get_ancestors(folders, folder_id)))
    if folder is not None:
        path.append(folder)
    return path


def get_depth(folders: Sequence[Folder], folder_id) -> int:
    return len(get_ancestors(folders, folder_id))


def can_move_folder(folders: Sequence[Folder], source_id, target_id) -> bool:
    if target_id == source_id:
        return False
    if source_id == INBOX_ID or target_id == INBOX_ID:
        return False
    index = _by_id(folders)
    source = index.get(source_id)
    if source is None:
        return False
    if target_id is None:
        return source.parent_id is not None
    if target_id not in index:
        return False
    return target_id not in get_descendant_ids(folders, source_id)


def next_order(folders: Sequence[Folder], parent_id) -> int:
    return len(get_children(folders, parent_id))


def move_folder(folders: Sequence[Folder], source_id, target_id) -> tuple[Folder, ...]:
    if not can_move_folder(folders, source_id, target_id):
        raise InvalidMove(f'Cannot move folder {source_id!r} into {target_id!r}')
    order = next_order(folders, target_id)
    now = now_iso()
    return tuple(
        replace(f, parent_id=target_id, order=order, updated_at=now)
        if f.id == source_id else f
        for f in folders
    )


def delete_folder(folders: Sequence[Folder], notes: Sequence[Note], folder_id):
    """Remove a folder with its whole subtree; their notes go to the Inbox."""
    if folder_id == INBOX_ID:
        raise ProtectedEntity('The Inbox cannot be deleted')
    if folder_id not in _by_id(folders):
        raise NotFound(f'No folder with id {folder_id!r}')

    removed = get_descendant_ids(folders, folder_id)
    new_folders = tuple(f for f in folders if f.id not in removed)
    now = now_iso()
    new_notes = tuple(
        replace(n, folder=INBOX_ID, updated_at=now) if n.folder in removed else n
        for n in notes
    )
    log.debug('Deleted folder %s with %d descendants', folder_id, len(removed) - 1)
    return new_folders, new_notes


def find_duplicate_name(folders: Sequence[Folder], name, parent_id, exclude_id=None) -> Optional[Folder]:
    # Exact, case-sensitive match among siblings
    for f in folders:
        if f.name == name and f.parent_id == parent_id and f.id != exclude_id:
            return f
    return None


def validate_folder_name(folders: Sequence[Folder], name, parent_id, exclude_id=None):
    if find_duplicate_name(folders, name, parent_id, exclude_id) is None:
        return
    if parent_id is not None:
        parent = _by_id(folders).get(parent_id)
        location = f'in "{parent.name if parent else parent_id}"'
    else:
        location = 'at root level'
    raise DuplicateName(f'A folder named "{name}" already exists {location}')


def reorder_folders(folders: Sequence[Folder]) -> tuple[Folder, ...]:
    """Renumber ``order`` within each sibling group as 0..n-1."""
    renumbered = {}
    for siblings in _children_map(folders).values():
        for index, f in enumerate(siblings):
            renumbered[f.id] = index
    return tuple(
        f if f.order == renumbered[f.id] else replace(f, order=renumbered[f.id])
        for f in folders
    )


def normalize_folders(folders: Sequence[Folder]) -> tuple[Folder, ...]:
    """
    Repair a folder collection coming from outside the engine.

    Guarantees a parentless, unarchived Inbox, unique ids, parents that
    exist and an acyclic parent graph. Folders with a missing parent or
    caught in a cycle are moved to the root.
    """
    seen = {}
    for f in folders:
        if f.id in seen:
            log.info('Dropping duplicate folder id %s', f.id)
            continue
        seen[f.id] = f

    inbox = seen.get(INBOX_ID)
    if inbox is None:
        seen = {INBOX_ID: make_inbox(), **seen}
    elif inbox.parent_id is not None or inbox.archived:
        seen[INBOX_ID] = replace(inbox, parent_id=None, archived=False)

    for folder_id in list(seen):
        f = seen[folder_id]
        if f.parent_id is None:
            continue
        if f.parent_id not in seen or f.parent_id == INBOX_ID:
            log.info('Re-rooting folder %s with invalid parent %s', f.id, f.parent_id)
            seen[folder_id] = replace(f, parent_id=None)
            continue
        # Walk up; coming back to ourselves means we sit on a cycle.
        # Cycles further up are broken when their own members are visited.
        visited = {folder_id}
        current = seen[f.parent_id]
        while current.parent_id is not None and current.parent_id in seen:
            if current.id in visited:
                break
            visited.add(current.id)
            current = seen[current.parent_id]
        if current.id == folder_id:
            log.info('Breaking folder cycle at %s', f.id)
            seen[folder_id] = replace(f, parent_id=None)

    return tuple(seen.values())


def migrate_legacy_folders(notes_folders: dict, subfolders: Sequence[dict] = ()) -> list[Folder]:
    """
    Flatten the old two-tier folder/subfolder shape.

    ``notes_folders`` maps ids to ``{id, name, parent?, children?}`` records,
    ``subfolders`` is a list of ``{id, name, parent}`` records. Both may
    describe the same subfolder.
    """
    flat = {}

    def add(record, parent_id, order):
        folder_id = record['id']
        if folder_id in flat:
            return
        flat[folder_id] = Folder(
            id=folder_id,
            name=record.get('name') or (INBOX_NAME if folder_id == INBOX_ID else folder_id),
            parent_id=None if folder_id == INBOX_ID else parent_id,
            icon=record.get('icon'),
            order=order,
        )
        for index, child in enumerate(record.get('children') or []):
            add(child, folder_id, index)

    for index, record in enumerate(notes_folders.values()):
        add(record, record.get('parent'), index)
    for record in subfolders:
        parent_id = record.get('parent')
        add(record, parent_id, next_order(list(flat.values()), parent_id))

    return list(normalize_folders(list(flat.values())))


def count_notes(folders: Sequence[Folder], notes: Sequence[Note], folder_id,
                recursive=True, include_archived=False) -> int:
    ids = get_descendant_ids(folders, folder_id) if recursive else {folder_id}
    return sum(
        1 for n in notes
        if n.folder in ids and (include_archived or not n.archived)
    )


def visible_folders(folders: Sequence[Folder], notes: Sequence[Note], archived_view=False) -> list[Folder]:
    """Folders shown in the active view, or in the archive view."""
    if not archived_view:
        return [f for f in folders if not f.archived]
    with_archived_notes = {n.folder for n in notes if n.archived}
    return [f for f in folders if f.archived or f.id in with_archived_notes]
