# SPDX-License-Identifier: GPL-3.0-or-later
"""
On-demand search over notes and folders.

Block document format, as written by the editor:

{
  "<block id>": {
    "meta": {"props": {"url": "https://..."}},
    "value": [
      {"children": [
        {"text": "hello "},
        {"text": "link", "props": {"url": "https://..."}}
      ]}
    ]
  }
}

Only this minimal shape is read. Anything else is searched as raw text.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from notespace.constants import INBOX_NAME, PREVIEW_LENGTH, UNTITLED
from notespace.errors import ParseFailure
from notespace.models import Folder, Note

log = logging.getLogger(__name__)

SEARCH_MODES = ('all', 'folders', 'notes')


@dataclass(frozen=True)
class NoteMatch:
    id: str
    title: str
    folder_id: str
    folder_name: str
    created_at: str
    archived: bool
    content_preview: str
    type: str = 'note'


@dataclass(frozen=True)
class FolderMatch:
    id: str
    name: str
    parent_name: Optional[str]
    note_count: int
    type: str = 'folder'


@dataclass
class SearchResults:
    folders: list[FolderMatch] = field(default_factory=list)
    notes: list[NoteMatch] = field(default_factory=list)
    mode: str = 'all'

    @property
    def all(self) -> list:
        return [*self.folders, *self.notes]

    @property
    def results(self) -> list:
        if self.mode == 'folders':
            return list(self.folders)
        if self.mode == 'notes':
            return list(self.notes)
        return self.all

    @property
    def folder_count(self) -> int:
        return len(self.folders)

    @property
    def note_count(self) -> int:
        return len(self.notes)


def _parse_block_map(content) -> dict:
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, TypeError, RecursionError) as e:
        raise ParseFailure(str(e)) from e
    if not isinstance(data, dict):
        raise ParseFailure(f'Expected a block map, got {type(data).__name__}')
    return data


def _block_text(block) -> str:
    text = ''
    meta = block.get('meta')
    if isinstance(meta, dict):
        url = (meta.get('props') or {}).get('url')
        if url:
            text += f'{url} '
    for element in block['value']:
        if not isinstance(element, dict):
            continue
        children = element.get('children') or []
        if not isinstance(children, list):
            raise ParseFailure(f'Expected a list of children, got {type(children).__name__}')
        for child in children:
            if not isinstance(child, dict):
                continue
            if child.get('text') is not None:
                text += str(child['text'])
            url = (child.get('props') or {}).get('url')
            if url:
                text += f'{url} '
    return text.strip()


def extract_blocks(content) -> list[str]:
    """Plain text of each top-level block, or ``[content]`` if unreadable."""
    try:
        blocks = _parse_block_map(content)
        texts = []
        for block in blocks.values():
            if not isinstance(block, dict) or not isinstance(block.get('value'), list):
                continue
            text = _block_text(block)
            if text:
                texts.append(text)
        return texts
    except (ParseFailure, AttributeError, TypeError) as e:
        log.debug('Searching content as raw text: %s', e)
        return [content]


def make_preview(text, length=PREVIEW_LENGTH) -> str:
    preview = (text or '').strip()
    if len(preview) > length:
        return f'{preview[:length]}...'
    return preview


def _folder_names(folders):
    return {f.id: f.name for f in folders}


def search_notes(notes: Sequence[Note], term, folders: Sequence[Folder] = (),
                 preview_length=PREVIEW_LENGTH) -> list[NoteMatch]:
    if not term or not term.strip():
        return []
    needle = term.lower()
    names = _folder_names(folders)

    matches = []
    for note in notes:
        matching_block = next(
            (b for b in extract_blocks(note.content) if needle in b.lower()),
            None,
        )
        if matching_block is None and needle not in note.title.lower():
            continue
        matches.append(NoteMatch(
            id=note.id,
            title=note.title or UNTITLED,
            folder_id=note.folder,
            folder_name=names.get(note.folder, INBOX_NAME),
            created_at=note.created_at,
            archived=note.archived,
            content_preview=make_preview(matching_block, preview_length),
        ))
    return matches


def search_folders(folders: Sequence[Folder], term, notes: Sequence[Note] = ()) -> list[FolderMatch]:
    if not term or not term.strip():
        return []
    needle = term.lower()
    names = _folder_names(folders)

    active_counts = {}
    for n in notes:
        if not n.archived:
            active_counts[n.folder] = active_counts.get(n.folder, 0) + 1

    return [
        FolderMatch(
            id=f.id,
            name=f.name,
            parent_name=names.get(f.parent_id) if f.parent_id else None,
            note_count=active_counts.get(f.id, 0),
        )
        for f in folders
        if needle in f.name.lower()
    ]


def search(folders: Sequence[Folder], notes: Sequence[Note], term, mode='all',
           preview_length=PREVIEW_LENGTH) -> SearchResults:
    if mode not in SEARCH_MODES:
        raise ValueError(f'Unknown search mode: {mode!r}')
    return SearchResults(
        folders=search_folders(folders, term, notes),
        notes=search_notes(notes, term, folders, preview_length),
        mode=mode,
    )


def next_mode(mode) -> str:
    """Cycle all -> folders -> notes -> all."""
    return SEARCH_MODES[(SEARCH_MODES.index(mode) + 1) % len(SEARCH_MODES)]
