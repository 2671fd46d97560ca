# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from gi.repository import GObject

from notespace.constants import MAX_HISTORY_SIZE

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    """One undoable user action: the state before it and the state after it."""
    kind: str
    before: Any
    after: Any
    target_id: str = ''
    timestamp: float = field(default_factory=time.time)


class HistoryStore(GObject.Object):
    """
    Bounded undo/redo stacks.

    The store knows nothing about what ``before``/``after`` hold; restoring
    one of them is delegated to the ``apply`` callback given by the owner.
    """

    __gsignals__ = {
        'changed': (GObject.SignalFlags.RUN_LAST, None, ()),
    }

    def __init__(self, apply: Callable[[Any], None], limit=MAX_HISTORY_SIZE):
        super().__init__()
        if limit < 1:
            raise ValueError('History limit must be at least 1')
        self._apply = apply
        self._limit = limit
        self._past: list[HistoryEntry] = []
        self._future: list[HistoryEntry] = []

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    @property
    def undo_kind(self) -> Optional[str]:
        return self._past[-1].kind if self._past else None

    @property
    def redo_kind(self) -> Optional[str]:
        return self._future[-1].kind if self._future else None

    def __len__(self):
        return len(self._past)

    def record(self, entry: HistoryEntry):
        self._past.append(entry)
        if len(self._past) > self._limit:
            del self._past[:len(self._past) - self._limit]
        self._future.clear()
        log.debug('Recorded %s (%d undoable)', entry.kind, len(self._past))
        self.emit('changed')

    def undo(self) -> Optional[HistoryEntry]:
        if not self._past:
            return None
        entry = self._past.pop()
        self._apply(entry.before)
        self._future.append(entry)
        log.debug('Undid %s', entry.kind)
        self.emit('changed')
        return entry

    def redo(self) -> Optional[HistoryEntry]:
        if not self._future:
            return None
        entry = self._future.pop()
        self._apply(entry.after)
        self._past.append(entry)
        log.debug('Redid %s', entry.kind)
        self.emit('changed')
        return entry

    def clear(self):
        self._past.clear()
        self._future.clear()
        self.emit('changed')
