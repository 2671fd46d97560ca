# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timedelta
from typing import Optional

from notespace.constants import INBOX_ID, INBOX_NAME, REMINDER_UNITS

_MINUTES_PER_UNIT = {'minutes': 1, 'hours': 60, 'days': 60 * 24}


def now_iso() -> str:
    return datetime.now().isoformat()


@dataclass(frozen=True)
class ReminderNotification:
    unit: str = 'minutes'
    value: int = 15

    def __post_init__(self):
        if self.unit not in REMINDER_UNITS:
            raise ValueError(f'Unknown reminder unit: {self.unit!r}')
        if self.value <= 0:
            raise ValueError('Reminder offset must be positive')

    @property
    def minutes(self) -> int:
        return self.value * _MINUTES_PER_UNIT[self.unit]


@dataclass(frozen=True)
class Reminder:
    date_time: str
    notifications: tuple[ReminderNotification, ...] = ()

    def notification_times(self) -> list[datetime]:
        """Instants at which each "notify N before" offset is due."""
        at = datetime.fromisoformat(self.date_time)
        return [at - timedelta(minutes=n.minutes) for n in self.notifications]

    def is_due(self, now: datetime, grace=timedelta(seconds=30)) -> bool:
        return any(abs(t - now) <= grace for t in self.notification_times())


@dataclass(frozen=True)
class Folder:
    id: str
    name: str
    parent_id: Optional[str] = None
    icon: Optional[str] = None
    archived: bool = False
    order: int = 0
    created_at: str = field(default_factory=now_iso)
    updated_at: Optional[str] = None

    @property
    def is_inbox(self) -> bool:
        return self.id == INBOX_ID


@dataclass(frozen=True)
class Note:
    id: str
    title: str
    content: str  # JSON-serialized block document
    folder: str = INBOX_ID
    tags: tuple[str, ...] = ()
    archived: bool = False
    created_at: str = field(default_factory=now_iso)
    updated_at: str = field(default_factory=now_iso)
    reminder: Optional[Reminder] = None

    @property
    def preview_text(self) -> str:
        """Plain text preview of the first blocks of content."""
        if not self.content:
            return ''
        # notespace.search imports this module
        from notespace.search import extract_blocks
        return '\n'.join(extract_blocks(self.content))[:200]


@dataclass(frozen=True)
class Tag:
    id: str
    name: str
    color: str
    icon: Optional[str] = None


def make_inbox() -> Folder:
    return Folder(id=INBOX_ID, name=INBOX_NAME, parent_id=None, order=0)


@dataclass(frozen=True)
class WorkspaceSnapshot:
    folders: tuple[Folder, ...] = ()
    notes: tuple[Note, ...] = ()
    tags: tuple[Tag, ...] = ()

    @classmethod
    def empty(cls) -> 'WorkspaceSnapshot':
        return cls(folders=(make_inbox(),))

    def evolve(self, **changes) -> 'WorkspaceSnapshot':
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            'folders': [asdict(f) for f in self.folders],
            'notes': [asdict(n) for n in self.notes],
            'tags': [asdict(t) for t in self.tags],
        }
