# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass
from typing import Any, Optional


class WorkspaceError(Exception):
    """Base class for structural errors raised by the workspace engine."""


class InvalidMove(WorkspaceError):
    """A move would create a cycle or target a protected folder."""


class ProtectedEntity(WorkspaceError):
    """Attempt to delete, rename, move or archive the Inbox."""


ProtectedFolder = ProtectedEntity


class DuplicateName(WorkspaceError):
    pass


class InvalidName(WorkspaceError):
    pass


class NotFound(WorkspaceError):
    pass


class ParseFailure(WorkspaceError):
    """Content could not be read as a block document. Never leaves search."""


@dataclass(frozen=True)
class MutationResult:
    value: Any = None
    error: Optional[WorkspaceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        return str(self.error) if self.error is not None else ''

    def __bool__(self):
        return self.ok
