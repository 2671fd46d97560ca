# SPDX-License-Identifier: GPL-3.0-or-later

import logging
from dataclasses import dataclass

from gi.repository import Gio

from notespace.constants import (
    APP_ID,
    AUTOSAVE_DELAY_MS,
    DRAG_HOLD_DELAY_MS,
    MAX_HISTORY_SIZE,
    PREVIEW_LENGTH,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkspaceConfig:
    history_limit: int = MAX_HISTORY_SIZE
    autosave_delay_ms: int = AUTOSAVE_DELAY_MS
    drag_hold_delay_ms: int = DRAG_HOLD_DELAY_MS
    preview_length: int = PREVIEW_LENGTH


def _get_settings():
    schema_source = Gio.SettingsSchemaSource.get_default()
    if schema_source and schema_source.lookup(APP_ID, True):
        return Gio.Settings.new(APP_ID)
    return None


def load_config(settings=None) -> WorkspaceConfig:
    """Read tunables from GSettings, falling back to built-in defaults."""
    if settings is None:
        settings = _get_settings()
    if settings is None:
        log.debug('No GSettings schema %s installed, using defaults', APP_ID)
        return WorkspaceConfig()
    return WorkspaceConfig(
        history_limit=settings.get_int('history-limit'),
        autosave_delay_ms=settings.get_int('autosave-delay'),
        drag_hold_delay_ms=settings.get_int('drag-hold-delay'),
        preview_length=settings.get_int('preview-length'),
    )
