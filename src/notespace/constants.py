# SPDX-License-Identifier: GPL-3.0-or-later

APP_ID = 'io.github.notespace.Workspace'

INBOX_ID = 'inbox'
INBOX_NAME = 'Inbox'
UNTITLED = 'Untitled'

MAX_HISTORY_SIZE = 100
AUTOSAVE_DELAY_MS = 500
DRAG_HOLD_DELAY_MS = 200
PREVIEW_LENGTH = 120

NOTE_DRAG_TYPE = 'note'
FOLDER_DRAG_TYPE = 'folder'

REMINDER_UNITS = ('minutes', 'hours', 'days')
