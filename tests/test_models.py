import json
from datetime import datetime, timedelta

import pytest

from notespace.colors import DEFAULT_TAG_COLOR, resolve_color
from notespace.config import WorkspaceConfig, load_config
from notespace.errors import MutationResult, NotFound
from notespace.models import Note, Reminder, ReminderNotification, WorkspaceSnapshot


def test_reminder_notification_times() -> None:
    reminder = Reminder(
        '2026-06-12T14:30:00',
        (ReminderNotification('minutes', 15), ReminderNotification('hours', 1),
         ReminderNotification('days', 2)),
    )
    at = datetime(2026, 6, 12, 14, 30)

    assert reminder.notification_times() == [
        at - timedelta(minutes=15),
        at - timedelta(hours=1),
        at - timedelta(days=2),
    ]
    assert reminder.is_due(at - timedelta(minutes=15, seconds=10))
    assert not reminder.is_due(at)


@pytest.mark.parametrize('unit, value', [('weeks', 1), ('minutes', 0)])
def test_reminder_notification_validation(unit, value) -> None:
    with pytest.raises(ValueError):
        ReminderNotification(unit, value)


def test_note_preview_text() -> None:
    content = json.dumps({'a': {'value': [{'children': [{'text': 'first'}]}]},
                          'b': {'value': [{'children': [{'text': 'second'}]}]}})
    assert Note(id='n', title='', content=content).preview_text == 'first\nsecond'
    assert Note(id='n', title='', content='').preview_text == ''


def test_empty_snapshot_and_serialization() -> None:
    snapshot = WorkspaceSnapshot.empty()
    data = snapshot.to_dict()
    assert [f['id'] for f in data['folders']] == ['inbox']
    assert data['notes'] == [] and data['tags'] == []


def test_mutation_result() -> None:
    assert MutationResult(value=1)
    failed = MutationResult(error=NotFound('No note'))
    assert not failed
    assert failed.message == 'No note'


def test_tag_colors() -> None:
    assert resolve_color('  ') == DEFAULT_TAG_COLOR
    assert resolve_color(None) == DEFAULT_TAG_COLOR
    assert resolve_color('#123456') == '#123456'


class FakeSettings:
    def __init__(self, values: dict) -> None:
        self._values = values

    def get_int(self, key: str) -> int:
        return self._values[key]


def test_load_config_from_settings() -> None:
    settings = FakeSettings({
        'history-limit': 10,
        'autosave-delay': 250,
        'drag-hold-delay': 300,
        'preview-length': 80,
    })
    assert load_config(settings) == WorkspaceConfig(10, 250, 300, 80)


def test_load_config_defaults_without_schema() -> None:
    assert isinstance(load_config(), WorkspaceConfig)
