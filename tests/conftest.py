"""Pytest configuration and fixtures."""

import pytest
from gi.repository import GLib

from notespace.config import WorkspaceConfig
from notespace.drag import DragCoordinator
from notespace.workspace_store import WorkspaceStore


def run_main_loop(ms: int) -> None:
    """Let GLib timers fire for ``ms`` milliseconds."""
    loop = GLib.MainLoop()
    GLib.timeout_add(ms, loop.quit)
    loop.run()


@pytest.fixture
def config() -> WorkspaceConfig:
    return WorkspaceConfig(history_limit=100, autosave_delay_ms=20, drag_hold_delay_ms=20)


@pytest.fixture
def saved() -> list:
    """Snapshots handed to the persistence callback."""
    return []


@pytest.fixture
def store(config: WorkspaceConfig, saved: list) -> WorkspaceStore:
    return WorkspaceStore(config=config, save_callback=saved.append)


@pytest.fixture
def coordinator() -> DragCoordinator:
    return DragCoordinator()


@pytest.fixture
def wait():
    return run_main_loop
