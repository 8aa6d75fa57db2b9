# tests/conftest.py

from __future__ import annotations

from datetime import UTC, datetime
from types import SimpleNamespace

import pytest

from prompt_scheduler.core.workspace import StaticWorkspace
from prompt_scheduler.storage.record_store import MemoryRecordStore
from prompt_scheduler.tasks.task_models import CreateTaskInput
from prompt_scheduler.tasks.task_store import TaskStore

from .fakes import FixedClock

START = datetime(2025, 1, 1, 10, 0, 0, tzinfo=UTC)


@pytest.fixture()
def settings() -> SimpleNamespace:
    """
    Minimal settings object compatible with TaskStore and SchedulerLoop.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic (UTC, no timeout).
    """
    return SimpleNamespace(
        scheduling_enabled=True,
        timezone="UTC",
        default_scope="global",
        execute_timeout_seconds=None,
    )


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(START)


@pytest.fixture()
def workspace() -> StaticWorkspace:
    return StaticWorkspace("/repoA")


@pytest.fixture()
def record_store() -> MemoryRecordStore:
    return MemoryRecordStore()


@pytest.fixture()
def store(record_store, settings, clock, workspace) -> TaskStore:
    return TaskStore(record_store, settings, clock=clock, workspace=workspace)


@pytest.fixture()
def make_task(store):
    """Factory: create a task in the store with sensible defaults."""

    def _make(name: str = "job", cron: str = "* * * * *", **kwargs):
        kwargs.setdefault("prompt", f"prompt for {name}")
        return store.create_task(CreateTaskInput(name=name, cron_expression=cron, **kwargs))

    return _make
