# src/prompt_scheduler/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations (record store, task store, executor, loop).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import Settings, get_settings
from ..connectors.console_delivery import ConsoleDelivery
from ..core.clock import SystemClock
from ..core.ports import PromptDelivery
from ..core.workspace import StaticWorkspace
from ..prompts.executor import PromptExecutor
from ..prompts.resolver import PromptResolver
from ..storage.record_store import SQLiteRecordStore
from ..tasks.task_scheduler import SchedulerLoop
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SchedulerApp:
    settings: Settings
    store: TaskStore
    executor: PromptExecutor
    loop: SchedulerLoop


def _ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_app(*, settings: Settings | None = None, delivery: PromptDelivery | None = None) -> SchedulerApp:
    """
    Build the scheduler from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings(). Delivery defaults to the console.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    clock = SystemClock()
    workspace = StaticWorkspace(settings.workspace_path)

    store = TaskStore(
        SQLiteRecordStore(settings.tasks_db_path),
        settings,
        clock=clock,
        workspace=workspace,
    )
    executor = PromptExecutor(
        PromptResolver(workspace, settings.global_prompts_path),
        delivery or ConsoleDelivery(),
    )
    loop = SchedulerLoop(
        store,
        settings,
        executor=executor,
        clock=clock,
        workspace=workspace,
        interval_seconds=settings.poll_interval_seconds,
    )

    logger.info(
        "Scheduler wired: tasks=%d workspace=%s tz=%s",
        store.count_tasks(),
        workspace.current_workspace_path(),
        settings.timezone or "local",
    )
    return SchedulerApp(settings=settings, store=store, executor=executor, loop=loop)
