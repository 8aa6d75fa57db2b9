# tasks/task_store.py

from __future__ import annotations

import logging
import random
import string
from datetime import datetime, timedelta
from typing import Any

from ..core.clock import SystemClock, truncate_to_minute
from ..core.events import ChangeNotifier
from ..core.ports import (
    Clock,
    RecordStore,
    SchedulerSettings,
    TasksChangedCallback,
    WorkspaceIdentity,
)
from ..core.workspace import StaticWorkspace
from .cron import CronEvaluator
from .errors import MissingWorkspace
from .migrations import migrate
from .scope import is_eligible
from .task_models import CreateTaskInput, PromptSource, ScheduledTask, TaskScope

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits
COPY_SUFFIX = " (Copy)"


class TaskStore:
    """
    Authoritative in-memory task collection backed by a durable RecordStore.

    - loads + migrates records on construction, then recomputes every next_run
      (stored values are stale after any downtime)
    - every successful mutation: change in memory -> save full snapshot -> notify
    - a failed save is logged; memory stays authoritative and the next
      successful save (always a full snapshot) brings the durable copy back in line

    Not thread-safe: meant to be driven from a single event loop thread.
    """

    def __init__(
        self,
        record_store: RecordStore,
        settings: SchedulerSettings,
        *,
        cron: CronEvaluator | None = None,
        clock: Clock | None = None,
        workspace: WorkspaceIdentity | None = None,
        notifier: ChangeNotifier | None = None,
    ) -> None:
        self._record_store = record_store
        self._settings = settings
        self._cron = cron or CronEvaluator()
        self._clock = clock or SystemClock()
        self._workspace = workspace or StaticWorkspace(None)
        self._notifier = notifier or ChangeNotifier()
        self._tasks: dict[str, ScheduledTask] = {}

        self._load()
        logger.info("TaskStore ready total=%s tz=%s", len(self._tasks), self._timezone())

    # ---- low-level helpers ----

    def _timezone(self) -> str | None:
        return getattr(self._settings, "timezone", None) or None

    def _default_scope(self) -> TaskScope:
        return TaskScope.from_raw(getattr(self._settings, "default_scope", None))

    def _next_run(self, cron_expression: str, base: datetime) -> datetime | None:
        return self._cron.next_occurrence(cron_expression, base, self._timezone())

    def _capture_workspace(self) -> str:
        path = self._workspace.current_workspace_path()
        if not path:
            raise MissingWorkspace("workspace scope requires an open workspace")
        return path

    def _generate_id(self) -> str:
        while True:
            millis = int(self._clock.now().timestamp() * 1000)
            suffix = "".join(random.choices(_ID_ALPHABET, k=6))
            task_id = f"task_{millis}_{suffix}"
            if task_id not in self._tasks:
                return task_id

    def _load(self) -> None:
        raw_records = self._record_store.load()
        now = self._clock.now()

        for raw in raw_records:
            if not isinstance(raw, dict) or not raw.get("id"):
                logger.warning("Skipping malformed task record: %r", raw)
                continue
            try:
                task = ScheduledTask.from_record(migrate(raw))
            except Exception:
                logger.exception("Failed to load task record id=%s", raw.get("id"))
                continue

            task.next_run = self._next_run(task.cron_expression, now)
            if task.next_run is None:
                logger.warning(
                    "Task %s (%s) is unschedulable: cron=%r tz=%r",
                    task.id,
                    task.name,
                    task.cron_expression,
                    self._timezone(),
                )
            self._tasks[task.id] = task

    def _persist(self) -> bool:
        records = self.export_records()
        try:
            self._record_store.save(records)
        except Exception:
            logger.exception("Failed to persist %d tasks; keeping in-memory state", len(records))
            return False
        return True

    def _commit(self) -> None:
        self._persist()
        self._notifier.emit()

    # ---- change notification ----

    def set_on_tasks_changed(self, callback: TasksChangedCallback | None) -> None:
        """Register the single "tasks changed" subscriber (replaces any previous one)."""
        self._notifier.subscribe(callback)

    # ---- reads ----

    def count_tasks(self) -> int:
        return len(self._tasks)

    def get_task(self, task_id: str) -> ScheduledTask | None:
        return self._tasks.get(task_id)

    def list_tasks(self, scope: TaskScope | str | None = None) -> list[ScheduledTask]:
        """All tasks in insertion order, optionally only one scope."""
        if scope is None:
            return list(self._tasks.values())
        wanted = TaskScope(scope)
        return [t for t in self._tasks.values() if t.scope == wanted]

    def list_due_tasks(self, now: datetime, workspace_path: str | None) -> list[ScheduledTask]:
        """
        Tasks to dispatch on the tick at `now`.

        A task is due if:
        - it is enabled and has a next_run,
        - it is eligible in workspace_path,
        - next_run truncated to the minute <= now truncated to the minute
          (missed runs therefore fire on the next tick, once).
        """
        now_minute = truncate_to_minute(now)
        due: list[ScheduledTask] = []
        for task in self._tasks.values():
            if not task.enabled or task.next_run is None:
                continue
            if not is_eligible(task, workspace_path):
                continue
            if truncate_to_minute(task.next_run) <= now_minute:
                due.append(task)
        return due

    # ---- mutations ----

    def create_task(self, data: CreateTaskInput) -> ScheduledTask:
        self._cron.validate(data.cron_expression)
        cron_expression = data.cron_expression.strip()

        scope = TaskScope(data.scope) if data.scope else self._default_scope()
        workspace_path = self._capture_workspace() if scope == TaskScope.WORKSPACE else None

        now = self._clock.now()
        if data.run_first_in_one_minute:
            next_run: datetime | None = now + timedelta(minutes=1)
        else:
            next_run = self._next_run(cron_expression, now)

        task = ScheduledTask(
            id=self._generate_id(),
            name=data.name,
            cron_expression=cron_expression,
            prompt=data.prompt,
            enabled=bool(data.enabled),
            agent=data.agent,
            model=data.model,
            scope=scope,
            workspace_path=workspace_path,
            prompt_source=PromptSource(data.prompt_source) if data.prompt_source else PromptSource.INLINE,
            prompt_path=data.prompt_path,
            next_run=next_run,
            created_at=now,
            updated_at=now,
        )

        self._tasks[task.id] = task
        self._commit()
        logger.info(
            "Task created id=%s name=%r cron=%r scope=%s next_run=%s",
            task.id,
            task.name,
            task.cron_expression,
            task.scope.value,
            task.next_run,
        )
        return task

    def update_task(
        self,
        task_id: str,
        *,
        name: str | None = None,
        cron_expression: str | None = None,
        prompt: str | None = None,
        enabled: bool | None = None,
        agent: str | None = None,
        model: str | None = None,
        scope: TaskScope | str | None = None,
        prompt_source: PromptSource | str | None = None,
        prompt_path: str | None = None,
    ) -> ScheduledTask | None:
        """
        Apply the given fields (None = leave unchanged).

        Validation happens before anything is touched, so a bad cron expression or a
        workspace scope without a workspace leaves the task as it was.
        """
        task = self._tasks.get(task_id)
        if task is None:
            return None

        if cron_expression is not None:
            self._cron.validate(cron_expression)

        new_scope = TaskScope(scope) if scope is not None else None
        new_workspace: str | None = None
        if new_scope == TaskScope.WORKSPACE:
            new_workspace = self._capture_workspace()

        now = self._clock.now()
        reschedule = False

        if name is not None:
            task.name = name
        if cron_expression is not None:
            task.cron_expression = cron_expression.strip()
            reschedule = True
        if prompt is not None:
            task.prompt = prompt
        if enabled is not None:
            if enabled and not task.enabled:
                reschedule = True
            task.enabled = bool(enabled)
        if agent is not None:
            task.agent = agent
        if model is not None:
            task.model = model
        if new_scope is not None:
            task.scope = new_scope
            task.workspace_path = new_workspace
        if prompt_source is not None:
            task.prompt_source = PromptSource(prompt_source)
        if prompt_path is not None:
            task.prompt_path = prompt_path

        if reschedule:
            task.next_run = self._next_run(task.cron_expression, now)
        task.updated_at = now

        self._commit()
        logger.info("Task updated id=%s next_run=%s", task.id, task.next_run)
        return task

    def delete_task(self, task_id: str) -> bool:
        task = self._tasks.pop(task_id, None)
        if task is None:
            return False
        self._commit()
        logger.info("Task deleted id=%s name=%r", task.id, task.name)
        return True

    def toggle_task(self, task_id: str) -> ScheduledTask | None:
        """
        Flip enabled.

        Enabling recomputes next_run from now so a long-disabled task cannot fire on a
        stale value; disabling leaves next_run alone (disabled tasks are never due).
        """
        task = self._tasks.get(task_id)
        if task is None:
            return None

        now = self._clock.now()
        task.enabled = not task.enabled
        task.updated_at = now
        if task.enabled:
            task.next_run = self._next_run(task.cron_expression, now)

        self._commit()
        logger.info("Task %s -> %s", task.id, "enabled" if task.enabled else "disabled")
        return task

    def duplicate_task(self, task_id: str) -> ScheduledTask | None:
        original = self._tasks.get(task_id)
        if original is None:
            return None

        return self.create_task(
            CreateTaskInput(
                name=f"{original.name}{COPY_SUFFIX}",
                cron_expression=original.cron_expression,
                prompt=original.prompt,
                enabled=False,
                agent=original.agent,
                model=original.model,
                scope=original.scope,
                prompt_source=original.prompt_source,
                prompt_path=original.prompt_path,
            )
        )

    def record_run(
        self,
        task_id: str,
        ran_at: datetime,
        *,
        reschedule: bool = True,
    ) -> ScheduledTask | None:
        """
        Scheduler bookkeeping after a firing.

        reschedule=True (scheduled tick): last_run = ran_at, next_run = next occurrence after ran_at.
        reschedule=False (manual run): only last_run changes.
        """
        task = self._tasks.get(task_id)
        if task is None:
            return None

        task.last_run = ran_at
        if reschedule:
            task.next_run = self._next_run(task.cron_expression, ran_at)

        self._commit()
        logger.debug("Task %s ran_at=%s next_run=%s", task.id, ran_at, task.next_run)
        return task

    def reschedule_all(self) -> None:
        """Recompute every next_run from now (e.g. after the timezone setting changed)."""
        now = self._clock.now()
        for task in self._tasks.values():
            task.next_run = self._next_run(task.cron_expression, now)
        self._commit()
        logger.info("Rescheduled %d tasks tz=%s", len(self._tasks), self._timezone())

    def export_records(self) -> list[dict[str, Any]]:
        return [t.to_record() for t in self._tasks.values()]
