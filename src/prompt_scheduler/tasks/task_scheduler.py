# src/prompt_scheduler/tasks/task_scheduler.py

from __future__ import annotations

"""
Task scheduler.

A minute-aligned polling loop that:
- waits for the next :00 boundary, then ticks every interval_seconds,
- asks the TaskStore for enabled + due + eligible tasks,
- hands each one to the injected executor, sequentially,
- records last_run/next_run whether the executor succeeded or not.

How a prompt actually reaches a chat surface belongs to the executor, not the scheduler.
"""

import asyncio
import logging
from enum import StrEnum

from ..core.clock import SystemClock, seconds_until_next_minute
from ..core.ports import Clock, SchedulerSettings, TaskExecutor, WorkspaceIdentity
from ..core.workspace import StaticWorkspace
from .task_models import ScheduledTask
from .task_store import TaskStore

logger = logging.getLogger(__name__)


class LoopState(StrEnum):
    STOPPED = "stopped"
    ALIGNING = "aligning"
    POLLING = "polling"


class SchedulerLoop:
    """
    One owned scheduling loop (no module-level state; several may coexist in tests).

    start()/stop() must be called from inside a running event loop.
    stop() only prevents future ticks: a tick already running is shielded and
    finishes its executor call and bookkeeping.
    """

    def __init__(
        self,
        store: TaskStore,
        settings: SchedulerSettings,
        *,
        executor: TaskExecutor | None = None,
        clock: Clock | None = None,
        workspace: WorkspaceIdentity | None = None,
        interval_seconds: float = 60.0,
    ) -> None:
        self._store = store
        self._settings = settings
        self._executor = executor
        self._clock = clock or SystemClock()
        self._workspace = workspace or StaticWorkspace(None)
        self._interval_s = max(0.001, float(interval_seconds))

        self._runner: asyncio.Task[None] | None = None
        self._state = LoopState.STOPPED

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._runner is not None

    # ---- lifecycle ----

    def start(self, executor: TaskExecutor | None = None) -> None:
        if self._runner is not None:
            self.stop()
        if executor is not None:
            self._executor = executor

        delay = seconds_until_next_minute(self._clock.now())
        self._state = LoopState.ALIGNING
        self._runner = asyncio.get_running_loop().create_task(
            self._run(delay), name="prompt-scheduler-loop"
        )
        logger.info("Scheduler started; first tick in %.3fs", delay)

    def stop(self) -> None:
        runner = self._runner
        self._runner = None
        self._state = LoopState.STOPPED
        if runner is None:
            return
        runner.cancel()
        logger.info("Scheduler stopped")

    async def _run(self, delay: float) -> None:
        try:
            await asyncio.sleep(delay)
            self._state = LoopState.POLLING
            while True:
                await asyncio.shield(self._safe_tick())
                await asyncio.sleep(self._interval_s)
        except asyncio.CancelledError:
            logger.debug("Scheduler loop cancelled")
            raise

    async def _safe_tick(self) -> None:
        try:
            await self.check_and_execute_tasks()
        except Exception:
            # The loop must survive anything a single tick throws.
            logger.exception("Scheduler tick failed")

    # ---- execution ----

    async def _execute(self, task: ScheduledTask) -> None:
        if self._executor is None:
            raise RuntimeError("no executor bound")

        timeout = getattr(self._settings, "execute_timeout_seconds", None)
        if timeout:
            await asyncio.wait_for(self._executor.execute(task), timeout=float(timeout))
        else:
            await self._executor.execute(task)

    async def check_and_execute_tasks(self) -> int:
        """
        One poll step. Returns the number of tasks handed to the executor.

        Executor failures are logged and never stop the remaining tasks; the
        failing task still advances to its next natural occurrence.
        """
        if not getattr(self._settings, "scheduling_enabled", True):
            logger.debug("Scheduling disabled; skipping tick")
            return 0

        now = self._clock.now()
        workspace_path = self._workspace.current_workspace_path()
        due = self._store.list_due_tasks(now, workspace_path)
        if not due:
            return 0

        dispatched = 0
        for task in due:
            # An earlier executor call in this tick may have deleted or disabled it.
            current = self._store.get_task(task.id)
            if current is None or not current.enabled:
                continue

            if self._executor is None:
                logger.warning("Task %s is due but no executor is bound", task.id)
                self._store.record_run(task.id, now)
                continue

            logger.info("Running task %s (%s)", task.id, task.name)
            try:
                await self._execute(current)
            except Exception:
                logger.exception("Task execution failed id=%s name=%r", task.id, task.name)

            self._store.record_run(task.id, now)
            dispatched += 1

        return dispatched

    async def run_now(self, task_id: str) -> bool:
        """
        Fire a task immediately, ignoring enabled/next_run/scope.

        Returns True when the executor completed. On success only last_run is
        recorded; next_run keeps following the cron schedule.
        """
        task = self._store.get_task(task_id)
        if task is None or self._executor is None:
            return False

        try:
            await self._execute(task)
        except Exception:
            logger.exception("Manual run failed id=%s name=%r", task.id, task.name)
            return False

        self._store.record_run(task.id, self._clock.now(), reschedule=False)
        logger.info("Manual run done id=%s", task.id)
        return True
