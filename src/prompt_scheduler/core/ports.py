# src/prompt_scheduler/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the scheduling core.

The core depends on Protocols instead of concrete implementations.
This keeps storage/delivery/host integration swappable and makes testing easier.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import ScheduledTask, TaskScope

TaskRecord = dict[str, Any]
# JSON-serialisable shape of a ScheduledTask (see ScheduledTask.to_record).

TasksChangedCallback = Callable[[], None]


class RecordStore(Protocol):
    """
    Durable key-value collaborator.

    Holds the whole task collection; save() always receives the full snapshot.
    """

    def load(self) -> list[TaskRecord]: ...
    def save(self, records: list[TaskRecord]) -> None: ...


class TaskExecutor(Protocol):
    """Performs a task (hands its prompt to whatever surface runs it). Raises on failure."""

    def execute(self, task: ScheduledTask) -> Awaitable[None]: ...


class PromptDelivery(Protocol):
    """
    Connector-side port: how the executor hands resolved prompt text outward.

    The connector decides how to interpret agent/model (both may be None).
    """

    def deliver(
            self,
            text: str,
            *,
            agent: str | None = None,
            model: str | None = None,
    ) -> Awaitable[None]: ...


class SchedulerSettings(Protocol):
    """Read-only configuration consulted at creation time and at the top of every tick."""

    scheduling_enabled: bool
    timezone: str | None
    default_scope: TaskScope | str
    execute_timeout_seconds: float | None


class WorkspaceIdentity(Protocol):
    def current_workspace_path(self) -> str | None: ...


class Clock(Protocol):
    def now(self) -> datetime: ...
