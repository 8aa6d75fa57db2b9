# src/prompt_scheduler/tasks/errors.py

from __future__ import annotations


class TaskError(Exception):
    """Base class for scheduler errors."""


class InvalidExpression(TaskError, ValueError):
    """Cron expression is empty or cannot be parsed as 5-field cron."""

    def __init__(self, expression: str | None, reason: str = "invalid cron expression") -> None:
        self.expression = expression
        self.reason = reason
        super().__init__(f"{reason}: {expression!r}")


class MissingWorkspace(TaskError, ValueError):
    """Workspace scope was requested but there is no current workspace."""


class ExecutionError(TaskError):
    """Raised by an executor when a task could not be performed."""

    def __init__(self, task_id: str, message: str) -> None:
        self.task_id = task_id
        super().__init__(f"task {task_id}: {message}")


class CorruptStore(TaskError):
    """The durable task document exists but cannot be decoded as a record list."""
