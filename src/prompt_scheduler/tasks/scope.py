# src/prompt_scheduler/tasks/scope.py

from __future__ import annotations

from .task_models import ScheduledTask, TaskScope


def is_eligible(task: ScheduledTask, current_workspace: str | None) -> bool:
    """
    Whether the task may fire in the given workspace context.

    Global tasks always may. Workspace tasks only when there is a current
    workspace and it equals task.workspace_path (both already normalized).
    """
    if task.scope == TaskScope.GLOBAL:
        return True
    if current_workspace is None:
        return False
    return task.workspace_path == current_workspace
