# src/prompt_scheduler/prompts/resolver.py

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..core.ports import WorkspaceIdentity
from ..tasks.task_models import PromptSource, ScheduledTask

logger = logging.getLogger(__name__)


def resolve_within(base_dir: str | Path, relative: str) -> Path | None:
    """
    Join `relative` onto `base_dir`, refusing anything that escapes it
    (.., absolute paths, symlinks pointing outside).
    """
    base = Path(os.path.realpath(base_dir))
    target = Path(os.path.realpath(base / relative))
    if target == base or base in target.parents:
        return target
    return None


class PromptResolver:
    """
    Turns a task into the prompt text to deliver.

    - inline: task.prompt
    - local:  file under the current workspace
    - global: file under the global prompts directory
    Anything unresolvable (no root, path escape, missing/unreadable file) falls back to task.prompt.
    """

    def __init__(
        self,
        workspace: WorkspaceIdentity,
        global_prompts_path: str | Path | None = None,
    ) -> None:
        self._workspace = workspace
        self._global_root = Path(global_prompts_path).expanduser() if global_prompts_path else None

    def _root_for(self, source: PromptSource) -> Path | None:
        if source == PromptSource.LOCAL:
            ws = self._workspace.current_workspace_path()
            return Path(ws) if ws else None
        if source == PromptSource.GLOBAL:
            return self._global_root
        return None

    def resolve_path(self, task: ScheduledTask) -> Path | None:
        if task.prompt_source == PromptSource.INLINE or not task.prompt_path:
            return None
        root = self._root_for(task.prompt_source)
        if root is None or not root.is_dir():
            return None
        return resolve_within(root, task.prompt_path)

    def resolve(self, task: ScheduledTask) -> str:
        if task.prompt_source == PromptSource.INLINE or not task.prompt_path:
            return task.prompt

        path = self.resolve_path(task)
        if path is None:
            logger.warning(
                "Prompt path not allowed or root missing task=%s source=%s path=%r; using inline prompt",
                task.id,
                task.prompt_source.value,
                task.prompt_path,
            )
            return task.prompt

        try:
            return path.read_text("utf-8")
        except OSError:
            logger.warning("Cannot read prompt file %s for task=%s; using inline prompt", path, task.id)
            return task.prompt
