# src/prompt_scheduler/core/workspace.py

from __future__ import annotations

import os
from pathlib import Path


def normalize_workspace_path(path: str | Path) -> str:
    """Absolute, normalized, user-expanded path string used for scope comparisons."""
    return os.path.normpath(os.path.abspath(os.path.expanduser(str(path))))


class StaticWorkspace:
    """
    Workspace identity fixed for the lifetime of the process.

    None means "no workspace context": workspace-scoped tasks never fire.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = normalize_workspace_path(path) if path else None

    def current_workspace_path(self) -> str | None:
        return self._path

    def __repr__(self) -> str:
        return f"StaticWorkspace({self._path!r})"
