# src/prompt_scheduler/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Components receive settings by injection; only the composition root calls get_settings().
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .tasks.task_models import TaskScope

ENV_PREFIX = "PROMPT_SCHEDULER"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_optional(name: str) -> Optional[str]:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return None
    return v.strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Scheduling ----
    scheduling_enabled: bool
    timezone: Optional[str]
    default_scope: TaskScope
    execute_timeout_seconds: Optional[float]
    poll_interval_seconds: float

    # ---- Workspace / prompts ----
    workspace_path: Optional[Path]
    global_prompts_path: Optional[Path]

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "prompt-scheduler")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        scheduling_enabled = _env_bool(_k("ENABLED"), True)
        timezone = _env_optional(_k("TIMEZONE"))
        default_scope = TaskScope.from_raw(_env_optional(_k("DEFAULT_SCOPE")))

        timeout = _env_float(_k("EXECUTE_TIMEOUT_SECONDS"), None)
        execute_timeout_seconds = timeout if timeout and timeout > 0 else None
        poll_interval_seconds = _env_float(_k("POLL_INTERVAL_SECONDS"), 60.0) or 60.0

        raw_ws = _env_optional(_k("WORKSPACE"))
        workspace_path = Path(raw_ws).expanduser() if raw_ws else None
        raw_prompts = _env_optional(_k("GLOBAL_PROMPTS_PATH"))
        global_prompts_path = Path(raw_prompts).expanduser() if raw_prompts else None

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/prompt-scheduler"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            scheduling_enabled=scheduling_enabled,
            timezone=timezone,
            default_scope=default_scope,
            execute_timeout_seconds=execute_timeout_seconds,
            poll_interval_seconds=poll_interval_seconds,
            workspace_path=workspace_path,
            global_prompts_path=global_prompts_path,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
