# tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any

CURRENT_SCHEMA_VERSION = 1


class TaskScope(StrEnum):
    """
    Where a task may fire.

    - "global": in every execution context
    - "workspace": only when the current workspace matches task.workspace_path
    """

    GLOBAL = "global"
    WORKSPACE = "workspace"

    @classmethod
    def from_raw(cls, raw: str | None, default: TaskScope | None = None) -> TaskScope:
        fallback = default or cls.GLOBAL
        if not raw:
            return fallback
        try:
            return cls(raw)
        except ValueError:
            return fallback


class PromptSource(StrEnum):
    """Where the prompt text comes from: the task itself, a workspace file or a global template."""

    INLINE = "inline"
    LOCAL = "local"
    GLOBAL = "global"

    @classmethod
    def from_raw(cls, raw: str | None) -> PromptSource:
        if not raw:
            return cls.INLINE
        try:
            return cls(raw)
        except ValueError:
            return cls.INLINE


def parse_timestamp(raw: Any) -> datetime | None:
    """
    Decode a persisted timestamp.

    Accepts datetime, ISO-8601 strings and numeric epoch seconds.
    Naive values are interpreted as host-local time.
    """
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        ts = raw
    elif isinstance(raw, (int, float)):
        ts = datetime.fromtimestamp(float(raw)).astimezone()
    elif isinstance(raw, str):
        try:
            ts = datetime.fromisoformat(raw.strip())
        except ValueError:
            return None
    else:
        return None
    return ts if ts.tzinfo is not None else ts.astimezone()


def format_timestamp(ts: datetime | None) -> str | None:
    return ts.isoformat() if ts is not None else None


_TRUE_STRINGS = {"1", "true", "yes", "y", "on"}
_FALSE_STRINGS = {"0", "false", "no", "n", "off", ""}


def parse_bool(raw: Any, default: bool) -> bool:
    """Tolerant bool decoding for stored records (strings like "false" are not truthy)."""
    if raw is None:
        return default
    if isinstance(raw, str):
        v = raw.strip().lower()
        if v in _TRUE_STRINGS:
            return True
        if v in _FALSE_STRINGS:
            return False
        return default
    return bool(raw)


@dataclass(slots=True)
class ScheduledTask:
    id: str
    name: str
    cron_expression: str
    prompt: str
    enabled: bool

    scope: TaskScope
    prompt_source: PromptSource

    created_at: datetime
    updated_at: datetime

    workspace_path: str | None = None
    prompt_path: str | None = None
    agent: str | None = None
    model: str | None = None

    last_run: datetime | None = None
    next_run: datetime | None = None

    def to_record(self) -> dict[str, Any]:
        return {
            "schema_version": CURRENT_SCHEMA_VERSION,
            "id": self.id,
            "name": self.name,
            "cron_expression": self.cron_expression,
            "prompt": self.prompt,
            "enabled": self.enabled,
            "scope": self.scope.value,
            "workspace_path": self.workspace_path,
            "prompt_source": self.prompt_source.value,
            "prompt_path": self.prompt_path,
            "agent": self.agent,
            "model": self.model,
            "last_run": format_timestamp(self.last_run),
            "next_run": format_timestamp(self.next_run),
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> ScheduledTask:
        """Build a task from a record already migrated to the current schema."""
        created_at = parse_timestamp(record.get("created_at"))
        if created_at is None:
            created_at = datetime.fromtimestamp(0).astimezone()
        updated_at = parse_timestamp(record.get("updated_at")) or created_at

        scope = TaskScope.from_raw(record.get("scope"))
        workspace_path = record.get("workspace_path") if scope == TaskScope.WORKSPACE else None

        return cls(
            id=str(record["id"]),
            name=str(record.get("name") or ""),
            cron_expression=str(record.get("cron_expression") or ""),
            prompt=str(record.get("prompt") or ""),
            enabled=parse_bool(record.get("enabled"), True),
            scope=scope,
            workspace_path=workspace_path,
            prompt_source=PromptSource.from_raw(record.get("prompt_source")),
            prompt_path=record.get("prompt_path"),
            agent=record.get("agent"),
            model=record.get("model"),
            last_run=parse_timestamp(record.get("last_run")),
            next_run=parse_timestamp(record.get("next_run")),
            created_at=created_at,
            updated_at=updated_at,
        )


@dataclass(slots=True)
class CreateTaskInput:
    name: str
    cron_expression: str
    prompt: str = ""
    enabled: bool = True
    agent: str | None = None
    model: str | None = None
    scope: TaskScope | None = None  # None -> settings.default_scope
    prompt_source: PromptSource | None = None  # None -> inline
    prompt_path: str | None = None
    run_first_in_one_minute: bool = False
