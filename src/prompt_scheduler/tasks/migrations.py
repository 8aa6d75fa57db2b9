# src/prompt_scheduler/tasks/migrations.py

from __future__ import annotations

"""
Record schema migrations.

Persisted records carry "schema_version"; records written before versioning
existed have none and count as version 0. Each step is a pure function
raw(vN) -> raw(vN+1). migrate() applies the steps in sequence, so a new field
only needs a new step here instead of presence checks spread over the store.
"""

import logging
from collections.abc import Callable
from typing import Any

from .task_models import CURRENT_SCHEMA_VERSION, PromptSource, TaskScope

logger = logging.getLogger(__name__)

Record = dict[str, Any]

# Records from the first releases used camelCase keys.
_LEGACY_KEYS = {
    "cronExpression": "cron_expression",
    "workspacePath": "workspace_path",
    "promptSource": "prompt_source",
    "promptPath": "prompt_path",
    "lastRun": "last_run",
    "nextRun": "next_run",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


def _v0_to_v1(record: Record) -> Record:
    """Snake-case keys; scope defaults to global and prompt_source to inline."""
    out: Record = {}
    for key, value in record.items():
        out[_LEGACY_KEYS.get(key, key)] = value

    if not out.get("scope"):
        out["scope"] = TaskScope.GLOBAL.value
    if not out.get("prompt_source"):
        out["prompt_source"] = PromptSource.INLINE.value
    return out


# index N holds the step from version N to N+1
MIGRATIONS: list[Callable[[Record], Record]] = [_v0_to_v1]


def schema_version_of(record: Record) -> int:
    raw = record.get("schema_version", 0)
    try:
        return int(raw)
    except (TypeError, ValueError):
        return 0


def migrate(record: Record) -> Record:
    """Bring one raw record to CURRENT_SCHEMA_VERSION. Never mutates the input."""
    version = schema_version_of(record)
    out = dict(record)

    if version > CURRENT_SCHEMA_VERSION:
        logger.warning(
            "Record id=%s has schema_version=%s newer than supported %s; loading as-is",
            out.get("id"),
            version,
            CURRENT_SCHEMA_VERSION,
        )
        return out

    while version < CURRENT_SCHEMA_VERSION:
        out = MIGRATIONS[version](out)
        version += 1

    out["schema_version"] = CURRENT_SCHEMA_VERSION
    return out
