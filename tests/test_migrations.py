# tests/test_migrations.py

from __future__ import annotations

from prompt_scheduler.tasks.migrations import migrate, schema_version_of
from prompt_scheduler.tasks.task_models import CURRENT_SCHEMA_VERSION


def test_migrate_fills_defaults_without_mutating_input() -> None:
    raw = {"id": "t", "cronExpression": "* * * * *", "workspacePath": "/x"}
    out = migrate(raw)

    assert raw == {"id": "t", "cronExpression": "* * * * *", "workspacePath": "/x"}
    assert out["cron_expression"] == "* * * * *"
    assert out["workspace_path"] == "/x"
    assert out["scope"] == "global"
    assert out["prompt_source"] == "inline"
    assert out["schema_version"] == CURRENT_SCHEMA_VERSION


def test_migrate_keeps_existing_values() -> None:
    out = migrate({"id": "t", "scope": "workspace", "promptSource": "local"})
    assert out["scope"] == "workspace"
    assert out["prompt_source"] == "local"


def test_current_records_pass_through() -> None:
    record = {"id": "t", "schema_version": CURRENT_SCHEMA_VERSION, "scope": "workspace"}
    assert migrate(record) == record


def test_newer_records_are_left_alone() -> None:
    record = {"id": "t", "schema_version": CURRENT_SCHEMA_VERSION + 5, "shiny": True}
    assert migrate(record) == record


def test_schema_version_of_tolerates_garbage() -> None:
    assert schema_version_of({}) == 0
    assert schema_version_of({"schema_version": "x"}) == 0
    assert schema_version_of({"schema_version": "1"}) == 1
