# tests/test_record_store.py

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from prompt_scheduler.storage.record_store import SQLiteRecordStore
from prompt_scheduler.tasks.errors import CorruptStore
from prompt_scheduler.tasks.task_models import CreateTaskInput
from prompt_scheduler.tasks.task_store import TaskStore


def test_sqlite_store_empty_then_round_trip(tmp_path: Path) -> None:
    db = tmp_path / "nested" / "tasks.sqlite3"
    store = SQLiteRecordStore(db)
    assert store.load() == []

    records = [{"id": "t1", "name": "Ünïcode", "enabled": True}, {"id": "t2", "name": "b"}]
    store.save(records)
    assert SQLiteRecordStore(db).load() == records

    store.save(records[:1])
    assert store.load() == records[:1]


def test_sqlite_store_keys_are_independent(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"
    a = SQLiteRecordStore(db, key="a")
    b = SQLiteRecordStore(db, key="b")
    a.save([{"id": "x"}])
    assert b.load() == []
    assert a.load() == [{"id": "x"}]


def _seed_document(db: Path, value: str) -> None:
    conn = sqlite3.connect(str(db))
    try:
        conn.execute(
            "INSERT INTO records(key, value, updated_at) VALUES (?, ?, 0)",
            ("scheduled_tasks", value),
        )
        conn.commit()
    finally:
        conn.close()


def _stored_document(db: Path) -> str:
    conn = sqlite3.connect(str(db))
    try:
        (value,) = conn.execute(
            "SELECT value FROM records WHERE key = ?", ("scheduled_tasks",)
        ).fetchone()
    finally:
        conn.close()
    return value


@pytest.mark.parametrize("document", ['[{"id": "t1", "name": "precious"', '{"id": "t1", "name": "precious"}'])
def test_sqlite_store_corrupt_document_raises(tmp_path: Path, document: str) -> None:
    db = tmp_path / "tasks.sqlite3"
    store = SQLiteRecordStore(db)
    _seed_document(db, document)

    with pytest.raises(CorruptStore):
        store.load()


def test_corrupt_document_is_never_overwritten(tmp_path: Path, settings, clock, workspace) -> None:
    db = tmp_path / "tasks.sqlite3"
    SQLiteRecordStore(db)
    document = '[{"id": "task_1", "name": "precious", "cron_expression": "0 9 * * *"'
    _seed_document(db, document)

    with pytest.raises(CorruptStore):
        TaskStore(SQLiteRecordStore(db), settings, clock=clock, workspace=workspace)

    assert _stored_document(db) == document


def test_task_store_survives_restart_on_sqlite(tmp_path: Path, settings, clock, workspace) -> None:
    db = tmp_path / "tasks.sqlite3"
    first = TaskStore(SQLiteRecordStore(db), settings, clock=clock, workspace=workspace)
    task = first.create_task(CreateTaskInput(name="persisted", cron_expression="0 9 * * *"))

    second = TaskStore(SQLiteRecordStore(db), settings, clock=clock, workspace=workspace)
    again = second.get_task(task.id)
    assert again is not None
    assert again.name == "persisted"
    assert again.next_run == task.next_run
