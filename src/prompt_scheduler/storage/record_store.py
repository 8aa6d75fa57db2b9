# src/prompt_scheduler/storage/record_store.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
import time
from pathlib import Path

from ..core.ports import TaskRecord
from ..tasks.errors import CorruptStore

logger = logging.getLogger(__name__)

DEFAULT_KEY = "scheduled_tasks"


class SQLiteRecordStore:
    """
    SQLite key-value store for the task collection.

    The whole collection lives as one JSON document under a single key, so
    save() is a single atomic upsert of the full snapshot.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3", *, key: str = DEFAULT_KEY) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._key = key
        self._ensure_schema()
        logger.info("SQLiteRecordStore ready db=%s key=%s", self._db_path, self._key)

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS records (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL DEFAULT '[]',
                    updated_at REAL NOT NULL DEFAULT 0
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    def load(self) -> list[TaskRecord]:
        conn = self._get_conn()
        try:
            cur = conn.execute("SELECT value FROM records WHERE key = ?", (self._key,))
            row = cur.fetchone()
        finally:
            conn.close()

        if row is None:
            return []

        try:
            data = json.loads(row["value"])
        except json.JSONDecodeError as e:
            raise CorruptStore(f"corrupt task document in {self._db_path} key={self._key}: {e}") from e
        if not isinstance(data, list):
            raise CorruptStore(
                f"unexpected task document type={type(data).__name__} in {self._db_path} key={self._key}"
            )
        return [r for r in data if isinstance(r, dict)]

    def save(self, records: list[TaskRecord]) -> None:
        payload = json.dumps(records, ensure_ascii=False)
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO records(key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (self._key, payload, time.time()),
            )
            conn.commit()
            logger.debug("Saved %d task records to %s", len(records), self._db_path)
        finally:
            conn.close()


class MemoryRecordStore:
    """Process-local RecordStore (no durability). Handy for demos and embedding."""

    def __init__(self, records: list[TaskRecord] | None = None) -> None:
        self._payload = json.dumps(records or [])

    def load(self) -> list[TaskRecord]:
        return json.loads(self._payload)

    def save(self, records: list[TaskRecord]) -> None:
        self._payload = json.dumps(records, ensure_ascii=False)
