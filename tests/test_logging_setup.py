# tests/test_logging_setup.py

from __future__ import annotations

import logging

import pytest

from prompt_scheduler.logging_setup import _ConsoleNoiseFilter


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize("name", ["prompt_scheduler", "prompt_scheduler.tasks.task_store"])
def test_console_filter_passes_own_logs(name: str) -> None:
    assert _ConsoleNoiseFilter().filter(_record(name, logging.DEBUG)) is True


@pytest.mark.parametrize("name", ["py.warnings", "croniter", "asyncio"])
def test_console_filter_hides_foreign_logs_below_error(name: str) -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record(name, logging.WARNING)) is False
    assert f.filter(_record(name, logging.ERROR)) is True


def test_console_filter_does_not_match_prefix_lookalikes() -> None:
    assert _ConsoleNoiseFilter().filter(_record("prompt_scheduler_extra", logging.INFO)) is False
