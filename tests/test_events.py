# tests/test_events.py

from __future__ import annotations

import asyncio

import pytest

from prompt_scheduler.core.events import ChangeNotifier


def test_emit_without_subscriber_is_noop() -> None:
    notifier = ChangeNotifier()
    assert notifier.has_subscriber is False
    notifier.emit()


@pytest.mark.asyncio
async def test_emit_inside_event_loop_does_not_run_inline() -> None:
    notifier = ChangeNotifier()
    calls: list[int] = []
    notifier.subscribe(lambda: calls.append(1))

    notifier.emit()
    assert calls == []

    await asyncio.sleep(0)
    assert calls == [1]


def test_unsubscribe() -> None:
    notifier = ChangeNotifier()
    calls: list[int] = []
    notifier.subscribe(lambda: calls.append(1))
    notifier.subscribe(None)
    notifier.emit()
    assert calls == []
