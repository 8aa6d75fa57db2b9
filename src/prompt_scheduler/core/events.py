# src/prompt_scheduler/core/events.py

from __future__ import annotations

import asyncio
import logging

from .ports import TasksChangedCallback

logger = logging.getLogger(__name__)


class ChangeNotifier:
    """
    Zero-or-one subscriber "tasks changed" signal.

    emit() never blocks the caller and never raises:
    - inside a running event loop the callback is scheduled with call_soon,
    - otherwise it is invoked directly and any exception is logged.
    Registering a new callback replaces the previous one.
    """

    def __init__(self) -> None:
        self._callback: TasksChangedCallback | None = None

    def subscribe(self, callback: TasksChangedCallback | None) -> None:
        self._callback = callback

    @property
    def has_subscriber(self) -> bool:
        return self._callback is not None

    def emit(self) -> None:
        callback = self._callback
        if callback is None:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is not None:
            loop.call_soon(self._invoke, callback)
        else:
            self._invoke(callback)

    @staticmethod
    def _invoke(callback: TasksChangedCallback) -> None:
        try:
            callback()
        except Exception:
            logger.exception("tasks-changed callback failed")
