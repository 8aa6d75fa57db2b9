# src/prompt_scheduler/connectors/console_delivery.py

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import TextIO

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


class ConsoleDelivery:
    """PromptDelivery that prints prompts to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdout

    async def deliver(
        self,
        text: str,
        *,
        agent: str | None = None,
        model: str | None = None,
    ) -> None:
        tags = " ".join(f"{k}={v}" for k, v in (("agent", agent), ("model", model)) if v)
        header = f"[{_ts_local()}] >>> Prompt" + (f" ({tags})" if tags else "")
        self._stream.write(f"{header}\n{text}\n")
        self._stream.flush()
        logger.debug("Console delivery wrote %d chars", len(text))
