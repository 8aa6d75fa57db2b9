# src/prompt_scheduler/prompts/executor.py

from __future__ import annotations

import logging

from ..core.ports import PromptDelivery
from ..tasks.errors import ExecutionError
from ..tasks.task_models import ScheduledTask
from .resolver import PromptResolver

logger = logging.getLogger(__name__)


class PromptExecutor:
    """
    TaskExecutor that resolves the prompt text and hands it to a PromptDelivery.

    Delivery failures are re-raised as ExecutionError; the scheduler logs them and moves on.
    """

    def __init__(self, resolver: PromptResolver, delivery: PromptDelivery) -> None:
        self._resolver = resolver
        self._delivery = delivery

    async def execute(self, task: ScheduledTask) -> None:
        text = self._resolver.resolve(task).strip()
        if not text:
            raise ExecutionError(task.id, "prompt is empty")

        try:
            await self._delivery.deliver(text, agent=task.agent, model=task.model)
        except ExecutionError:
            raise
        except Exception as e:
            raise ExecutionError(task.id, f"delivery failed: {e}") from e

        logger.info("Task %s (%s) delivered %d chars", task.id, task.name, len(text))
