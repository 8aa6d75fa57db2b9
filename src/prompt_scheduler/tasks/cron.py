# src/prompt_scheduler/tasks/cron.py

from __future__ import annotations

"""
Cron evaluation.

Thin stateless wrapper over croniter:
- validate() is strict and raises InvalidExpression (used before anything is stored),
- next_occurrence() soft-fails to None so a single bad record cannot crash the loop.
"""

import logging
from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from croniter import croniter

from .errors import InvalidExpression

logger = logging.getLogger(__name__)

CRON_FIELD_COUNT = 5


def _resolve_zone(timezone: str | None) -> tzinfo | None:
    if not timezone:
        return None
    return ZoneInfo(timezone)


class CronEvaluator:
    def validate(self, expression: str | None) -> None:
        if expression is None or not str(expression).strip():
            raise InvalidExpression(expression, "empty cron expression")

        fields = str(expression).split()
        if len(fields) != CRON_FIELD_COUNT:
            raise InvalidExpression(
                expression, f"expected {CRON_FIELD_COUNT} fields, got {len(fields)}"
            )

        try:
            ok = croniter.is_valid(" ".join(fields))
        except Exception:
            ok = False
        if not ok:
            raise InvalidExpression(expression)

    def is_valid(self, expression: str | None) -> bool:
        try:
            self.validate(expression)
        except InvalidExpression:
            return False
        return True

    def next_occurrence(
        self,
        expression: str,
        from_: datetime,
        timezone: str | None = None,
    ) -> datetime | None:
        """
        Earliest instant strictly after from_ matching the expression.

        Evaluated in `timezone` (IANA name) when given, otherwise in the host's local zone.
        Returns None when the expression or timezone cannot be evaluated.
        """
        try:
            zone = _resolve_zone(timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone %r; cron expression=%r cannot be scheduled", timezone, expression)
            return None

        try:
            self.validate(expression)
            base = from_.astimezone(zone) if zone is not None else from_.astimezone()

            it = croniter(" ".join(expression.split()), base)
            nxt = it.get_next(datetime)
            while nxt <= base:
                nxt = it.get_next(datetime)
            return nxt
        except Exception:
            logger.debug(
                "Cannot evaluate cron expression=%r tz=%r", expression, timezone, exc_info=True
            )
            return None
