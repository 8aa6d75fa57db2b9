# src/prompt_scheduler/core/clock.py

from __future__ import annotations

from datetime import datetime, timedelta


class SystemClock:
    """Wall clock in the host's local timezone (always tz-aware)."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


def truncate_to_minute(ts: datetime) -> datetime:
    return ts.replace(second=0, microsecond=0)


def seconds_until_next_minute(now: datetime) -> float:
    """Delay until the next :00 boundary. Never zero: on an exact boundary we wait a full minute."""
    next_minute = truncate_to_minute(now) + timedelta(minutes=1)
    return (next_minute - now).total_seconds()
