# src/prompt_scheduler/tasks/cron_builder.py

from __future__ import annotations

"""
Helpers for the common cron shapes (every N minutes, hourly, daily, weekly, monthly).

build_cron_expression() turns a ScheduleConfig into a 5-field expression,
parse_cron_expression() is the best-effort inverse (None for anything custom),
describe_cron_expression() renders a short English label.
"""

from dataclasses import dataclass, field
from enum import StrEnum

DEFAULT_EXPRESSION = "0 9 * * 1-5"

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


class ScheduleFrequency(StrEnum):
    MINUTE = "minute"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(slots=True)
class ScheduleConfig:
    frequency: ScheduleFrequency
    minute: int = 0  # 0-59
    hour: int = 9  # 0-23
    days_of_week: list[int] = field(default_factory=list)  # 0-6, 0 = Sunday
    day_of_month: int = 1  # 1-31
    interval_minutes: int | None = None


@dataclass(frozen=True, slots=True)
class CronPreset:
    id: str
    name: str
    expression: str
    description: str


CRON_PRESETS: tuple[CronPreset, ...] = (
    CronPreset("every-minute", "Every minute", "* * * * *", "Runs at the start of every minute"),
    CronPreset("every-5-minutes", "Every 5 minutes", "*/5 * * * *", "Runs every five minutes"),
    CronPreset("every-15-minutes", "Every 15 minutes", "*/15 * * * *", "Runs every fifteen minutes"),
    CronPreset("hourly", "Hourly", "0 * * * *", "Runs at minute 0 of every hour"),
    CronPreset("daily-9am", "Daily at 9:00", "0 9 * * *", "Runs every day at 09:00"),
    CronPreset("weekdays-9am", "Weekdays at 9:00", "0 9 * * 1-5", "Runs Monday to Friday at 09:00"),
    CronPreset("weekly-monday", "Weekly on Monday", "0 9 * * 1", "Runs every Monday at 09:00"),
    CronPreset("monthly-first", "Monthly on the 1st", "0 9 1 * *", "Runs on the first day of every month at 09:00"),
)


def build_cron_expression(config: ScheduleConfig) -> str:
    freq = config.frequency

    if freq == ScheduleFrequency.MINUTE:
        if config.interval_minutes and config.interval_minutes > 1:
            return f"*/{config.interval_minutes} * * * *"
        return "* * * * *"

    if freq == ScheduleFrequency.HOURLY:
        return f"{config.minute} * * * *"

    if freq == ScheduleFrequency.DAILY:
        return f"{config.minute} {config.hour} * * *"

    if freq == ScheduleFrequency.WEEKLY:
        if not config.days_of_week:
            # Monday when nothing was picked
            return f"{config.minute} {config.hour} * * 1"
        days = ",".join(str(d) for d in sorted(set(config.days_of_week)))
        return f"{config.minute} {config.hour} * * {days}"

    if freq == ScheduleFrequency.MONTHLY:
        return f"{config.minute} {config.hour} {config.day_of_month} * *"

    return DEFAULT_EXPRESSION


def _int_or(raw: str, default: int) -> int:
    try:
        return int(raw)
    except ValueError:
        return default


def _expand_days(part: str) -> list[int] | None:
    days: list[int] = []
    for chunk in part.split(","):
        if "-" in chunk:
            start_s, _, end_s = chunk.partition("-")
            try:
                start, end = int(start_s), int(end_s)
            except ValueError:
                return None
            days.extend(range(start, end + 1))
        else:
            try:
                days.append(int(chunk))
            except ValueError:
                return None
    return days


def parse_cron_expression(expression: str) -> ScheduleConfig | None:
    parts = expression.strip().split()
    if len(parts) != 5:
        return None

    minute_p, hour_p, dom_p, month_p, dow_p = parts
    if month_p != "*":
        return None

    if minute_p.startswith("*/") and hour_p == "*":
        interval = _int_or(minute_p[2:], 0)
        if interval <= 0:
            return None
        return ScheduleConfig(ScheduleFrequency.MINUTE, minute=0, hour=0, interval_minutes=interval)

    if minute_p == "*" and hour_p == "*" and dom_p == "*" and dow_p == "*":
        return ScheduleConfig(ScheduleFrequency.MINUTE, minute=0, hour=0, interval_minutes=1)

    if not minute_p.isdigit():
        return None
    minute = int(minute_p)

    if hour_p == "*" and dom_p == "*" and dow_p == "*":
        return ScheduleConfig(ScheduleFrequency.HOURLY, minute=minute, hour=0)

    if not hour_p.isdigit():
        return None
    hour = int(hour_p)

    if dom_p == "*" and dow_p != "*":
        days = _expand_days(dow_p)
        if days is None:
            return None
        return ScheduleConfig(ScheduleFrequency.WEEKLY, minute=minute, hour=hour, days_of_week=days)

    if dom_p != "*" and dow_p == "*":
        if not dom_p.isdigit():
            return None
        return ScheduleConfig(
            ScheduleFrequency.MONTHLY, minute=minute, hour=hour, day_of_month=int(dom_p)
        )

    if dom_p == "*" and dow_p == "*":
        return ScheduleConfig(ScheduleFrequency.DAILY, minute=minute, hour=hour)

    return None


def _day_name(value: int) -> str:
    # cron allows 7 for Sunday as well
    return DAY_NAMES[value % 7]


def describe_cron_expression(expression: str) -> str:
    config = parse_cron_expression(expression)
    if config is None:
        return f"Custom: {expression}"

    time_str = f"{config.hour:02d}:{config.minute:02d}"

    if config.frequency == ScheduleFrequency.MINUTE:
        if config.interval_minutes and config.interval_minutes > 1:
            return f"Every {config.interval_minutes} minutes"
        return "Every minute"
    if config.frequency == ScheduleFrequency.HOURLY:
        return f"Hourly at :{config.minute:02d}"
    if config.frequency == ScheduleFrequency.DAILY:
        return f"Daily at {time_str}"
    if config.frequency == ScheduleFrequency.WEEKLY:
        labels = ", ".join(_day_name(d) for d in config.days_of_week)
        return f"Weekly on {labels} at {time_str}"
    if config.frequency == ScheduleFrequency.MONTHLY:
        return f"Monthly on day {config.day_of_month} at {time_str}"
    return expression
