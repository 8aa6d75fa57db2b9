"""Cron-driven prompt scheduler: task store, scope gating and a minute-aligned polling loop."""

__version__ = "0.3.0"
