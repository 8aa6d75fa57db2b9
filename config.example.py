# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
See src/prompt_scheduler/config.py for parsing and defaults.
"""

ENV_VARS = {
    # App / logging
    "PROMPT_SCHEDULER_APP_NAME": "App display name (default: prompt-scheduler).",
    "PROMPT_SCHEDULER_LOG_LEVEL": "Console logging level (default: INFO).",
    # Scheduling
    "PROMPT_SCHEDULER_ENABLED": "Master switch; when false every tick is skipped (default: true).",
    "PROMPT_SCHEDULER_TIMEZONE": "IANA timezone for cron evaluation (default: host local time).",
    "PROMPT_SCHEDULER_DEFAULT_SCOPE": "Scope for new tasks: global | workspace (default: global).",
    "PROMPT_SCHEDULER_EXECUTE_TIMEOUT_SECONDS": "Per-task executor timeout; empty/0 => none.",
    "PROMPT_SCHEDULER_POLL_INTERVAL_SECONDS": "Seconds between ticks after alignment (default: 60).",
    # Workspace / prompts
    "PROMPT_SCHEDULER_WORKSPACE": "Current workspace path (empty => no workspace; workspace tasks never fire).",
    "PROMPT_SCHEDULER_GLOBAL_PROMPTS_PATH": "Directory holding global prompt templates.",
    # Paths (gitignored)
    "PROMPT_SCHEDULER_DATA_DIR": "Local data directory (default: .local/prompt-scheduler).",
    "PROMPT_SCHEDULER_TASKS_DB_PATH": "Task SQLite path (default: <data_dir>/tasks.sqlite3).",
}
