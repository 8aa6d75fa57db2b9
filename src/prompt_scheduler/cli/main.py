# src/prompt_scheduler/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the scheduler, then runs the polling loop until
SIGINT/SIGTERM.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal

from ..cli.bootstrap import SchedulerApp, create_app
from ..config import get_settings
from ..logging_setup import setup_logging
from ..tasks.errors import CorruptStore

logger = logging.getLogger(__name__)


async def run(app: SchedulerApp) -> None:
    stop_main = asyncio.Event()
    loop = asyncio.get_running_loop()

    def _handle_signal(signum: int) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        # Not available on every platform (e.g. Windows proactor loop).
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.add_signal_handler(sig, _handle_signal, sig)

    app.loop.start()
    try:
        await stop_main.wait()
    finally:
        app.loop.stop()


def main() -> None:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        app = create_app(settings=settings)
    except CorruptStore:
        logger.exception("Refusing to start: stored tasks cannot be read (db=%s)", settings.tasks_db_path)
        raise SystemExit(1)

    try:
        asyncio.run(run(app))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
