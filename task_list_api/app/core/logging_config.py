"""
Logging setup for the Task List API.

Everything goes through the root logger: a console handler, plus a
file handler when ``Settings.log_file`` is set.  Uvicorn's own loggers
are made to propagate to the root logger so that server and
application messages share one format.
"""

import logging
from pathlib import Path

from .config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logging(app_settings: Settings) -> None:
    """Configure the root logger from ``app_settings``.

    Runs only once per process; later calls (one per ``create_app``,
    e.g. in tests) leave the existing handlers alone.  In debug mode
    the level is forced to ``DEBUG`` regardless of ``log_level``.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    level = "DEBUG" if app_settings.debug else app_settings.log_level
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if app_settings.log_file:
        file_handler = logging.FileHandler(Path(app_settings.log_file).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True
