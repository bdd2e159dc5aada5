from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger import jsonlogger

# requests logs every connection it opens while fetching the archive
NOISY_LOGGERS = ("urllib3",)


def configure_logging(
        level: Optional[int] = None,
        force_format: Optional[str] = None,
) -> None:
    """
    Configure root logger for the app

    Modes:
    - JSON (default) in prod
    - plain text (dev mode)

    Selection Order:
        1) force_format argument ("json" or "plain") if provided
        2) env var FUNGI_BROWSER_LOG_FORMAT
        3) default = "json"

    Level comes from `level`, then FUNGI_BROWSER_LOG_LEVEL, then INFO.
    """

    if force_format is not None:
        format_mode = force_format
    else:
        format_mode = os.getenv("FUNGI_BROWSER_LOG_FORMAT", "json").lower()

    if level is None:
        level_name = os.getenv("FUNGI_BROWSER_LOG_LEVEL", "INFO").upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger()
    logger.setLevel(level)

    handler = logging.StreamHandler()

    if format_mode == "plain":
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        )
    else:
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        )

    handler.setFormatter(formatter)

    # Replace any existing handlers to avoid duplicate logs
    logger.handlers.clear()
    logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
