"""
Centralized logging configuration for pentascore.

The library itself only creates module loggers; the embedding application
decides whether to call setup_logging(). Level and format come from
Settings (PENTASCORE_LOG_LEVEL, PENTASCORE_LOG_FORMAT) unless overridden.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from pentascore.config import Settings, get_settings

VERBOSE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(funcName)s | %(message)s"
CONSOLE_FORMAT = "%(levelname).1s %(name)s: %(message)s"


def setup_logging(
    level: Optional[str] = None,
    log_format: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> None:
    """Configure the root logger.

    Args:
        level: Optional level name (e.g. "DEBUG"). Defaults to settings.log_level.
        log_format: "console" or "verbose". Defaults to settings.log_format;
            DEBUG level always uses the verbose format.
        settings: Settings to read defaults from (cached settings if omitted).
    """
    settings = settings or get_settings()
    level_name = (level or settings.log_level).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level_name}")

    fmt_name = (log_format or settings.log_format).lower()
    is_debug = numeric_level <= logging.DEBUG
    fmt = VERBOSE_FORMAT if (fmt_name == "verbose" or is_debug) else CONSOLE_FORMAT

    # Avoid duplicate handlers if re-configuring
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt="%H:%M:%S"))

    root.setLevel(numeric_level)
    root.addHandler(handler)
