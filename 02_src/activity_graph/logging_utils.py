"""Logging helpers for the activity graph builder."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

_CONFIGURED = False

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(level_name: str = "INFO", log_path: Optional[Path] = None) -> None:
    """Configure the package logger once, to stderr or a rotating file."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    level = getattr(logging, level_name.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    handler: logging.Handler
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_path,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    package_logger = logging.getLogger("activity_graph")
    package_logger.setLevel(level)
    package_logger.addHandler(handler)
    package_logger.propagate = False

    _CONFIGURED = True
    package_logger.debug("Logging initialized at level %s", logging.getLevelName(level))
