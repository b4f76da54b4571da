# -*- coding: utf-8 -*-
"""
Logging setup: console log plus per-user log files.
"""
from __future__ import annotations

import logging
from pathlib import Path

from infra.paths import logs_dir

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level(name) -> int:
    value = logging.getLevelName(str(name or "INFO").upper())
    return value if isinstance(value, int) else logging.INFO


def init_logging(filename: str = "app.log", level: str = "INFO") -> Path:
    log_path = logs_dir() / filename
    # Don't add multiple handlers if init called twice
    root = logging.getLogger()
    if not any(isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", "") == str(log_path) for h in root.handlers):
        logging.basicConfig(
            level=_level(level),
            format=LOG_FORMAT,
            handlers=[logging.FileHandler(log_path, encoding="utf-8"), logging.StreamHandler()],
        )
    return log_path


def init_dispatch_logging(filename: str = "dispatch.log") -> Path:
    """Attach a dedicated file handler for command round trips.

    Keeps backend error codes/texts in one place, apart from the main app log.
    """
    log_path = logs_dir() / filename
    logger = logging.getLogger("services.dispatcher")
    logger.setLevel(logging.INFO)
    # Avoid duplicate handlers
    if not any(isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", "") == str(log_path) for h in logger.handlers):
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setLevel(logging.INFO)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(fh)
    return log_path
