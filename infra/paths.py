# -*- coding: utf-8 -*-
"""
Centralized path resolver for per-user writable data (no admin required):
settings, logs, exports.
"""
from __future__ import annotations

import os
from pathlib import Path

from app.config import APP_NAME


def user_data_dir() -> Path:
    """
    Per-user writable directory. KONTOKONSOLE_DATA_DIR wins; otherwise prefer
    LOCALAPPDATA (non-roaming), then XDG_DATA_HOME, then the home folder.
    """
    override = os.getenv("KONTOKONSOLE_DATA_DIR")
    if override:
        p = Path(override).expanduser()
    else:
        base = os.getenv("LOCALAPPDATA") or os.getenv("APPDATA") or os.getenv("XDG_DATA_HOME") or str(Path.home())
        p = Path(base) / APP_NAME
    p.mkdir(parents=True, exist_ok=True)
    return p


def ensure_dir(p: Path) -> Path:
    p.mkdir(parents=True, exist_ok=True)
    return p


def logs_dir() -> Path:
    return ensure_dir(user_data_dir() / "logs")


def exports_dir() -> Path:
    return ensure_dir(user_data_dir() / "exports")
