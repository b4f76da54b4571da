# -*- coding: utf-8 -*-
"""Optional Qt runtime for the threaded dispatch path.

The console engine itself is pure Python; only ``send --qt`` and the GUI
adapters (services/qt_dispatcher.py, ui/console_signals.py) need PyQt5.
"""
from __future__ import annotations

from importlib import import_module
from typing import Optional


def qt_version() -> Optional[str]:
    """PyQt5 version string, or None when PyQt5 cannot be imported."""
    try:
        core = import_module("PyQt5.QtCore")
    except ImportError:
        return None
    return str(getattr(core, "PYQT_VERSION_STR", "") or "unknown")


def require_qt(feature: str) -> str:
    version = qt_version()
    if version is None:
        raise RuntimeError(
            f"{feature} needs PyQt5, which is not installed.\n"
            "Install it with:\n"
            "  pip install -e ."
        )
    return version
