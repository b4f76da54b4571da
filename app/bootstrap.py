# -*- coding: utf-8 -*-
"""
Application bootstrap (runs before the console starts):
- Load per-user settings
- Init logging (app log + dispatch log)
"""
from __future__ import annotations

from typing import Any, Dict

from infra.logging_setup import init_dispatch_logging, init_logging
from infra.settings import load_settings


def bootstrap() -> Dict[str, Any]:
    settings = load_settings()
    init_logging(level=settings.get("log_level", "INFO"))
    init_dispatch_logging()
    return settings
