# -*- coding: utf-8 -*-
"""
Client settings stored in a per-user writable folder (no admin).

Only client configuration lives here (server, timeout, policies); account
data is never persisted locally.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from app.config import DEFAULT_SERVER_URL, DEFAULT_STALE_POLICY, DEFAULT_TIMEOUT_S, STALE_POLICIES
from infra.paths import user_data_dir

SETTINGS_NAME = "kontokonsole_settings.json"
log = logging.getLogger(__name__)


def settings_file() -> Path:
    return user_data_dir() / SETTINGS_NAME


def _defaults() -> Dict[str, Any]:
    return {
        "server_url": DEFAULT_SERVER_URL,
        "request_timeout_s": DEFAULT_TIMEOUT_S,
        "stale_policy": DEFAULT_STALE_POLICY,
        "log_level": "INFO",
    }


def _sanitize(data: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(data)
    try:
        timeout = float(out.get("request_timeout_s", DEFAULT_TIMEOUT_S))
        out["request_timeout_s"] = timeout if timeout > 0 else DEFAULT_TIMEOUT_S
    except (TypeError, ValueError):
        out["request_timeout_s"] = DEFAULT_TIMEOUT_S
    if out.get("stale_policy") not in STALE_POLICIES:
        out["stale_policy"] = DEFAULT_STALE_POLICY
    out["server_url"] = str(out.get("server_url") or DEFAULT_SERVER_URL)
    return out


def _apply_env(data: Dict[str, Any]) -> Dict[str, Any]:
    url = os.environ.get("KONTOKONSOLE_SERVER_URL", "").strip()
    if url:
        data["server_url"] = url
    timeout = os.environ.get("KONTOKONSOLE_TIMEOUT", "").strip()
    if timeout:
        data["request_timeout_s"] = timeout
    return data


def load_settings() -> Dict[str, Any]:
    defaults = _defaults()
    path = settings_file()
    if not path.exists():
        save_settings(defaults.copy())
        return _sanitize(_apply_env(defaults.copy()))

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        merged = defaults.copy()
        if isinstance(data, dict):
            merged.update({k: v for k, v in data.items() if v is not None})
        return _sanitize(_apply_env(merged))
    except (OSError, ValueError):
        # Recover from corruption gracefully
        log.warning("Settings file %s unreadable; resetting to defaults.", path)
        save_settings(defaults.copy())
        return _sanitize(_apply_env(defaults.copy()))


def save_settings(data: Dict[str, Any]) -> None:
    path = settings_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
