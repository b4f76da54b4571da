# -*- coding: utf-8 -*-
from __future__ import annotations

import json

import pytest

from app.config import DEFAULT_SERVER_URL, DEFAULT_TIMEOUT_S
from infra import settings as settings_mod
from infra.paths import exports_dir, logs_dir, user_data_dir


@pytest.fixture(autouse=True)
def _data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("KONTOKONSOLE_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("KONTOKONSOLE_SERVER_URL", raising=False)
    monkeypatch.delenv("KONTOKONSOLE_TIMEOUT", raising=False)
    return tmp_path


def test_data_dir_override(tmp_path) -> None:
    assert user_data_dir() == tmp_path
    assert logs_dir() == tmp_path / "logs" and logs_dir().is_dir()
    assert exports_dir().is_dir()


def test_first_load_writes_defaults(tmp_path) -> None:
    s = settings_mod.load_settings()
    assert s["server_url"] == DEFAULT_SERVER_URL
    assert s["request_timeout_s"] == DEFAULT_TIMEOUT_S
    assert s["stale_policy"] == "apply"
    assert (tmp_path / settings_mod.SETTINGS_NAME).exists()


def test_saved_values_are_sanitized() -> None:
    settings_mod.save_settings({"server_url": "https://grundbuch.example", "request_timeout_s": -3, "stale_policy": "bogus"})
    s = settings_mod.load_settings()
    assert s["server_url"] == "https://grundbuch.example"
    assert s["request_timeout_s"] == DEFAULT_TIMEOUT_S
    assert s["stale_policy"] == "apply"


def test_discard_policy_survives() -> None:
    settings_mod.save_settings({"stale_policy": "discard"})
    assert settings_mod.load_settings()["stale_policy"] == "discard"


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("KONTOKONSOLE_SERVER_URL", "http://konto.local:9000")
    monkeypatch.setenv("KONTOKONSOLE_TIMEOUT", "5")
    s = settings_mod.load_settings()
    assert s["server_url"] == "http://konto.local:9000"
    assert s["request_timeout_s"] == 5.0


def test_corrupt_file_resets(tmp_path) -> None:
    path = tmp_path / settings_mod.SETTINGS_NAME
    path.write_text("{not json", encoding="utf-8")
    s = settings_mod.load_settings()
    assert s["server_url"] == DEFAULT_SERVER_URL
    assert json.loads(path.read_text(encoding="utf-8"))["stale_policy"] == "apply"
