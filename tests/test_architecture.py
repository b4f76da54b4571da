# -*- coding: utf-8 -*-
"""Layer rules: the state engine must stay importable without Qt."""
from __future__ import annotations

import importlib.util
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def _checker():
    spec = importlib.util.spec_from_file_location("check_architecture", ROOT / "tools" / "check_architecture.py")
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


def test_no_layer_violations() -> None:
    assert _checker().find_violations() == []


def test_checker_flags_qt_in_domain(tmp_path) -> None:
    (tmp_path / "domain").mkdir()
    (tmp_path / "domain" / "bad.py").write_text("from PyQt5.QtCore import QObject\n", encoding="utf-8")
    (tmp_path / "services").mkdir()
    (tmp_path / "services" / "qt_dispatcher.py").write_text("import PyQt5.QtCore\n", encoding="utf-8")

    violations = _checker().find_violations(tmp_path)

    assert violations == ["domain/bad.py imports forbidden 'PyQt5.QtCore' (layer=domain)"]
