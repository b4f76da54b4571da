"""Layer boundary checks for the console engine.

Static import scan (ast, no imports executed):

- core/ and domain/ are pure: no app, services, infra, ui, no Qt
- app/ may use domain and services but never ui or Qt
- services/ never imports ui; only the Qt adapter may import PyQt5

Usage:
    python tools/check_architecture.py

Exit code:
    0 = OK
    1 = violations found
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

QT = "PyQt5"

LAYER_RULES = {
    "core": {"app", "services", "infra", "ui", QT},
    "domain": {"app", "services", "infra", "ui", QT},
    "app": {"ui", QT},
    "services": {"ui", QT},
}

# modules allowed to import Qt despite their layer
QT_ADAPTERS = {"services/qt_dispatcher.py"}


def imported_packages(path: Path) -> list[tuple[str, str]]:
    """(top-level package, full module) for every import in *path*."""
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    found: list[tuple[str, str]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                found.append((alias.name.split(".")[0], alias.name))
        elif isinstance(node, ast.ImportFrom) and node.module and not node.level:
            found.append((node.module.split(".")[0], node.module))
    return found


def find_violations(root: Path = ROOT) -> list[str]:
    violations: list[str] = []
    for layer in LAYER_RULES:
        if not (root / layer).is_dir():
            continue
        for f in sorted((root / layer).rglob("*.py")):
            if "__pycache__" in f.parts:
                continue
            rel = f.relative_to(root).as_posix()
            forbidden = set(LAYER_RULES[layer])
            if rel in QT_ADAPTERS:
                forbidden.discard(QT)
            for pkg, module in imported_packages(f):
                if pkg in forbidden:
                    violations.append(f"{rel} imports forbidden '{module}' (layer={layer})")
    return violations


def main() -> int:
    violations = find_violations()
    if violations:
        print("Architecture violations found:\n")
        for v in violations:
            print(" -", v)
        print("\nFix: keep Qt in the adapters and state logic in core/domain.")
        return 1

    print("OK: no architecture boundary violations.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
