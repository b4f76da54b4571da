# -*- coding: utf-8 -*-
"""Kontokonsole entrypoint.

Headless driver for the console engine:
- show   : render a section of a snapshot file as a text table
- send   : dispatch an action and write the replacement snapshot
- export : dispatch the sheet export and save the archive

``send --qt`` runs the round trip on the Qt thread pool, the way the GUI does.
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

log = logging.getLogger("kontokonsole")


def _build_parser() -> argparse.ArgumentParser:
    from kontokonsole import __version__

    p = argparse.ArgumentParser(prog="kontokonsole", description="Konto console engine (headless).")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--snapshot", required=True, help="JSON file with the initial snapshot (page load data)")
    p.add_argument("--section", default="0", help="active section: sidebar index or section key (e.g. benutzer)")
    p.add_argument("--filter", default=None, help="filter text for the active section")
    p.add_argument("--select", action="append", default=[], help="row id to select (repeatable)")
    p.add_argument("--select-all", action="store_true", help="select all visible rows")

    sub = p.add_subparsers(dest="cmd", required=True)
    sub.add_parser("show", help="print the active section")

    send = sub.add_parser("send", help="dispatch an action")
    send.add_argument("action", help="action name, e.g. benutzer-bearbeite-kontotyp")
    send.add_argument("args", nargs="*", help="positional arguments")
    send.add_argument("--with-selection", action="store_true", help="append the live selection to the arguments")
    send.add_argument("--out", default=None, help="write the new snapshot here (default: overwrite --snapshot)")
    send.add_argument("--qt", action="store_true", help="run the round trip on the Qt thread pool")

    exp = sub.add_parser("export", help="export selected sheets as an archive")
    exp.add_argument("--dest", default=None, help="target directory (default: per-user exports folder)")

    for sp in (send, exp):
        sp.add_argument("--server", default=None, help="server URL (default from settings)")
        sp.add_argument("--token", default=None, help="auth token (default: KONTOKONSOLE_TOKEN)")
    return p


def _snapshot_payload(snapshot) -> dict:
    payload = {
        "role": snapshot.role.value,
        "data": {
            name: {"spalten": list(sec.columns), "daten": {k: list(v) for k, v in sec.rows.items()}}
            for name, sec in snapshot.sections.items()
        },
    }
    if snapshot.selected is not None:
        payload["ausgewaehlt"] = snapshot.selected
    return payload


def _section_index(role, value) -> Optional[int]:
    from core.section_registry import index_of

    text = str(value).strip()
    if text.lstrip("-").isdigit():
        return int(text)
    return index_of(role, text)


def _make_session(ns, settings):
    from app.session import ConsoleSession
    from domain.snapshot import snapshot_from_json
    from services.dispatcher import CommandDispatcher
    from services.transport import HttpTransport

    snapshot = snapshot_from_json(Path(ns.snapshot).read_text(encoding="utf-8"))
    token = getattr(ns, "token", None) or os.environ.get("KONTOKONSOLE_TOKEN")
    server = getattr(ns, "server", None) or settings["server_url"]
    transport = HttpTransport(server, timeout_s=settings["request_timeout_s"])
    dispatcher = CommandDispatcher(transport, lambda: token)
    session = ConsoleSession(snapshot, dispatcher=dispatcher, stale_policy=settings["stale_policy"])

    session.change_section(_section_index(snapshot.role, ns.section))
    if ns.filter:
        session.set_filter(ns.filter)
    if ns.select_all:
        session.select_all_visible()
    for rid in ns.select:
        session.select(rid)
    return session, dispatcher


def _run_qt(session, dispatcher, command) -> Optional[object]:
    from app.deps import require_qt

    try:
        require_qt("send --qt")
    except RuntimeError as e:
        print(str(e), file=sys.stderr)
        return None
    from PyQt5.QtCore import QCoreApplication
    from services.qt_dispatcher import QtCommandDispatcher
    from ui.console_signals import ConsoleSignals

    app = QCoreApplication.instance() or QCoreApplication([])
    signals = ConsoleSignals(session.bus)
    qt_dispatcher = QtCommandDispatcher(session, dispatcher)
    outcome = {}

    def _done(request_id: int, ok: bool) -> None:
        outcome["ok"] = ok
        app.quit()

    qt_dispatcher.request_finished.connect(_done)
    signals.dispatch_failed.connect(lambda ev: outcome.setdefault("error", ev))
    if qt_dispatcher.submit(command) is None:
        return None
    app.exec_()
    signals.detach()
    return outcome


def main(argv: Optional[List[str]] = None) -> int:
    from app.bootstrap import bootstrap
    from app.events import DispatchFailed, DownloadReady
    from app.view_model import render_text
    from domain.snapshot import SnapshotFormatError
    from infra.paths import exports_dir
    from services import commands

    ns = _build_parser().parse_args(argv)
    settings = bootstrap()

    try:
        session, dispatcher = _make_session(ns, settings)
    except (OSError, SnapshotFormatError) as e:
        print(f"Cannot load snapshot: {e}", file=sys.stderr)
        return 2

    failures = []
    downloads = []
    session.bus.subscribe(DispatchFailed, failures.append)
    session.bus.subscribe(DownloadReady, downloads.append)

    if ns.cmd == "show":
        print(render_text(session.view()))
        return 0

    if ns.cmd == "export":
        result = session.dispatch(commands.export_sheets(session.state))
        if result is None:
            print("Not logged in: no token, nothing sent.", file=sys.stderr)
            return 1
        if not downloads:
            print(f"Export failed: {result.error}", file=sys.stderr)
            return 1
        dest = Path(ns.dest) if ns.dest else exports_dir()
        dest.mkdir(parents=True, exist_ok=True)
        target = dest / downloads[-1].filename
        target.write_bytes(downloads[-1].payload)
        print(str(target))
        return 0

    try:
        args = list(ns.args) + (list(session.state.live_selection) if ns.with_selection else [])
        command = commands.command(ns.action, args)
    except ValueError as e:
        print(f"Unknown action: {e}", file=sys.stderr)
        return 2

    if ns.qt:
        outcome = _run_qt(session, dispatcher, command)
        sent = outcome is not None
    else:
        sent = session.dispatch(command) is not None
    if not sent:
        print("Nothing sent (no token or Qt unavailable).", file=sys.stderr)
        return 1
    if failures:
        ev = failures[-1]
        print(f"{ev.action} failed: {ev.kind} [{ev.code}] {ev.text}", file=sys.stderr)
        return 1

    out = Path(ns.out or ns.snapshot)
    out.write_text(json.dumps(_snapshot_payload(session.snapshot), ensure_ascii=False, indent=2), encoding="utf-8")
    print(render_text(session.view()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
