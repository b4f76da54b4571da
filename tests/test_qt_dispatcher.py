# -*- coding: utf-8 -*-
"""Qt adapter: worker round trip and signal re-emission (no event loop)."""
from __future__ import annotations

import pytest

pytest.importorskip("PyQt5")

from PyQt5.QtCore import QCoreApplication  # noqa: E402

from app.session import ConsoleSession  # noqa: E402
from conftest import FakeTransport, admin_payload, json_response  # noqa: E402
from services import commands  # noqa: E402
from services.dispatcher import CommandDispatcher  # noqa: E402
from services.errors import ErrorKind  # noqa: E402
from services.qt_dispatcher import DispatchWorker, QtCommandDispatcher  # noqa: E402
from ui.console_signals import ConsoleSignals  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    return QCoreApplication.instance() or QCoreApplication([])


class _Pool:
    """Holds workers instead of running them, so tests drive the order."""

    def __init__(self) -> None:
        self.workers = []

    def start(self, worker) -> None:
        self.workers.append(worker)


def _setup(admin_snapshot, *responses, token="tok"):
    session = ConsoleSession(admin_snapshot)
    dispatcher = CommandDispatcher(FakeTransport(*responses), lambda: token)
    pool = _Pool()
    qt = QtCommandDispatcher(session, dispatcher, pool=pool)
    return session, qt, pool


def test_submit_runs_on_pool_and_applies(qapp, admin_snapshot) -> None:
    updated = admin_payload()
    updated["data"]["benutzer"]["daten"]["a@b.com"][2] = "admin"
    session, qt, pool = _setup(admin_snapshot, json_response(updated))
    session.change_section(2)
    started, finished = [], []
    qt.request_started.connect(lambda rid, action: started.append((rid, action)))
    qt.request_finished.connect(lambda rid, ok: finished.append((rid, ok)))

    rid = qt.submit(commands.edit_user_role(session.state, "a@b.com", "admin"))

    assert rid is not None and qt.in_flight == 1
    assert started == [(rid, "benutzer-bearbeite-kontotyp")]
    # worker signal is wired to the dispatcher slot; same thread, so delivery is direct
    pool.workers[0].run()

    assert qt.in_flight == 0
    assert finished == [(rid, True)]
    assert session.view().row("a@b.com").cells[2] == "admin"


def test_submit_without_token_sends_nothing(qapp, admin_snapshot) -> None:
    session, qt, pool = _setup(admin_snapshot, token="")
    assert qt.submit(commands.delete_users(session.state, ids=["a@b.com"])) is None
    assert pool.workers == [] and qt.in_flight == 0


def test_worker_turns_crash_into_failure(qapp, admin_snapshot) -> None:
    class Boom:
        def execute(self, request):
            raise RuntimeError("kaputt")

    session = ConsoleSession(admin_snapshot)
    request = CommandDispatcher(FakeTransport(), lambda: "tok").prepare(
        commands.delete_users(session.state, ids=["a@b.com"])
    )
    worker = DispatchWorker(Boom(), request)
    results = []
    worker.signals.finished.connect(results.append)
    worker.run()
    assert results[0].ok is False
    assert results[0].error.kind is ErrorKind.TRANSPORT


def test_console_signals_reemit_bus_events(qapp, admin_snapshot) -> None:
    session = ConsoleSession(admin_snapshot)
    signals = ConsoleSignals(session.bus)
    seen = []
    signals.section_changed.connect(seen.append)
    signals.filter_changed.connect(seen.append)

    session.change_section(1)
    session.set_filter("dora")
    assert [type(e).__name__ for e in seen] == ["SectionChanged", "FilterChanged"]

    signals.detach()
    session.change_section(0)
    assert len(seen) == 2
