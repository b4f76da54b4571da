# -*- coding: utf-8 -*-
"""Qt-backed command dispatch (QThreadPool/QRunnable).

The round trip runs on a pool thread; the result is handed back to the UI
thread through a queued signal and applied there, in completion order. Any
number of requests may be in flight; none is cancelled.
"""
from __future__ import annotations

import logging
import traceback
from typing import Optional

from PyQt5.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal, pyqtSlot

from app.session import ConsoleSession
from services.commands import Command
from services.dispatcher import CommandDispatcher, DispatchResult, PendingRequest
from services.errors import ErrorKind

log = logging.getLogger(__name__)


class _WorkerSignals(QObject):
    finished = pyqtSignal(object)


class DispatchWorker(QRunnable):
    def __init__(self, dispatcher: CommandDispatcher, request: PendingRequest) -> None:
        super().__init__()
        self._dispatcher = dispatcher
        self._request = request
        self.signals = _WorkerSignals()

    def run(self) -> None:
        try:
            result = self._dispatcher.execute(self._request)
        except Exception as exc:
            log.error("Dispatch worker id=%s crashed:\n%s", self._request.request_id, traceback.format_exc())
            result = DispatchResult.failure(
                self._request.request_id, self._request.action, ErrorKind.TRANSPORT, "", repr(exc)
            )
        self.signals.finished.emit(result)


class QtCommandDispatcher(QObject):
    request_started = pyqtSignal(int, str)
    request_finished = pyqtSignal(int, bool)

    def __init__(self, session: ConsoleSession, dispatcher: CommandDispatcher, *, pool: Optional[QThreadPool] = None) -> None:
        super().__init__()
        self._session = session
        self._dispatcher = dispatcher
        self._pool = pool or QThreadPool.globalInstance()
        self._in_flight = set()

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def submit(self, command: Command) -> Optional[int]:
        """Start *command*; returns its request id, or None if nothing was sent."""
        request = self._dispatcher.prepare(command)
        if request is None:
            return None
        worker = DispatchWorker(self._dispatcher, request)
        worker.signals.finished.connect(self._on_finished)
        self._in_flight.add(request.request_id)
        self.request_started.emit(request.request_id, request.action)
        self._pool.start(worker)
        return request.request_id

    @pyqtSlot(object)
    def _on_finished(self, result: DispatchResult) -> None:
        if result.request_id is not None:
            self._in_flight.discard(result.request_id)
        try:
            self._session.apply_result(result)
        except Exception:
            log.exception("Applying dispatch result id=%s failed", result.request_id)
        self.request_finished.emit(int(result.request_id or 0), bool(result.ok))
