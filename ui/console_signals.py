# -*- coding: utf-8 -*-
"""ui/console_signals.py

Qt face of the console event bus: every engine event is re-emitted as a
``pyqtSignal(object)`` so widgets can connect their re-render slots.
"""

from __future__ import annotations

import logging

from PyQt5.QtCore import QObject, pyqtSignal

from app.events import (
    DispatchFailed,
    DownloadReady,
    EventBus,
    FilterChanged,
    SectionChanged,
    SelectionChanged,
    SnapshotReplaced,
)

log = logging.getLogger(__name__)


class ConsoleSignals(QObject):
    section_changed = pyqtSignal(object)
    filter_changed = pyqtSignal(object)
    selection_changed = pyqtSignal(object)
    snapshot_replaced = pyqtSignal(object)
    dispatch_failed = pyqtSignal(object)
    download_ready = pyqtSignal(object)

    def __init__(self, bus: EventBus) -> None:
        super().__init__()
        self._bus = bus
        self._routes = (
            (SectionChanged, self.section_changed),
            (FilterChanged, self.filter_changed),
            (SelectionChanged, self.selection_changed),
            (SnapshotReplaced, self.snapshot_replaced),
            (DispatchFailed, self.dispatch_failed),
            (DownloadReady, self.download_ready),
        )
        for event_type, signal in self._routes:
            bus.subscribe(event_type, signal.emit)

    def detach(self) -> None:
        for event_type, signal in self._routes:
            try:
                self._bus.unsubscribe(event_type, signal.emit)
            except Exception:
                log.debug("detach failed for %s", event_type.__name__, exc_info=True)
