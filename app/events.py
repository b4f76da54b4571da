# -*- coding: utf-8 -*-
"""Simple event bus for console re-render requests (no UI dependency)."""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import time
from typing import Any, Callable, Dict, List, Optional, Tuple, Type


@dataclass(frozen=True)
class SectionChanged:
    section: Any
    index: Optional[int] = None


@dataclass(frozen=True)
class FilterChanged:
    section: Any
    text: Optional[str] = None


@dataclass(frozen=True)
class SelectionChanged:
    section: Any
    ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SnapshotReplaced:
    section: Any
    request_id: Optional[int] = None
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True)
class DispatchFailed:
    request_id: Optional[int]
    action: str
    kind: str
    code: str = ""
    text: str = ""


@dataclass(frozen=True)
class DownloadReady:
    request_id: Optional[int]
    action: str
    filename: str
    payload: bytes = b""


class EventBus:
    """Minimal in-process event bus (best-effort)."""

    def __init__(self) -> None:
        self._subs: Dict[Type[Any], List[Callable[[Any], None]]] = {}

    def subscribe(self, event_type: Type[Any], callback: Callable[[Any], None]) -> None:
        self._subs.setdefault(event_type, []).append(callback)

    def unsubscribe(self, event_type: Type[Any], callback: Callable[[Any], None]) -> None:
        subs = self._subs.get(event_type, [])
        if callback in subs:
            subs.remove(callback)

    def emit(self, event: Any) -> None:
        for cb in list(self._subs.get(type(event), []) or []):
            try:
                cb(event)
            except Exception:
                # Best-effort: a failing view handler never breaks the engine
                logging.getLogger(__name__).debug("Event handler failed.", exc_info=True)
