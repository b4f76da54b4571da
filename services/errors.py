# -*- coding: utf-8 -*-
"""services/errors.py

Typed failures of a command round trip (no PyQt dependency).

Failures are terminal at the dispatcher boundary: they are logged and returned
as data, never raised to callers and never retried by the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    MALFORMED = "malformed"
    APPLICATION = "application"
    ROLE_CHANGED = "role_changed"


@dataclass(frozen=True)
class DispatchError:
    kind: ErrorKind
    code: str = ""
    text: str = ""

    @property
    def retryable(self) -> bool:
        return self.kind is ErrorKind.TRANSPORT

    def __str__(self) -> str:
        if self.code:
            return f"{self.kind.value} [{self.code}]: {self.text}"
        return f"{self.kind.value}: {self.text}"


class TransportError(Exception):
    """Request did not complete (connection, timeout, HTTP status)."""

    def __init__(self, message: str, *, status: int = 0) -> None:
        super().__init__(message)
        self.status = int(status)
