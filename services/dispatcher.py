# -*- coding: utf-8 -*-
"""Command dispatcher (no-Qt).

Two steps so the network part can run off the UI thread:

- ``prepare(command)``: auth guard + request id + encoded body (UI thread)
- ``execute(request)``: blocking round trip, never raises (worker thread)

Applying a result to the console state is the session's job
(:meth:`app.session.ConsoleSession.apply_result`).
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass
from email.message import Message
from typing import Any, Callable, Optional

from app.config import DEFAULT_EXPORT_FILENAME
from domain.snapshot import Snapshot
from services.commands import Command
from services.errors import DispatchError, ErrorKind, TransportError
from services.protocol import decode_response, encode_request

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingRequest:
    request_id: int
    command: Command
    body: bytes

    @property
    def action(self) -> str:
        return self.command.action.value


@dataclass(frozen=True)
class DispatchResult:
    ok: bool
    request_id: Optional[int]
    action: str
    snapshot: Optional[Snapshot] = None
    payload: Optional[bytes] = None
    filename: str = ""
    error: Optional[DispatchError] = None

    @property
    def binary(self) -> bool:
        return self.payload is not None

    @classmethod
    def failure(cls, request_id: Optional[int], action: str, kind: ErrorKind, code: str = "", text: str = "") -> "DispatchResult":
        return cls(ok=False, request_id=request_id, action=action, error=DispatchError(kind, code=code, text=text))


def _filename_from(content_disposition: str) -> str:
    if not content_disposition:
        return ""
    msg = Message()
    msg["content-disposition"] = content_disposition
    name = msg.get_filename() or ""
    # never let a server pick a directory
    return name.replace("\\", "/").rsplit("/", 1)[-1]


class CommandDispatcher:
    """Sends commands for the token returned by *token_provider*.

    Parameters
    ----------
    transport:
        Object with ``post(body: bytes) -> TransportResponse``.
    token_provider:
        Callable returning the current auth token or None ("not logged in").
    """

    def __init__(self, transport: Any, token_provider: Callable[[], Optional[str]]) -> None:
        self._transport = transport
        self._token_provider = token_provider
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def _next_id(self) -> int:
        with self._lock:
            return next(self._ids)

    def prepare(self, command: Command) -> Optional[PendingRequest]:
        try:
            token = self._token_provider()
        except Exception:
            log.debug("token provider failed; treating as logged out", exc_info=True)
            token = None
        if not token:
            log.debug("No auth token; %s not sent.", command.action.value)
            return None
        body = encode_request(token, command.action, command.args)
        return PendingRequest(request_id=self._next_id(), command=command, body=body)

    def execute(self, request: PendingRequest) -> DispatchResult:
        rid = request.request_id
        log.debug("Dispatch id=%s action=%s args=%d", rid, request.action, len(request.command.args))
        try:
            resp = self._transport.post(request.body)
        except TransportError as e:
            return self._log_failure(DispatchResult.failure(rid, request.action, ErrorKind.TRANSPORT, str(e.status or ""), str(e)))
        except Exception as e:
            log.debug("transport raised unexpected error", exc_info=True)
            return self._log_failure(DispatchResult.failure(rid, request.action, ErrorKind.TRANSPORT, "", repr(e)))

        if request.command.binary and not resp.is_json:
            filename = _filename_from(resp.headers.get("content-disposition", "")) or DEFAULT_EXPORT_FILENAME
            log.info("Dispatch id=%s action=%s ok (%d bytes -> %s)", rid, request.action, len(resp.body), filename)
            return DispatchResult(ok=True, request_id=rid, action=request.action, payload=resp.body, filename=filename)

        decoded = decode_response(resp.body)
        if decoded.error is not None:
            err = decoded.error
            return self._log_failure(DispatchResult.failure(rid, request.action, err.kind, err.code, err.text))
        if request.command.binary:
            # a JSON success on an export carries no archive
            return self._log_failure(
                DispatchResult.failure(rid, request.action, ErrorKind.MALFORMED, "", "expected archive, got snapshot")
            )
        log.info("Dispatch id=%s action=%s ok", rid, request.action)
        return DispatchResult(ok=True, request_id=rid, action=request.action, snapshot=decoded.snapshot)

    def dispatch(self, command: Command) -> Optional[DispatchResult]:
        """prepare + execute; None when no token is present."""
        request = self.prepare(command)
        if request is None:
            return None
        return self.execute(request)

    @staticmethod
    def _log_failure(result: DispatchResult) -> DispatchResult:
        err = result.error
        if err is not None:
            log.error(
                "Dispatch id=%s action=%s failed: kind=%s code=%s text=%s",
                result.request_id,
                result.action,
                err.kind.value,
                err.code,
                err.text,
            )
        return result
