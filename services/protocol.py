# -*- coding: utf-8 -*-
"""Wire codec for the account RPC.

Request::

    {"auth": "<token>", "aktion": "<action>", "daten": ["...", ...]}

Response, one of::

    {"status": "ok", "role": "...", "data": {...}}     # full snapshot
    {"status": "error", "code": "...", "text": "..."}

Anything else is malformed and handled like an error.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple, Union

from domain.snapshot import Snapshot, SnapshotFormatError, parse_snapshot
from services.errors import DispatchError, ErrorKind


def _arg(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_request(auth: str, action: str, args: Sequence[Any]) -> bytes:
    body = {
        "auth": str(auth),
        "aktion": getattr(action, "value", action),
        "daten": [_arg(a) for a in args],
    }
    return json.dumps(body, ensure_ascii=False).encode("utf-8")


@dataclass(frozen=True)
class Decoded:
    snapshot: Optional[Snapshot] = None
    error: Optional[DispatchError] = None

    @property
    def ok(self) -> bool:
        return self.snapshot is not None and self.error is None


def _malformed(text: str) -> Decoded:
    return Decoded(error=DispatchError(ErrorKind.MALFORMED, text=text))


def decode_json(body: Union[bytes, str]) -> Tuple[Optional[Any], Optional[str]]:
    """Return (payload, None) or (None, reason)."""
    try:
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        return json.loads(body), None
    except (UnicodeDecodeError, ValueError) as exc:
        return None, f"response is not JSON: {exc}"


def decode_payload(payload: Any) -> Decoded:
    if not isinstance(payload, dict):
        return _malformed("response is not a JSON object")
    status = payload.get("status")
    if status == "ok":
        try:
            return Decoded(snapshot=parse_snapshot(payload))
        except SnapshotFormatError as exc:
            return _malformed(f"invalid snapshot: {exc}")
    if status == "error":
        code = payload.get("code", "")
        return Decoded(
            error=DispatchError(
                ErrorKind.APPLICATION,
                code="" if code is None else str(code),
                text=str(payload.get("text", "") or ""),
            )
        )
    return _malformed(f"unexpected status {status!r}")


def decode_response(body: Union[bytes, str]) -> Decoded:
    payload, reason = decode_json(body)
    if reason is not None:
        return _malformed(reason)
    return decode_payload(payload)
