# -*- coding: utf-8 -*-
"""HTTP transport for the account RPC (stdlib, no extra deps).

Any object with ``post(body: bytes) -> TransportResponse`` can stand in for
:class:`HttpTransport` (tests use an in-memory fake).
"""

from __future__ import annotations

import logging
import socket
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Dict

from app.config import API_PATH, DEFAULT_TIMEOUT_S, USER_AGENT
from services.errors import TransportError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    status: int
    body: bytes
    content_type: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def is_json(self) -> bool:
        return "json" in (self.content_type or "").lower()


class HttpTransport:
    def __init__(self, base_url: str, *, path: str = API_PATH, timeout_s: float = DEFAULT_TIMEOUT_S) -> None:
        self.url = str(base_url or "").rstrip("/") + "/" + str(path or "").lstrip("/")
        self.timeout_s = float(timeout_s)

    def post(self, body: bytes) -> TransportResponse:
        req = urllib.request.Request(
            self.url,
            data=body,
            method="POST",
            headers={
                "Content-Type": "application/json; charset=utf-8",
                "User-Agent": USER_AGENT,
            },
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout_s) as resp:
                data = resp.read()
                headers = {k.lower(): v for k, v in resp.headers.items()}
                status = int(getattr(resp, "status", 200) or 200)
        except urllib.error.HTTPError as e:
            raise TransportError(f"HTTP {e.code} from {self.url}", status=e.code) from e
        except (socket.timeout, TimeoutError) as e:
            raise TransportError(f"Timeout after {self.timeout_s:g}s ({self.url})") from e
        except (urllib.error.URLError, OSError) as e:
            raise TransportError(f"Request to {self.url} failed: {e}") from e

        log.debug("POST %s -> %s (%d bytes)", self.url, status, len(data))
        return TransportResponse(
            status=status,
            body=data,
            content_type=headers.get("content-type", ""),
            headers=headers,
        )
