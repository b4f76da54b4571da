# -*- coding: utf-8 -*-
"""Build-time configuration.

This module is intentionally tiny and *import-safe*. Per-user values
(server URL, timeout, stale policy) live in :mod:`infra.settings`.
"""

from __future__ import annotations

APP_NAME: str = "Kontokonsole"

# Endpoint of the account RPC, relative to the server URL.
API_PATH: str = "/konto"

# Default server; overridden by settings or KONTOKONSOLE_SERVER_URL.
DEFAULT_SERVER_URL: str = "http://127.0.0.1:8080"

# Bounded request timeout (seconds). Retry is left to the caller.
DEFAULT_TIMEOUT_S: float = 30.0

# File name used for binary exports without a Content-Disposition header.
DEFAULT_EXPORT_FILENAME: str = "grundbuchblaetter.zip"

# How late responses are handled:
#   - 'apply'  : last response to arrive wins (also older requests)
#   - 'discard': responses older than the last applied one are ignored
STALE_POLICIES = ("apply", "discard")
DEFAULT_STALE_POLICY: str = "apply"

USER_AGENT: str = "Kontokonsole/RPC"
