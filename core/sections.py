# -*- coding: utf-8 -*-
"""Role and section keys (single source of truth).

Keep these constants stable. They are the wire keys used by:
- the snapshot payload (``role`` and the keys of ``data``)
- core.section_registry (sidebar order per role)
- domain.row_model (descriptor lookup table)
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    ADMIN = "admin"
    CASEWORKER = "bearbeiter"
    GUEST = "gast"

    @classmethod
    def parse(cls, value) -> Optional["Role"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return None


class Section(str, Enum):
    # admin
    CHANGES = "aenderungen"
    ACCESSES = "zugriffe"
    USERS = "benutzer"
    DISTRICTS = "bezirke"

    # bearbeiter / gast
    MY_CHANGES = "meine-aenderungen"
    SHEETS = "meine-grundbuchblaetter"
    SUBSCRIPTIONS = "abonnements"

    # every role
    ACCOUNT_SETTINGS = "meine-kontodaten"

    # nothing selected
    NONE = ""

    @classmethod
    def parse(cls, value) -> Optional["Section"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return None
