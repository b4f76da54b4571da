# -*- coding: utf-8 -*-
"""domain/snapshot.py

Authoritative account data as delivered by the backend.

A Snapshot is immutable once built: sections and rows are exposed through
read-only mappings and tuples. The console never patches a snapshot; it swaps
the whole object (see :func:`domain.console_state.replace_snapshot`).

Wire shape::

    {"role": "admin",
     "data": {"benutzer": {"spalten": [...], "daten": {"<row-id>": [...]}}}}
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from core.sections import Role, Section

Row = Tuple[str, ...]


class SnapshotFormatError(ValueError):
    """Payload is not a structurally valid snapshot."""


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


@dataclass(frozen=True)
class SectionData:
    columns: Tuple[str, ...] = ()
    rows: Mapping[str, Row] = field(default_factory=lambda: MappingProxyType({}))

    def get(self, key: str) -> Optional[Row]:
        return self.rows.get(key)

    def __len__(self) -> int:
        return len(self.rows)


EMPTY_SECTION = SectionData()


@dataclass(frozen=True)
class Snapshot:
    role: Role
    sections: Mapping[str, SectionData] = field(default_factory=lambda: MappingProxyType({}))
    selected: Optional[str] = None

    def has_section(self, key) -> bool:
        return _key(key) in self.sections

    def section(self, key) -> SectionData:
        return self.sections.get(_key(key), EMPTY_SECTION)


def _key(key) -> str:
    return key.value if isinstance(key, Section) else str(key)


def _parse_section(name: str, raw: Any) -> SectionData:
    if not isinstance(raw, dict):
        raise SnapshotFormatError(f"section {name!r} is not an object")
    columns = raw.get("spalten", [])
    rows = raw.get("daten", {})
    if not isinstance(columns, list):
        raise SnapshotFormatError(f"section {name!r}: 'spalten' must be a list")
    if not isinstance(rows, dict):
        raise SnapshotFormatError(f"section {name!r}: 'daten' must be an object")

    parsed: Dict[str, Row] = {}
    for row_key, row in rows.items():
        if not isinstance(row, list):
            raise SnapshotFormatError(f"section {name!r}: row {row_key!r} is not a list")
        parsed[str(row_key)] = tuple(_cell(v) for v in row)
    return SectionData(
        columns=tuple(_cell(c) for c in columns),
        rows=MappingProxyType(parsed),
    )


def parse_snapshot(payload: Any) -> Snapshot:
    """Build a Snapshot from a decoded response/page body.

    Accepts ``role`` or the legacy ``kontotyp`` key for the role.
    """
    if not isinstance(payload, dict):
        raise SnapshotFormatError("snapshot must be a JSON object")

    raw_role = payload.get("role", payload.get("kontotyp"))
    role = Role.parse(raw_role)
    if role is None:
        raise SnapshotFormatError(f"unknown role {raw_role!r}")

    data = payload.get("data", {})
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SnapshotFormatError("'data' must be an object")

    sections = {str(name): _parse_section(str(name), raw) for name, raw in data.items()}
    selected = payload.get("ausgewaehlt")
    return Snapshot(
        role=role,
        sections=MappingProxyType(sections),
        selected=None if selected is None else _cell(selected),
    )


def snapshot_from_json(text: str) -> Snapshot:
    try:
        payload = json.loads(text)
    except ValueError as exc:
        raise SnapshotFormatError(f"invalid JSON: {exc}") from exc
    return parse_snapshot(payload)
