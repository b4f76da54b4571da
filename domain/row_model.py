# -*- coding: utf-8 -*-
"""domain/row_model.py

Per (role, section) row rules:
- identity: stable selection key of a raw row
- projection: display cells derived from the raw row
- columns: header labels (same length as the projection)
- actions: commands the action bar offers for the section

Rules live in a lookup table resolved once per render. Combinations that are
not registered resolve to EMPTY_DESCRIPTOR (nothing shown, never an error).
Raw row layouts follow the backend's account tables.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Sequence, Tuple

from core.actions import Action
from core.sections import Role, Section

log = logging.getLogger(__name__)

Cells = Tuple[str, ...]

_QUOTES = "\"'«»„“”"


def field_at(row: Sequence[str], index: int) -> str:
    """Field *index* of *row*, or "" if the row is too short."""
    try:
        value = row[index]
    except (IndexError, TypeError):
        return ""
    return "" if value is None else str(value)


def strip_quotes(value: str) -> str:
    return "".join(ch for ch in str(value or "") if ch not in _QUOTES).strip()


def format_epoch(seconds: str, offset_minutes: str = "") -> str:
    """``DD.MM.YYYY HH:MM`` in the commit's own UTC offset. Raw text if unparsable."""
    try:
        ts = int(str(seconds).strip())
    except (TypeError, ValueError):
        return str(seconds or "")
    try:
        offset = int(str(offset_minutes).strip() or 0)
    except ValueError:
        offset = 0
    try:
        tz = timezone(timedelta(minutes=offset))
        return datetime.fromtimestamp(ts, tz).strftime("%d.%m.%Y %H:%M")
    except (OverflowError, OSError, ValueError):
        return str(seconds)


def format_date(value: str) -> str:
    """ISO/RFC3339 date-time to ``DD.MM.YYYY``. Raw text if unparsable."""
    text = str(value or "").strip()
    if not text:
        return ""
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).strftime("%d.%m.%Y")
    except ValueError:
        return text


def _access_status(row: Sequence[str]) -> str:
    granted_by = field_at(row, 6)
    rejected_by = field_at(row, 7)
    if granted_by:
        return f"gewährt von {granted_by}"
    if rejected_by:
        return f"abgelehnt von {rejected_by}"
    return "offen"


@dataclass(frozen=True)
class SectionDescriptor:
    section: Section
    columns: Tuple[str, ...]
    identity: Callable[[Sequence[str]], str]
    project: Callable[[Sequence[str]], Cells]
    actions: Tuple[Action, ...] = ()
    kind: str = "table"

    @property
    def is_empty(self) -> bool:
        return self.kind == "empty"

    def column_width(self) -> float:
        """Even column width in percent."""
        if not self.columns:
            return 0.0
        return 100.0 / len(self.columns)


def _no_identity(row: Sequence[str]) -> str:
    return ""


def _no_projection(row: Sequence[str]) -> Cells:
    return ()


EMPTY_DESCRIPTOR = SectionDescriptor(
    section=Section.NONE,
    columns=(),
    identity=_no_identity,
    project=_no_projection,
    kind="empty",
)


def _field_identity(index: int) -> Callable[[Sequence[str]], str]:
    def identity(row: Sequence[str]) -> str:
        return field_at(row, index)
    return identity


def _composite_identity(*indexes: int) -> Callable[[Sequence[str]], str]:
    # The business key is the identity (land/amtsgericht/bezirk[/blatt]).
    def identity(row: Sequence[str]) -> str:
        return "/".join(field_at(row, i) for i in indexes)
    return identity


# --- projections ---

def _project_changes(row: Sequence[str]) -> Cells:
    return (
        field_at(row, 6),
        field_at(row, 1),
        field_at(row, 2),
        format_epoch(field_at(row, 3), field_at(row, 4)),
    )


def _project_accesses(row: Sequence[str]) -> Cells:
    return (
        field_at(row, 1),
        field_at(row, 2),
        strip_quotes(field_at(row, 3)),
        field_at(row, 4),
        strip_quotes(field_at(row, 5)),
        _access_status(row),
        format_date(field_at(row, 8)),
    )


def _project_account(row: Sequence[str]) -> Cells:
    # [name, email, rechte, pubkey, fingerprint]; spalten names 3 and 4 swapped
    return (field_at(row, 0), field_at(row, 1), field_at(row, 2), field_at(row, 4))


def _project_districts(row: Sequence[str]) -> Cells:
    return (field_at(row, 0), field_at(row, 1), field_at(row, 2))


def _project_sheets(row: Sequence[str]) -> Cells:
    return (
        field_at(row, 1),
        field_at(row, 2),
        field_at(row, 3),
        strip_quotes(field_at(row, 4)),
        format_date(field_at(row, 5)),
    )


def _project_subscriptions(row: Sequence[str]) -> Cells:
    return tuple(field_at(row, i) for i in range(1, 7))


# --- descriptors ---

_CHANGES_COLUMNS = ("Zusammenfassung", "Name", "E-Mail", "Zeit")
_ACCOUNT_COLUMNS = ("Name", "E-Mail", "Kontotyp", "Fingerprint")

CHANGES = SectionDescriptor(
    section=Section.CHANGES,
    columns=_CHANGES_COLUMNS,
    identity=_field_identity(0),
    project=_project_changes,
)

MY_CHANGES = SectionDescriptor(
    section=Section.MY_CHANGES,
    columns=_CHANGES_COLUMNS,
    identity=_field_identity(0),
    project=_project_changes,
)

ACCESSES = SectionDescriptor(
    section=Section.ACCESSES,
    columns=("Name", "E-Mail", "Typ", "Grund", "Blätter", "Status", "Am"),
    identity=_field_identity(0),
    project=_project_accesses,
    actions=(Action.ACCESS_APPROVE, Action.ACCESS_REJECT, Action.ACCESS_WITHDRAW),
)

USERS = SectionDescriptor(
    section=Section.USERS,
    columns=_ACCOUNT_COLUMNS,
    identity=_field_identity(1),
    project=_project_account,
    actions=(
        Action.USER_CREATE,
        Action.USER_DELETE,
        Action.USER_EDIT_ROLE,
        Action.USER_GENERATE_KEY,
    ),
)

DISTRICTS = SectionDescriptor(
    section=Section.DISTRICTS,
    columns=("Land", "Amtsgericht", "Bezirk"),
    identity=_composite_identity(0, 1, 2),
    project=_project_districts,
    actions=(Action.DISTRICT_CREATE, Action.DISTRICT_CREATE_BULK, Action.DISTRICT_DELETE),
)

SHEETS = SectionDescriptor(
    section=Section.SHEETS,
    columns=("Amtsgericht", "Bezirk", "Blatt", "Zugriff", "Seit"),
    identity=_composite_identity(0, 1, 2, 3),
    project=_project_sheets,
    actions=(Action.SHEETS_EXPORT, Action.SUBSCRIPTION_CREATE),
)

SUBSCRIPTIONS = SectionDescriptor(
    section=Section.SUBSCRIPTIONS,
    columns=("Typ", "Ziel", "Amtsgericht", "Bezirk", "Blatt", "Aktenzeichen"),
    identity=_field_identity(0),
    project=_project_subscriptions,
    actions=(Action.SUBSCRIPTION_CREATE, Action.SUBSCRIPTION_END),
)

ACCOUNT_SETTINGS = SectionDescriptor(
    section=Section.ACCOUNT_SETTINGS,
    columns=_ACCOUNT_COLUMNS,
    identity=_field_identity(1),
    project=_project_account,
    actions=(Action.SETTING_EDIT,),
)


ROW_RULES: Dict[Tuple[Role, Section], SectionDescriptor] = {
    (Role.ADMIN, Section.CHANGES): CHANGES,
    (Role.ADMIN, Section.ACCESSES): ACCESSES,
    (Role.ADMIN, Section.USERS): USERS,
    (Role.ADMIN, Section.DISTRICTS): DISTRICTS,
    (Role.ADMIN, Section.ACCOUNT_SETTINGS): ACCOUNT_SETTINGS,
    (Role.CASEWORKER, Section.MY_CHANGES): MY_CHANGES,
    (Role.CASEWORKER, Section.SHEETS): SHEETS,
    (Role.CASEWORKER, Section.SUBSCRIPTIONS): SUBSCRIPTIONS,
    (Role.CASEWORKER, Section.ACCOUNT_SETTINGS): ACCOUNT_SETTINGS,
    (Role.GUEST, Section.SHEETS): SHEETS,
    (Role.GUEST, Section.SUBSCRIPTIONS): SUBSCRIPTIONS,
    (Role.GUEST, Section.ACCOUNT_SETTINGS): ACCOUNT_SETTINGS,
}


def descriptor_for(role, section) -> SectionDescriptor:
    r = Role.parse(role)
    s = Section.parse(section)
    if r is None or s is None:
        return EMPTY_DESCRIPTOR
    desc = ROW_RULES.get((r, s))
    if desc is None:
        if s is not Section.NONE:
            log.debug("No row rule for role=%s section=%s", r.value, s.value)
        return EMPTY_DESCRIPTOR
    return desc
