# -*- coding: utf-8 -*-
"""Section registry

Centralizes:
- which sections each role can navigate to (sidebar order)
- index -> section resolution
- sidebar labels

Role-to-section lists are static configuration, not computed.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from core.sections import Role, Section


ROLE_SECTIONS: Dict[Role, Tuple[Section, ...]] = {
    Role.ADMIN: (
        Section.CHANGES,
        Section.ACCESSES,
        Section.USERS,
        Section.DISTRICTS,
        Section.ACCOUNT_SETTINGS,
    ),
    Role.CASEWORKER: (
        Section.MY_CHANGES,
        Section.SHEETS,
        Section.SUBSCRIPTIONS,
        Section.ACCOUNT_SETTINGS,
    ),
    Role.GUEST: (
        Section.SHEETS,
        Section.SUBSCRIPTIONS,
        Section.ACCOUNT_SETTINGS,
    ),
}

SECTION_LABELS: Dict[Section, str] = {
    Section.CHANGES: "Änderungen",
    Section.ACCESSES: "Zugriffe",
    Section.USERS: "Benutzer",
    Section.DISTRICTS: "Bezirke",
    Section.MY_CHANGES: "Meine Änderungen",
    Section.SHEETS: "Meine Grundbuchblätter",
    Section.SUBSCRIPTIONS: "Abonnements",
    Section.ACCOUNT_SETTINGS: "Einstellungen",
    Section.NONE: "",
}


def sections_for(role) -> List[Section]:
    """Return the ordered sections of *role* (empty for unknown roles)."""
    r = Role.parse(role)
    if r is None:
        return []
    return list(ROLE_SECTIONS.get(r, ()))


def section_key_at(role, index) -> Section:
    """Resolve a sidebar index; anything out of range is ``Section.NONE``."""
    if isinstance(index, bool) or not isinstance(index, int):
        return Section.NONE
    sections = sections_for(role)
    if 0 <= index < len(sections):
        return sections[index]
    return Section.NONE


def index_of(role, section) -> Optional[int]:
    sec = Section.parse(section)
    if sec is None or sec is Section.NONE:
        return None
    sections = sections_for(role)
    return sections.index(sec) if sec in sections else None


def section_label(section) -> str:
    sec = Section.parse(section)
    if sec is None:
        return ""
    return SECTION_LABELS.get(sec, "")


def sidebar(role) -> List[Tuple[int, Section, str]]:
    return [(i, sec, section_label(sec)) for i, sec in enumerate(sections_for(role))]
