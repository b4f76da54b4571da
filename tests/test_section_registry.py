# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from core.section_registry import index_of, section_key_at, section_label, sections_for, sidebar
from core.sections import Role, Section


def test_admin_sections_in_sidebar_order() -> None:
    assert sections_for(Role.ADMIN) == [
        Section.CHANGES,
        Section.ACCESSES,
        Section.USERS,
        Section.DISTRICTS,
        Section.ACCOUNT_SETTINGS,
    ]


def test_caseworker_and_guest_sections() -> None:
    assert sections_for("bearbeiter") == [
        Section.MY_CHANGES,
        Section.SHEETS,
        Section.SUBSCRIPTIONS,
        Section.ACCOUNT_SETTINGS,
    ]
    assert sections_for("gast") == [Section.SHEETS, Section.SUBSCRIPTIONS, Section.ACCOUNT_SETTINGS]


def test_unknown_role_has_no_sections() -> None:
    assert sections_for("root") == []
    assert section_key_at("root", 0) == ""


@pytest.mark.parametrize("role", list(Role))
def test_out_of_range_index_is_empty_key(role) -> None:
    n = len(sections_for(role))
    assert section_key_at(role, n) == ""
    assert section_key_at(role, n + 10) == ""
    assert section_key_at(role, -1) == ""
    assert section_key_at(role, None) == ""
    assert section_key_at(role, n - 1) is Section.ACCOUNT_SETTINGS


def test_section_key_at_resolves_wire_key() -> None:
    assert section_key_at(Role.ADMIN, 2) == "benutzer"


def test_labels_and_sidebar() -> None:
    assert section_label(Section.ACCESSES) == "Zugriffe"
    assert section_label(Section.NONE) == ""
    assert sidebar(Role.GUEST)[0] == (0, Section.SHEETS, "Meine Grundbuchblätter")
    assert index_of(Role.GUEST, Section.SUBSCRIPTIONS) == 1
    assert index_of(Role.GUEST, Section.USERS) is None
