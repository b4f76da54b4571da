# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import replace

import pytest

from app.navigation import change_section, set_filter
from core.sections import Section
from domain.console_state import initial_state


def _dirty(state):
    return replace(state, filter_text="anna", selection=("a@b.com", "c@d.com"))


def test_initial_state_has_no_active_section(admin_snapshot) -> None:
    st = initial_state(admin_snapshot)
    assert st.active_index is None
    assert st.active_section is Section.NONE
    assert st.descriptor.is_empty


@pytest.mark.parametrize("index", [0, 1, 2, 3, 4, 5, 99, -1])
def test_change_section_resets_filter_and_selection(admin_snapshot, index) -> None:
    st = change_section(_dirty(initial_state(admin_snapshot)), index)
    assert st.filter_text is None
    assert st.selection == ()


def test_reentering_same_section_is_a_reset(admin_snapshot) -> None:
    st = change_section(initial_state(admin_snapshot), 2)
    assert st.active_section is Section.USERS
    st = change_section(_dirty(st), 2)
    assert st.active_section is Section.USERS
    assert (st.filter_text, st.selection) == (None, ())


def test_out_of_range_index_activates_empty_section(admin_snapshot) -> None:
    st = change_section(change_section(initial_state(admin_snapshot), 1), 42)
    assert st.active_index is None
    assert st.active_section is Section.NONE


def test_set_filter_clears_selection(admin_snapshot) -> None:
    st = change_section(initial_state(admin_snapshot), 2)
    st = set_filter(replace(st, selection=("a@b.com",)), "carl")
    assert st.filter_text == "carl"
    assert st.selection == ()
    assert set_filter(st, "").filter_text is None
