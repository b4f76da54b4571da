# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import replace

from app.navigation import change_section, set_filter
from app.view_model import build_table_view, render_text
from core.actions import Action
from core.sections import Section
from domain.console_state import initial_state
from domain.selection import add


def test_no_section_renders_empty_table(admin_snapshot) -> None:
    view = build_table_view(initial_state(admin_snapshot))
    assert view.section is Section.NONE
    assert view.rows == () and view.columns == () and view.actions == ()
    assert [e.section for e in view.sidebar][:2] == [Section.CHANGES, Section.ACCESSES]
    assert not any(e.active for e in view.sidebar)
    assert "kein Bereich" in render_text(view)


def test_users_view_marks_selection(admin_snapshot) -> None:
    st = change_section(initial_state(admin_snapshot), 2)
    st = replace(st, selection=add(st.selection, "c@d.com"))
    view = build_table_view(st)

    assert view.section is Section.USERS
    assert [r.row_id for r in view.rows] == ["a@b.com", "c@d.com", "e@f.com"]
    assert [r.row_id for r in view.rows if r.selected] == ["c@d.com"]
    assert view.selection == ("c@d.com",)
    assert Action.USER_DELETE in view.actions
    assert view.sidebar[2].active
    assert view.column_width == 100.0 / len(view.columns)


def test_filter_narrows_rows_and_shows_in_text(admin_snapshot) -> None:
    st = set_filter(change_section(initial_state(admin_snapshot), 3), "cottbus")
    view = build_table_view(st)
    assert [r.cells[1] for r in view.rows] == ["Cottbus"]
    text = render_text(view)
    assert "Filter: cottbus" in text
    assert "Sachsendorf" in text and "Bornstedt" not in text


def test_guest_sheets_view(guest_snapshot) -> None:
    view = build_table_view(change_section(initial_state(guest_snapshot), 0))
    assert view.section is Section.SHEETS
    assert len(view.rows) == 2
    assert Action.SHEETS_EXPORT in view.actions
