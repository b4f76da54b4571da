# -*- coding: utf-8 -*-
"""Table view model (no-Qt).

Everything the view layer needs to draw the console for the current state:
sidebar, header, column width, visible rows with their selected flag, and the
action bar. Pure; unknown sections render as an empty table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from core.section_registry import section_label, sidebar
from core.actions import Action
from core.sections import Section
from domain.console_state import ConsoleState
from domain.filtering import visible_rows


@dataclass(frozen=True)
class SidebarEntry:
    index: int
    section: Section
    label: str
    active: bool


@dataclass(frozen=True)
class RowView:
    row_id: str
    cells: Tuple[str, ...]
    selected: bool


@dataclass(frozen=True)
class TableView:
    section: Section
    label: str
    columns: Tuple[str, ...]
    column_width: float
    rows: Tuple[RowView, ...]
    selection: Tuple[str, ...]
    actions: Tuple[Action, ...]
    sidebar: Tuple[SidebarEntry, ...]
    filter_text: Optional[str] = None

    def row(self, row_id: str) -> Optional[RowView]:
        for r in self.rows:
            if r.row_id == row_id:
                return r
        return None


def build_table_view(state: ConsoleState) -> TableView:
    section = state.active_section
    desc = state.descriptor
    selected = set(state.selection)

    rows = []
    if not desc.is_empty:
        for _key, raw in visible_rows(state.active_data, state.filter_text):
            rid = desc.identity(raw)
            rows.append(RowView(row_id=rid, cells=desc.project(raw), selected=rid in selected))

    entries = tuple(
        SidebarEntry(index=i, section=sec, label=label, active=(i == state.active_index))
        for i, sec, label in sidebar(state.role)
    )
    return TableView(
        section=section,
        label=section_label(section),
        columns=desc.columns,
        column_width=desc.column_width(),
        rows=tuple(rows),
        selection=state.live_selection,
        actions=desc.actions,
        sidebar=entries,
        filter_text=state.filter_text,
    )


def render_text(view: TableView) -> str:
    """Plain-text table (CLI output)."""
    lines = []
    nav = "  ".join(("[%s]" if e.active else "%s") % e.label for e in view.sidebar)
    lines.append(nav)
    if view.section is Section.NONE:
        lines.append("(kein Bereich ausgewählt)")
        return "\n".join(lines)
    lines.append("== %s ==" % view.label)
    if view.filter_text:
        lines.append("Filter: %s" % view.filter_text)
    lines.append(" | ".join(("  ", *view.columns)))
    for r in view.rows:
        mark = "x " if r.selected else "  "
        lines.append(" | ".join((mark, *r.cells)))
    if view.actions:
        lines.append("Aktionen: " + ", ".join(a.value for a in view.actions))
    return "\n".join(lines)
