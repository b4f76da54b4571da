# domain/selection.py
from __future__ import annotations

from typing import Iterable, Optional, Set, Tuple

from domain.filtering import visible_rows
from domain.row_model import SectionDescriptor
from domain.snapshot import SectionData

Selection = Tuple[str, ...]

EMPTY: Selection = ()


def _normalized(ids: Iterable[str]) -> Selection:
    # Sorted and deduplicated after every mutation.
    return tuple(sorted({str(i) for i in ids if i is not None and str(i) != ""}))


def add(selection: Selection, row_id: str) -> Selection:
    return _normalized((*selection, row_id))


def remove(selection: Selection, row_id: str) -> Selection:
    return _normalized(i for i in selection if i != row_id)


def toggle(selection: Selection, row_id: str) -> Selection:
    if row_id in selection:
        return remove(selection, row_id)
    return add(selection, row_id)


def clear(selection: Optional[Selection] = None) -> Selection:
    return EMPTY


def select_all_visible(
    section: SectionData,
    descriptor: SectionDescriptor,
    filter_text: Optional[str],
) -> Selection:
    """Identities of exactly the rows that currently pass the filter."""
    if descriptor.is_empty:
        return EMPTY
    return _normalized(descriptor.identity(row) for _, row in visible_rows(section, filter_text))


def present_ids(section: SectionData, descriptor: SectionDescriptor) -> Set[str]:
    if descriptor.is_empty:
        return set()
    return {descriptor.identity(row) for row in section.rows.values()}


def live_selection(
    selection: Selection,
    section: SectionData,
    descriptor: SectionDescriptor,
) -> Selection:
    """Drop ids that no longer exist in *section* (stale ids are inert)."""
    present = present_ids(section, descriptor)
    return tuple(i for i in selection if i in present)
