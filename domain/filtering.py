# -*- coding: utf-8 -*-
"""Case-insensitive substring filter over raw rows.

The predicate runs over every stored field, not just the projected ones, so a
filter can match a value that is not shown in any column.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from domain.snapshot import Row, SectionData


def matches(row: Iterable[str], filter_text: Optional[str]) -> bool:
    if not filter_text:
        return True
    needle = str(filter_text).casefold()
    for value in row:
        if value is None:
            continue
        if needle in str(value).casefold():
            return True
    return False


def visible_rows(section: SectionData, filter_text: Optional[str]) -> List[Tuple[str, Row]]:
    """(row_key, row) pairs of *section* passing the filter, in snapshot order."""
    return [(key, row) for key, row in section.rows.items() if matches(row, filter_text)]
