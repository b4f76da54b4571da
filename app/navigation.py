# -*- coding: utf-8 -*-
"""Navigation controller (no-Qt).

States: no section active (initial) / section S active. The only transition
is ``change_section(index)``; every navigation is a forward re-entry, so
re-selecting the active section still resets filter and selection.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from core.section_registry import section_key_at
from core.sections import Section
from domain import selection as sel
from domain.console_state import ConsoleState

log = logging.getLogger(__name__)


def change_section(state: ConsoleState, index) -> ConsoleState:
    section = section_key_at(state.role, index)
    if section is Section.NONE:
        log.debug("Section index %r out of range for role %s", index, state.role.value)
        return replace(state, active_index=None, filter_text=None, selection=sel.EMPTY)
    return replace(state, active_index=int(index), filter_text=None, selection=sel.EMPTY)


def set_filter(state: ConsoleState, text: Optional[str]) -> ConsoleState:
    text = text or None
    return replace(state, filter_text=text, selection=sel.EMPTY)
