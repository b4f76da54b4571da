# -*- coding: utf-8 -*-
"""domain/console_state.py

The single owned console state and the snapshot replacement protocol.

Every engine operation is a pure function ``(state, input) -> new state``;
:class:`app.session.ConsoleSession` holds the current value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from core.section_registry import section_key_at
from core.sections import Role, Section
from domain import selection as sel
from domain.row_model import SectionDescriptor, descriptor_for
from domain.snapshot import SectionData, Snapshot

log = logging.getLogger(__name__)


class RoleChangedError(ValueError):
    """A replacement snapshot carries a different role than the session."""


@dataclass(frozen=True)
class ConsoleState:
    snapshot: Snapshot
    active_index: Optional[int] = None
    filter_text: Optional[str] = None
    selection: sel.Selection = sel.EMPTY

    @property
    def role(self) -> Role:
        return self.snapshot.role

    @property
    def active_section(self) -> Section:
        if self.active_index is None:
            return Section.NONE
        return section_key_at(self.role, self.active_index)

    @property
    def active_data(self) -> SectionData:
        return self.snapshot.section(self.active_section)

    @property
    def descriptor(self) -> SectionDescriptor:
        return descriptor_for(self.role, self.active_section)

    @property
    def live_selection(self) -> sel.Selection:
        return sel.live_selection(self.selection, self.active_data, self.descriptor)


def initial_state(snapshot: Snapshot) -> ConsoleState:
    return ConsoleState(snapshot=snapshot)


def replace_snapshot(state: ConsoleState, snapshot: Snapshot) -> ConsoleState:
    """Swap in *snapshot* wholesale.

    Selection and filter survive while the active section still exists. When
    the active section's dataset vanished, the state behaves as if navigated
    to the empty section.
    """
    if snapshot.role != state.role:
        raise RoleChangedError(
            f"snapshot role {snapshot.role.value!r} differs from session role {state.role.value!r}"
        )
    new_state = replace(state, snapshot=snapshot)
    active = state.active_section
    if active is not Section.NONE and not snapshot.has_section(active):
        log.info("Active section %r vanished from snapshot; resetting to empty section.", active.value)
        return replace(new_state, active_index=None, filter_text=None, selection=sel.EMPTY)
    return new_state
