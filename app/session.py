# -*- coding: utf-8 -*-
"""Console session (no-Qt).

Holds the single :class:`ConsoleState` of the running console and turns
user input and backend replies into state transitions plus events:

- navigation / filter / selection: pure transitions, then an event
- dispatch results: snapshot swap or download, in arrival order
- failures: logged and emitted as DispatchFailed, state unchanged

Keep this module free of PyQt imports.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Optional

from app import navigation
from app.config import DEFAULT_STALE_POLICY, STALE_POLICIES
from app.events import (
    DispatchFailed,
    DownloadReady,
    EventBus,
    FilterChanged,
    SectionChanged,
    SelectionChanged,
    SnapshotReplaced,
)
from app.view_model import TableView, build_table_view
from domain import selection as sel
from domain.console_state import ConsoleState, RoleChangedError, initial_state, replace_snapshot
from domain.snapshot import Snapshot
from services.commands import Command
from services.dispatcher import CommandDispatcher, DispatchResult
from services.errors import ErrorKind

log = logging.getLogger(__name__)


class ConsoleSession:
    """Owner of the console state for one login.

    Parameters
    ----------
    snapshot:
        Snapshot of the initial page load. Fixes the role for the session.
    dispatcher:
        Optional CommandDispatcher used by :meth:`dispatch`.
    bus:
        EventBus the view layer listens on (a new one if omitted).
    stale_policy:
        'apply' (last arrival wins) or 'discard' (ignore responses older than
        the last applied one).
    """

    def __init__(
        self,
        snapshot: Snapshot,
        *,
        dispatcher: Optional[CommandDispatcher] = None,
        bus: Optional[EventBus] = None,
        stale_policy: str = DEFAULT_STALE_POLICY,
    ) -> None:
        if stale_policy not in STALE_POLICIES:
            raise ValueError(f"unknown stale policy {stale_policy!r}")
        self._state = initial_state(snapshot)
        self._dispatcher = dispatcher
        self.bus = bus or EventBus()
        self.stale_policy = stale_policy
        self._last_applied_id = 0

    # --------- state ---------
    @property
    def state(self) -> ConsoleState:
        return self._state

    @property
    def snapshot(self) -> Snapshot:
        return self._state.snapshot

    def view(self) -> TableView:
        return build_table_view(self._state)

    def _set(self, new_state: ConsoleState) -> ConsoleState:
        self._state = new_state
        return new_state

    # --------- navigation / filter ---------
    def change_section(self, index) -> ConsoleState:
        st = self._set(navigation.change_section(self._state, index))
        self.bus.emit(SectionChanged(section=st.active_section, index=st.active_index))
        return st

    def set_filter(self, text: Optional[str]) -> ConsoleState:
        st = self._set(navigation.set_filter(self._state, text))
        self.bus.emit(FilterChanged(section=st.active_section, text=st.filter_text))
        return st

    # --------- selection ---------
    def _update_selection(self, fn: Callable[..., sel.Selection], *args: Any) -> ConsoleState:
        new_sel = fn(*args)
        if new_sel == self._state.selection:
            return self._state
        st = self._set(replace(self._state, selection=new_sel))
        self.bus.emit(SelectionChanged(section=st.active_section, ids=st.selection))
        return st

    def select(self, row_id: str) -> ConsoleState:
        return self._update_selection(sel.add, self._state.selection, row_id)

    def deselect(self, row_id: str) -> ConsoleState:
        return self._update_selection(sel.remove, self._state.selection, row_id)

    def toggle(self, row_id: str) -> ConsoleState:
        return self._update_selection(sel.toggle, self._state.selection, row_id)

    def select_all_visible(self) -> ConsoleState:
        st = self._state
        return self._update_selection(sel.select_all_visible, st.active_data, st.descriptor, st.filter_text)

    def clear_selection(self) -> ConsoleState:
        return self._update_selection(sel.clear, self._state.selection)

    # --------- dispatch ---------
    def dispatch(self, command: Command) -> Optional[DispatchResult]:
        """Blocking round trip + apply. None when nothing was sent."""
        if self._dispatcher is None:
            log.warning("No dispatcher configured; %s not sent.", command.action.value)
            return None
        result = self._dispatcher.dispatch(command)
        if result is None:
            return None
        self.apply_result(result)
        return result

    def apply_result(self, result: DispatchResult) -> bool:
        """Apply a finished round trip. Returns True if the state or view changed."""
        rid = result.request_id
        if not result.ok:
            self._emit_failure(result)
            return False

        if result.binary:
            self.bus.emit(DownloadReady(
                request_id=rid,
                action=result.action,
                filename=result.filename,
                payload=result.payload or b"",
            ))
            return True

        if result.snapshot is None:
            return False

        if rid is not None and rid < self._last_applied_id:
            if self.stale_policy == "discard":
                log.info("Discarding stale response id=%s (last applied id=%s)", rid, self._last_applied_id)
                return False
            log.info("Applying out-of-order response id=%s after id=%s", rid, self._last_applied_id)

        try:
            st = self._set(replace_snapshot(self._state, result.snapshot))
        except RoleChangedError as e:
            log.error("Dispatch id=%s action=%s rejected: %s", rid, result.action, e)
            self._emit_failure(DispatchResult.failure(rid, result.action, ErrorKind.ROLE_CHANGED, "", str(e)))
            return False

        if rid is not None:
            self._last_applied_id = max(self._last_applied_id, rid)
        self.bus.emit(SnapshotReplaced(section=st.active_section, request_id=rid))
        return True

    def _emit_failure(self, result: DispatchResult) -> None:
        err = result.error
        self.bus.emit(DispatchFailed(
            request_id=result.request_id,
            action=result.action,
            kind=err.kind.value if err else "",
            code=err.code if err else "",
            text=err.text if err else "",
        ))
