# -*- coding: utf-8 -*-
"""Command builders.

Each builder turns console state + user input into a :class:`Command`: an
action name and a flat, ordered list of strings. The backend reads ``daten``
positionally, so the argument order documented here is the contract.

Bulk actions act on the *live* selection: selected ids that no longer exist in
the active section are left out. The selection only counts for actions the
active section offers; from any other section the default id list is empty.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from core.actions import BINARY_ACTIONS, Action
from domain.console_state import ConsoleState


@dataclass(frozen=True)
class Command:
    action: Action
    args: Tuple[str, ...] = ()

    @property
    def binary(self) -> bool:
        return self.action in BINARY_ACTIONS


def command(action, args: Iterable = ()) -> Command:
    """Free-form command (CLI / scripting). Unknown action names raise ValueError."""
    act = action if isinstance(action, Action) else Action(str(action))
    return Command(act, tuple("" if a is None else str(a) for a in args))


def _selection_for(state: ConsoleState, action: Action) -> Tuple[str, ...]:
    # ids of another section never leak into this action
    if action not in state.descriptor.actions:
        return ()
    return state.live_selection


def _ids(state: ConsoleState, action: Action, ids: Optional[Iterable[str]]) -> Tuple[str, ...]:
    if ids is None:
        return _selection_for(state, action)
    return tuple(str(i) for i in ids)


# --- zugriffe: [id, ...] ---

def approve_access(state: ConsoleState, ids: Optional[Iterable[str]] = None) -> Command:
    return Command(Action.ACCESS_APPROVE, _ids(state, Action.ACCESS_APPROVE, ids))


def reject_access(state: ConsoleState, ids: Optional[Iterable[str]] = None) -> Command:
    return Command(Action.ACCESS_REJECT, _ids(state, Action.ACCESS_REJECT, ids))


def withdraw_access(state: ConsoleState, ids: Optional[Iterable[str]] = None) -> Command:
    return Command(Action.ACCESS_WITHDRAW, _ids(state, Action.ACCESS_WITHDRAW, ids))


# --- benutzer ---

def create_user(state: ConsoleState, name: str, email: str, role: str, password: str) -> Command:
    """[name, email, kontotyp, passwort]"""
    return Command(Action.USER_CREATE, (str(name), str(email), str(role), str(password)))


def delete_users(state: ConsoleState, ids: Optional[Iterable[str]] = None) -> Command:
    """[email, ...]"""
    return Command(Action.USER_DELETE, _ids(state, Action.USER_DELETE, ids))


def edit_user_role(state: ConsoleState, email: str, new_role: str) -> Command:
    """[kontotyp, email, *selection]

    The selected users receive the same role as *email*.
    """
    selected = _selection_for(state, Action.USER_EDIT_ROLE)
    return Command(Action.USER_EDIT_ROLE, (str(new_role), str(email), *selected))


def generate_keypair(state: ConsoleState, email: str) -> Command:
    """[email]"""
    return Command(Action.USER_GENERATE_KEY, (str(email),))


# --- bezirke ---

def create_district(state: ConsoleState, land: str, amtsgericht: str, bezirk: str) -> Command:
    """[land, amtsgericht, bezirk]"""
    return Command(Action.DISTRICT_CREATE, (str(land), str(amtsgericht), str(bezirk)))


def create_districts_bulk(state: ConsoleState, rows: Iterable[Sequence[str]]) -> Command:
    """[land, amtsgericht, bezirk, land, amtsgericht, bezirk, ...]

    *rows* come from an already parsed delimited file. Extra columns are
    ignored; rows with fewer than three fields raise ValueError before
    anything is sent. Blank rows are skipped.
    """
    flat = []
    for lineno, row in enumerate(rows, start=1):
        cells = [str(c).strip() for c in row]
        if not any(cells):
            continue
        if len(cells) < 3:
            raise ValueError(f"row {lineno}: expected land, amtsgericht, bezirk; got {len(cells)} field(s)")
        flat.extend(cells[:3])
    return Command(Action.DISTRICT_CREATE_BULK, tuple(flat))


def delete_districts(state: ConsoleState, ids: Optional[Iterable[str]] = None) -> Command:
    """[land/amtsgericht/bezirk, ...]"""
    return Command(Action.DISTRICT_DELETE, _ids(state, Action.DISTRICT_DELETE, ids))


# --- einstellungen ---

def edit_setting(state: ConsoleState, key: str, value: str) -> Command:
    """[key, value]"""
    return Command(Action.SETTING_EDIT, (str(key), "" if value is None else str(value)))


# --- abonnements ---

def create_subscription(
    state: ConsoleState,
    typ: str,
    text: str,
    amtsgericht: str,
    bezirk: str,
    blatt,
    aktenzeichen: Optional[str] = None,
) -> Command:
    """[typ (email|webhook), text, amtsgericht, bezirk, blatt, aktenzeichen]"""
    return Command(
        Action.SUBSCRIPTION_CREATE,
        (str(typ), str(text), str(amtsgericht), str(bezirk), str(blatt), str(aktenzeichen or "")),
    )


def end_subscriptions(state: ConsoleState, ids: Optional[Iterable[str]] = None) -> Command:
    """[abo-id, ...]"""
    return Command(Action.SUBSCRIPTION_END, _ids(state, Action.SUBSCRIPTION_END, ids))


# --- grundbuchblaetter ---

def export_sheets(state: ConsoleState, ids: Optional[Iterable[str]] = None) -> Command:
    """[land/amtsgericht/bezirk/blatt, ...]; the reply is an archive, not a snapshot."""
    return Command(Action.SHEETS_EXPORT, _ids(state, Action.SHEETS_EXPORT, ids))
