# -*- coding: utf-8 -*-
"""Backend action names.

The backend interprets ``daten`` positionally per action; the argument order
for each action is documented on its builder in :mod:`services.commands`.
"""

from __future__ import annotations

from enum import Enum


class Action(str, Enum):
    # zugriffe
    ACCESS_APPROVE = "zugriff-genehmigen"
    ACCESS_REJECT = "zugriff-ablehnen"
    ACCESS_WITHDRAW = "zugriff-zurueckziehen"

    # benutzer
    USER_CREATE = "benutzer-neu"
    USER_DELETE = "benutzer-loeschen"
    USER_EDIT_ROLE = "benutzer-bearbeite-kontotyp"
    USER_GENERATE_KEY = "benutzer-schluessel-generieren"

    # bezirke
    DISTRICT_CREATE = "bezirk-neu"
    DISTRICT_CREATE_BULK = "bezirke-neu"
    DISTRICT_DELETE = "bezirk-loeschen"

    # einstellungen
    SETTING_EDIT = "einstellung-bearbeiten"

    # abonnements
    SUBSCRIPTION_CREATE = "abo-neu"
    SUBSCRIPTION_END = "abo-beenden"

    # grundbuchblaetter (binary response)
    SHEETS_EXPORT = "blaetter-exportieren"


# Actions whose success reply is a raw byte stream instead of a snapshot.
BINARY_ACTIONS = frozenset({Action.SHEETS_EXPORT})
