# -*- coding: utf-8 -*-

"""Pytest configuration.

This project is a simple app folder layout (top-level packages app/, core/,
domain/, ...). For local testing we add the repository root to sys.path so
that imports like `from core...` work reliably.
"""

from __future__ import annotations

import copy
import json
import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from domain.snapshot import parse_snapshot  # noqa: E402
from services.transport import TransportResponse  # noqa: E402


ADMIN_PAYLOAD = {
    "status": "ok",
    "role": "admin",
    "data": {
        "aenderungen": {
            "spalten": ["id", "name", "email", "zeit-sec", "zeit-offset", "zeit-tz", "zusammenfassung"],
            "daten": {
                "0": ["c0ffee01", "Anna Muster", "anna@example.com", "1700000000", "60", "+", "Blatt 12 geändert"],
                "1": ["c0ffee02", "Carl Dorn", "c@d.com", "1700003600", "0", "+", "Bezirk Bornstedt neu"],
            },
        },
        "zugriffe": {
            "spalten": ["id", "name", "email", "typ", "grund", "blaetter", "gewaehrt_von", "abgelehnt_von", "am"],
            "daten": {
                "z-1": ["z-1", "Bernd Beispiel", "bernd@example.com", "\"lesen\"", "Erbfall", "[\"Potsdam/Bornstedt/12\"]", "", "", ""],
                "z-2": ["z-2", "Clara Klein", "clara@example.com", "\"schreiben\"", "Notar", "[]", "admin@example.com", "", "2023-05-01T10:00:00Z"],
                "z-3": ["z-3", "Dora Dorn", "dora@example.com", "\"lesen\"", "", "[]", "", "admin@example.com", ""],
            },
        },
        "benutzer": {
            "spalten": ["name", "email", "rechte", "publickeys.fingerprint", "publickeys.pubkey"],
            "daten": {
                "a@b.com": ["Anna Berg", "a@b.com", "gast", "", ""],
                "c@d.com": ["Carl Dorn", "c@d.com", "bearbeiter", "-----BEGIN PGP PUBLIC KEY BLOCK-----KEY-C", "FP-C"],
                "e@f.com": ["Emil Fink", "e@f.com", "gast", "", ""],
            },
        },
        "bezirke": {
            "spalten": ["land", "amtsgericht", "bezirk"],
            "daten": {
                "0": ["Brandenburg", "Potsdam", "Bornstedt"],
                "1": ["Brandenburg", "Cottbus", "Sachsendorf"],
            },
        },
        "meine-kontodaten": {
            "spalten": ["name", "email", "rechte", "publickeys.fingerprint", "publickeys.pubkey"],
            "daten": {
                "admin@example.com": ["Admin", "admin@example.com", "admin", "", ""],
            },
        },
    },
}

GUEST_PAYLOAD = {
    "status": "ok",
    "role": "gast",
    "data": {
        "meine-grundbuchblaetter": {
            "spalten": ["land", "amtsgericht", "bezirk", "blatt", "typ", "seit"],
            "daten": {
                "0": ["Brandenburg", "Potsdam", "Bornstedt", "12", "\"lesen\"", "2023-01-02T08:00:00Z"],
                "1": ["Brandenburg", "Potsdam", "Bornstedt", "13", "\"lesen\"", ""],
            },
        },
        "abonnements": {
            "spalten": ["id", "typ", "text", "amtsgericht", "bezirk", "blatt", "aktenzeichen"],
            "daten": {
                "abo-1": ["abo-1", "email", "gast@example.com", "Potsdam", "Bornstedt", "12", "AZ 1/23"],
            },
        },
        "meine-kontodaten": {
            "spalten": ["name", "email", "rechte"],
            "daten": {"gast@example.com": ["Gast", "gast@example.com", "gast"]},
        },
    },
}


def admin_payload() -> dict:
    return copy.deepcopy(ADMIN_PAYLOAD)


def guest_payload() -> dict:
    return copy.deepcopy(GUEST_PAYLOAD)


def json_response(payload) -> TransportResponse:
    return TransportResponse(
        status=200,
        body=json.dumps(payload).encode("utf-8"),
        content_type="application/json",
    )


class FakeTransport:
    """Replays queued responses and records every request body."""

    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.requests = []

    def post(self, body: bytes) -> TransportResponse:
        self.requests.append(json.loads(body.decode("utf-8")))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def admin_snapshot():
    return parse_snapshot(admin_payload())


@pytest.fixture
def guest_snapshot():
    return parse_snapshot(guest_payload())
