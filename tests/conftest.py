"""Shared fixtures for bwimport tests."""

from __future__ import annotations

import json
import uuid
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def sequential_ids() -> Callable[[], uuid.UUID]:
    """Identifier generator yielding UUID(int=1), UUID(int=2), ..."""
    counter = 0

    def new_id() -> uuid.UUID:
        nonlocal counter
        counter += 1
        return uuid.UUID(int=counter)

    return new_id


@pytest.fixture
def export_document() -> dict[str, Any]:
    """A small but realistic Bitwarden export."""
    return {
        "encrypted": False,
        "folders": [
            {"id": "f-work", "name": "Work"},
            {"id": "f-home", "name": "Home"},
        ],
        "items": [
            {
                "id": "i-1",
                "folderId": "f-work",
                "type": 1,
                "name": "GitHub",
                "notes": "2FA enabled",
                "favorite": True,
                "login": {
                    "username": "dev@example.com",
                    "password": "hunter2",
                    "totp": "otpauth://totp/GitHub:dev?secret=JBSWY3DPEHPK3PXP&issuer=GitHub",
                    "uris": [
                        {"match": None, "uri": "https://github.com"},
                        {"match": None, "uri": "https://gist.github.com"},
                    ],
                },
                "fields": [
                    {"name": "recovery", "value": "abcd-efgh", "type": 1},
                ],
                "createdAt": 1600000000,
                "updatedAt": 1650000000,
            },
            {
                "id": "i-2",
                "folderId": "f-home",
                "type": 4,
                "name": "Me",
                "identity": {
                    "address1": "1 Main St",
                    "city": "Springfield",
                    "state": "IL",
                    "postalCode": "62701",
                    "country": "US",
                },
            },
            {
                "id": "i-3",
                "folderId": None,
                "type": 2,
                "name": "Loose note",
                "notes": "no folder",
                "secureNote": {"type": 0},
            },
        ],
    }


@pytest.fixture
def write_export(tmp_path: Path) -> Callable[[Any], Path]:
    """Write a JSON document to a temporary export file."""

    def write(document: Any, name: str = "export.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return write
