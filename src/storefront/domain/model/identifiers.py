"""Storage identifiers: 24 lowercase hex characters, document-store style."""

from __future__ import annotations

import secrets

OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"


def new_object_id() -> str:
    return secrets.token_hex(12)
