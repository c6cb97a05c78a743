"""Opaque identifier generation."""

from __future__ import annotations

import uuid
from typing import Final


ID_LENGTH: Final[int] = 32


def new_id() -> str:
    """Return a fresh, URL-safe, opaque identifier."""
    return uuid.uuid4().hex
