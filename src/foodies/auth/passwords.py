"""Password hashing with bcrypt via passlib.

Hashing is CPU-bound, so both operations run in a worker thread.
"""

from __future__ import annotations

import asyncio
from functools import lru_cache

from passlib.context import CryptContext

from foodies.core.config import get_settings


@lru_cache(maxsize=8)
def _context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def get_password_context(rounds: int | None = None) -> CryptContext:
    """Crypt context using ``rounds`` or the configured bcrypt cost."""
    return _context(rounds or get_settings().auth.bcrypt_rounds)


async def hash_password(password: str, *, rounds: int | None = None) -> str:
    """Hash a plaintext password."""
    return await asyncio.to_thread(get_password_context(rounds).hash, password)


async def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored hash.

    Malformed hashes count as a mismatch.
    """
    context = get_password_context()
    try:
        return await asyncio.to_thread(context.verify, password, password_hash)
    except ValueError:
        return False
