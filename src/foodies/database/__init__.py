"""Relational store layer.

This module provides:
- Async SQLAlchemy engine and per-request session management
- ORM models
- Repository classes for data access
- Health check utilities
"""

from foodies.database.connection import (
    check_database_health,
    close_database,
    get_db_session,
    get_session_factory,
    init_database,
)


__all__ = [
    "check_database_health",
    "close_database",
    "get_db_session",
    "get_session_factory",
    "init_database",
]
