"""
Database Module

This module provides database connectivity, session management and the
unit of work used for multi-row writes.

Architecture Overview:
======================
    FastAPI Route
        │
        │  Dependency Injection: get_db()
        ▼
    AsyncSession (one per request)
        │
        │  Passed to the composition root
        ▼
    SqlAlchemy*Repository
        │
        │  atomic(session) around multi-row writes
        ▼
    PostgreSQL (asyncpg) / SQLite (aiosqlite, tests)

Components:
===========
- session.py: Database engine, session factory, and lifecycle functions
- unit_of_work.py: atomic() transaction scope
"""

from agora.shared.db.session import (
    get_db,
    init_db,
    close_db,
    create_engine,
    create_session_factory,
    AsyncSessionLocal,
    engine,
)
from agora.shared.db.unit_of_work import atomic

__all__ = [
    # Session management
    "get_db",
    "init_db",
    "close_db",
    "create_engine",
    "create_session_factory",
    "AsyncSessionLocal",
    "engine",
    # Transactions
    "atomic",
]
