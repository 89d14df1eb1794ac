"""Database layer - engine, base classes and types."""

from timeverify_kernel.db.base import UUID, Base, TrackedBase, UUIDString
from timeverify_kernel.db.engine import (
    build_engine,
    create_tables,
    get_engine,
    get_session,
    session_scope,
)

__all__ = [
    "build_engine",
    "get_engine",
    "get_session",
    "session_scope",
    "create_tables",
    "Base",
    "TrackedBase",
    "UUIDString",
    "UUID",
]
