"""Statement persistence."""

from .postgres_store import PostgresConfig, PostgresStore

__all__ = [
    "PostgresConfig",
    "PostgresStore",
]
