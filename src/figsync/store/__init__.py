from __future__ import annotations

from figsync.store.db import Database
from figsync.store.migrations import run_migrations
from figsync.store.repositories import DocumentRepository, LinkRepository

__all__ = [
    "Database",
    "run_migrations",
    "LinkRepository",
    "DocumentRepository",
]
