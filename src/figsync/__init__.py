"""figsync: keep a design document and a LESS stylesheet in sync."""
from __future__ import annotations

from figsync.config import SyncConfig
from figsync.session import SyncSession, SyncStatus

__version__ = "0.1.0"

__all__ = [
    "SyncConfig",
    "SyncSession",
    "SyncStatus",
    "__version__",
]
