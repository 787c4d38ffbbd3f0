from __future__ import annotations

from figsync.store.db import Database

SCHEMA = """
CREATE TABLE IF NOT EXISTS links (
    layer_id TEXT NOT NULL,
    scope_id TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT '',
    PRIMARY KEY (layer_id, scope_id)
);

CREATE INDEX IF NOT EXISTS links_scope ON links (scope_id);

CREATE TABLE IF NOT EXISTS documents (
    key TEXT PRIMARY KEY,
    name TEXT NOT NULL DEFAULT '',
    last_modified TEXT NOT NULL DEFAULT '',
    payload TEXT NOT NULL DEFAULT '{}',
    fetched_at TEXT NOT NULL DEFAULT ''
);
"""


def run_migrations(db: Database) -> None:
    """Create all tables."""
    db.executescript(SCHEMA)
