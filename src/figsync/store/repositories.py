from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone

from figsync.model.link import IdOrder
from figsync.model.node import DesignDocument
from figsync.store.db import Database

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class LinkRepository:
    """Repository for persisted ``(layer_id, scope_id)`` pairs."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def add(self, layer_id: str, scope_id: str) -> bool:
        """Insert a link; returns False when the pair already exists."""
        with self._db.write():
            cursor = self._db.execute(
                "INSERT OR IGNORE INTO links (layer_id, scope_id, created_at) VALUES (?, ?, ?)",
                (layer_id, scope_id, _now()),
            )
        added = cursor.rowcount > 0
        if added:
            logger.info("Linked layer %s to scope %r", layer_id, scope_id)
        return added

    def remove(self, layer_id: str, scope_id: str) -> bool:
        """Delete one link; returns False when it did not exist."""
        with self._db.write():
            cursor = self._db.execute(
                "DELETE FROM links WHERE layer_id = ? AND scope_id = ?",
                (layer_id, scope_id),
            )
        removed = cursor.rowcount > 0
        if removed:
            logger.info("Unlinked layer %s from scope %r", layer_id, scope_id)
        return removed

    def remove_layer_links(self, layer_id: str) -> int:
        """Delete every link of a layer and return how many there were."""
        return self._delete("DELETE FROM links WHERE layer_id = ?", (layer_id,))

    def remove_scope_links(self, scope_id: str) -> int:
        """Delete every link of a scope and return how many there were."""
        return self._delete("DELETE FROM links WHERE scope_id = ?", (scope_id,))

    def clear_document(self, key: str) -> int:
        """Delete every link whose layer belongs to document *key*."""
        prefix = f"{key}:"
        return self._delete(
            "DELETE FROM links WHERE substr(layer_id, 1, ?) = ?",
            (len(prefix), prefix),
        )

    def _delete(self, sql: str, params: tuple) -> int:
        with self._db.write():
            cursor = self._db.execute(sql, params)
        if cursor.rowcount:
            logger.info("Removed %d link(s)", cursor.rowcount)
        return cursor.rowcount

    def exists(self, layer_id: str, scope_id: str) -> bool:
        row = self._db.fetch_one(
            "SELECT 1 FROM links WHERE layer_id = ? AND scope_id = ?",
            (layer_id, scope_id),
        )
        return row is not None

    def list_all(self) -> tuple[tuple[str, str], ...]:
        """All pairs in insertion order."""
        rows = self._db.fetch_all("SELECT layer_id, scope_id FROM links ORDER BY rowid")
        return tuple((r["layer_id"], r["scope_id"]) for r in rows)

    def index(self, order: IdOrder) -> dict[str, list[tuple[str, str]]]:
        """Group all pairs by layer id or by scope id."""
        grouped: dict[str, list[tuple[str, str]]] = {}
        for layer_id, scope_id in self.list_all():
            key = layer_id if order is IdOrder.LAYER else scope_id
            grouped.setdefault(key, []).append((layer_id, scope_id))
        return grouped

    def count(self) -> int:
        """Return the total number of links."""
        row = self._db.fetch_one("SELECT COUNT(*) as cnt FROM links")
        assert row is not None
        return row["cnt"]


class DocumentRepository:
    """Repository for cached design document snapshots."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def save(self, document: DesignDocument) -> None:
        """Insert or replace the snapshot for ``document.key``."""
        with self._db.write():
            self._db.execute(
                """INSERT OR REPLACE INTO documents (key, name, last_modified, payload, fetched_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (
                    document.key,
                    document.name,
                    document.last_modified,
                    json.dumps(document.payload),
                    _now(),
                ),
            )

    def get(self, key: str) -> DesignDocument | None:
        """Retrieve a snapshot by key, or None if not cached."""
        row = self._db.fetch_one("SELECT * FROM documents WHERE key = ?", (key,))
        if row is None:
            return None
        return _row_to_document(row)

    def last_modified(self, key: str) -> str | None:
        row = self._db.fetch_one("SELECT last_modified FROM documents WHERE key = ?", (key,))
        return row["last_modified"] if row is not None else None

    def list_all(self) -> tuple[DesignDocument, ...]:
        rows = self._db.fetch_all("SELECT * FROM documents ORDER BY key")
        return tuple(_row_to_document(r) for r in rows)

    def keys(self) -> tuple[str, ...]:
        rows = self._db.fetch_all("SELECT key FROM documents ORDER BY key")
        return tuple(r["key"] for r in rows)

    def delete(self, key: str) -> bool:
        with self._db.write():
            cursor = self._db.execute("DELETE FROM documents WHERE key = ?", (key,))
        return cursor.rowcount > 0


def _row_to_document(row: sqlite3.Row) -> DesignDocument:
    return DesignDocument.from_response(row["key"], json.loads(row["payload"]))
