"""Tests for SyncSession: snapshots, stylesheet swaps, links and diagnostics."""
from __future__ import annotations

import json
from concurrent.futures import Executor
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from figsync.config import SyncConfig
from figsync.design.client import DesignClient
from figsync.errors import ConfigurationError, DesignFetchError, NotFoundError, StylesheetParseError
from figsync.model.link import IdOrder
from figsync.model.node import DesignDocument
from figsync.session import SyncSession, SyncStatus
from figsync.store.db import Database
from figsync.store.migrations import run_migrations

TITLE_LESS = """\
.title {
  font-size: 14px;
  color: #000000;
}
"""


@pytest.fixture
def db() -> Database:
    """Create a fresh in-memory database with migrations for each test."""
    database = Database(":memory:")
    database.connect()
    run_migrations(database)
    yield database
    database.close()


# ---------------------------------------------------------------------------
# Shared factory helpers
# ---------------------------------------------------------------------------


def _payload(last_modified: str = "2024-01-01T00:00:00Z", with_title: bool = True) -> dict[str, Any]:
    nodes: list[dict[str, Any]] = [{"id": "2:1", "name": "Frame", "type": "FRAME"}]
    if with_title:
        nodes.append(
            {
                "id": "1:1",
                "name": "Title",
                "type": "TEXT",
                "style": {"fontFamily": "Inter", "fontSize": 12},
                "fills": [{"type": "SOLID", "color": {"r": 0, "g": 0, "b": 0, "a": 1}}],
            }
        )
    return {
        "name": "Library",
        "lastModified": last_modified,
        "document": {
            "id": "0:0",
            "type": "DOCUMENT",
            "children": [{"id": "0:1", "type": "CANVAS", "children": nodes}],
        },
        "components": {},
    }


def _make_document(key: str = "KEY", **kwargs: Any) -> DesignDocument:
    return DesignDocument.from_response(key, _payload(**kwargs))


class DeferredExecutor(Executor):
    """Holds submitted work until :meth:`run_all` is called."""

    def __init__(self) -> None:
        self.pending: list[Callable[[], Any]] = []

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any:  # type: ignore[override]
        self.pending.append(lambda: fn(*args, **kwargs))
        return None

    def run_all(self) -> None:
        while self.pending:
            self.pending.pop(0)()


def _linked_session(db: Database) -> SyncSession:
    session = SyncSession(db=db)
    session.accept_document(_make_document())
    session.load_stylesheet(TITLE_LESS)
    session.add_link("KEY:1:1", "body .title")
    return session


# ---------------------------------------------------------------------------
# Design documents
# ---------------------------------------------------------------------------


class TestDocuments:
    def test_initial_status(self, db: Database) -> None:
        session = SyncSession(db=db)
        assert session.status is SyncStatus.NOT_ATTACHED
        assert len(session.layer_tree) == 0

    def test_accept_document(self, db: Database) -> None:
        session = SyncSession(db=db)
        assert session.accept_document(_make_document())
        assert session.status is SyncStatus.SYNCED
        assert session.layer("KEY:1:1").name == "Title"
        assert session.documents.keys() == ("KEY",)

    def test_unchanged_snapshot_is_noop(self, db: Database) -> None:
        session = SyncSession(db=db)
        session.accept_document(_make_document())
        tree = session.layer_tree
        assert not session.accept_document(_make_document())
        assert session.layer_tree is tree

    def test_stale_snapshot_discarded(self, db: Database) -> None:
        session = SyncSession(db=db)
        session.accept_document(_make_document(last_modified="2024-02-01T00:00:00Z"))
        assert not session.accept_document(_make_document(last_modified="2024-01-01T00:00:00Z"))
        assert session.documents.last_modified("KEY") == "2024-02-01T00:00:00Z"

    def test_newer_snapshot_rebuilds(self, db: Database) -> None:
        session = SyncSession(db=db)
        session.accept_document(_make_document())
        assert session.accept_document(_make_document(last_modified="2024-02-01T00:00:00Z", with_title=False))
        assert session.layer("KEY:1:1") is None

    def test_cached_documents_loaded(self, db: Database) -> None:
        SyncSession(db=db).accept_document(_make_document())
        session = SyncSession(db=db)
        assert session.status is SyncStatus.SYNCED
        assert "KEY:1:1" in session.layer_tree

    def test_detach_document(self, db: Database) -> None:
        session = _linked_session(db)
        session.add_link("OTHER:1:1", "body .title")
        assert session.detach_document("KEY") == 1
        assert session.layer("KEY:1:1") is None
        assert session.links.list_all() == (("OTHER:1:1", "body .title"),)
        assert session.resolved_links == []
        assert session.status is SyncStatus.NOT_ATTACHED

    def test_own_database_from_config(self, tmp_path: Path) -> None:
        config = SyncConfig(db_path=str(tmp_path / "figsync.db"))
        session = SyncSession(config)
        session.accept_document(_make_document())
        session.close()
        reopened = SyncSession(config)
        assert reopened.documents.keys() == ("KEY",)
        reopened.close()


class TestRefresh:
    def _client(self, handler: Callable[[httpx.Request], httpx.Response]) -> DesignClient:
        return DesignClient("token", transport=httpx.MockTransport(handler))

    def test_refresh_then_unchanged(self, db: Database) -> None:
        client = self._client(lambda request: httpx.Response(200, content=json.dumps(_payload()).encode()))
        session = SyncSession(db=db, client=client)
        assert session.refresh("KEY")
        assert session.status is SyncStatus.SYNCED
        assert not session.refresh("KEY")
        assert session.status is SyncStatus.SYNCED

    def test_fetch_failure_sets_error(self, db: Database) -> None:
        client = self._client(lambda request: httpx.Response(404, json={"err": "Not found"}))
        session = SyncSession(db=db, client=client)
        with pytest.raises(NotFoundError):
            session.refresh("KEY")
        assert session.status is SyncStatus.ERROR
        assert isinstance(session.last_error, NotFoundError)

    def test_empty_key_sets_error(self, db: Database) -> None:
        client = self._client(lambda request: httpx.Response(200, json=_payload()))
        session = SyncSession(db=db, client=client)
        with pytest.raises(ConfigurationError):
            session.refresh("")
        assert session.status is SyncStatus.ERROR
        assert isinstance(session.last_error, ConfigurationError)

    def test_no_client(self, db: Database) -> None:
        with pytest.raises(ConfigurationError):
            SyncSession(db=db).refresh("KEY")


# ---------------------------------------------------------------------------
# Stylesheet
# ---------------------------------------------------------------------------


class TestStylesheet:
    def test_load_swaps_scope_tree(self, db: Database) -> None:
        session = SyncSession(db=db)
        future = session.load_stylesheet(TITLE_LESS, name="theme.less")
        assert future.done()
        assert session.scope_tree is future.result()
        assert session.scope("body .title") is not None
        assert session.stylesheet.name == "theme.less"

    def test_failed_parse_keeps_previous_tree(self, db: Database) -> None:
        session = SyncSession(db=db)
        session.load_stylesheet(TITLE_LESS)
        tree = session.scope_tree
        future = session.load_stylesheet(".title {")
        assert isinstance(future.exception(), StylesheetParseError)
        assert session.scope_tree is tree
        assert session.status is SyncStatus.ERROR
        assert isinstance(session.last_error, StylesheetParseError)

    def test_successful_parse_clears_parse_error(self, db: Database) -> None:
        session = SyncSession(db=db)
        session.accept_document(_make_document())
        session.load_stylesheet(".title {")
        assert session.status is SyncStatus.ERROR
        session.load_stylesheet(TITLE_LESS)
        assert session.status is SyncStatus.SYNCED
        assert session.last_error is None

    def test_successful_parse_keeps_fetch_error(self, db: Database) -> None:
        client = DesignClient("token", transport=httpx.MockTransport(lambda request: httpx.Response(500, text="boom")))
        session = SyncSession(db=db, client=client)
        with pytest.raises(DesignFetchError):
            session.refresh("KEY")
        session.load_stylesheet(TITLE_LESS)
        assert session.status is SyncStatus.ERROR

    def test_superseded_parse_ignored(self, db: Database) -> None:
        session = SyncSession(db=db)
        executor = DeferredExecutor()
        session.load_stylesheet(".old { }", executor=executor)
        session.load_stylesheet(".new { }")
        executor.run_all()
        assert session.scope("body .new") is not None
        assert session.scope("body .old") is None

    def test_scope_before_load(self, db: Database) -> None:
        assert SyncSession(db=db).scope("body .title") is None


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------


class TestLinks:
    def test_link_resolved(self, db: Database) -> None:
        session = _linked_session(db)
        assert len(session.resolved_links) == 1
        link = session.resolved_links[0]
        assert link.ids == ("KEY:1:1", "body .title")
        assert link.layer_name == "Title"
        assert link.scope_name == ".title"
        assert link.layer_path == ("Title",)

    def test_link_added_before_stylesheet_resolves_later(self, db: Database) -> None:
        session = SyncSession(db=db)
        session.accept_document(_make_document())
        assert session.add_link("KEY:1:1", "body .title")
        assert session.resolved_links == []
        session.load_stylesheet(TITLE_LESS)
        assert len(session.resolved_links) == 1

    def test_duplicate_link(self, db: Database) -> None:
        session = _linked_session(db)
        assert not session.add_link("KEY:1:1", "body .title")
        assert len(session.resolved_links) == 1

    def test_unresolvable_links_skipped(self, db: Database) -> None:
        session = _linked_session(db)
        session.add_link("KEY:9:9", "body .title")
        session.add_link("KEY:1:1", "body .gone")
        assert session.links.count() == 3
        assert [link.ids for link in session.resolved_links] == [("KEY:1:1", "body .title")]

    def test_stale_link_after_rebuild(self, db: Database) -> None:
        session = _linked_session(db)
        session.accept_document(_make_document(last_modified="2024-03-01T00:00:00Z", with_title=False))
        assert session.resolved_links == []
        assert session.links.count() == 1

    def test_remove_link(self, db: Database) -> None:
        session = _linked_session(db)
        assert session.remove_link("KEY:1:1", "body .title")
        assert session.resolved_links == []

    def test_remove_layer_and_scope_links(self, db: Database) -> None:
        session = _linked_session(db)
        session.add_link("KEY:2:1", "body .title")
        assert session.remove_layer_links("KEY:1:1") == 1
        assert [link.layer_id for link in session.resolved_links] == ["KEY:2:1"]
        assert session.remove_scope_links("body .title") == 1
        assert session.resolved_links == []

    def test_links_by(self, db: Database) -> None:
        session = _linked_session(db)
        session.add_link("KEY:2:1", "body .title")
        by_scope = session.links_by(IdOrder.SCOPE)
        assert list(by_scope) == ["body .title"]
        assert len(by_scope["body .title"]) == 2
        by_layer = session.links_by(IdOrder.LAYER)
        assert sorted(by_layer) == ["KEY:1:1", "KEY:2:1"]


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


class TestDiagnostics:
    def test_diagnostics_for_links(self, db: Database) -> None:
        session = _linked_session(db)
        messages = [d.message for d in session.diagnostics()]
        assert messages == ["missing font-family: 'Inter';", "expected font-size: 12px;"]

    def test_no_stylesheet(self, db: Database) -> None:
        session = SyncSession(db=db)
        session.accept_document(_make_document())
        session.add_link("KEY:1:1", "body .title")
        assert session.diagnostics() == []
