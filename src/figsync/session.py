"""Sync session: the per-workspace state shared by every command.

A session owns the cached design snapshots, the layer tree built from them,
the current stylesheet and its scope tree, and the link store.  Trees are
rebuilt wholesale and swapped; links are the only state written piecemeal,
and every write is followed by re-resolving the in-memory links against the
current trees.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from enum import Enum

from figsync.config import SyncConfig
from figsync.design.client import DesignClient
from figsync.design.layers import Layer, LayerTree
from figsync.errors import ConfigurationError, DesignFetchError, StylesheetParseError
from figsync.model.diagnostic import Diagnostic
from figsync.model.link import IdOrder, Link
from figsync.model.node import DesignDocument
from figsync.reconcile.reconciler import Reconciler
from figsync.store.db import Database
from figsync.store.migrations import run_migrations
from figsync.store.repositories import DocumentRepository, LinkRepository
from figsync.stylesheet.parser import Stylesheet
from figsync.stylesheet.scope import ScopeTree, StylesheetScope

logger = logging.getLogger(__name__)


class SyncStatus(Enum):
    """What a status indicator shows for the session."""

    NOT_ATTACHED = "not_attached"
    SYNCING = "syncing"
    SYNCED = "synced"
    ERROR = "error"


class SyncSession:
    """Explicit context for one stylesheet and its attached design documents."""

    def __init__(
        self,
        config: SyncConfig | None = None,
        db: Database | None = None,
        client: DesignClient | None = None,
    ) -> None:
        self.config = config or SyncConfig()
        if db is None:
            db = Database(self.config.db_path)
            db.connect()
            run_migrations(db)
        self.db = db
        self.client = client
        self.documents = DocumentRepository(db)
        self.links = LinkRepository(db)

        self.layer_tree = LayerTree.from_documents(self.documents.list_all())
        self.stylesheet: Stylesheet | None = None
        self.scope_tree: ScopeTree | None = None
        self.resolved_links: list[Link] = []
        self.status = self._idle_status()
        self.last_error: Exception | None = None

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
        self.db.close()

    # ------------------------------------------------------------------
    # Design documents
    # ------------------------------------------------------------------

    def refresh(self, key: str) -> bool:
        """Fetch document *key* and commit it unless ``lastModified`` is unchanged.

        Returns whether the trees were rebuilt.  Fetch failures (an empty
        key included) set the status to ERROR and propagate.
        """
        if self.client is None:
            raise ConfigurationError("No design client configured; an API token is required")
        self.status = SyncStatus.SYNCING
        try:
            document = self.client.get_file(key)
        except (DesignFetchError, ConfigurationError) as exc:
            self.status = SyncStatus.ERROR
            self.last_error = exc
            raise
        return self.accept_document(document)

    def accept_document(self, document: DesignDocument) -> bool:
        """Commit a snapshot unless it is the same as or older than the cached one."""
        cached = self.documents.last_modified(document.key)
        if cached is not None and document.last_modified <= cached:
            if document.last_modified == cached:
                logger.info("Document %s unchanged (%s)", document.key, cached)
            else:
                logger.info(
                    "Discarding stale snapshot of %s (%s < %s)",
                    document.key,
                    document.last_modified,
                    cached,
                )
            self.status = SyncStatus.SYNCED
            return False
        self.documents.save(document)
        self._rebuild_layers()
        self.status = SyncStatus.SYNCED
        return True

    def detach_document(self, key: str) -> int:
        """Forget document *key* and every link to its layers."""
        removed = self.links.clear_document(key)
        self.documents.delete(key)
        self._rebuild_layers()
        if not self.documents.keys():
            self.status = SyncStatus.NOT_ATTACHED
        return removed

    def _idle_status(self) -> SyncStatus:
        return SyncStatus.SYNCED if self.documents.keys() else SyncStatus.NOT_ATTACHED

    def _rebuild_layers(self) -> None:
        self.layer_tree = LayerTree.from_documents(self.documents.list_all())
        self._resolve_links()

    # ------------------------------------------------------------------
    # Stylesheet
    # ------------------------------------------------------------------

    def load_stylesheet(
        self,
        text: str,
        *,
        name: str = "<stylesheet>",
        executor: Executor | None = None,
    ) -> Future[ScopeTree]:
        """Parse *text* and swap in its scope tree once the parse settles.

        A parse that settles after a newer stylesheet was loaded is ignored.
        A successful parse clears an ERROR status left by a failed one.
        """
        stylesheet = Stylesheet(
            text,
            name=name,
            root_selector=self.config.root_selector,
            global_selectors=self.config.global_selectors,
        )
        self.stylesheet = stylesheet

        def _swap(tree: ScopeTree) -> None:
            if self.stylesheet is not stylesheet:
                logger.debug("Ignoring parse of superseded stylesheet %s", name)
                return
            self.scope_tree = tree
            if self.status is SyncStatus.ERROR and isinstance(self.last_error, StylesheetParseError):
                self.status = self._idle_status()
                self.last_error = None
            self._resolve_links()

        def _failed(future: Future[ScopeTree]) -> None:
            exc = future.exception()
            if exc is not None and self.stylesheet is stylesheet:
                self.status = SyncStatus.ERROR
                self.last_error = exc

        stylesheet.when_parsed(_swap)
        stylesheet.future.add_done_callback(_failed)
        return stylesheet.parse(executor)

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------

    def add_link(self, layer_id: str, scope_id: str) -> bool:
        added = self.links.add(layer_id, scope_id)
        self._resolve_links()
        return added

    def remove_link(self, layer_id: str, scope_id: str) -> bool:
        removed = self.links.remove(layer_id, scope_id)
        self._resolve_links()
        return removed

    def remove_layer_links(self, layer_id: str) -> int:
        removed = self.links.remove_layer_links(layer_id)
        self._resolve_links()
        return removed

    def remove_scope_links(self, scope_id: str) -> int:
        removed = self.links.remove_scope_links(scope_id)
        self._resolve_links()
        return removed

    def _resolve_links(self) -> None:
        resolved: list[Link] = []
        if self.scope_tree is not None:
            for layer_id, scope_id in self.links.list_all():
                layer = self.layer_tree.get(layer_id)
                scope = self.scope_tree.get_scope(scope_id)
                if layer is None or scope is None:
                    logger.debug("Ignoring unresolved link %s <-> %s", layer_id, scope_id)
                    continue
                resolved.append(Link.between(layer, scope))
        self.resolved_links = resolved

    def links_by(self, order: IdOrder) -> dict[str, list[Link]]:
        """Resolved links grouped by layer id or by scope selector."""
        grouped: dict[str, list[Link]] = {}
        for link in self.resolved_links:
            grouped.setdefault(link.key(order), []).append(link)
        return grouped

    def layer(self, layer_id: str) -> Layer | None:
        return self.layer_tree.get(layer_id)

    def scope(self, selector: str) -> StylesheetScope | None:
        return self.scope_tree.get_scope(selector) if self.scope_tree is not None else None

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def diagnostics(self) -> list[Diagnostic]:
        """Missing and mismatched properties for every resolved link."""
        if self.scope_tree is None:
            return []
        return Reconciler(self.scope_tree, self.layer_tree).diagnostics(self.resolved_links)
