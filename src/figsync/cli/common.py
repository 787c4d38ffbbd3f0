"""Helpers shared by the CLI commands."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from figsync.config import SyncConfig
from figsync.errors import StylesheetParseError
from figsync.model.node import DesignDocument
from figsync.session import SyncSession
from figsync.stylesheet.parser import Stylesheet
from figsync.stylesheet.scope import ScopeTree


def load_document(path: str, key: str | None = None) -> DesignDocument:
    """Read a saved file response; the key defaults to the file name stem."""
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        click.echo(f"Invalid document JSON in {p.name}: {exc}", err=True)
        sys.exit(1)
    if not isinstance(data, dict):
        click.echo(f"Invalid document JSON in {p.name}: expected an object", err=True)
        sys.exit(1)
    return DesignDocument.from_response(key or p.stem, data)


def parse_stylesheet_file(path: str, config: SyncConfig) -> ScopeTree:
    stylesheet = Stylesheet.from_path(
        path,
        root_selector=config.root_selector,
        global_selectors=config.global_selectors,
    )
    try:
        return stylesheet.parse().result()
    except StylesheetParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)


def open_session(config: SyncConfig) -> SyncSession:
    return SyncSession(config)
