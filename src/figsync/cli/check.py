"""CLI command: figsync check -- report differences for every link."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from figsync.config import SyncConfig
from figsync.cli.common import load_document, open_session
from figsync.errors import StylesheetParseError


@click.command()
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--document",
    "documents",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Saved file response to attach before checking (repeatable)",
)
@click.pass_obj
def check(config: SyncConfig, stylesheet: str, documents: tuple[str, ...]) -> None:
    """Compare STYLESHEET with the linked design layers.

    Prints one diagnostic per missing or mismatched property and exits with
    code 1 if there are any.
    """
    path = Path(stylesheet)
    session = open_session(config)
    try:
        for document in documents:
            session.accept_document(load_document(document))
        try:
            session.load_stylesheet(path.read_text(encoding="utf-8"), name=path.name).result()
        except StylesheetParseError as exc:
            click.echo(f"Parse error: {exc}", err=True)
            sys.exit(1)

        diagnostics = session.diagnostics()
        linked = len(session.resolved_links)
    finally:
        session.close()

    if not diagnostics:
        click.echo(f"OK: {path.name} matches {linked} linked layer(s)")
        sys.exit(0)

    for diag in diagnostics:
        click.echo(f"{path.name}:{diag}")
    click.echo()
    click.echo(f"Summary: {len(diagnostics)} difference(s) across {linked} link(s)")
    sys.exit(1)
