"""CLI commands: figsync link / unlink / links -- maintain the link store."""

from __future__ import annotations

import sys

import click

from figsync.config import SyncConfig
from figsync.cli.common import open_session
from figsync.model.link import IdOrder


@click.command()
@click.argument("layer_id")
@click.argument("scope_id")
@click.pass_obj
def link(config: SyncConfig, layer_id: str, scope_id: str) -> None:
    """Link LAYER_ID (``<file key>:<node id>``) to the selector SCOPE_ID."""
    session = open_session(config)
    try:
        added = session.add_link(layer_id, scope_id)
    finally:
        session.close()
    if added:
        click.echo(f"Linked {layer_id} -> {scope_id}")
    else:
        click.echo(f"Already linked: {layer_id} -> {scope_id}")


@click.command()
@click.option("--layer", "layer_id", default=None, help="Layer id")
@click.option("--scope", "scope_id", default=None, help="Full selector")
@click.option("--document", "document_key", default=None, help="Detach a whole document by key")
@click.pass_obj
def unlink(
    config: SyncConfig,
    layer_id: str | None,
    scope_id: str | None,
    document_key: str | None,
) -> None:
    """Remove one link, all links of a layer or scope, or a whole document."""
    if not (layer_id or scope_id or document_key):
        click.echo("Nothing to unlink: pass --layer, --scope or --document", err=True)
        sys.exit(2)

    session = open_session(config)
    try:
        if document_key:
            removed = session.detach_document(document_key)
        elif layer_id and scope_id:
            removed = int(session.remove_link(layer_id, scope_id))
        elif layer_id:
            removed = session.remove_layer_links(layer_id)
        else:
            assert scope_id is not None
            removed = session.remove_scope_links(scope_id)
    finally:
        session.close()
    click.echo(f"Removed {removed} link(s)")


@click.command()
@click.option(
    "--by",
    "order",
    type=click.Choice([o.value for o in IdOrder]),
    default=IdOrder.LAYER.value,
    show_default=True,
    help="Group links by layer id or by selector",
)
@click.pass_obj
def links(config: SyncConfig, order: str) -> None:
    """List stored links."""
    session = open_session(config)
    try:
        grouped = session.links.index(IdOrder(order))
    finally:
        session.close()

    if not grouped:
        click.echo("No links.")
        return
    for key, pairs in grouped.items():
        click.echo(key)
        for layer_id, scope_id in pairs:
            other = scope_id if order == IdOrder.LAYER.value else layer_id
            click.echo(f"  {other}")
