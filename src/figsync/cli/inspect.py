"""CLI commands: figsync scopes / figsync layers -- display parsed trees."""

from __future__ import annotations

import click

from figsync.config import SyncConfig
from figsync.cli.common import load_document, parse_stylesheet_file
from figsync.design.layers import Layer, LayerTree


@click.command()
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
@click.option("--styles/--no-styles", default=False, help="Show each scope's resolved properties")
@click.pass_obj
def scopes(config: SyncConfig, stylesheet: str, styles: bool) -> None:
    """List every selector of STYLESHEET with its source range."""
    tree = parse_stylesheet_file(stylesheet, config)
    for scope in tree:
        span = scope.selector_range
        location = str(span) if span is not None else "-"
        click.echo(f"{location:<12} {scope.css_scope_name}")
        if styles:
            for prop, value in scope.styles.items():
                click.echo(f"{'':<12}   {prop}: {value};")


def _echo_layer(tree: LayerTree, layer: Layer, depth: int, styles: bool, config: SyncConfig) -> None:
    marker = "*" if layer.has_styles else " "
    click.echo(f"{'  ' * depth}{marker} {layer.name} [{layer.type.value}] {layer.id}")
    if styles:
        for line in layer.formatted_styles().splitlines():
            click.echo(f"{'  ' * (depth + 2)}{line}")
    for child in tree.visible_children(
        layer,
        ignore_internal=config.ignore_internal_layers,
        internal_prefix=config.internal_layer_prefix,
    ):
        _echo_layer(tree, child, depth + 1, styles, config)


@click.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False))
@click.option("--key", default=None, help="Document key (defaults to the file name)")
@click.option("--styles/--no-styles", default=False, help="Show each layer's derived style")
@click.pass_obj
def layers(config: SyncConfig, document: str, key: str | None, styles: bool) -> None:
    """Show the pruned layer tree of a saved DOCUMENT file response.

    Layers marked with ``*`` have a style, their own or their children's.
    """
    tree = LayerTree.from_documents([load_document(document, key)])
    for root in tree.visible_children(
        ignore_internal=config.ignore_internal_layers,
        internal_prefix=config.internal_layer_prefix,
    ):
        _echo_layer(tree, root, 0, styles, config)
