"""CLI command: figsync generate -- emit a LESS stylesheet for a design document."""

from __future__ import annotations

import dataclasses
import sys

import click

from figsync.config import SyncConfig
from figsync.cli.common import load_document
from figsync.design.less import generate_component_rules, generate_stylesheet


@click.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False))
@click.option("--tokens-frame", default=None, help="Top-level frame holding '@key: value;' text layers")
@click.option("--colors-frame", default=None, help="Top-level frame holding color samples")
@click.option("--typography-frame", default=None, help="Top-level frame holding text style samples")
@click.option(
    "--frame",
    "frames",
    multiple=True,
    help="Top-level frame to take components from (repeatable; default: all others)",
)
@click.option("--components-only", is_flag=True, help="Print only the component rules")
@click.pass_obj
def generate(
    config: SyncConfig,
    document: str,
    tokens_frame: str | None,
    colors_frame: str | None,
    typography_frame: str | None,
    frames: tuple[str, ...],
    components_only: bool,
) -> None:
    """Print a LESS stylesheet for a saved DOCUMENT file response.

    Only components whose description carries a selector such as
    ``<.button>`` produce a rule.
    """
    doc = load_document(document)
    if components_only:
        click.echo(generate_component_rules(doc), nl=False)
        return

    roots = doc.root_nodes
    for name in (tokens_frame, colors_frame, typography_frame, *frames):
        if name is not None and name not in roots:
            click.echo(f"No top-level frame named {name!r}", err=True)
            sys.exit(1)

    overrides: dict[str, object] = {}
    if tokens_frame is not None:
        overrides["tokens_frame"] = tokens_frame
    if colors_frame is not None:
        overrides["colors_frame"] = colors_frame
    if typography_frame is not None:
        overrides["typography_frame"] = typography_frame
    if frames:
        overrides["component_frames"] = frames
    click.echo(generate_stylesheet(doc, dataclasses.replace(config, **overrides)), nl=False)
