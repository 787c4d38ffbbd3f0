"""figsync CLI entry point: Click group with subcommands."""

from __future__ import annotations

import logging

import click

from figsync import __version__
from figsync.config import SyncConfig


@click.group()
@click.version_option(version=__version__, prog_name="figsync")
@click.option(
    "--db",
    "db_path",
    envvar="FIGSYNC_DB",
    default="figsync.db",
    show_default=True,
    help="Link store and document cache",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
)
@click.option(
    "--ignore-internal/--show-internal",
    default=False,
    help="Hide layers whose name starts with '_'",
)
@click.pass_context
def cli(ctx: click.Context, db_path: str, log_level: str, ignore_internal: bool) -> None:
    """figsync - keep a design document and a LESS stylesheet in sync."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = SyncConfig(db_path=db_path, ignore_internal_layers=ignore_internal)


# Import and register subcommands
from figsync.cli.check import check  # noqa: E402
from figsync.cli.fetch import fetch  # noqa: E402
from figsync.cli.generate import generate  # noqa: E402
from figsync.cli.inspect import layers, scopes  # noqa: E402
from figsync.cli.links import link, links, unlink  # noqa: E402

cli.add_command(scopes)
cli.add_command(layers)
cli.add_command(check)
cli.add_command(link)
cli.add_command(unlink)
cli.add_command(links)
cli.add_command(generate)
cli.add_command(fetch)
