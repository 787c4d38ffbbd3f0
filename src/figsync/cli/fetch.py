"""CLI command: figsync fetch -- download and cache a design document."""

from __future__ import annotations

import dataclasses
import sys

import click

from figsync.config import SyncConfig
from figsync.design.client import DesignClient
from figsync.errors import ConfigurationError, DesignFetchError
from figsync.session import SyncSession


@click.command()
@click.argument("key")
@click.option("--token", envvar="FIGMA_TOKEN", default="", help="API token (or FIGMA_TOKEN)")
@click.option("--base-url", default=None, help="Override the API base URL")
@click.pass_obj
def fetch(config: SyncConfig, key: str, token: str, base_url: str | None) -> None:
    """Fetch document KEY and store it in the document cache."""
    changes: dict[str, str] = {"api_token": token}
    if base_url:
        changes["api_base_url"] = base_url
    config = dataclasses.replace(config, **changes)

    try:
        client = DesignClient.from_config(config)
    except ConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    session = SyncSession(config, client=client)
    try:
        changed = session.refresh(key)
    except DesignFetchError as exc:
        click.echo(f"Fetch failed: {exc}", err=True)
        sys.exit(1)
    finally:
        session.close()

    if changed:
        click.echo(f"Fetched {key}")
    else:
        click.echo(f"{key} is up to date")
