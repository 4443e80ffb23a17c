"""CLI utilities."""

from __future__ import annotations

from pathlib import Path

import click

from codevector.config import CodeVectorConfig, load_config
from codevector.core.errors import ConfigError, VectorStoreError
from codevector.mcp.context import AppContext


def load_cli_config(ctx: click.Context) -> CodeVectorConfig:
    """Resolve configuration for a command.

    Raises:
        click.ClickException: If the config file or environment is invalid.
    """
    config_path: Path | None = ctx.obj.get("config_path") if ctx.obj else None
    try:
        return load_config(config_path=config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


def build_context(config: CodeVectorConfig) -> AppContext:
    """Create the app context, bootstrapping the collection.

    Raises:
        click.ClickException: If the vector store cannot be reached or the
            collection cannot be created.
    """
    try:
        return AppContext.create(config)
    except VectorStoreError as e:
        raise click.ClickException(str(e)) from e
