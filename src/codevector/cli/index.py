"""codevector index command - index a project once."""

from __future__ import annotations

from pathlib import Path

import click

from codevector.cli.utils import build_context, load_cli_config
from codevector.core.cancellation import CancellationToken


@click.command()
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False, resolve_path=True, path_type=Path),
)
@click.pass_context
def index_command(ctx: click.Context, path: Path) -> None:
    """Index every function and method under PATH.

    Re-running on the same tree overwrites existing points instead of
    duplicating them.
    """
    config = load_cli_config(ctx)
    app_ctx = build_context(config)
    try:
        stats = app_ctx.indexer.index_project(
            path, cancel=CancellationToken(config.timeouts.index_sec)
        )
    finally:
        app_ctx.close()

    click.echo(stats.render())
    if stats.cancelled:
        raise SystemExit(1)
