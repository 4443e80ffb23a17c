"""codevector search command - query the index."""

from __future__ import annotations

import click

from codevector.cli.utils import build_context, load_cli_config
from codevector.config.constants import SEARCH_DEFAULT_LIMIT, SEARCH_MAX_LIMIT
from codevector.core.cancellation import CancellationToken
from codevector.core.errors import CodeVectorError


@click.command()
@click.argument("query")
@click.option(
    "--limit",
    "-n",
    type=click.IntRange(1, SEARCH_MAX_LIMIT),
    default=SEARCH_DEFAULT_LIMIT,
    show_default=True,
    help="Maximum number of matches",
)
@click.pass_context
def search_command(ctx: click.Context, query: str, limit: int) -> None:
    """Search indexed code for QUERY, a natural language description."""
    config = load_cli_config(ctx)
    app_ctx = build_context(config)
    try:
        output = app_ctx.searcher.search(
            query, limit, cancel=CancellationToken(config.timeouts.search_sec)
        )
    except CodeVectorError as e:
        raise click.ClickException(str(e)) from e
    finally:
        app_ctx.close()

    click.echo(output)
