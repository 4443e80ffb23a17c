"""codevector serve command - run the MCP server on stdio."""

from __future__ import annotations

import click

from codevector.cli.utils import load_cli_config
from codevector.core.errors import VectorStoreError


@click.command()
@click.pass_context
def serve_command(ctx: click.Context) -> None:
    """Run the MCP tool server over stdio.

    Exposes index_project and codebase_search. Exits with status 1 if the
    vector collection cannot be bootstrapped.
    """
    from codevector.mcp.server import run_server

    config = load_cli_config(ctx)
    try:
        run_server(config)
    except VectorStoreError as e:
        raise click.ClickException(str(e)) from e
