"""codevector check command - verify the vector store is reachable."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from codevector.cli.utils import load_cli_config
from codevector.index.store import create_qdrant_client, list_collections


@click.command()
@click.pass_context
def check_command(ctx: click.Context) -> None:
    """Connect to Qdrant and list its collections.

    Uses a short timeout; exits with status 1 if the server is unreachable.
    """
    console = Console()
    config = load_cli_config(ctx)
    vs = config.vector_store
    target = f"{vs.host}:{vs.port}"

    console.print(f"Connecting to Qdrant at [cyan]{target}[/cyan]...")
    client = create_qdrant_client(vs, timeout=vs.check_timeout_sec)
    try:
        names = list_collections(client)
    except Exception as e:
        console.print(f"[red]✗[/red] Failed to connect to {target}: {e}")
        raise SystemExit(1) from e
    finally:
        client.close()

    console.print(f"[green]✓[/green] Connected. Found {len(names)} collections.")
    if not names:
        return

    table = Table(show_header=True, box=None, padding=(0, 1), pad_edge=False)
    table.add_column("collection", style="cyan")
    table.add_column("status")
    for name in names:
        status = "[green]index[/green]" if name == vs.collection else "[dim]other[/dim]"
        table.add_row(name, status)
    console.print(table)
