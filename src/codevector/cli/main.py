"""codevector CLI - codevector command."""

from pathlib import Path

import click

from codevector.cli.check import check_command
from codevector.cli.index import index_command
from codevector.cli.search import search_command
from codevector.cli.serve import serve_command
from codevector.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="codevector")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file (default: ~/.config/codevector/config.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """codevector - semantic code search over a Qdrant index."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(serve_command, name="serve")
cli.add_command(index_command, name="index")
cli.add_command(search_command, name="search")
cli.add_command(check_command, name="check")


if __name__ == "__main__":
    cli()
