"""Allow ``python -m codevector``."""

from codevector.cli.main import cli

if __name__ == "__main__":
    cli()
