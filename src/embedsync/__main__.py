"""Allow ``python -m embedsync``."""

from embedsync.cli.main import cli

if __name__ == "__main__":
    cli()
