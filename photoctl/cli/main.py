"""Main CLI entry point for photoctl."""

from __future__ import annotations

import click

from photoctl import __version__
from photoctl.cli.config_cmd import config
from photoctl.cli.photos import photos
from photoctl.cli.upload import upload

# =============================================================================
# Main CLI Group
# =============================================================================


@click.group()
@click.version_option(version=__version__, prog_name="photoctl")
def cli() -> None:
    """photoctl - Batch photo uploads to a photo store.

    Uploads run concurrently with per-item progress, and failed items can
    be retried without re-sending the rest.

    Get started:

      photoctl config init       # Create config file

      photoctl upload *.jpg      # Upload a batch

      photoctl photos list       # Browse stored photos

    Use --help on any command for more information.
    """
    pass


# =============================================================================
# Register Commands
# =============================================================================

cli.add_command(config)
cli.add_command(upload)
cli.add_command(photos)


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
