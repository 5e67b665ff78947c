"""CLI command handler for creating a starter config file."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from copybara_runner.cli.common import cli
from copybara_runner.core.config import create_default_config
from copybara_runner.utils.logging import setup_logger

# ---------------------------------------------------------------------------
# create-config subcommand
# ---------------------------------------------------------------------------


@cli.command("create-config")
@click.option(
    "--output",
    "-o",
    default="copybara.yaml",
    show_default=True,
    help="Where to write the config file",
)
def create_config(output: str) -> None:
    """Write a commented starter config file. Never overwrites.

    Args:
        output: Where to write the config file.
    """
    setup_logger()

    if not create_default_config(Path(output)):
        sys.exit(1)
