#!/usr/bin/env python3
"""
Command-line entry point for the Copybara runner.

Importing the command modules registers their subcommands on the ``cli``
group.
"""

from copybara_runner.cli import (  # noqa: F401
    config_cmd,
    download_cmd,
    render_cmd,
    run_cmd,
)
from copybara_runner.cli.common import cli, handle_exception

__all__ = ["cli", "handle_exception", "main"]


def main() -> None:
    """Main entry point for the copybara-runner command."""
    cli()


if __name__ == "__main__":
    main()
