"""Shared CLI infrastructure: option decorators, error handlers, and the CLI group."""

from __future__ import annotations

import logging
from typing import Callable

import click

import copybara_runner
from copybara_runner.exceptions import (
    ConfigError,
    CopybaraRunnerError,
    ExitCodeError,
)
from copybara_runner.utils.logging import log_with_context


# ---------------------------------------------------------------------------
# Shared option decorator
# ---------------------------------------------------------------------------


def common_options(f: Callable[..., None]) -> Callable[..., None]:
    """Decorator that adds options shared across multiple subcommands.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function with common options attached.
    """
    f = click.option(
        "--config",
        default="copybara.yaml",
        show_default=True,
        help="Path to config YAML",
    )(f)
    f = click.option(
        "--verbose",
        "-v",
        is_flag=True,
        default=False,
        help="Enable verbose console logging (shows DEBUG level messages)",
    )(f)
    f = click.option(
        "--log_dir",
        default=None,
        help="Directory to write copybara.log into",
    )(f)
    return f


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=copybara_runner.__version__, prog_name="copybara-runner")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Render copy.bara.sky and run Copybara workflows in a container.

    Args:
        ctx: The Click context (injected by ``@click.pass_context``).
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------


def handle_exception(e: BaseException) -> int:
    """Log an error the way the user should see it.

    Args:
        e: The exception to handle.

    Returns:
        The process exit code to finish with.
    """
    if isinstance(e, ConfigError):
        log_with_context(logging.ERROR, str(e))
        log_with_context(
            logging.INFO, "Fix the configuration file and run the command again."
        )
    elif isinstance(e, ExitCodeError):
        log_with_context(logging.ERROR, str(e))
        log_with_context(
            logging.INFO, "See the Copybara output above for the cause of the failure."
        )
    elif isinstance(e, CopybaraRunnerError):
        log_with_context(logging.ERROR, str(e))
    elif isinstance(e, FileNotFoundError):
        log_with_context(logging.ERROR, f"File not found: {e}")
        log_with_context(
            logging.INFO,
            "Please check that all required files exist and paths are correct.",
        )
        return 1
    elif isinstance(e, KeyboardInterrupt):
        log_with_context(logging.WARNING, "Interrupted by user.")
        return 130
    else:
        log_with_context(logging.ERROR, f"Command failed: {e}", exc_info=True)
        return 1

    return e.exit_code
