"""CLI command handler for rendering copy.bara.sky."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from copybara_runner.cli.common import cli, common_options, handle_exception
from copybara_runner.core.config import load_config
from copybara_runner.core.host import HostConfig
from copybara_runner.core.runner import CopybaraRunner
from copybara_runner.utils.logging import log_with_context, setup_logger

# ---------------------------------------------------------------------------
# render subcommand
# ---------------------------------------------------------------------------


@cli.command()
@common_options
@click.option(
    "--workflow",
    default=None,
    help="Workflow to validate the config for (defaults to the config's workflow)",
)
@click.option(
    "--output",
    "-o",
    default=None,
    help="Write the document to this file instead of stdout",
)
def render(
    config: str,
    verbose: bool,
    log_dir: str | None,
    workflow: str | None,
    output: str | None,
) -> None:
    """Validate the config and print the generated copy.bara.sky.

    Args:
        config: Path to config YAML.
        verbose: Enable verbose console logging.
        log_dir: Directory for the log file.
        workflow: Workflow to validate the config for.
        output: File to write the document to.
    """
    setup_logger(verbose, log_dir)

    try:
        cfg = load_config(Path(config))
        host = HostConfig.from_home()
        document = CopybaraRunner.build_config_document(
            workflow or cfg.workflow, cfg, host.read_ssh_key()
        )
        if output:
            Path(output).write_text(document)
            log_with_context(logging.INFO, f"Wrote Copybara config to {output}")
        else:
            click.echo(document, nl=False)
    except Exception as e:
        sys.exit(handle_exception(e))
