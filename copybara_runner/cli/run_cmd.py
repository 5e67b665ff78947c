"""CLI command handler for running a Copybara workflow."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from copybara_runner.cli.common import cli, common_options, handle_exception
from copybara_runner.core.config import CopybaraConfig, load_config
from copybara_runner.core.host import HostConfig
from copybara_runner.core.runner import CopybaraRunner
from copybara_runner.utils.logging import log_with_context, setup_logger

# ---------------------------------------------------------------------------
# run subcommand
# ---------------------------------------------------------------------------


@cli.command("run")
@common_options
@click.option(
    "--workflow",
    default=None,
    help="push, pr, init or a workflow name from a custom config "
    "(defaults to the config's workflow)",
)
@click.option(
    "--ref",
    default=None,
    help="Source reference for the pr workflow (defaults to pr_number)",
)
@click.option(
    "--copybara_option",
    "copybara_options",
    multiple=True,
    help="Extra option passed to Copybara; may be repeated",
)
@click.option(
    "--skip_download",
    is_flag=True,
    default=False,
    help="Do not pull the Copybara image before running",
)
def run_workflow(
    config: str,
    verbose: bool,
    log_dir: str | None,
    workflow: str | None,
    ref: str | None,
    copybara_options: tuple[str, ...],
    skip_download: bool,
) -> None:
    """Write copy.bara.sky and run a Copybara workflow in the container.

    Exits 0 when Copybara succeeds or reports a no-op, and with Copybara's
    exit code (or 52 for unrecognised codes) when it fails.

    Args:
        config: Path to config YAML.
        verbose: Enable verbose console logging.
        log_dir: Directory for the log file.
        workflow: Workflow to run.
        ref: Source reference for the pr workflow.
        copybara_options: Extra Copybara options.
        skip_download: Skip pulling the image.
    """
    setup_logger(verbose, log_dir)

    try:
        cfg = load_config(Path(config))
        selected = workflow or cfg.workflow
        exit_code = run_copybara(
            cfg,
            selected,
            [*cfg.copybara_options, *copybara_options],
            cfg.pr_number if ref is None else ref,
            download=not skip_download,
        )
    except (Exception, KeyboardInterrupt) as e:
        sys.exit(handle_exception(e))

    log_with_context(
        logging.INFO,
        f"Copybara finished with exit code {exit_code}",
        workflow=selected,
    )


def run_copybara(
    cfg: CopybaraConfig,
    workflow: str,
    copybara_options: list[str],
    ref: str,
    download: bool = True,
    host: HostConfig | None = None,
) -> int:
    """Render and save the config, optionally pull the image, then run Copybara.

    Args:
        cfg: Loaded configuration.
        workflow: Workflow to run.
        copybara_options: Extra Copybara options.
        ref: Source reference for the pr workflow.
        download: Pull the image first.
        host: Host file layout; defaults to the user's home directory.

    Returns:
        The classified Copybara exit code.
    """
    host = host or HostConfig.from_home()
    runner = CopybaraRunner(cfg.image, host)

    document = runner.build_config_document(workflow, cfg, host.read_ssh_key())
    host.save_config(document)

    if download:
        pull_code = runner.download()
        if pull_code != 0:
            log_with_context(
                logging.WARNING,
                f"docker pull exited with {pull_code}, using the local image",
            )

    return runner.run(workflow, copybara_options, ref)
