"""CLI command handler for pulling the Copybara image."""

from __future__ import annotations

import sys
from pathlib import Path

from copybara_runner.cli.common import cli, common_options, handle_exception
from copybara_runner.core.config import load_config
from copybara_runner.core.runner import CopybaraRunner
from copybara_runner.utils.logging import setup_logger

# ---------------------------------------------------------------------------
# download subcommand
# ---------------------------------------------------------------------------


@cli.command()
@common_options
def download(config: str, verbose: bool, log_dir: str | None) -> None:
    """Pull the configured Copybara image.

    Exits with the docker exit code.

    Args:
        config: Path to config YAML.
        verbose: Enable verbose console logging.
        log_dir: Directory for the log file.
    """
    setup_logger(verbose, log_dir)

    try:
        cfg = load_config(Path(config))
        exit_code = CopybaraRunner(cfg.image).download()
    except Exception as e:
        sys.exit(handle_exception(e))

    sys.exit(exit_code)
