"""
Exit-code table for the Copybara container.

Copybara reports its outcome through a small set of documented process exit
codes. This module holds the static table mapping each code to a namespace
and outcome kind, and the single function that turns a raw code into either
a normal return or an exception.
"""

from __future__ import annotations

import logging

from copybara_runner.constants import (
    CONFIG_ERROR_CODE,
    COPYBARA_NAMESPACE,
    ENGINE_LAUNCH_ERROR_CODE,
    RUNNER_NAMESPACE,
    UNKNOWN_ERROR_CODE,
)
from copybara_runner.exceptions import CopybaraExitError, UnknownExitCodeError
from copybara_runner.types import ExitCodeEntry, ExitCodeType
from copybara_runner.utils.logging import log_with_context

EXIT_CODES: dict[int, ExitCodeEntry] = {
    0: ExitCodeEntry(
        COPYBARA_NAMESPACE, ExitCodeType.SUCCESS, "Everything went well"
    ),
    1: ExitCodeEntry(
        COPYBARA_NAMESPACE, ExitCodeType.ERROR, "Error parsing the command line"
    ),
    2: ExitCodeEntry(
        COPYBARA_NAMESPACE, ExitCodeType.ERROR, "Error in the configuration"
    ),
    3: ExitCodeEntry(
        COPYBARA_NAMESPACE,
        ExitCodeType.ERROR,
        "Error accessing or pushing to a repository",
    ),
    4: ExitCodeEntry(
        COPYBARA_NAMESPACE,
        ExitCodeType.WARNING,
        "No-op: there were no changes to migrate",
    ),
    8: ExitCodeEntry(
        COPYBARA_NAMESPACE, ExitCodeType.ERROR, "Execution was interrupted"
    ),
    30: ExitCodeEntry(
        COPYBARA_NAMESPACE,
        ExitCodeType.ERROR,
        "Error in the environment (missing tool, bad permissions...)",
    ),
    31: ExitCodeEntry(
        COPYBARA_NAMESPACE, ExitCodeType.ERROR, "Internal Copybara error"
    ),
    CONFIG_ERROR_CODE: ExitCodeEntry(
        RUNNER_NAMESPACE, ExitCodeType.ERROR, "Invalid runner configuration"
    ),
    ENGINE_LAUNCH_ERROR_CODE: ExitCodeEntry(
        RUNNER_NAMESPACE, ExitCodeType.ERROR, "Could not start the container"
    ),
    UNKNOWN_ERROR_CODE: ExitCodeEntry(
        RUNNER_NAMESPACE, ExitCodeType.ERROR, "Unknown error"
    ),
}


def classify_exit_code(exit_code: int) -> int:
    """
    Classify a Copybara container exit code.

    Success and warning codes from the Copybara namespace are returned
    unchanged. Any other Copybara code raises ``CopybaraExitError`` carrying
    the same code. Codes missing from the table, or owned by another
    namespace, raise ``UnknownExitCodeError`` carrying the unknown-error
    sentinel.

    Args:
        exit_code: Raw process exit code

    Returns:
        The exit code, when it represents success or a warning
    """
    entry = EXIT_CODES.get(exit_code)

    if entry is not None and entry.ns == COPYBARA_NAMESPACE:
        if entry.ok:
            level = (
                logging.INFO
                if entry.type == ExitCodeType.SUCCESS
                else logging.WARNING
            )
            log_with_context(level, f"Copybara exited with {exit_code}: {entry.msg}")
            return exit_code
        raise CopybaraExitError(exit_code, entry)

    raise UnknownExitCodeError(exit_code, entry)
