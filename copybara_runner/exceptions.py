"""Custom exception hierarchy for the Copybara runner."""

from __future__ import annotations

from typing import TYPE_CHECKING

from copybara_runner.constants import (
    CONFIG_ERROR_CODE,
    ENGINE_LAUNCH_ERROR_CODE,
    UNKNOWN_ERROR_CODE,
)

if TYPE_CHECKING:
    from copybara_runner.types import ExitCodeEntry


class CopybaraRunnerError(Exception):
    """Base exception for all runner errors."""

    exit_code: int = UNKNOWN_ERROR_CODE


class ConfigError(CopybaraRunnerError):
    """Raised when the configuration is invalid or missing a required value."""

    exit_code = CONFIG_ERROR_CODE

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class EngineLaunchError(CopybaraRunnerError):
    """Raised when the container runtime cannot be started at all."""

    exit_code = ENGINE_LAUNCH_ERROR_CODE


class ExitCodeError(CopybaraRunnerError):
    """Raised when the Copybara container exits with a fatal code."""

    def __init__(
        self,
        exit_code: int,
        entry: ExitCodeEntry | None = None,
        message: str | None = None,
    ) -> None:
        self.exit_code = exit_code
        self.entry = entry
        if message is None:
            detail = f" ({entry.msg})" if entry and entry.msg else ""
            message = f"Copybara exited with code {exit_code}{detail}"
        super().__init__(message)


class CopybaraExitError(ExitCodeError):
    """A fatal exit code that Copybara itself documents."""


class UnknownExitCodeError(ExitCodeError):
    """An exit code with no Copybara classification.

    ``exit_code`` is always the unknown-error sentinel; the value the process
    actually returned is kept in ``observed_code``.
    """

    def __init__(self, observed_code: int, entry: ExitCodeEntry | None = None) -> None:
        self.observed_code = observed_code
        super().__init__(
            UNKNOWN_ERROR_CODE,
            entry,
            f"Copybara exited with unrecognised code {observed_code}",
        )
