"""Tests for the custom exception hierarchy."""

import pytest

from copybara_runner.exceptions import (
    ConfigError,
    CopybaraExitError,
    CopybaraRunnerError,
    EngineLaunchError,
    ExitCodeError,
    UnknownExitCodeError,
)
from copybara_runner.types import ExitCodeEntry, ExitCodeType


class TestExceptionHierarchy:
    """Tests for exception types, inheritance, and exit codes."""

    @pytest.mark.parametrize(
        "exc",
        [
            ConfigError("bad"),
            EngineLaunchError("no docker"),
            CopybaraExitError(2),
            UnknownExitCodeError(99),
        ],
    )
    def test_each_exception_is_caught_by_base(self, exc):
        with pytest.raises(CopybaraRunnerError):
            raise exc

    def test_exit_code_errors_share_base(self):
        assert issubclass(CopybaraExitError, ExitCodeError)
        assert issubclass(UnknownExitCodeError, ExitCodeError)
        assert not issubclass(ConfigError, ExitCodeError)

    def test_config_error_keeps_field(self):
        exc = ConfigError('You need to set a value for "committer".', "committer")
        assert exc.field == "committer"
        assert str(exc) == 'You need to set a value for "committer".'
        assert exc.exit_code == 50

    def test_config_error_field_optional(self):
        assert ConfigError("bad").field is None

    def test_engine_launch_error_code(self):
        assert EngineLaunchError("no docker").exit_code == 51

    def test_copybara_exit_error_keeps_code_and_entry(self):
        entry = ExitCodeEntry("copybara", ExitCodeType.ERROR, "Repository error")
        exc = CopybaraExitError(3, entry)
        assert exc.exit_code == 3
        assert exc.entry is entry
        assert str(exc) == "Copybara exited with code 3 (Repository error)"

    def test_copybara_exit_error_without_entry(self):
        assert str(CopybaraExitError(3)) == "Copybara exited with code 3"

    def test_unknown_exit_code_error_uses_sentinel(self):
        exc = UnknownExitCodeError(99)
        assert exc.exit_code == 52
        assert exc.observed_code == 99
        assert "99" in str(exc)

    def test_catching_base_does_not_catch_unrelated_exceptions(self):
        with pytest.raises(ValueError):
            try:
                raise ValueError("unrelated")
            except CopybaraRunnerError:
                pytest.fail("CopybaraRunnerError should not catch ValueError")
