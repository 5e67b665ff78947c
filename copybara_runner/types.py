"""Shared type definitions for the Copybara runner.

Provides the parsed transformation rule that flows from the YAML config into
the ``copy.bara.sky`` renderer, and the records that make up the static
exit-code table.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from copybara_runner.constants import DEFAULT_RULE_PATH, RULE_DELIMITER

# ---------------------------------------------------------------------------
# Transformations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Transformation:
    """A single ``core.move`` or ``core.replace`` rule scoped to a path glob."""

    source: str
    target: str = ""
    path: str = DEFAULT_RULE_PATH

    @classmethod
    def parse(cls, rule: str) -> Transformation:
        """Parse a ``from||to||path`` rule string.

        ``to`` defaults to an empty string and ``path`` to every file. Any
        segments after the third are ignored.

        Args:
            rule: The delimited rule string.

        Returns:
            The parsed Transformation.
        """
        parts = rule.split(RULE_DELIMITER)
        target = parts[1] if len(parts) > 1 else ""
        path = parts[2] if len(parts) > 2 and parts[2] else DEFAULT_RULE_PATH
        return cls(source=parts[0], target=target, path=path)

    @classmethod
    def parse_all(cls, rules: Iterable[str]) -> tuple[Transformation, ...]:
        """Parse every non-empty rule string, keeping input order."""
        return tuple(cls.parse(rule) for rule in rules if rule)


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------


class ExitCodeType(str, Enum):
    """Outcome kind of a classified exit code."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ExitCodeEntry:
    """One row of the exit-code table."""

    ns: str
    type: ExitCodeType
    msg: str = ""

    @property
    def ok(self) -> bool:
        """True when the outcome should not fail the run."""
        return self.type in (ExitCodeType.SUCCESS, ExitCodeType.WARNING)
