"""Unit test configuration and shared fixtures."""

from __future__ import annotations

import logging
from typing import Any
import pytest

from copybara_runner.core.config import CopybaraConfig, RepoConfig, WorkflowConfig
from copybara_runner.core.host import HostConfig

# ---------------------------------------------------------------------------
# Config factory
# ---------------------------------------------------------------------------


def _build_config(**overrides: Any) -> CopybaraConfig:
    """Build a CopybaraConfig that passes validation for every workflow.

    Any ``CopybaraConfig`` field can be overridden by keyword.
    """
    fields: dict[str, Any] = {
        "sot": RepoConfig("a/b", "main"),
        "destination": RepoConfig("c/d", "main"),
        "committer": "x",
        "push": WorkflowConfig(include=("**",)),
        "pr": WorkflowConfig(include=("**",), template="${PR_MESSAGE}"),
    }
    fields.update(overrides)
    return CopybaraConfig(**fields)


@pytest.fixture()
def make_config():
    """Factory fixture; call with kwargs to get a valid CopybaraConfig.

    Usage in tests::

        def test_something(make_config):
            cfg = make_config(committer="")
    """
    return _build_config


@pytest.fixture()
def host(tmp_path):
    """HostConfig rooted in a temporary home directory, without an SSH key."""
    return HostConfig.from_home(tmp_path)


@pytest.fixture(autouse=True)
def _clean_logger():
    """Remove all handlers from the copybara_runner logger around each test."""
    logger = logging.getLogger("copybara_runner")
    saved = logger.handlers[:]
    for handler in saved:
        logger.removeHandler(handler)
    yield
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    for handler in saved:
        logger.addHandler(handler)
