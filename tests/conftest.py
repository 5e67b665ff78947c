"""Shared test fixtures for the copybara_runner test suite."""

import pytest
import yaml


@pytest.fixture()
def raw_config():
    """Return a raw config dict as it would be read from copybara.yaml."""
    return {
        "sot_repo": "a/b",
        "sot_branch": "main",
        "destination_repo": "c/d",
        "destination_branch": "main",
        "committer": "Bot <bot@example.com>",
        "push_include": ["**"],
        "push_exclude": [".github/**"],
        "push_move": [],
        "push_replace": [],
        "pr_include": ["**"],
        "pr_exclude": [],
        "pr_move": ["internal||public"],
        "pr_replace": ["secret||public||docs/**"],
        "pr_message": "Imported from the destination",
        "pr_template": "${PR_MESSAGE}",
        "copybara_image": "olivr/copybara",
        "copybara_image_tag": "1.2.3",
    }


@pytest.fixture()
def config_file(tmp_path, raw_config):
    """Write ``raw_config`` to a YAML file and return its path."""
    path = tmp_path / "copybara.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(raw_config, f)
    return path
