"""
Configuration module for the Copybara runner.

This module provides the typed configuration records consumed by the runner,
functions for loading them from YAML files, creating a starter configuration,
and the pre-flight validation that runs before any container is started.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

import yaml

from copybara_runner.constants import (
    DEFAULT_BRANCH,
    DEFAULT_IMAGE_NAME,
    DEFAULT_IMAGE_TAG,
    DEFAULT_PR_TEMPLATE,
    DEFAULT_WORKFLOW,
)
from copybara_runner.exceptions import ConfigError
from copybara_runner.types import Transformation
from copybara_runner.utils.logging import log_with_context

RawList = Union[str, list, tuple, None]


def _split_words(value: RawList) -> tuple[str, ...]:
    """Split a YAML list or a whitespace-separated string."""
    if not value:
        return ()
    if isinstance(value, str):
        return tuple(value.split())
    return tuple(str(v) for v in value if v is not None)


def _split_rules(value: RawList) -> tuple[str, ...]:
    """Split a YAML list or a string holding one rule per line."""
    if not value:
        return ()
    if isinstance(value, str):
        return tuple(line.strip() for line in value.splitlines())
    return tuple(str(v) for v in value if v is not None)


def _image_tag(data: dict[str, Any]) -> str:
    """Read ``copybara_image_tag``, which YAML must hand over as a string.

    An unquoted ``1.10`` loads as the float ``1.1``, so numbers are rejected
    rather than converted.
    """
    tag = data.get("copybara_image_tag", DEFAULT_IMAGE_TAG)
    if tag is None:
        return ""
    if not isinstance(tag, str):
        raise ConfigError(
            f'"copybara_image_tag" must be a string, got {tag!r}; '
            "quote the value in the config file.",
            "copybara_image_tag",
        )
    return tag


@dataclass(frozen=True)
class RepoConfig:
    """A repository (``owner/repo``) and the branch to sync."""

    repo: str = ""
    branch: str = DEFAULT_BRANCH


@dataclass(frozen=True)
class DockerConfig:
    """The Copybara container image."""

    name: str = DEFAULT_IMAGE_NAME
    tag: str = DEFAULT_IMAGE_TAG

    @property
    def reference(self) -> str:
        return f"{self.name}:{self.tag}"


@dataclass(frozen=True)
class WorkflowConfig:
    """One side of the sync: the push mirror or the pull request flow."""

    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    move: tuple[Transformation, ...] = ()
    replace: tuple[Transformation, ...] = ()
    message: str = ""
    template: str = ""
    branch_name_template: str = ""

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], prefix: str, default_template: str = ""
    ) -> WorkflowConfig:
        """Build a WorkflowConfig from the ``{prefix}_*`` keys of a raw config."""
        return cls(
            include=_split_words(data.get(f"{prefix}_include")),
            exclude=_split_words(data.get(f"{prefix}_exclude")),
            move=Transformation.parse_all(_split_rules(data.get(f"{prefix}_move"))),
            replace=Transformation.parse_all(
                _split_rules(data.get(f"{prefix}_replace"))
            ),
            message=data.get(f"{prefix}_message") or "",
            template=data.get(f"{prefix}_template", default_template) or "",
            branch_name_template=data.get(f"{prefix}_branch_name_template") or "",
        )


@dataclass(frozen=True)
class CopybaraConfig:
    """Typed configuration for a single runner invocation.

    Created once from the YAML file (or directly in code) and never mutated.
    """

    # Common config
    sot: RepoConfig = field(default_factory=RepoConfig)
    destination: RepoConfig = field(default_factory=RepoConfig)
    committer: str = ""

    # Push config
    push: WorkflowConfig = field(default_factory=WorkflowConfig)

    # PR config
    pr: WorkflowConfig = field(
        default_factory=lambda: WorkflowConfig(template=DEFAULT_PR_TEMPLATE)
    )

    # Advanced config
    custom_config: str = ""
    workflow: str = DEFAULT_WORKFLOW
    copybara_options: tuple[str, ...] = ()
    known_hosts: str = ""
    pr_number: str = ""
    create_repo: bool = False
    image: DockerConfig = field(default_factory=DockerConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CopybaraConfig:
        """Create a CopybaraConfig from a raw config dictionary.

        Keys that are present but empty stay empty, so that validation can
        report them; only absent keys fall back to defaults.
        """
        pr_number = data.get("pr_number")
        return cls(
            sot=RepoConfig(
                repo=data.get("sot_repo") or "",
                branch=data.get("sot_branch") or DEFAULT_BRANCH,
            ),
            destination=RepoConfig(
                repo=data.get("destination_repo") or "",
                branch=data.get("destination_branch") or DEFAULT_BRANCH,
            ),
            committer=data.get("committer") or "",
            push=WorkflowConfig.from_dict(data, "push"),
            pr=WorkflowConfig.from_dict(data, "pr", DEFAULT_PR_TEMPLATE),
            custom_config=data.get("custom_config") or "",
            workflow=data.get("workflow") or DEFAULT_WORKFLOW,
            copybara_options=_split_words(data.get("copybara_options")),
            known_hosts=data.get("known_hosts") or "",
            pr_number="" if pr_number is None else str(pr_number),
            create_repo=bool(data.get("create_repo", False)),
            image=DockerConfig(
                name=data.get("copybara_image", DEFAULT_IMAGE_NAME) or "",
                tag=_image_tag(data),
            ),
        )


def load_config(config_path: Path) -> CopybaraConfig:
    """
    Load configuration from YAML file and apply default values.

    A missing file is not an error: a warning is logged and the defaults are
    used, leaving validation to report whatever is still required. A file that
    exists but cannot be read or parsed raises ``ConfigError``.

    Args:
        config_path: Path to the config YAML file

    Returns:
        CopybaraConfig with all necessary defaults applied
    """
    if not config_path.exists():
        log_with_context(
            logging.WARNING,
            f"Config file {config_path} not found, using default settings",
        )
        return CopybaraConfig()

    try:
        with open(config_path) as f:
            loaded_config = yaml.safe_load(f)
    except (yaml.YAMLError, OSError) as e:
        raise ConfigError(f"Failed to load config file {config_path}: {e}") from e

    # Handle None result from empty file
    if loaded_config is None:
        loaded_config = {}
    if not isinstance(loaded_config, dict):
        raise ConfigError(
            f"Config file {config_path} must contain a mapping of settings"
        )

    log_with_context(logging.INFO, f"Loaded configuration from {config_path}")
    return CopybaraConfig.from_dict(loaded_config)


DEFAULT_CONFIG_TEMPLATE = """\
# Source of truth and destination repositories (owner/repo)
sot_repo: ""
sot_branch: main
destination_repo: ""
destination_branch: main

# Fallback author for commits that carry no author information
committer: "Bot <bot@example.com>"

# Push workflow (source of truth -> destination)
push_include:
  - "**"
push_exclude: []
# Rules are written as "from||to||path"; path defaults to every file
push_move: []
push_replace: []

# Pull request workflow (destination -> source of truth)
pr_include:
  - "**"
pr_exclude: []
pr_move: []
pr_replace: []
pr_message: "Imported changes"
pr_template: "${PR_MESSAGE}"
pr_branch_name_template: ""

# Advanced
custom_config: ""
workflow: push
copybara_options: []
copybara_image: olivr/copybara
# Quote numeric tags, e.g. "1.10"
copybara_image_tag: latest
"""


def create_default_config(output_path: Path) -> bool:
    """
    Create a starter configuration file.

    The file lists every supported option with comments. An existing file is
    never overwritten.

    Args:
        output_path: Path where the default config should be saved

    Returns:
        True if the config file was created successfully, False otherwise
    """
    if output_path.exists():
        log_with_context(
            logging.WARNING,
            f"Config file {output_path} already exists, not overwriting",
        )
        return False

    try:
        output_path.write_text(DEFAULT_CONFIG_TEMPLATE)
        log_with_context(logging.INFO, f"Created default config file at {output_path}")
        return True
    except OSError as e:
        log_with_context(logging.ERROR, f"Failed to create default config file: {e}")
        return False


def validate_config(config: CopybaraConfig, workflow: str) -> None:
    """
    Check that every value needed to render ``copy.bara.sky`` is present.

    Args:
        config: The configuration to check
        workflow: The workflow being requested

    Raises:
        ConfigError: naming the first missing setting
    """
    if not config.committer:
        raise ConfigError('You need to set a value for "committer".', "committer")
    if not config.image.name:
        raise ConfigError(
            'You need to set a value for "copybara_image".', "copybara_image"
        )
    if not config.image.tag:
        raise ConfigError(
            'You need to set a value for "copybara_image_tag".', "copybara_image_tag"
        )
    if workflow == "push" and not config.push.include:
        raise ConfigError('You need to set a value for "push_include".', "push_include")
    if workflow == "pr" and not config.pr.include:
        raise ConfigError('You need to set a value for "pr_include".', "pr_include")
    if not config.sot.repo or not config.destination.repo:
        raise ConfigError(
            'You need to set values for "sot_repo" & "destination_repo" '
            'or set a value for "custom_config".',
            "sot_repo" if not config.sot.repo else "destination_repo",
        )
