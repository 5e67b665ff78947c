"""
Invocation of the Copybara container.

``CopybaraRunner`` resolves a ``CopybaraConfig`` into a ``copy.bara.sky``
document, assembles the ``docker run`` command line that executes a workflow,
and classifies the container's exit code.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Sequence

from copybara_runner.constants import (
    CONFIG_OPTION_MARKER,
    CONTAINER_CONFIG,
    CONTAINER_GIT_CONFIG,
    CONTAINER_GIT_CREDENTIALS,
    CONTAINER_KNOWN_HOSTS,
    CONTAINER_SSH_KEY,
    CONTAINER_WORKDIR,
    ENV_CONFIG,
    ENV_OPTIONS,
    ENV_SOURCEREF,
    ENV_WORKFLOW,
    HTTPS_URL_TEMPLATE,
    LOCAL_SOT,
    SSH_URL_TEMPLATE,
    WORKFLOW_OPTION_MARKERS,
)
from copybara_runner.core.config import CopybaraConfig, DockerConfig, validate_config
from copybara_runner.core.exit_codes import classify_exit_code
from copybara_runner.core.host import HostConfig
from copybara_runner.core.sky import (
    generate_in_excludes,
    generate_transformations,
    render_sky,
)
from copybara_runner.exceptions import ConfigError, EngineLaunchError
from copybara_runner.utils.logging import log_with_context

DOCKER = "docker"


class CopybaraRunner:
    """Runs Copybara workflows inside the configured container image."""

    def __init__(self, image: DockerConfig, host: HostConfig | None = None) -> None:
        self.image = image
        self.host = host or HostConfig.from_home()

    # ------------------------------------------------------------------
    # Config document
    # ------------------------------------------------------------------

    @staticmethod
    def use_ssh(ssh_key: str | None) -> bool:
        """True when a non-blank SSH key was supplied."""
        return bool(ssh_key and ssh_key.strip())

    @staticmethod
    def repo_url(owner_repo: str, use_ssh: bool) -> str:
        """Return the SSH or HTTPS GitHub URL for ``owner/repo``."""
        template = SSH_URL_TEMPLATE if use_ssh else HTTPS_URL_TEMPLATE
        return template.format(owner_repo)

    @classmethod
    def get_config(
        cls, workflow: str, config: CopybaraConfig, ssh_key: str | None = None
    ) -> str:
        """
        Validate a configuration and render its ``copy.bara.sky`` document.

        Repository URLs use SSH when an SSH key is supplied and HTTPS
        otherwise.

        Args:
            workflow: The workflow being requested
            config: The runner configuration
            ssh_key: Contents of the SSH private key, if any

        Returns:
            The rendered document

        Raises:
            ConfigError: If a required setting is missing
        """
        validate_config(config, workflow)
        use_ssh = cls.use_ssh(ssh_key)
        destination_url = cls.repo_url(config.destination.repo, use_ssh)

        log_with_context(
            logging.DEBUG,
            f"Rendering copy.bara.sky over {'SSH' if use_ssh else 'HTTPS'}",
            workflow=workflow,
        )

        return render_sky(
            sot_repo=cls.repo_url(config.sot.repo, use_ssh),
            sot_branch=config.sot.branch,
            destination_repo=destination_url,
            destination_branch=config.destination.branch,
            committer=config.committer,
            local_sot=LOCAL_SOT,
            push_include=generate_in_excludes(config.push.include),
            push_exclude=generate_in_excludes(config.push.exclude),
            push_transformations=generate_transformations(
                config.push.move, config.push.replace, "push"
            ),
            pr_include=generate_in_excludes(config.pr.include),
            pr_exclude=generate_in_excludes(config.pr.exclude),
            pr_transformations=generate_transformations(
                config.pr.move, config.pr.replace, "pr"
            ),
            pr_message=config.pr.message,
            pr_template=config.pr.template,
            pr_branch_name_template=config.pr.branch_name_template,
        )

    @classmethod
    def build_config_document(
        cls, workflow: str, config: CopybaraConfig, ssh_key: str | None = None
    ) -> str:
        """Return the user's own ``custom_config`` file, or render one."""
        if not config.custom_config:
            return cls.get_config(workflow, config, ssh_key)

        custom_path = Path(config.custom_config)
        try:
            document = custom_path.read_text()
        except OSError as e:
            raise ConfigError(
                f"Failed to read custom_config {custom_path}: {e}", "custom_config"
            ) from e

        log_with_context(
            logging.INFO, f"Using custom config {custom_path}", workflow=workflow
        )
        return document

    # ------------------------------------------------------------------
    # Container
    # ------------------------------------------------------------------

    def download(self) -> int:
        """Pull the Copybara image. Returns the docker exit code unchanged."""
        log_with_context(logging.INFO, f"Pulling {self.image.reference}")
        return self._docker(["pull", self.image.reference]).returncode

    def run(
        self, workflow: str, copybara_options: Sequence[str], ref: str | int = ""
    ) -> int:
        """
        Run a Copybara workflow in the container.

        ``init`` runs the push workflow with history initialisation, ``pr``
        runs the pull request workflow for ``ref``, and any other name is
        passed through as the workflow to run. When an option mentions a
        workflow name or a config file, the caller is driving Copybara
        directly and no workflow is selected.

        Args:
            workflow: Workflow name
            copybara_options: Extra command line options for Copybara
            ref: Source reference for the ``pr`` workflow

        Returns:
            The exit code, when it represents success or a warning

        Raises:
            ExitCodeError: If Copybara fails or exits with an unknown code
        """
        options = list(copybara_options)
        has_workflow_in_options = any(
            marker in opt for opt in options for marker in WORKFLOW_OPTION_MARKERS
        )

        if workflow == "init":
            return self._exec(
                ["-e", f"{ENV_WORKFLOW}=push"],
                ["--force", "--init-history", "--ignore-noop", *options],
                workflow,
            )

        if workflow == "pr":
            return self._exec(
                ["-e", f"{ENV_WORKFLOW}=pr", "-e", f"{ENV_SOURCEREF}={ref}"],
                ["--ignore-noop", *options],
                workflow,
            )

        if has_workflow_in_options:
            log_with_context(
                logging.DEBUG,
                "Options name a workflow or config file, not selecting a workflow",
                workflow=workflow,
            )
            return self._exec([], ["--ignore-noop", *options], workflow)

        return self._exec(
            ["-e", f"{ENV_WORKFLOW}={workflow}"],
            ["--ignore-noop", *options],
            workflow,
        )

    def build_docker_args(
        self, docker_params: Sequence[str], copybara_options: Sequence[str]
    ) -> list[str]:
        """Assemble the ``docker run`` arguments for one Copybara invocation."""
        host = self.host
        docker_args = ["run", "-v", f"{os.getcwd()}:{CONTAINER_WORKDIR}"]

        if host.ssh_key_path.exists():
            docker_args += ["-v", f"{host.ssh_key_path}:{CONTAINER_SSH_KEY}"]

        docker_args += [
            "-v",
            f"{host.known_hosts_path}:{CONTAINER_KNOWN_HOSTS}",
            "-v",
            f"{host.config_path}:{CONTAINER_CONFIG}",
            "-v",
            f"{host.git_config_path}:{CONTAINER_GIT_CONFIG}",
            "-v",
            f"{host.git_credentials_path}:{CONTAINER_GIT_CREDENTIALS}",
        ]

        if not any(CONFIG_OPTION_MARKER in opt for opt in copybara_options):
            docker_args += ["-e", f"{ENV_CONFIG}={CONTAINER_CONFIG}"]

        # The image entrypoint splits COPYBARA_OPTIONS back into arguments
        if copybara_options:
            docker_args += ["-e", f"{ENV_OPTIONS}={' '.join(copybara_options)}"]

        docker_args += [*docker_params, self.image.reference]
        return docker_args

    def _exec(
        self,
        docker_params: Sequence[str],
        copybara_options: Sequence[str],
        workflow: str | None = None,
    ) -> int:
        docker_args = self.build_docker_args(docker_params, copybara_options)
        log_with_context(
            logging.INFO,
            f"Running Copybara in {self.image.reference}",
            workflow=workflow,
        )
        result = self._docker(docker_args)
        return classify_exit_code(result.returncode)

    def _docker(self, args: Sequence[str]) -> subprocess.CompletedProcess:
        command = [DOCKER, *args]
        log_with_context(logging.DEBUG, f"Executing: {' '.join(command)}")
        try:
            # Output streams straight to the console; a non-zero code is
            # classified by the caller rather than raised here
            return subprocess.run(command, check=False)
        except OSError as e:
            raise EngineLaunchError(f"Could not start {DOCKER}: {e}") from e
