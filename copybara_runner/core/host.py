"""Host-side files that are mounted into the Copybara container."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from copybara_runner.utils.logging import log_with_context


@dataclass(frozen=True)
class HostConfig:
    """Locations of the host files the container reads.

    The runner only writes ``config_path``; the SSH key, known hosts and git
    files are provisioned by whatever prepares the host.
    """

    ssh_key_path: Path
    known_hosts_path: Path
    config_path: Path
    git_config_path: Path
    git_credentials_path: Path

    @classmethod
    def from_home(cls, home: Path | None = None) -> HostConfig:
        """Build the default layout under a home directory."""
        home = home or Path.home()
        return cls(
            ssh_key_path=home / ".ssh" / "id_rsa",
            known_hosts_path=home / ".ssh" / "known_hosts",
            config_path=home / "copy.bara.sky",
            git_config_path=home / ".gitconfig",
            git_credentials_path=home / ".git-credentials",
        )

    def read_ssh_key(self) -> str:
        """Return the SSH private key, or an empty string if there is none."""
        if not self.ssh_key_path.exists():
            return ""
        return self.ssh_key_path.read_text()

    def save_config(self, document: str) -> Path:
        """Write the rendered ``copy.bara.sky`` where the container expects it."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(document)
        log_with_context(logging.DEBUG, f"Wrote Copybara config to {self.config_path}")
        return self.config_path
