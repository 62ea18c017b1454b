#!/usr/bin/env python3
"""
Cluster runtime installer.

Checks that the K3s runtime is present before any cluster call, and installs
it with the upstream install script when it is not.
"""

import logging
import shutil
import subprocess
from typing import Callable

from k3s_wordpress.domain.errors import ExternalCommandError
from k3s_wordpress.infrastructure.config import K3S_INSTALL_URL, K3S_KUBECONFIG

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "runtime_installer",
        "description": "K3s cluster runtime installer",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


class K3sInstaller:
    """Installs K3s on the local host when kubectl is missing."""

    def __init__(
        self,
        install_url: str = K3S_INSTALL_URL,
        kubeconfig_path: str = K3S_KUBECONFIG,
        run: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        which: Callable[[str], str | None] = shutil.which,
    ) -> None:
        """Initialize the installer.

        Args:
            install_url: URL of the K3s install script
            kubeconfig_path: kubeconfig written by the install script
            run: Command runner (subprocess.run signature)
            which: Executable lookup (shutil.which signature)
        """
        self.install_url = install_url
        self.kubeconfig_path = kubeconfig_path
        self._run = run
        self._which = which

    def is_installed(self) -> bool:
        """Check if kubectl is available on PATH.

        Returns:
            True if kubectl is found
        """
        return self._which("kubectl") is not None

    def install(self) -> None:
        """Run the K3s install script and open up the kubeconfig.

        Raises:
            ExternalCommandError: If either command exits nonzero or cannot start
        """
        logger.info("Installing K3s...")
        self._execute("Install K3s", f"curl -sfL {self.install_url} | sh -", shell=True)
        self._execute(
            "Make kubeconfig readable",
            ["sudo", "chmod", "644", self.kubeconfig_path],
        )
        logger.info("K3s installed")

    def ensure_installed(self) -> bool:
        """Install K3s only if it is missing.

        Returns:
            True if an installation was performed
        """
        if self.is_installed():
            logger.info("K3s already installed")
            return False
        self.install()
        return True

    def _execute(self, operation: str, command: str | list[str], shell: bool = False) -> None:
        try:
            result = self._run(command, shell=shell, capture_output=True, text=True)
        except OSError as e:
            raise ExternalCommandError(operation, str(e)) from e
        if result.returncode != 0:
            raise ExternalCommandError(operation, (result.stderr or "").strip(), result.returncode)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
