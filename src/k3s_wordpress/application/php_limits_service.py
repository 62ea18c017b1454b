#!/usr/bin/env python3
"""
Service for raising PHP limits on a running WordPress pod.

Rewrites the pod's .htaccess through the remote exec channel, keeping a
backup of the previous file.
"""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from k3s_wordpress.domain.cluster import ExecResult
from k3s_wordpress.domain.errors import PrerequisiteMissingError
from k3s_wordpress.domain.php_limits import (
    HTACCESS_BACKUP_PATH,
    HTACCESS_MODE,
    HTACCESS_OWNER,
    HTACCESS_PATH,
    PhpLimits,
)

logger = logging.getLogger(__name__)

__version__ = "0.1.0"
__author__ = "John Ayers"

DEFAULT_NAMESPACE = "wp-dev"
WORDPRESS_SELECTOR = "app=wordpress"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "php_limits_service",
        "description": "Service for patching PHP limits in a WordPress pod",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


class PodExecutor(Protocol):
    """Protocol defining the pod operations the patcher needs.

    Infrastructure layer must implement this protocol.
    """

    def find_pod(self, namespace: str, label_selector: str) -> str | None:
        """Return the name of a pod matching the selector, or None."""
        ...

    def exec_in_pod(
        self,
        pod_name: str,
        namespace: str,
        command: list[str],
        container: str | None = None,
        check: bool = True,
    ) -> ExecResult:
        """Run a command in the pod."""
        ...

    def write_file_in_pod(
        self,
        pod_name: str,
        namespace: str,
        pod_path: str,
        content: str | bytes,
        container: str | None = None,
    ) -> None:
        """Write a file in the pod."""
        ...


@dataclass
class PhpLimitsResult:
    """Outcome of a PHP limits update.

    Attributes:
        pod_name: Pod that was patched
        namespace: Namespace of the pod
        settings: PHP settings written, in directive order
        backup_created: Whether the previous .htaccess was backed up
    """

    pod_name: str
    namespace: str
    settings: dict[str, str] = field(default_factory=dict)
    backup_created: bool = False

    def format_report(self) -> str:
        lines = [f"PHP limits updated in pod {self.pod_name} (namespace {self.namespace}):"]
        lines.extend(f"  {name} = {value}" for name, value in self.settings.items())
        if self.backup_created:
            lines.append(f"Previous file saved as {HTACCESS_BACKUP_PATH}")
        return "\n".join(lines)


class PhpLimitsService:
    """Application service for the .htaccess PHP limits patch."""

    def __init__(self, executor: PodExecutor, label_selector: str = WORDPRESS_SELECTOR) -> None:
        """Initialize the service.

        Args:
            executor: Pod executor (cluster client)
            label_selector: Selector identifying WordPress pods
        """
        self.executor = executor
        self.label_selector = label_selector

    def apply(
        self, namespace: str = DEFAULT_NAMESPACE, limits: PhpLimits | None = None
    ) -> PhpLimitsResult:
        """Write the PHP limits into the first WordPress pod's .htaccess.

        Args:
            namespace: Namespace of the WordPress deployment
            limits: Limits to write (default: PhpLimits())

        Returns:
            PhpLimitsResult describing the change

        Raises:
            PrerequisiteMissingError: If no WordPress pod exists in the namespace
            ExternalCommandError: If writing or fixing permissions fails
        """
        limits = limits or PhpLimits()

        pod = self.executor.find_pod(namespace, self.label_selector)
        if pod is None:
            raise PrerequisiteMissingError(
                f"No pod with label {self.label_selector} found in namespace {namespace}"
            )
        logger.info(f"Found WordPress pod: {pod}")

        backup = self.executor.exec_in_pod(
            pod, namespace, ["cp", HTACCESS_PATH, HTACCESS_BACKUP_PATH], check=False
        )
        if backup.ok:
            logger.info(f"Backed up {HTACCESS_PATH} to {HTACCESS_BACKUP_PATH}")
        else:
            logger.warning(f"No existing {HTACCESS_PATH} to back up, continuing")

        self.executor.write_file_in_pod(pod, namespace, HTACCESS_PATH, limits.render_htaccess())
        self.executor.exec_in_pod(pod, namespace, ["chown", HTACCESS_OWNER, HTACCESS_PATH])
        self.executor.exec_in_pod(pod, namespace, ["chmod", HTACCESS_MODE, HTACCESS_PATH])
        logger.info(f"Updated {HTACCESS_PATH} in pod {pod}")

        return PhpLimitsResult(
            pod_name=pod,
            namespace=namespace,
            settings=limits.as_settings(),
            backup_created=backup.ok,
        )


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
