#!/usr/bin/env python3
"""
Service for reporting the credentials of a deployed site.

Builds the deployment summary, writes it to the credentials file and
returns it for console or JSON output.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Protocol

from k3s_wordpress.domain.deployment_summary import DeploymentSummary
from k3s_wordpress.domain.site import SiteParameters

logger = logging.getLogger(__name__)

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "credential_reporter",
        "description": "Service for reporting deployment credentials",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


class CredentialStore(Protocol):
    """Protocol for the place credentials are written.

    Infrastructure layer must implement this protocol.
    """

    path: Path

    def write_credentials(self, text: str) -> Path:
        """Write the credentials file and return its path."""
        ...


class CredentialReporter:
    """Application service producing the credential summary."""

    def __init__(
        self,
        store: CredentialStore,
        resolve_ip: Optional[Callable[[], str | None]] = None,
    ) -> None:
        """Initialize the reporter.

        Args:
            store: Destination for the credentials file
            resolve_ip: Returns the server's public IP, or None if unknown
        """
        self.store = store
        self.resolve_ip = resolve_ip

    def build_summary(self, params: SiteParameters) -> DeploymentSummary:
        """Build the summary for a site, looking up the server IP.

        Args:
            params: Site parameters holding the generated passwords

        Returns:
            DeploymentSummary (server_ip None if the lookup failed)
        """
        server_ip = self.resolve_ip() if self.resolve_ip else None
        return DeploymentSummary(
            domain=params.domain,
            namespace=params.namespace,
            deployment_dir=self.store.path,
            db_password=params.db_password,
            wp_password=params.wp_password,
            server_ip=server_ip,
            app_replicas=params.application.replicas,
        )

    def report(self, params: SiteParameters) -> DeploymentSummary:
        """Write the credentials file, overwriting any earlier one.

        Args:
            params: Site parameters

        Returns:
            The summary that was written
        """
        summary = self.build_summary(params)
        path = self.store.write_credentials(summary.to_credentials_text())
        logger.info(f"Credentials saved to {path}")
        return summary


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
