#!/usr/bin/env python3
"""
Deployment summary domain model.

Provides the credential summary written after a successful deployment,
in plaintext (credentials file and console) and dictionary form.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "deployment_summary",
        "description": "Credential summary for a deployed site",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


IP_UNAVAILABLE = "Unable to get IP"
HOSTS_IP_PLACEHOLDER = "SERVER_IP"


@dataclass
class DeploymentSummary:
    """Summary of a deployed WordPress site.

    Attributes:
        domain: Site domain
        namespace: Kubernetes namespace
        deployment_dir: Directory holding manifests and credentials
        db_password: Generated database password
        wp_password: Generated WordPress admin password
        server_ip: Public IP of this host, or None if it could not be resolved
        app_replicas: WordPress replica count
        generated_at: When the summary was produced
    """

    domain: str
    namespace: str
    deployment_dir: Path
    db_password: str
    wp_password: str
    server_ip: str | None = None
    app_replicas: int = 2
    generated_at: datetime = field(default_factory=datetime.now)

    @property
    def url(self) -> str:
        """Public HTTP URL of the site."""
        return f"http://{self.domain}"

    @property
    def display_ip(self) -> str:
        """Server IP, or the placeholder used when it is unknown."""
        return self.server_ip or IP_UNAVAILABLE

    def hosts_entry(self) -> str:
        """Return the hosts-file line for local testing.

        Returns:
            Line such as "203.0.113.7 blog.example.com"
        """
        return f"{self.server_ip or HOSTS_IP_PLACEHOLDER} {self.domain}"

    def useful_commands(self) -> list[str]:
        """Return kubectl commands for managing the site."""
        return [
            f"kubectl get pods -n {self.namespace}",
            f"kubectl logs -f deployment/wordpress -n {self.namespace}",
            f"kubectl scale deployment wordpress --replicas=3 -n {self.namespace}",
            f"kubectl delete namespace {self.namespace}",
        ]

    def to_credentials_text(self) -> str:
        """Format the credentials file content.

        Returns:
            Plaintext credentials summary
        """
        lines = [
            f"WordPress K3s Deployment - {self.domain}",
            f"Generated: {self.generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
            f"Domain: {self.url}",
            f"Namespace: {self.namespace}",
            f"Database Password: {self.db_password}",
            f"WordPress Admin Password: {self.wp_password}",
            f"Server IP: {self.display_ip}",
            "",
            "Add to hosts file for local testing:",
            self.hosts_entry(),
            "",
            "Useful Commands:",
            *self.useful_commands(),
        ]
        return "\n".join(lines) + "\n"

    def format_console_summary(self) -> str:
        """Format summary for console display.

        Returns:
            Formatted multi-line summary string
        """
        lines = [
            "\n" + "=" * 60,
            "WORDPRESS K3S DEPLOYMENT COMPLETE",
            "=" * 60,
            f"Domain:               {self.url}",
            f"Namespace:            {self.namespace}",
            f"Deployment Directory: {self.deployment_dir}",
            "Database:             MariaDB with persistent storage",
            f"WordPress:            {self.app_replicas} replicas with persistent storage",
            "",
            "Generated Credentials:",
            f"  Database Password:        {self.db_password}",
            f"  WordPress Admin Password: {self.wp_password}",
            "",
            "Useful Commands:",
            *(f"  {command}" for command in self.useful_commands()),
            "",
            "Next Steps:",
            f"  1. Ensure DNS points {self.domain} to your server IP",
            f"  2. Add '{self.domain}' to your local hosts file if testing locally",
            f"  3. Visit {self.url} to complete WordPress setup",
            f"  4. Use generated admin password: {self.wp_password}",
            "",
            "For local testing, add this to your hosts file:",
            f"  {self.hosts_entry()}",
            "  Windows:   C:\\Windows\\System32\\drivers\\etc\\hosts",
            "  Mac/Linux: /etc/hosts",
            "=" * 60,
        ]
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation
        """
        return {
            "domain": self.domain,
            "url": self.url,
            "namespace": self.namespace,
            "deployment_dir": str(self.deployment_dir),
            "db_password": self.db_password,
            "wp_password": self.wp_password,
            "server_ip": self.server_ip,
            "hosts_entry": self.hosts_entry(),
            "generated_at": self.generated_at.isoformat(),
        }

    def __repr__(self) -> str:
        return (
            f"DeploymentSummary(domain={self.domain!r}, namespace={self.namespace!r}, "
            f"server_ip={self.server_ip!r})"
        )


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
