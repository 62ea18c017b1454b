"""Unit tests for the deployment summary model."""

import json
from datetime import datetime
from pathlib import Path

import pytest

from k3s_wordpress.domain.deployment_summary import (
    HOSTS_IP_PLACEHOLDER,
    IP_UNAVAILABLE,
    DeploymentSummary,
)


@pytest.fixture
def summary() -> DeploymentSummary:
    """Create a sample summary with a known IP."""
    return DeploymentSummary(
        domain="blog.example.com",
        namespace="wordpress-blog-example-com",
        deployment_dir=Path("/home/ubuntu/k3s-wordpress-blog-example-com"),
        db_password="db-secret",
        wp_password="wp-secret",
        server_ip="203.0.113.7",
        generated_at=datetime(2026, 3, 1, 9, 30, 0),
    )


def test_summary_url_and_hosts_entry(summary: DeploymentSummary) -> None:
    """Test the URL and hosts-file line."""
    assert summary.url == "http://blog.example.com"
    assert summary.hosts_entry() == "203.0.113.7 blog.example.com"


def test_summary_placeholders_without_ip(summary: DeploymentSummary) -> None:
    """Test placeholders are used when the IP is unknown."""
    summary.server_ip = None

    assert summary.display_ip == IP_UNAVAILABLE
    assert summary.hosts_entry() == f"{HOSTS_IP_PLACEHOLDER} blog.example.com"


def test_credentials_text(summary: DeploymentSummary) -> None:
    """Test the credentials file content."""
    text = summary.to_credentials_text()
    lines = text.splitlines()

    assert lines[0] == "WordPress K3s Deployment - blog.example.com"
    assert lines[1] == "Generated: 2026-03-01 09:30:00"
    assert "Domain: http://blog.example.com" in lines
    assert "Namespace: wordpress-blog-example-com" in lines
    assert "Database Password: db-secret" in lines
    assert "WordPress Admin Password: wp-secret" in lines
    assert "Server IP: 203.0.113.7" in lines
    assert "203.0.113.7 blog.example.com" in lines
    assert "kubectl get pods -n wordpress-blog-example-com" in lines
    assert text.endswith("\n")


def test_credentials_text_without_ip(summary: DeploymentSummary) -> None:
    """Test the credentials file degrades to placeholders."""
    summary.server_ip = None
    lines = summary.to_credentials_text().splitlines()

    assert "Server IP: Unable to get IP" in lines
    assert "SERVER_IP blog.example.com" in lines


def test_console_summary(summary: DeploymentSummary) -> None:
    """Test the console summary shows credentials and the hosts hint."""
    text = summary.format_console_summary()

    assert "WORDPRESS K3S DEPLOYMENT COMPLETE" in text
    assert "wp-secret" in text
    assert "203.0.113.7 blog.example.com" in text
    assert "2 replicas" in text


def test_to_dict_is_json_serializable(summary: DeploymentSummary) -> None:
    """Test the dict form survives JSON serialization."""
    data = json.loads(json.dumps(summary.to_dict()))

    assert data["domain"] == "blog.example.com"
    assert data["server_ip"] == "203.0.113.7"
    assert data["deployment_dir"] == "/home/ubuntu/k3s-wordpress-blog-example-com"
    assert data["generated_at"] == "2026-03-01T09:30:00"


def test_repr_hides_passwords(summary: DeploymentSummary) -> None:
    """Test passwords do not appear in the repr."""
    assert "wp-secret" not in repr(summary)
    assert "db-secret" not in repr(summary)
