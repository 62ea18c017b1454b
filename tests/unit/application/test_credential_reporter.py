"""Unit tests for CredentialReporter."""

from pathlib import Path
from unittest.mock import Mock

from k3s_wordpress.application.credential_reporter import CredentialReporter
from k3s_wordpress.domain.site import SiteParameters


def _store() -> Mock:
    store = Mock()
    store.path = Path("/srv/k3s-wordpress-blog-example-com")
    store.write_credentials.return_value = store.path / "credentials.txt"
    return store


def test_report_writes_credentials(site_params: SiteParameters) -> None:
    """Test the credentials file is written with the passwords and IP."""
    store = _store()
    reporter = CredentialReporter(store, resolve_ip=lambda: "198.51.100.4")

    summary = reporter.report(site_params)

    text = store.write_credentials.call_args.args[0]
    assert f"Database Password: {site_params.db_password}" in text
    assert f"WordPress Admin Password: {site_params.wp_password}" in text
    assert "198.51.100.4 blog.example.com" in text
    assert summary.server_ip == "198.51.100.4"
    assert summary.deployment_dir == store.path


def test_report_degrades_when_ip_unknown(site_params: SiteParameters) -> None:
    """Test a failed IP lookup falls back to placeholders."""
    store = _store()
    reporter = CredentialReporter(store, resolve_ip=lambda: None)

    summary = reporter.report(site_params)

    text = store.write_credentials.call_args.args[0]
    assert summary.server_ip is None
    assert "Server IP: Unable to get IP" in text
    assert "SERVER_IP blog.example.com" in text


def test_build_summary_without_resolver(site_params: SiteParameters) -> None:
    """Test building a summary with no IP resolver."""
    summary = CredentialReporter(_store()).build_summary(site_params)

    assert summary.server_ip is None
    assert summary.app_replicas == 2
    assert summary.namespace == "wordpress-blog-example-com"
