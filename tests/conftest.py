"""Shared pytest fixtures for k3s-wordpress tests."""

from unittest.mock import Mock

import pytest

from k3s_wordpress.application.manifest_renderer import ManifestRenderer
from k3s_wordpress.domain.cluster import ExecResult
from k3s_wordpress.domain.manifest import Manifest
from k3s_wordpress.domain.site import SiteParameters
from k3s_wordpress.infrastructure.config import ClusterConfig


@pytest.fixture
def site_params() -> SiteParameters:
    """Create sample site parameters for testing.

    Returns:
        SiteParameters instance
    """
    return SiteParameters(
        domain="blog.example.com",
        namespace="wordpress-blog-example-com",
        db_password="DbPassw0rdDbPassw0rdDbPas",
        wp_password="WpPassw0rdWpPassw0rdWpPas",
    )


@pytest.fixture
def manifests(site_params: SiteParameters) -> list[Manifest]:
    """Render the sample site's manifests.

    Returns:
        Manifests in apply order
    """
    return ManifestRenderer().render(site_params)


@pytest.fixture
def cluster_config() -> ClusterConfig:
    """Create a cluster config with short timeouts.

    Returns:
        ClusterConfig instance
    """
    return ClusterConfig(
        kubeconfig="/tmp/kubeconfig",
        node_ready_timeout=10.0,
        deployment_timeout=20.0,
        poll_interval=5.0,
        exec_timeout=5.0,
    )


@pytest.fixture
def mock_cluster() -> Mock:
    """Create a mock cluster client.

    Returns:
        Mock implementing the applier and pod executor operations
    """
    cluster = Mock()
    cluster.find_pod.return_value = "wordpress-7d9c-abcde"
    cluster.exec_in_pod.return_value = ExecResult(stdout="", stderr="", returncode=0)
    cluster.list_namespace_resources.return_value = []
    return cluster
