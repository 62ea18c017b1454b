"""Unit tests for site parameter models."""

import dataclasses

import pytest

from k3s_wordpress.domain.site import (
    DEFAULT_APPLICATION,
    DEFAULT_DATABASE,
    ContainerResources,
    SiteParameters,
)


def test_default_database_settings() -> None:
    """Test MariaDB defaults."""
    assert DEFAULT_DATABASE.image == "mariadb:10.11"
    assert DEFAULT_DATABASE.replicas == 1
    assert DEFAULT_DATABASE.port == 3306
    assert DEFAULT_DATABASE.pvc_name == "mariadb-pvc"
    assert DEFAULT_DATABASE.storage_size == "5Gi"
    assert DEFAULT_DATABASE.mount_path == "/var/lib/mysql"


def test_default_application_settings() -> None:
    """Test WordPress defaults."""
    assert DEFAULT_APPLICATION.image == "wordpress:php8.2-apache"
    assert DEFAULT_APPLICATION.replicas == 2
    assert DEFAULT_APPLICATION.port == 80
    assert DEFAULT_APPLICATION.pvc_name == "wordpress-pvc"
    assert DEFAULT_APPLICATION.storage_size == "10Gi"
    assert DEFAULT_APPLICATION.labels() == {"app": "wordpress"}


def test_container_resources_defaults() -> None:
    """Test resource requests and limits."""
    resources = ContainerResources()

    assert resources.requests() == {"memory": "256Mi", "cpu": "250m"}
    assert resources.limits() == {"memory": "512Mi", "cpu": "500m"}


def test_site_parameters_frozen(site_params: SiteParameters) -> None:
    """Test site parameters cannot be modified."""
    with pytest.raises(dataclasses.FrozenInstanceError):
        site_params.domain = "other.example.com"  # type: ignore[misc]


def test_site_parameters_repr_hides_passwords(site_params: SiteParameters) -> None:
    """Test passwords do not appear in the repr."""
    text = repr(site_params)

    assert "blog.example.com" in text
    assert site_params.db_password not in text
    assert site_params.wp_password not in text
