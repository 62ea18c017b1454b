"""Unit tests for PhpLimitsService."""

from unittest.mock import Mock, call

import pytest

from k3s_wordpress.application.php_limits_service import (
    DEFAULT_NAMESPACE,
    PhpLimitsService,
)
from k3s_wordpress.domain.cluster import ExecResult
from k3s_wordpress.domain.errors import ExternalCommandError, PrerequisiteMissingError
from k3s_wordpress.domain.php_limits import PhpLimits


def test_apply_patches_htaccess(mock_cluster: Mock) -> None:
    """Test backup, write, chown and chmod in order."""
    result = PhpLimitsService(mock_cluster).apply("wp-dev")

    pod = "wordpress-7d9c-abcde"
    mock_cluster.find_pod.assert_called_once_with("wp-dev", "app=wordpress")
    assert mock_cluster.exec_in_pod.call_args_list == [
        call(
            pod,
            "wp-dev",
            ["cp", "/var/www/html/.htaccess", "/var/www/html/.htaccess.backup"],
            check=False,
        ),
        call(pod, "wp-dev", ["chown", "www-data:www-data", "/var/www/html/.htaccess"]),
        call(pod, "wp-dev", ["chmod", "644", "/var/www/html/.htaccess"]),
    ]
    mock_cluster.write_file_in_pod.assert_called_once_with(
        pod, "wp-dev", "/var/www/html/.htaccess", PhpLimits().render_htaccess()
    )
    assert result.pod_name == pod
    assert result.backup_created is True
    assert result.settings["memory_limit"] == "256M"


def test_apply_default_namespace(mock_cluster: Mock) -> None:
    """Test the default namespace is wp-dev."""
    PhpLimitsService(mock_cluster).apply()

    assert DEFAULT_NAMESPACE == "wp-dev"
    mock_cluster.find_pod.assert_called_once_with("wp-dev", "app=wordpress")


def test_apply_no_pod_raises(mock_cluster: Mock) -> None:
    """Test a missing WordPress pod fails before any exec."""
    mock_cluster.find_pod.return_value = None

    with pytest.raises(PrerequisiteMissingError, match="wp-dev"):
        PhpLimitsService(mock_cluster).apply("wp-dev")

    mock_cluster.exec_in_pod.assert_not_called()
    mock_cluster.write_file_in_pod.assert_not_called()


def test_apply_missing_htaccess_does_not_abort(mock_cluster: Mock) -> None:
    """Test a failed backup only warns."""
    mock_cluster.exec_in_pod.side_effect = [
        ExecResult(stdout="", stderr="cp: cannot stat", returncode=1),
        ExecResult(stdout="", stderr="", returncode=0),
        ExecResult(stdout="", stderr="", returncode=0),
    ]

    result = PhpLimitsService(mock_cluster).apply("wp-dev")

    assert result.backup_created is False
    mock_cluster.write_file_in_pod.assert_called_once()
    assert "backup" not in result.format_report()


def test_apply_write_failure_propagates(mock_cluster: Mock) -> None:
    """Test a failed write surfaces as ExternalCommandError."""
    mock_cluster.write_file_in_pod.side_effect = ExternalCommandError("Exec sh", "read-only", 1)

    with pytest.raises(ExternalCommandError):
        PhpLimitsService(mock_cluster).apply("wp-dev")


def test_apply_custom_limits(mock_cluster: Mock) -> None:
    """Test custom limits are written and reported."""
    limits = PhpLimits(upload_max_filesize="512M", post_max_size="512M")

    result = PhpLimitsService(mock_cluster).apply("blog", limits)

    content = mock_cluster.write_file_in_pod.call_args.args[3]
    assert "php_value upload_max_filesize 512M" in content
    assert "upload_max_filesize = 512M" in result.format_report()
