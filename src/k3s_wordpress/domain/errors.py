#!/usr/bin/env python3
"""
Error types for k3s-wordpress.

Every failure the tool reports maps to one of these classes. The CLI turns
any of them into a logged diagnostic and a nonzero exit code.
"""

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "errors",
        "description": "Error taxonomy for deployment operations",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


class WordPressDeployError(Exception):
    """Base class for all k3s-wordpress errors."""


class InvalidInputError(WordPressDeployError, ValueError):
    """A command-line value failed validation before any cluster call."""


class InvalidDomainError(InvalidInputError):
    """Domain does not match the hostname grammar."""

    def __init__(self, domain: str, reason: str = "") -> None:
        self.domain = domain
        self.reason = reason
        message = f"Invalid domain format: {domain!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidNamespaceError(InvalidInputError):
    """Namespace is not a valid DNS-1123 label."""

    def __init__(self, namespace: str, reason: str = "") -> None:
        self.namespace = namespace
        self.reason = reason
        message = f"Invalid namespace format: {namespace!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class PrerequisiteMissingError(WordPressDeployError):
    """Something the operation needs in the cluster does not exist."""


class ExternalCommandError(WordPressDeployError):
    """A Kubernetes API call, remote exec, or installer command failed.

    Attributes:
        operation: Short description of what was being attempted
        status: HTTP status or process exit code, when known
    """

    def __init__(self, operation: str, detail: str = "", status: int | None = None) -> None:
        self.operation = operation
        self.detail = detail
        self.status = status
        message = f"{operation} failed"
        if status is not None:
            message = f"{message} (status {status})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class DeploymentTimeoutError(WordPressDeployError):
    """A readiness condition was not reached before its timeout.

    Attributes:
        resource: Resource being waited on (e.g. "deployment/mariadb")
        timeout_seconds: Timeout that elapsed
    """

    def __init__(self, resource: str, timeout_seconds: float) -> None:
        self.resource = resource
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Timed out after {timeout_seconds:g}s waiting for {resource} to become ready"
        )


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
