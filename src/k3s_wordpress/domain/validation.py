#!/usr/bin/env python3
"""
Input validation for domains and namespaces.

Checks the domain against a hostname grammar, the namespace against the
DNS-1123 label grammar, and derives a namespace from the domain when none
is supplied.
"""

import re

from k3s_wordpress.domain.errors import InvalidDomainError, InvalidNamespaceError

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "validation",
        "description": "Domain and namespace validation",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


# One hostname label: 1-63 chars, alphanumeric ends, hyphens only inside
_LABEL = r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
DOMAIN_PATTERN = re.compile(rf"{_LABEL}(?:\.{_LABEL})*")
NAMESPACE_PATTERN = re.compile(r"[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?")

NAMESPACE_PREFIX = "wordpress-"
NAMESPACE_SUFFIX_LENGTH = 20
DEPLOYMENT_DIR_PREFIX = "k3s-wordpress-"


def validate_domain(domain: str) -> str:
    """Validate a domain name.

    Args:
        domain: Domain name to check (e.g. "blog.example.com")

    Returns:
        The domain, unchanged

    Raises:
        InvalidDomainError: If the domain does not match the hostname grammar
    """
    if not domain:
        raise InvalidDomainError(domain, "domain is empty")
    if not DOMAIN_PATTERN.fullmatch(domain):
        raise InvalidDomainError(
            domain,
            "labels must be 1-63 alphanumeric characters with internal hyphens only",
        )
    return domain


def validate_namespace(namespace: str) -> str:
    """Validate a Kubernetes namespace name.

    Args:
        namespace: Namespace to check

    Returns:
        The namespace, unchanged

    Raises:
        InvalidNamespaceError: If the namespace is not a DNS-1123 label
    """
    if not namespace:
        raise InvalidNamespaceError(namespace, "namespace is empty")
    if not NAMESPACE_PATTERN.fullmatch(namespace):
        raise InvalidNamespaceError(
            namespace,
            "must be lowercase alphanumeric with hyphens, at most 63 characters",
        )
    return namespace


def derive_namespace(domain: str) -> str:
    """Derive a namespace from a domain.

    Dots become hyphens and the result is cut to 20 characters. A cut that
    lands on a hyphen is trimmed so the namespace stays a valid label.

    Args:
        domain: Validated domain name

    Returns:
        Namespace such as "wordpress-blog-example-com"
    """
    suffix = domain.lower().replace(".", "-")[:NAMESPACE_SUFFIX_LENGTH].rstrip("-")
    return f"{NAMESPACE_PREFIX}{suffix}"


def resolve_site_names(domain: str, namespace: str | None = None) -> tuple[str, str]:
    """Validate the domain and resolve the namespace to use.

    An explicit namespace is checked before the domain so that a bad
    override is always reported, whatever the domain looks like.

    Args:
        domain: Domain from the command line
        namespace: Optional namespace override

    Returns:
        Tuple of (domain, namespace)

    Raises:
        InvalidNamespaceError: If the namespace override is invalid
        InvalidDomainError: If the domain is invalid
    """
    if namespace is not None:
        validate_namespace(namespace)
    validate_domain(domain)
    if namespace is None:
        namespace = validate_namespace(derive_namespace(domain))
    return domain, namespace


def deployment_dir_name(domain: str) -> str:
    """Return the per-domain deployment directory name.

    Args:
        domain: Validated domain name

    Returns:
        Directory name such as "k3s-wordpress-blog-example-com"
    """
    return f"{DEPLOYMENT_DIR_PREFIX}{domain.lower().replace('.', '-')}"


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
