#!/usr/bin/env python3
"""
k3s-wordpress: CLI tool to provision WordPress on a K3s cluster.

This package validates site parameters, renders Kubernetes manifests for a
MariaDB-backed WordPress installation, applies them to the cluster in
dependency order, and reports the generated credentials.
"""

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "__init__",
        "description": "Package initialization for k3s-wordpress",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }
