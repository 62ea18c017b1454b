#!/usr/bin/env python3
"""
Domain layer for k3s-wordpress.

Contains pure site logic: input validation, site parameters, step records
and error types. Nothing here talks to the cluster or the network.
"""

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "domain.__init__",
        "description": "Domain layer initialization",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }
