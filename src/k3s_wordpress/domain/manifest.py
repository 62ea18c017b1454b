#!/usr/bin/env python3
"""
Domain model for a named group of Kubernetes objects.

A manifest is the unit the deploy workflow applies in one step and writes
to one file in the deployment directory.
"""

from dataclasses import dataclass, field
from typing import Any

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "manifest",
        "description": "Domain model for rendered manifests",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


@dataclass(frozen=True)
class Manifest:
    """Immutable group of Kubernetes objects applied together.

    Attributes:
        name: Step name this manifest belongs to (e.g. "database")
        filename: File written in the deployment directory (e.g. "mariadb.yaml")
        documents: Kubernetes model objects, in apply order
    """

    name: str
    filename: str
    documents: tuple[Any, ...] = field(default_factory=tuple)

    def kinds(self) -> list[str]:
        """Return the kind of each document, in order."""
        return [doc.kind for doc in self.documents]


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
