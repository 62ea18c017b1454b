#!/usr/bin/env python3
"""
Domain models for results reported by the cluster.
"""

from dataclasses import dataclass

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "cluster",
        "description": "Domain models for cluster results",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


@dataclass(frozen=True)
class ExecResult:
    """Output of a command run inside a container.

    Attributes:
        stdout: Captured standard output
        stderr: Captured standard error
        returncode: Exit code reported by the container runtime
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def ok(self) -> bool:
        """True if the command exited with code 0."""
        return self.returncode == 0


@dataclass(frozen=True)
class ResourceStatus:
    """One line of a namespace status report.

    Attributes:
        kind: Resource kind (e.g. "Pod")
        name: Resource name
        status: Short human-readable status (e.g. "Running 1/1")
    """

    kind: str
    name: str
    status: str

    def format_line(self) -> str:
        """Format as "kind/name  status"."""
        return f"{self.kind.lower()}/{self.name}  {self.status}"


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
