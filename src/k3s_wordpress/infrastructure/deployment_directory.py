#!/usr/bin/env python3
"""
Per-domain deployment directory.

Holds the rendered manifest files, the credentials file and the run record
for one site.
"""

import logging
import os
from pathlib import Path

from k3s_wordpress.domain.validation import deployment_dir_name

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "deployment_directory",
        "description": "Per-domain deployment directory writer",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


CREDENTIALS_FILENAME = "credentials.txt"
RUN_RECORD_FILENAME = "deployment-run.json"


class DeploymentDirectory:
    """Filesystem layout of one site's deployment directory."""

    def __init__(self, base_dir: str | Path, domain: str) -> None:
        """Initialize the directory for a domain.

        Args:
            base_dir: Parent directory
            domain: Validated site domain
        """
        self.path = Path(base_dir) / deployment_dir_name(domain)

    @property
    def credentials_path(self) -> Path:
        return self.path / CREDENTIALS_FILENAME

    @property
    def run_record_path(self) -> Path:
        return self.path / RUN_RECORD_FILENAME

    def create(self) -> Path:
        """Create the directory if needed.

        Returns:
            Directory path
        """
        self.path.mkdir(parents=True, exist_ok=True)
        return self.path

    def write_manifests(self, rendered: dict[str, str]) -> list[Path]:
        """Write manifest files, overwriting earlier ones.

        Args:
            rendered: Mapping of filename to YAML text, in apply order

        Returns:
            Paths written, in order
        """
        self.create()
        written = []
        for filename, text in rendered.items():
            path = self.path / filename
            path.write_text(text, encoding="utf-8")
            written.append(path)
            logger.debug(f"Wrote {path}")
        logger.info(f"Manifests written to {self.path}")
        return written

    def write_credentials(self, text: str) -> Path:
        """Write the credentials file, readable by the owner only.

        Args:
            text: File content

        Returns:
            Path written
        """
        self.create()
        path = self.credentials_path
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        # An existing file keeps its old mode through O_CREAT
        os.fchmod(fd, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        return path


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
