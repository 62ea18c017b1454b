#!/usr/bin/env python3
"""
Repository for persisting deployment run records to disk.

Writes are atomic (temp file + rename) so an interrupted save never leaves
a truncated record behind.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from k3s_wordpress.domain.step_result import DeploymentRun, StepRecord, StepStatus

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "run_repository",
        "description": "Repository for deployment run records",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


class RunRepository:
    """Repository for persisting a DeploymentRun to a JSON file."""

    SCHEMA_VERSION = "1.0"
    SUPPORTED_SCHEMA_VERSIONS = ["1.0"]

    def __init__(self, record_path: str | Path) -> None:
        """Initialize the run repository.

        Args:
            record_path: Path to the run record file
        """
        self.record_path = Path(record_path)

    def save(self, run: DeploymentRun) -> None:
        """Save a run record to disk atomically.

        Args:
            run: Deployment run to save
        """
        self.record_path.parent.mkdir(parents=True, exist_ok=True)
        temp_file = self.record_path.with_suffix(".tmp")
        try:
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(self._run_to_dict(run), f, indent=2)
            temp_file.replace(self.record_path)
        except Exception:
            if temp_file.exists():
                temp_file.unlink()
            raise

    def load(self) -> DeploymentRun | None:
        """Load the run record from disk.

        Returns:
            Deployment run if the file exists, None otherwise

        Raises:
            ValueError: If the record has an unsupported schema version
        """
        if not self.record_path.exists():
            return None

        with open(self.record_path, encoding="utf-8") as f:
            data = json.load(f)

        schema_version = data.get("schema_version", self.SCHEMA_VERSION)
        if schema_version not in self.SUPPORTED_SCHEMA_VERSIONS:
            raise ValueError(
                f"Unsupported schema version: {schema_version}. "
                f"Supported versions: {self.SUPPORTED_SCHEMA_VERSIONS}"
            )
        return self._dict_to_run(data)

    def _run_to_dict(self, run: DeploymentRun) -> dict[str, Any]:
        return {
            "schema_version": self.SCHEMA_VERSION,
            "run_id": run.run_id,
            "domain": run.domain,
            "namespace": run.namespace,
            "started_at": _iso(run.started_at),
            "completed_at": _iso(run.completed_at),
            "steps": [
                {
                    "name": step.name,
                    "depends_on": list(step.depends_on),
                    "status": step.status.value,
                    "started_at": _iso(step.started_at),
                    "completed_at": _iso(step.completed_at),
                    "error_message": step.error_message,
                }
                for step in run.steps
            ],
        }

    def _dict_to_run(self, data: dict[str, Any]) -> DeploymentRun:
        steps = [
            StepRecord(
                name=step["name"],
                depends_on=tuple(step.get("depends_on", ())),
                status=StepStatus(step["status"]),
                started_at=_parse(step.get("started_at")),
                completed_at=_parse(step.get("completed_at")),
                error_message=step.get("error_message"),
            )
            for step in data["steps"]
        ]
        return DeploymentRun(
            run_id=data["run_id"],
            domain=data["domain"],
            namespace=data["namespace"],
            steps=steps,
            started_at=_parse(data.get("started_at")),
            completed_at=_parse(data.get("completed_at")),
        )


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
