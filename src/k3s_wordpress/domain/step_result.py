#!/usr/bin/env python3
"""
Domain model for deployment step results.

Tracks the outcome of each named step of a deployment run, so a failed run
leaves a record of which cluster resources were already submitted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "step_result",
        "description": "Domain model for deployment step tracking",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


class StepStatus(Enum):
    """Enumeration of step statuses."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class StepRecord:
    """Outcome of a single deployment step.

    Attributes:
        name: Step name (e.g. "secret", "wait-database")
        depends_on: Names of steps that must complete first
        status: Current status of the step
        started_at: When the step started
        completed_at: When the step finished (if finished)
        error_message: Error details if the step failed or was skipped
    """

    name: str
    depends_on: tuple[str, ...] = ()
    status: StepStatus = StepStatus.PENDING
    started_at: datetime | None = None
    completed_at: datetime | None = None
    error_message: str | None = None

    def start(self) -> None:
        """Mark step as started."""
        self.status = StepStatus.IN_PROGRESS
        self.started_at = datetime.now()

    def complete(self) -> None:
        """Mark step as completed successfully."""
        self.status = StepStatus.COMPLETED
        self.completed_at = datetime.now()

    def fail(self, error: str) -> None:
        """Mark step as failed.

        Args:
            error: Error message describing the failure
        """
        self.status = StepStatus.FAILED
        self.completed_at = datetime.now()
        self.error_message = error

    def skip(self, reason: str) -> None:
        """Mark step as skipped.

        Args:
            reason: Reason for skipping
        """
        self.status = StepStatus.SKIPPED
        self.completed_at = datetime.now()
        self.error_message = reason

    def duration_seconds(self) -> float | None:
        """Calculate step duration in seconds.

        Returns:
            Duration in seconds if step has started, None otherwise
        """
        if not self.started_at:
            return None
        end_time = self.completed_at or datetime.now()
        return (end_time - self.started_at).total_seconds()


@dataclass
class DeploymentRun:
    """Tracks every step of one deployment run.

    Attributes:
        run_id: Unique identifier for this run
        domain: Domain being deployed
        namespace: Target namespace
        steps: Step records in execution order
        started_at: When the run started
        completed_at: When the run finished
    """

    run_id: str
    domain: str
    namespace: str
    steps: list[StepRecord] = field(default_factory=list)
    started_at: datetime | None = None
    completed_at: datetime | None = None

    def add_step(self, step: StepRecord) -> None:
        """Append a step record to the run.

        Args:
            step: Step record to add
        """
        self.steps.append(step)

    def start(self) -> None:
        """Mark run as started."""
        self.started_at = datetime.now()

    def complete(self) -> None:
        """Mark run as finished (successfully or not)."""
        self.completed_at = datetime.now()

    def mark_interrupted(self, reason: str = "Interrupted") -> None:
        """Close out an interrupted run.

        The step in progress is marked failed and pending steps skipped.

        Args:
            reason: Message recorded on the affected steps
        """
        for step in self.steps:
            if step.status == StepStatus.IN_PROGRESS:
                step.fail(reason)
            elif step.status == StepStatus.PENDING:
                step.skip(reason)
        self.complete()

    def get_step(self, name: str) -> StepRecord | None:
        """Get a step record by name.

        Args:
            name: Step name

        Returns:
            Step record if found, None otherwise
        """
        for step in self.steps:
            if step.name == name:
                return step
        return None

    def count_by_status(self, status: StepStatus) -> int:
        """Count steps with given status.

        Args:
            status: Status to count

        Returns:
            Number of steps with the specified status
        """
        return sum(1 for step in self.steps if step.status == status)

    def completed_steps(self) -> list[str]:
        """Names of steps that completed, in execution order."""
        return [step.name for step in self.steps if step.status == StepStatus.COMPLETED]

    def failed_step(self) -> StepRecord | None:
        """Return the step that stopped the run, if any."""
        for step in self.steps:
            if step.status == StepStatus.FAILED:
                return step
        return None

    def succeeded(self) -> bool:
        """Check if every step completed.

        Returns:
            True if the run has steps and all of them completed
        """
        return bool(self.steps) and all(
            step.status == StepStatus.COMPLETED for step in self.steps
        )


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
