#!/usr/bin/env python3
"""
Service for running an ordered list of named deployment steps.

Steps run one at a time in list order. The first failure stops the run:
the failing step is marked failed, the remaining steps skipped, and the
exception propagates to the caller. Nothing is rolled back or retried.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Callable, Optional

from k3s_wordpress.domain.step_result import DeploymentRun, StepRecord

logger = logging.getLogger(__name__)

__version__ = "0.1.0"
__author__ = "John Ayers"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "step_runner",
        "description": "Sequential runner for named deployment steps",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


@dataclass(frozen=True)
class Step:
    """A named unit of deployment work.

    Attributes:
        name: Unique step name
        action: Callable performing the work
        depends_on: Names of steps that must appear (and complete) earlier
    """

    name: str
    action: Callable[[], None]
    depends_on: tuple[str, ...] = ()


def validate_steps(steps: list[Step]) -> None:
    """Check step names are unique and dependencies point backwards.

    Args:
        steps: Steps in execution order

    Raises:
        ValueError: On a duplicate name, or a dependency that is unknown or
            does not come earlier in the list
    """
    seen: set[str] = set()
    all_names = {step.name for step in steps}
    for step in steps:
        if step.name in seen:
            raise ValueError(f"Duplicate step name: {step.name}")
        for dependency in step.depends_on:
            if dependency not in all_names:
                raise ValueError(f"Step {step.name!r} depends on unknown step {dependency!r}")
            if dependency not in seen:
                raise ValueError(
                    f"Step {step.name!r} depends on {dependency!r}, which runs later"
                )
        seen.add(step.name)


class StepRunner:
    """Application service executing steps and recording their outcome."""

    def __init__(self, on_update: Optional[Callable[[DeploymentRun], None]] = None) -> None:
        """Initialize the step runner.

        Args:
            on_update: Called with the run record after every step change
                (e.g. to save it to disk)
        """
        self.on_update = on_update

    def create_run(self, steps: list[Step], domain: str, namespace: str) -> DeploymentRun:
        """Build a run record with one pending record per step.

        Args:
            steps: Steps in execution order
            domain: Site domain
            namespace: Target namespace

        Returns:
            DeploymentRun with all steps pending

        Raises:
            ValueError: If the step list is invalid
        """
        validate_steps(steps)
        run = DeploymentRun(run_id=uuid.uuid4().hex[:12], domain=domain, namespace=namespace)
        for step in steps:
            run.add_step(StepRecord(name=step.name, depends_on=step.depends_on))
        return run

    def run(self, steps: list[Step], run: Optional[DeploymentRun] = None) -> DeploymentRun:
        """Execute steps in order, stopping at the first failure.

        Args:
            steps: Steps in execution order
            run: Run record from create_run (default: a new anonymous record)

        Returns:
            The run record, all steps completed

        Raises:
            ValueError: If the step list is invalid or does not match the record
            Exception: Whatever the failing step raised, after the run
                record has been updated
        """
        if run is None:
            run = self.create_run(steps, domain="", namespace="")
        else:
            validate_steps(steps)
            if [record.name for record in run.steps] != [step.name for step in steps]:
                raise ValueError("Run record steps do not match the step list")

        run.start()
        self._notify(run)

        for index, step in enumerate(steps):
            record = run.get_step(step.name)
            record.start()
            logger.debug(f"Step {step.name} started")
            self._notify(run)
            try:
                step.action()
            except Exception as e:
                record.fail(str(e))
                for remaining in run.steps[index + 1 :]:
                    remaining.skip(f"Not run: step {step.name!r} failed")
                run.complete()
                self._notify(run)
                logger.error(f"Step {step.name} failed: {e}")
                raise
            record.complete()
            logger.debug(f"Step {step.name} completed in {record.duration_seconds():.1f}s")
            self._notify(run)

        run.complete()
        self._notify(run)
        return run

    def _notify(self, run: DeploymentRun) -> None:
        if self.on_update is not None:
            self.on_update(run)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
