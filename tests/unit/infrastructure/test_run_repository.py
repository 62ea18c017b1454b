"""Unit tests for RunRepository."""

import json
from datetime import datetime
from pathlib import Path

import pytest

from k3s_wordpress.domain.step_result import DeploymentRun, StepRecord, StepStatus
from k3s_wordpress.infrastructure.run_repository import RunRepository


@pytest.fixture
def sample_run() -> DeploymentRun:
    """Create a run with one completed and one failed step."""
    run = DeploymentRun(
        run_id="abc123",
        domain="blog.example.com",
        namespace="wordpress-blog-example-com",
        started_at=datetime(2026, 3, 1, 9, 0, 0),
    )
    done = StepRecord(name="namespace", status=StepStatus.COMPLETED)
    done.started_at = datetime(2026, 3, 1, 9, 0, 1)
    done.completed_at = datetime(2026, 3, 1, 9, 0, 2)
    failed = StepRecord(
        name="secret",
        depends_on=("namespace",),
        status=StepStatus.FAILED,
        error_message="Forbidden",
    )
    run.add_step(done)
    run.add_step(failed)
    return run


def test_save_and_load(tmp_path: Path, sample_run: DeploymentRun) -> None:
    """Test a saved run loads back with the same content."""
    repo = RunRepository(tmp_path / "deployment-run.json")

    repo.save(sample_run)
    loaded = repo.load()

    assert loaded is not None
    assert loaded.run_id == "abc123"
    assert loaded.started_at == datetime(2026, 3, 1, 9, 0, 0)
    assert [s.name for s in loaded.steps] == ["namespace", "secret"]
    assert loaded.steps[0].status == StepStatus.COMPLETED
    assert loaded.steps[0].completed_at == datetime(2026, 3, 1, 9, 0, 2)
    assert loaded.steps[1].depends_on == ("namespace",)
    assert loaded.steps[1].error_message == "Forbidden"


def test_save_writes_readable_json(tmp_path: Path, sample_run: DeploymentRun) -> None:
    """Test the record format."""
    path = tmp_path / "deployment-run.json"
    RunRepository(path).save(sample_run)

    data = json.loads(path.read_text())

    assert data["schema_version"] == "1.0"
    assert data["steps"][1]["status"] == "failed"
    assert not path.with_suffix(".tmp").exists()


def test_save_creates_parent_directory(tmp_path: Path, sample_run: DeploymentRun) -> None:
    """Test saving into a directory that does not exist yet."""
    path = tmp_path / "k3s-wordpress-blog-example-com" / "deployment-run.json"

    RunRepository(path).save(sample_run)

    assert path.exists()


def test_load_missing_returns_none(tmp_path: Path) -> None:
    """Test loading when no record exists."""
    assert RunRepository(tmp_path / "missing.json").load() is None


def test_load_unsupported_schema(tmp_path: Path) -> None:
    """Test an unknown schema version is rejected."""
    path = tmp_path / "deployment-run.json"
    path.write_text(json.dumps({"schema_version": "9.9", "steps": []}))

    with pytest.raises(ValueError, match="Unsupported schema version"):
        RunRepository(path).load()
