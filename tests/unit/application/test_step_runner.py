"""Unit tests for StepRunner."""

from unittest.mock import Mock

import pytest

from k3s_wordpress.application.step_runner import Step, StepRunner, validate_steps
from k3s_wordpress.domain.errors import ExternalCommandError
from k3s_wordpress.domain.step_result import StepStatus


def test_validate_steps_accepts_backward_dependencies() -> None:
    """Test a valid step list passes."""
    validate_steps(
        [
            Step("namespace", Mock()),
            Step("secret", Mock(), ("namespace",)),
            Step("database", Mock(), ("namespace", "secret")),
        ]
    )


def test_validate_steps_rejects_unknown_dependency() -> None:
    """Test a dependency on a missing step is rejected."""
    with pytest.raises(ValueError, match="unknown step"):
        validate_steps([Step("secret", Mock(), ("namespace",))])


def test_validate_steps_rejects_forward_dependency() -> None:
    """Test a dependency on a later step is rejected."""
    with pytest.raises(ValueError, match="runs later"):
        validate_steps([Step("secret", Mock(), ("namespace",)), Step("namespace", Mock())])


def test_validate_steps_rejects_duplicates() -> None:
    """Test duplicate step names are rejected."""
    with pytest.raises(ValueError, match="Duplicate"):
        validate_steps([Step("namespace", Mock()), Step("namespace", Mock())])


def test_run_executes_steps_in_order() -> None:
    """Test every step runs once, in list order."""
    calls: list[str] = []
    steps = [Step(name, lambda name=name: calls.append(name)) for name in ("a", "b", "c")]
    runner = StepRunner()

    run = runner.run(steps, runner.create_run(steps, "blog.example.com", "wp"))

    assert calls == ["a", "b", "c"]
    assert run.succeeded() is True
    assert run.completed_steps() == ["a", "b", "c"]
    assert run.started_at is not None
    assert run.completed_at is not None


def test_run_without_record_creates_one() -> None:
    """Test running without a pre-built record."""
    run = StepRunner().run([Step("only", Mock())])

    assert run.completed_steps() == ["only"]


def test_run_stops_at_first_failure() -> None:
    """Test fail-fast: later steps are skipped and the error re-raised."""
    third = Mock()
    steps = [
        Step("namespace", Mock()),
        Step("secret", Mock(side_effect=ExternalCommandError("Create Secret", "Forbidden", 403))),
        Step("storage", third),
    ]
    runner = StepRunner()
    run = runner.create_run(steps, "blog.example.com", "wp")

    with pytest.raises(ExternalCommandError):
        runner.run(steps, run)

    third.assert_not_called()
    assert run.completed_steps() == ["namespace"]
    assert run.get_step("secret").status == StepStatus.FAILED
    assert "Forbidden" in run.get_step("secret").error_message
    assert run.get_step("storage").status == StepStatus.SKIPPED
    assert run.count_by_status(StepStatus.PENDING) == 0


def test_run_notifies_on_update() -> None:
    """Test the update callback sees the final record after a failure."""
    on_update = Mock()
    steps = [Step("a", Mock()), Step("b", Mock(side_effect=RuntimeError("boom")))]
    runner = StepRunner(on_update=on_update)
    run = runner.create_run(steps, "blog.example.com", "wp")

    with pytest.raises(RuntimeError):
        runner.run(steps, run)

    assert on_update.call_count >= 4
    on_update.assert_called_with(run)
    assert run.failed_step().name == "b"


def test_run_rejects_invalid_steps_before_running() -> None:
    """Test no step runs when the list is invalid."""
    action = Mock()

    with pytest.raises(ValueError):
        StepRunner().run([Step("a", action), Step("b", Mock(), ("missing",))])

    action.assert_not_called()


def test_run_rejects_mismatched_record() -> None:
    """Test a run record built for other steps is rejected."""
    runner = StepRunner()
    run = runner.create_run([Step("a", Mock())], "blog.example.com", "wp")

    with pytest.raises(ValueError, match="do not match"):
        runner.run([Step("b", Mock())], run)
