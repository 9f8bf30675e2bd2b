"""Tests for the test runner."""

import io
import logging
from unittest.mock import Mock

import pytest

from jdx_harness.fixture import DatasetFixture, FixtureSetupError, TestContext
from jdx_harness.models.result import Outcome
from jdx_harness.registry import TestCase
from jdx_harness.report import Reporter
from jdx_harness.runner import TestRunner
from jdx_harness.timer import NullTimer


def returning(outcome: Outcome | None) -> Mock:
    """Procedure mock returning a fixed outcome."""
    return Mock(return_value=outcome)


def make_runner(
    fixture: DatasetFixture, *tests: TestCase, stream: io.StringIO | None = None
) -> TestRunner:
    return TestRunner(
        registry=tests,
        fixture=fixture,
        reporter=Reporter(stream if stream is not None else io.StringIO(), color=False),
    )


def test_success_and_failure(mock_fixture: DatasetFixture) -> None:
    """One passing and one failing test give passed=1, failed=1."""
    runner = make_runner(
        mock_fixture,
        TestCase(name="T1", procedure=returning("success")),
        TestCase(name="T2", procedure=returning("failure")),
    )

    summary = runner.run()

    assert (summary.passed, summary.failed, summary.skipped) == (1, 1, 0)


def test_silent_procedure_fails(mock_fixture: DatasetFixture) -> None:
    """A procedure that reports nothing is counted as failed."""
    runner = make_runner(mock_fixture, TestCase(name="T1", procedure=returning(None)))

    summary = runner.run()

    assert (summary.passed, summary.failed, summary.skipped) == (0, 1, 0)
    assert summary.results[0].outcome == "failure"


def test_not_executed_is_skipped(mock_fixture: DatasetFixture) -> None:
    """A procedure marking itself not executed counts as skipped."""
    runner = make_runner(
        mock_fixture, TestCase(name="T1", procedure=returning("not-executed"))
    )

    summary = runner.run()

    assert (summary.passed, summary.failed, summary.skipped) == (0, 0, 1)
    assert summary.results[0].elapsed_us is None
    assert summary.all_ok


def test_outcome_does_not_leak_between_tests(mock_fixture: DatasetFixture) -> None:
    """Every invocation starts from failure regardless of the previous result."""
    runner = make_runner(
        mock_fixture,
        TestCase(name="T1", procedure=returning("success")),
        TestCase(name="T2", procedure=returning(None)),
        TestCase(name="T3", procedure=returning("not-executed")),
        TestCase(name="T4", procedure=returning(None)),
    )

    summary = runner.run()

    assert [r.outcome for r in summary.results] == [
        "success",
        "failure",
        "not-executed",
        "failure",
    ]


def test_runs_in_registration_order(mock_fixture: DatasetFixture) -> None:
    """Execution follows registration order on every run."""
    calls: list[str] = []

    def recorder(name: str) -> TestCase:
        def procedure(context: TestContext) -> Outcome:
            calls.append(name)
            return "success"

        return TestCase(name=name, procedure=procedure)

    names = ["Zeta", "Alpha", "Mid", "Beta"]
    runner = make_runner(mock_fixture, *(recorder(name) for name in names))

    first = runner.run()
    second = runner.run()

    assert calls == names + names
    assert [r.name for r in first.results] == names
    assert [r.name for r in second.results] == names


def test_procedures_receive_fixture_context(
    mock_fixture: DatasetFixture, library_mock: Mock
) -> None:
    """Every procedure gets the library and the borrowed dataset."""
    handle = object()
    library_mock.alloc_dataset.return_value = handle
    procedure = returning("success")

    make_runner(mock_fixture, TestCase(name="T1", procedure=procedure)).run()

    (context,), _ = procedure.call_args
    assert context.library is library_mock
    assert context.dataset is handle


def test_fixture_lifecycle_once_around_all_tests(
    mock_fixture: DatasetFixture, library_mock: Mock
) -> None:
    """Setup happens once before the first test, teardown once after the last."""
    events: list[str] = []
    library_mock.alloc_dataset.side_effect = lambda: events.append("setup")
    library_mock.free_dataset.side_effect = lambda dataset: events.append("teardown")

    def failing(context: TestContext) -> Outcome:
        events.append("test")
        return "failure"

    runner = make_runner(
        mock_fixture,
        TestCase(name="T1", procedure=failing),
        TestCase(name="T2", procedure=failing),
    )

    runner.run()

    assert events == ["setup", "test", "test", "teardown"]


def test_raising_procedure_fails_and_run_continues(
    mock_fixture: DatasetFixture, caplog: pytest.LogCaptureFixture
) -> None:
    """An exception from a test body is a failure; later tests still run."""

    def broken(context: TestContext) -> Outcome:
        raise RuntimeError("library error")

    after = returning("success")
    runner = make_runner(
        mock_fixture,
        TestCase(name="Broken", procedure=broken),
        TestCase(name="After", procedure=after),
    )

    with caplog.at_level(logging.ERROR):
        summary = runner.run()

    assert [r.outcome for r in summary.results] == ["failure", "success"]
    after.assert_called_once()
    assert "Test Broken raised: library error" in caplog.text


@pytest.mark.parametrize("returned", ["passed", 1, ["success"]])
def test_unknown_return_value_fails(
    mock_fixture: DatasetFixture, returned: object
) -> None:
    """Anything other than a known outcome counts as failure."""
    runner = make_runner(
        mock_fixture, TestCase(name="T1", procedure=Mock(return_value=returned))
    )

    summary = runner.run()

    assert summary.results[0].outcome == "failure"


def test_fixture_failure_prints_no_test_line(
    mock_fixture: DatasetFixture, library_mock: Mock
) -> None:
    """A fixture that cannot be loaded aborts before any test runs."""
    library_mock.read_dataset_from_path.side_effect = OSError("corrupt")
    procedure = returning("success")
    stream = io.StringIO()
    runner = make_runner(
        mock_fixture, TestCase(name="T1", procedure=procedure), stream=stream
    )

    with pytest.raises(FixtureSetupError, match="corrupt"):
        runner.run()

    procedure.assert_not_called()
    assert "T1" not in stream.getvalue()
    assert "Passed" not in stream.getvalue()


def test_records_durations_when_clock_available(mock_fixture: DatasetFixture) -> None:
    """Timed outcomes carry a non-negative duration."""
    runner = make_runner(
        mock_fixture,
        TestCase(name="T1", procedure=returning("success")),
        TestCase(name="T2", procedure=returning(None)),
    )

    summary = runner.run()

    assert all(
        r.elapsed_us is not None and r.elapsed_us >= 0 for r in summary.results
    )


def test_without_clock_warns_once_and_omits_durations(
    mock_fixture: DatasetFixture,
) -> None:
    """Without a monotonic clock there is one warning and no durations."""
    stream = io.StringIO()
    runner = TestRunner(
        registry=(
            TestCase(name="T1", procedure=returning("success")),
            TestCase(name="T2", procedure=returning("failure")),
        ),
        fixture=mock_fixture,
        reporter=Reporter(stream, color=False),
        timer_factory=NullTimer,
    )

    summary = runner.run()

    output = stream.getvalue()
    assert output.count("Timing of tests is disabled") == 1
    assert " | " not in output
    assert all(r.elapsed_us is None for r in summary.results)


def test_keyboard_interrupt_propagates_after_teardown(
    mock_fixture: DatasetFixture, library_mock: Mock
) -> None:
    """Ctrl-C inside a test body is not swallowed; the fixture is still freed."""
    later = returning("success")
    runner = make_runner(
        mock_fixture,
        TestCase(name="T1", procedure=Mock(side_effect=KeyboardInterrupt)),
        TestCase(name="T2", procedure=later),
    )

    with pytest.raises(KeyboardInterrupt):
        runner.run()

    later.assert_not_called()
    library_mock.free_dataset.assert_called_once()


def test_report_write_failure_propagates_after_teardown(
    mock_fixture: DatasetFixture, library_mock: Mock
) -> None:
    """A broken output stream aborts the run but the fixture is still freed."""
    stream = Mock(spec=io.StringIO)
    stream.write.side_effect = BrokenPipeError("stdout closed")
    runner = TestRunner(
        registry=(TestCase(name="T1", procedure=returning("success")),),
        fixture=mock_fixture,
        reporter=Reporter(stream, color=False),
    )

    with pytest.raises(BrokenPipeError):
        runner.run()

    library_mock.free_dataset.assert_called_once()


def test_teardown_failure_is_logged_not_raised(
    mock_fixture: DatasetFixture,
    library_mock: Mock,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A release error after a completed run keeps the summary."""
    library_mock.free_dataset.side_effect = RuntimeError("double free")
    stream = io.StringIO()
    runner = make_runner(
        mock_fixture, TestCase(name="T1", procedure=returning("success")), stream=stream
    )

    with caplog.at_level(logging.ERROR):
        summary = runner.run()

    assert summary.passed == 1
    assert "Passed 1 tests." in stream.getvalue()
    assert "Fixture teardown failed" in caplog.text
    library_mock.free_dataset.assert_called_once()


def test_teardown_failure_does_not_mask_test_interrupt(
    mock_fixture: DatasetFixture, library_mock: Mock
) -> None:
    """The interrupt that ended the run is what the caller sees."""
    library_mock.free_dataset.side_effect = RuntimeError("double free")
    runner = make_runner(
        mock_fixture, TestCase(name="T1", procedure=Mock(side_effect=KeyboardInterrupt))
    )

    with pytest.raises(KeyboardInterrupt):
        runner.run()
