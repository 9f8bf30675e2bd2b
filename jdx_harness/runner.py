"""Sequential execution of a test registry against a shared fixture."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import cast

from jdx_harness.fixture import DatasetFixture, FixtureTeardownError, TestContext
from jdx_harness.models.result import OUTCOMES, Outcome, RunSummary, TestResult
from jdx_harness.registry import TestCase, TestRegistry
from jdx_harness.report import Reporter
from jdx_harness.timer import NullTimer, Timer, probe_timer

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class TestRunner:
    """Runs every registered test in order and reports as it goes."""

    __test__ = False

    registry: TestRegistry
    fixture: DatasetFixture
    reporter: Reporter = field(default_factory=Reporter)
    timer_factory: Callable[[], Timer] = probe_timer

    def run(self) -> RunSummary:
        """Set up the fixture, run all tests, print the summary, tear down.

        A fixture that fails to load aborts the run before any test line is
        printed. Teardown runs once whatever happens in the loop; a failure to
        release the dataset is logged and does not change the result.

        Returns:
            Counters and per-test results of the run

        Raises:
            FixtureSetupError: If the fixture dataset cannot be loaded

        """
        timer = self.timer_factory()
        if isinstance(timer, NullTimer):
            self.reporter.timing_disabled()

        summary = RunSummary()
        self.fixture.setup()
        try:
            context = self.fixture.context
            log.debug("Running %d test(s)", len(self.registry))
            for test in self.registry:
                summary.record(self._run_test(test, context, timer))
            self.reporter.summary(summary)
        finally:
            self._teardown()

        log.debug(
            "Run complete: passed=%d failed=%d skipped=%d",
            summary.passed,
            summary.failed,
            summary.skipped,
        )
        return summary

    def _teardown(self) -> None:
        try:
            self.fixture.teardown()
        except FixtureTeardownError as e:
            log.error("Fixture teardown failed: %s", e, exc_info=e)

    def _run_test(self, test: TestCase, context: TestContext, timer: Timer) -> TestResult:
        outcome: Outcome = "failure"
        self.reporter.test_started(test.name)

        timer.start()
        try:
            returned = test.procedure(context)
        except Exception as e:
            log.error("Test %s raised: %s", test.name, e, exc_info=e)
            returned = None
        timer.stop()

        if isinstance(returned, str) and returned in OUTCOMES:
            outcome = cast(Outcome, returned)
        elif returned is not None:
            log.warning("Test %s returned unknown outcome %r", test.name, returned)

        result = TestResult(
            name=test.name,
            outcome=outcome,
            elapsed_us=timer.elapsed_us if outcome != "not-executed" else None,
        )
        self.reporter.test_finished(result)
        return result
