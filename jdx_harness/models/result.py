"""Models for test outcomes and run summaries."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal, get_args

Outcome = Literal["success", "failure", "not-executed"]

OUTCOMES: frozenset[str] = frozenset(get_args(Outcome))


@dataclass(frozen=True, kw_only=True)
class TestResult:
    """Result of a single test invocation.

    ``elapsed_us`` is only set when the platform provides a monotonic clock.
    """

    __test__ = False

    name: str
    outcome: Outcome
    elapsed_us: int | None = None


@dataclass(kw_only=True)
class RunSummary:
    """Counters accumulated over one pass through the registry."""

    total: int = 0
    passed: int = 0
    skipped: int = 0
    results: Sequence[TestResult] = field(default_factory=tuple)

    @property
    def failed(self) -> int:
        return self.total - self.passed - self.skipped

    @property
    def all_ok(self) -> bool:
        """Whether every test either passed or was skipped."""
        return self.passed + self.skipped == self.total

    def record(self, result: TestResult) -> None:
        """Count a finished test."""
        self.total += 1
        if result.outcome == "success":
            self.passed += 1
        elif result.outcome == "not-executed":
            self.skipped += 1
        self.results = (*self.results, result)
