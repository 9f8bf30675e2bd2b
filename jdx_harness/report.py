"""Colorized line-oriented report of a test run."""

import sys
from typing import TextIO

from jdx_harness.models.result import RunSummary, TestResult
from jdx_harness.timer import format_duration

RESET = "\x1b[0m"
RED = "\x1b[31m"
GREEN = "\x1b[32m"
YELLOW = "\x1b[33m"
BLUE = "\x1b[34m"
BOLD = "\x1b[1m"
YELLOW_NORMAL = "\x1b[0;33m"


class Reporter:
    """Writes test headers, per-test status and the closing summary."""

    def __init__(self, stream: TextIO | None = None, *, color: bool = True) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.color = color

    def _paint(self, code: str, text: str) -> str:
        return f"{code}{text}{RESET}" if self.color else text

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def _bracketed(self, label: str) -> str:
        if not self.color:
            return f"[{label}]"
        return f"{YELLOW}[{BOLD}{label}{YELLOW_NORMAL}]{RESET}"

    def timing_disabled(self) -> None:
        """Warn once that durations will not be shown."""
        self._write(
            f"{self._bracketed('WARNING')} A monotonic clock is not available. "
            "Timing of tests is disabled.\n\n"
        )

    def test_started(self, name: str) -> None:
        """Print the test name as a header, leaving the line open for the status."""
        self._write(f"{self._bracketed(name)} ")

    def test_finished(self, result: TestResult) -> None:
        """Complete the test line with its status and duration."""
        match result.outcome:
            case "success":
                line = self._paint(GREEN, "passed") + self._duration(result)
            case "not-executed":
                line = self._paint(BLUE, "N/A")
            case _:
                line = self._paint(RED, "failed") + self._duration(result)
        self._write(f"{line}\n")

    def summary(self, summary: RunSummary) -> None:
        """Print pass/fail counts and the skip count when there is one."""
        fail_color = GREEN if summary.all_ok else RED
        self._write(f"\nPassed {self._paint(GREEN, str(summary.passed))} tests.\n")
        self._write(f"Failed {self._paint(fail_color, str(summary.failed))} tests.\n")
        if summary.skipped > 0:
            self._write(
                f"Did not execute {self._paint(BLUE, str(summary.skipped))} tests.\n"
            )

    @staticmethod
    def _duration(result: TestResult) -> str:
        if result.elapsed_us is None:
            return ""
        return f" | {format_duration(result.elapsed_us)}"
