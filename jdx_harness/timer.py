"""Best-effort elapsed time measurement around a single test invocation."""

import logging
import time
from abc import ABC, abstractmethod

log = logging.getLogger(__name__)


class Timer(ABC):
    """Start/stop stopwatch reporting whole microseconds."""

    @abstractmethod
    def start(self) -> None:
        """Capture the starting timestamp."""

    @abstractmethod
    def stop(self) -> None:
        """Capture the ending timestamp."""

    @property
    @abstractmethod
    def elapsed_us(self) -> int | None:
        """Microseconds between the last start and stop, if measurable."""


class MonotonicTimer(Timer):
    """Timer backed by the platform monotonic clock."""

    def __init__(self) -> None:
        self._start_ns: int | None = None
        self._end_ns: int | None = None

    def start(self) -> None:
        self._end_ns = None
        self._start_ns = time.monotonic_ns()

    def stop(self) -> None:
        self._end_ns = time.monotonic_ns()

    @property
    def elapsed_us(self) -> int | None:
        if self._start_ns is None or self._end_ns is None:
            return None
        return max(0, (self._end_ns - self._start_ns) // 1000)


class NullTimer(Timer):
    """Timer used when no monotonic clock is available."""

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass

    @property
    def elapsed_us(self) -> int | None:
        return None


def probe_timer() -> Timer:
    """Pick a timer implementation based on what the platform offers."""
    try:
        info = time.get_clock_info("monotonic")
    except (OSError, ValueError) as e:
        log.debug("Monotonic clock probe failed: %s", e)
        return NullTimer()

    if not info.monotonic:
        log.debug("Clock %s is not monotonic", info.implementation)
        return NullTimer()

    return MonotonicTimer()


def format_duration(elapsed_us: int) -> str:
    """Render a duration in the largest unit that keeps it readable.

    Below a millisecond the value is shown in microseconds, below a second
    in whole (truncated) milliseconds, otherwise in fractional seconds.
    """
    if elapsed_us < 1000:
        return f"{elapsed_us}μs"
    if elapsed_us < 1_000_000:
        return f"{elapsed_us // 1000}ms"
    return f"{elapsed_us / 1_000_000:f}s"
