"""Per-test execution record.

A ``TestContext`` is handed to every test body. The body reports problems
through it and the engine reads it back once the body has returned:

- ``record_error()`` notes a non-critical problem; the body keeps going.
- ``record_failure()`` marks the test as failed. By convention the body
  returns right after calling it; nothing forces it to.
- ``mark_started()`` / ``mark_ended()`` bracket the measured part of a
  benchmark. Tests named ``bench_*`` get both stamps from the engine unless
  the body sets them itself.

All timestamps are monotonic nanoseconds, so durations are unaffected by
wall-clock adjustments.
"""

from __future__ import annotations

from typing import Optional

from .interfaces import ClockInterface
from .implementations import MonotonicClock

_DEFAULT_CLOCK = MonotonicClock()


class TestContext:
    """Mutable outcome of a single test execution."""

    __test__ = False  # not a pytest test class

    def __init__(self, name: str, clock: Optional[ClockInterface] = None):
        self.name = name
        self.failed = False
        self.error_count = 0
        self.failure_message: Optional[str] = None
        self.error_messages: list[str] = []
        self.started_at: Optional[int] = None
        self.ended_at: Optional[int] = None
        self.failed_at: Optional[int] = None
        self.error_at: Optional[int] = None
        self._clock = clock or _DEFAULT_CLOCK

    def __repr__(self) -> str:
        return (f"TestContext(name={self.name!r}, failed={self.failed}, "
                f"error_count={self.error_count})")

    def record_failure(self, message: str) -> None:
        """Mark the test failed; replaces any earlier failure message."""
        self.failed = True
        self.failure_message = str(message)
        self.failed_at = self._clock.monotonic_ns()

    def record_error(self, message: str) -> None:
        """Record a non-fatal error and keep going."""
        self.error_messages.append(str(message))
        self.error_count += 1
        self.error_at = self._clock.monotonic_ns()

    def mark_started(self) -> None:
        self.started_at = self._clock.monotonic_ns()

    def mark_ended(self) -> None:
        self.ended_at = self._clock.monotonic_ns()

    def elapsed_ns(self) -> int:
        """Nanoseconds between start and end marks.

        A missing mark counts as a zero-length duration, and an end mark
        that precedes the start mark saturates at zero.
        """
        if self.started_at is None or self.ended_at is None:
            return 0
        return max(0, self.ended_at - self.started_at)

    def elapsed(self) -> tuple[int, int]:
        """``elapsed_ns()`` split into whole seconds and nanoseconds."""
        return divmod(self.elapsed_ns(), 1_000_000_000)
