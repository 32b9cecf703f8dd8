"""
Mock implementations for testing.

These classes implement the abstract interfaces with in-memory behavior
suitable for unit testing without touching signal dispositions or stdout.
"""

from typing import List, Optional

from .interfaces import (
    ClockInterface, CrashGuardInterface, ReporterInterface,
    Outcome, TestReport,
)


class MockClock(ClockInterface):
    """
    Controllable monotonic clock for testing.

    Time only moves when test code advances it, which makes benchmark
    durations deterministic.
    """

    def __init__(self, start_ns: int = 1_000_000_000):
        self._now = start_ns

    def monotonic_ns(self) -> int:
        return self._now

    # Test helper methods

    def advance(self, seconds: float = 0.0, nanoseconds: int = 0) -> None:
        """Advance time by the given amount."""
        self._now += int(seconds * 1_000_000_000) + nanoseconds

    def set_time(self, ns: int) -> None:
        """Jump to an absolute time, backwards included."""
        self._now = ns


class MockCrashGuard(CrashGuardInterface):
    """
    Crash counter driven directly by test code.

    Test bodies call ``crash()`` to simulate a fault signal.
    """

    def __init__(self, fail_install: Optional[Exception] = None):
        self._count = 0
        self._installed = False
        self._install_calls = 0
        self._fail_install = fail_install

    def install(self) -> None:
        self._install_calls += 1
        if self._fail_install is not None:
            raise self._fail_install
        self._installed = True

    def uninstall(self) -> None:
        self._installed = False

    def snapshot(self) -> int:
        return self._count

    def signal_installed(self) -> bool:
        return self._installed

    # Test helper methods

    def crash(self) -> None:
        """Simulate one intercepted fault."""
        self._count += 1

    @property
    def install_calls(self) -> int:
        return self._install_calls


class MockReporter(ReporterInterface):
    """
    Reporter that keeps every call in memory for testing.
    """

    def __init__(self):
        self.reports: List[TestReport] = []
        self.aborts: List[int] = []

    def report(self, report: TestReport) -> None:
        self.reports.append(report)

    def aborted(self, remaining: int) -> None:
        self.aborts.append(remaining)

    # Test helper methods

    def outcomes(self) -> List[Outcome]:
        """Outcome of every reported test, in report order."""
        return [r.outcome for r in self.reports]

    def names(self) -> List[str]:
        return [r.name for r in self.reports]

    def clear(self) -> None:
        self.reports.clear()
        self.aborts.clear()
