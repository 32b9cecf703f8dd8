"""
Interfaces for the tdd harness.

Abstract base classes that define contracts for the engine's pluggable
collaborators. This enables dependency injection and mock-based testing
without touching process-wide signal state or real stdout.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class Outcome(Enum):
    """Classification of a finished test."""
    PASS = "pass"
    FAIL = "fail"
    ERROR = "error"


@dataclass
class TestReport:
    """Everything the reporting sink receives about one finished test."""
    __test__ = False  # not a pytest test class

    ordinal: int                   # 1-based position in the suite
    total: int                     # number of registered tests
    name: str
    description: str
    outcome: Outcome
    failure_message: Optional[str] = None
    error_messages: List[str] = field(default_factory=list)
    elapsed: Optional[Tuple[int, int]] = None  # (seconds, nanoseconds), bench_ tests only


class ClockInterface(ABC):
    """
    Abstract interface for the monotonic clock used to stamp contexts.

    Enables deterministic testing of benchmark durations.
    """

    @abstractmethod
    def monotonic_ns(self) -> int:
        """Current monotonic time in nanoseconds."""
        pass


class CrashGuardInterface(ABC):
    """
    Abstract interface for the process-wide crash counter.

    Implementations:
    - SignalCrashGuard: counts fault signals through a ``signal`` handler
    - MockCrashGuard: counter driven directly by test code
    """

    @abstractmethod
    def install(self) -> None:
        """Install the fault handler. Must be safe to call repeatedly."""
        pass

    @abstractmethod
    def uninstall(self) -> None:
        """Restore whatever handler was active before install()."""
        pass

    @abstractmethod
    def snapshot(self) -> int:
        """Current value of the crash counter."""
        pass

    @abstractmethod
    def signal_installed(self) -> bool:
        """True while the fault handler is installed."""
        pass


class ReporterInterface(ABC):
    """
    Abstract interface for the write-only reporting sink.

    Implementations:
    - ConsoleReporter: human readable lines on a text stream
    - JsonReporter: one JSON object per line
    - MockReporter: keeps reports in memory for testing
    """

    @abstractmethod
    def report(self, report: TestReport) -> None:
        """Record the outcome of one test."""
        pass

    @abstractmethod
    def aborted(self, remaining: int) -> None:
        """Record that the suite stopped with ``remaining`` tests unscheduled."""
        pass
