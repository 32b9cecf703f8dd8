"""
Real implementations of interfaces for production use.

These classes wrap actual process resources (the monotonic clock, signal
dispositions, text streams) and implement the abstract interfaces.
"""

from typing import Optional, TextIO
from dataclasses import asdict
import json
import logging
import signal
import sys
import threading
import time

from .errors import CrashGuardError
from .interfaces import (
    ClockInterface, CrashGuardInterface, ReporterInterface,
    Outcome, TestReport,
)

logger = logging.getLogger(__name__)

CRASH_MESSAGE = "encountered a fatal memory fault"

# ANSI escape sequences used when colour output is enabled
TEXT_RESET = "\033[0m"
TEXT_RED = "\033[31m"
TEXT_GREEN = "\033[32m"
TEXT_YELLOW = "\033[33m"
TEXT_CYAN = "\033[36m"
TEXT_BOLD = "\033[1m"
TEXT_DIM = "\033[2m"

STYLE_SUCCESS = TEXT_RESET + TEXT_GREEN
STYLE_ERROR = TEXT_RESET + TEXT_BOLD + TEXT_RED
STYLE_WARNING = TEXT_RESET + TEXT_YELLOW
STYLE_DESCRIBE = TEXT_RESET + TEXT_DIM
STYLE_HILITE = TEXT_RESET + TEXT_BOLD + TEXT_CYAN

INDENT = " " * 6


class MonotonicClock(ClockInterface):
    """Clock backed by ``time.monotonic_ns``; immune to wall-clock changes."""

    def monotonic_ns(self) -> int:
        return time.monotonic_ns()


class SignalCrashGuard(CrashGuardInterface):
    """
    Counts memory-fault signals instead of letting them kill the process.

    CPython runs ``signal`` handlers in the main thread between bytecodes,
    so the counter is only ever written from one place and a plain int is
    enough. A fault signal raised from a test's worker thread is recorded
    by the interpreter immediately and the handler runs in the main thread
    once it resumes after joining the worker.

    Limitation: only faults delivered through the interpreter (for example
    ``signal.raise_signal(signal.SIGSEGV)`` or ``os.kill``) are survivable.
    A genuine invalid access inside native code re-faults on return from
    the handler and leaves the worker thread in an undefined state.
    """

    def __init__(self, signals: Optional[tuple] = None):
        self._signals = tuple(signals) if signals else (signal.SIGSEGV,)
        self._count = 0
        self._previous: dict = {}

    def _handler(self, signum, frame) -> None:
        if signum in self._signals:
            self._count += 1

    def install(self) -> None:
        if self.signal_installed():
            return
        if threading.current_thread() is not threading.main_thread():
            raise CrashGuardError("fault handler can only be installed from the main thread")
        previous = {}
        for signum in self._signals:
            try:
                previous[signum] = signal.signal(signum, self._handler)
            except (OSError, ValueError) as e:
                for installed, handler in previous.items():
                    signal.signal(installed, handler)
                raise CrashGuardError(f"could not install handler for signal {signum}: {e}") from e
        self._previous = previous
        logger.debug("Crash guard installed for signals %s", list(self._signals))

    def uninstall(self) -> None:
        if not self._previous:
            return
        for signum, handler in self._previous.items():
            if handler is None:
                handler = signal.SIG_DFL
            signal.signal(signum, handler)
        self._previous = {}
        logger.debug("Crash guard uninstalled")

    def snapshot(self) -> int:
        return self._count

    def signal_installed(self) -> bool:
        if not self._previous:
            return False
        return all(signal.getsignal(s) == self._handler for s in self._signals)


_default_guard: Optional[SignalCrashGuard] = None
_default_guard_lock = threading.Lock()


def get_crash_guard() -> SignalCrashGuard:
    """Return the process-wide crash guard, creating it on first use."""
    global _default_guard
    with _default_guard_lock:
        if _default_guard is None:
            _default_guard = SignalCrashGuard()
        return _default_guard


class ConsoleReporter(ReporterInterface):
    """
    Human readable reporter.

    Writes one status line per test, indented detail lines for failures and
    errors, and a ``bench:`` line for timed tests. ``stream=None`` resolves
    to ``sys.stdout`` at write time so redirected stdout is honoured.
    """

    def __init__(self, stream: Optional[TextIO] = None, color: bool = False):
        self._stream = stream
        self._color = color

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _style(self, style: str, text: str) -> str:
        if not self._color:
            return text
        return f"{style}{text}{TEXT_RESET}"

    def report(self, report: TestReport) -> None:
        head = f"test {report.ordinal}/{report.total} ({report.name}): "
        lines = []
        if report.outcome is Outcome.FAIL:
            lines.append(self._style(STYLE_ERROR, "fail: " + head)
                         + self._style(STYLE_DESCRIBE, report.description))
            lines.append(INDENT + self._style(STYLE_DESCRIBE, report.failure_message or ""))
        elif report.outcome is Outcome.ERROR:
            lines.append(self._style(STYLE_WARNING, "err:  " + head)
                         + self._style(STYLE_DESCRIBE, report.description))
            count = len(report.error_messages)
            lines.append(INDENT + self._style(STYLE_WARNING, f"encountered {count} errors."))
            for i, msg in enumerate(report.error_messages, 1):
                lines.append(INDENT + self._style(STYLE_DESCRIBE, f"{i}. {msg}"))
        else:
            lines.append(self._style(STYLE_SUCCESS, "okay: " + head)
                         + self._style(STYLE_DESCRIBE, report.description))

        if report.elapsed is not None:
            secs, nsecs = report.elapsed
            lines.append(INDENT + self._style(STYLE_DESCRIBE, f"bench: test ({report.name}) took ")
                         + self._style(STYLE_HILITE, f"{secs}s {nsecs}ns"))

        out = self.stream
        out.write("\n".join(lines) + "\n")
        out.flush()

    def aborted(self, remaining: int) -> None:
        out = self.stream
        out.write(f"aborted with {remaining} tests remaining.\n")
        out.flush()


class JsonReporter(ReporterInterface):
    """Machine readable reporter: one JSON object per line."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _emit(self, payload: dict) -> None:
        out = self.stream
        out.write(json.dumps(payload, sort_keys=True) + "\n")
        out.flush()

    def report(self, report: TestReport) -> None:
        data = asdict(report)
        data["outcome"] = report.outcome.value
        if report.elapsed is not None:
            data["elapsed"] = {"seconds": report.elapsed[0], "nanoseconds": report.elapsed[1]}
        self._emit({"type": "test", "data": data})

    def aborted(self, remaining: int) -> None:
        self._emit({"type": "aborted", "data": {"remaining": remaining}})
