"""Suite orchestration: register runners, execute them one at a time, keep results.

Execution protocol for one test (``Suite.step``):

    runner = runners[cursor]
        -> fresh TestContext (start mark for bench_ tests)
        -> crash guard installed, counter snapshotted
        -> run_isolated(): body runs on its own thread, joined
        -> end mark fallback for bench_ tests (strictly after the join)
        -> crash counter compared; a change forces a failure
        -> context appended to results, cursor advanced
        -> outcome handed to the reporter
        -> abort signal if the test failed and abort_on_failure is set
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from .context import TestContext
from .errors import EngineError, InvalidArgument, SuiteClosed, SuiteExhausted
from .implementations import CRASH_MESSAGE, ConsoleReporter, MonotonicClock, get_crash_guard
from .interfaces import (
    ClockInterface, CrashGuardInterface, ReporterInterface, Outcome, TestReport,
)
from .runner import TestRunner
from .stats import SuiteStats, derive
from .worker import run_isolated

if TYPE_CHECKING:
    from .config import SuiteConfig

logger = logging.getLogger(__name__)


class SuiteState(Enum):
    """Run state of a suite. ``RUNNING`` only while a test body executes."""
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"
    ABORTED = "aborted"


def classify(ctx: TestContext) -> Outcome:
    """Failure takes precedence over errors."""
    if ctx.failed:
        return Outcome.FAIL
    if ctx.error_count > 0:
        return Outcome.ERROR
    return Outcome.PASS


class Suite:
    """
    Ordered collection of test runners plus the results of running them.

    Usage:
        suite = Suite()
        suite.add(TestRunner(test_timer, "test_timer"),
                  TestRunner(bench_func, "bench_func", "timed automatically"))
        suite.add_test(TestRunner(test_errfunc, "test_errfunc"))

        ok = suite.run(abort_on_failure=False)
        stats = suite.stats()

        suite.reset()       # rerunnable, runners kept
        suite.run(abort_on_failure=True)
    """

    def __init__(
        self,
        reporter: Optional[ReporterInterface] = None,
        quiet: bool = False,
        crash_guard: Optional[CrashGuardInterface] = None,
        clock: Optional[ClockInterface] = None,
    ) -> None:
        self.reporter: ReporterInterface = reporter or ConsoleReporter()
        self.quiet = quiet
        self._crash_guard = crash_guard or get_crash_guard()
        self._clock = clock or MonotonicClock()
        self._runners: List[TestRunner] = []
        self._results: List[TestContext] = []
        self._cursor = 0
        self._finished = False
        self._crash_count = 0
        self._abort_on_failure = False
        self._state = SuiteState.IDLE
        self._closed = False

    @classmethod
    def from_config(cls, config: "SuiteConfig", **kwargs) -> "Suite":
        """Build a suite whose reporter and quiet flag come from ``config``."""
        from .config import build_reporter

        kwargs.setdefault("reporter", build_reporter(config))
        kwargs.setdefault("quiet", config.quiet)
        return cls(**kwargs)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def runners(self) -> tuple:
        return tuple(self._runners)

    @property
    def results(self) -> tuple:
        return tuple(self._results)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def crash_count(self) -> int:
        return self._crash_count

    @property
    def abort_on_failure(self) -> bool:
        return self._abort_on_failure

    @property
    def state(self) -> SuiteState:
        return self._state

    @property
    def crash_guard(self) -> CrashGuardInterface:
        return self._crash_guard

    def __len__(self) -> int:
        return len(self._runners)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def _check_open(self) -> None:
        if self._closed:
            raise SuiteClosed("suite has been closed")

    def add(self, *runners: TestRunner) -> None:
        """Append any number of runners; all or nothing."""
        self._check_open()
        for r in runners:
            if not isinstance(r, TestRunner):
                raise InvalidArgument(f"expected TestRunner, got {type(r).__name__}")
        self._runners.extend(runners)

    def add_test(self, runner: TestRunner) -> None:
        self.add(runner)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run(self, abort_on_failure: bool = False) -> bool:
        """Run every remaining test in registration order.

        Returns:
            True when all tests ran, False when a failure aborted the run.
            A later call resumes from the test after the one that aborted.
        """
        self._check_open()
        self._abort_on_failure = abort_on_failure
        while self._cursor < len(self._runners):
            if not self.step(abort_on_failure):
                return False
        self._finished = True
        self._state = SuiteState.FINISHED
        logger.debug("Suite finished: %d tests, %d crashes", len(self._runners), self._crash_count)
        return True

    def step(self, abort_on_failure: bool = False) -> bool:
        """Run exactly one test, the one at ``cursor``.

        Returns:
            False if the test failed and ``abort_on_failure`` is set,
            True otherwise.

        Raises:
            SuiteExhausted: no tests are left.
            CrashGuardError, WorkerError: the test could not be executed;
                the cursor is not advanced.
        """
        self._check_open()
        if self._cursor >= len(self._runners):
            raise SuiteExhausted(f"all {len(self._runners)} tests have run")
        self._abort_on_failure = abort_on_failure

        runner = self._runners[self._cursor]
        bench = runner.is_benchmark
        ctx = TestContext(runner.name, clock=self._clock)
        if bench:
            ctx.mark_started()

        self._state = SuiteState.RUNNING
        try:
            self._crash_guard.install()
            crashes_before = self._crash_guard.snapshot()

            logger.debug("Running test %d/%d (%s)", self._cursor + 1, len(self._runners), runner.name)
            exc = run_isolated(runner.body, ctx)
        except EngineError:
            self._state = SuiteState.IDLE
            raise

        # the body's thread is joined; only now may the engine stamp the end
        if bench and ctx.ended_at is None:
            ctx.mark_ended()

        if exc is not None:
            logger.error("Test %s raised %s", runner.name, type(exc).__name__,
                         exc_info=(type(exc), exc, exc.__traceback__))
            ctx.record_failure(f"unhandled {type(exc).__name__}: {exc}")

        if self._crash_guard.snapshot() != crashes_before:
            logger.warning("Test %s triggered a fatal memory fault", runner.name)
            ctx.record_failure(CRASH_MESSAGE)
            self._crash_count += 1

        self._results.append(ctx)
        self._cursor += 1

        self._report(runner, ctx, bench)

        if ctx.failed and abort_on_failure:
            remaining = len(self._runners) - self._cursor
            self._state = SuiteState.ABORTED
            logger.info("Suite aborted after %s with %d tests remaining", runner.name, remaining)
            if not self.quiet:
                self.reporter.aborted(remaining)
            return False
        self._state = SuiteState.IDLE
        return True

    def _report(self, runner: TestRunner, ctx: TestContext, bench: bool) -> None:
        if self.quiet:
            return
        outcome = classify(ctx)
        report = TestReport(
            ordinal=self._cursor,
            total=len(self._runners),
            name=runner.name,
            description=runner.description,
            outcome=outcome,
            failure_message=ctx.failure_message if outcome is Outcome.FAIL else None,
            error_messages=list(ctx.error_messages) if outcome is Outcome.ERROR else [],
            elapsed=ctx.elapsed() if bench else None,
        )
        self.reporter.report(report)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def stats(self) -> SuiteStats:
        return derive(self)

    def reset(self) -> None:
        """Forget all results; runners are kept and the suite can run again."""
        self._check_open()
        self._results = []
        self._cursor = 0
        self._finished = False
        self._crash_count = 0
        self._state = SuiteState.IDLE

    def close(self) -> None:
        """Release runners and results. The suite is unusable afterwards."""
        self._runners = []
        self._results = []
        self._cursor = 0
        self._finished = False
        self._closed = True

    def __enter__(self) -> "Suite":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
