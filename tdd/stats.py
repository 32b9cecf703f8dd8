"""Aggregate statistics derived from a suite's results."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .suite import Suite


@dataclass(frozen=True)
class TestOutcome:
    """Name of a test that ran and whether it passed (did not fail)."""
    __test__ = False  # not a pytest test class

    name: str
    ok: bool


@dataclass(frozen=True)
class SuiteStats:
    """Point-in-time snapshot; later changes to the suite are not reflected."""
    tests_run: tuple[TestOutcome, ...] = ()
    n_tests: int = 0
    n_ran: int = 0
    n_error: int = 0
    n_fail: int = 0
    success_rate: float = 0.0
    abort_on_failure: bool = False
    crash_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["tests_run"] = [asdict(t) for t in self.tests_run]
        return data


def derive(suite: "Suite") -> SuiteStats:
    """Build a ``SuiteStats`` over the tests that have run so far.

    ``n_error`` counts every test that recorded an error, failed or not.
    ``success_rate`` is the fraction of run tests with neither a failure
    nor an error, and 0.0 when nothing has run.
    """
    runners = suite.runners
    results = suite.results[:suite.cursor]

    tests_run = []
    n_error = 0
    n_fail = 0
    n_clean = 0
    for runner, ctx in zip(runners, results):
        tests_run.append(TestOutcome(name=runner.name, ok=not ctx.failed))
        if ctx.error_count > 0:
            n_error += 1
        if ctx.failed:
            n_fail += 1
        if not ctx.failed and ctx.error_count == 0:
            n_clean += 1

    n_ran = len(results)
    return SuiteStats(
        tests_run=tuple(tests_run),
        n_tests=len(runners),
        n_ran=n_ran,
        n_error=n_error,
        n_fail=n_fail,
        success_rate=(n_clean / n_ran) if n_ran else 0.0,
        abort_on_failure=suite.abort_on_failure,
        crash_count=suite.crash_count,
    )


def format_stats(stats: SuiteStats) -> str:
    """Plain-text summary followed by one ``name: okay|not okay`` line per test."""
    lines = [
        f"Ran {stats.n_ran} of {stats.n_tests} tests.",
        f"Failed {stats.n_fail} of {stats.n_tests} tests. "
        f"(Fatal failures: {'true' if stats.abort_on_failure else 'false'})",
        f"Errors during testing: {stats.n_error}",
        f"Success rate: {stats.success_rate:.2f}",
        "",
    ]
    for outcome in stats.tests_run:
        lines.append(f"{outcome.name}: {'okay' if outcome.ok else 'not okay'}")
    return "\n".join(lines) + "\n"
