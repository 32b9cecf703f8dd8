#!/usr/bin/env python3
"""
Example program exercising every public feature of tdd.

Runs the same suite twice: once ignoring failures, then (after a reset)
with abort-on-failure. The process exit code is the number of failed tests.

Usage:
    python3 examples/demo.py
    tddctl run examples.demo:build_suite --abort-on-failure
"""

import signal
import sys

from tdd import Suite, TestRunner


def test_errfunc(t):
    t.record_error("a non-critical error occurred.")


def test_failfunc(t):
    t.record_failure("a critical error occurred!")
    print("this code should not run unless fatal failures are disabled!")


def test_timer(t):
    t.mark_started()
    s = "This function is being timed!".upper()
    del s
    t.mark_ended()


def bench_func(t):
    s = "This function is being timed!".upper()
    del s


def test_segvfunc(t):
    signal.raise_signal(signal.SIGSEGV)


def build_suite() -> Suite:
    suite = Suite()

    # add() takes any number of runners at once
    suite.add(
        TestRunner(test_timer, "test_timer",
                   "Manual benchmark. Requires timespan to be printed manually."),
        TestRunner(bench_func, "bench_func",
                   "Builtin benchmark. Execution timespan is printed automatically below."),
    )
    # add_test() appends a single runner
    suite.add_test(TestRunner(test_errfunc, "test_errfunc", "Produces an error."))
    # add() can be called repeatedly to register groups of tests
    suite.add(
        TestRunner(test_failfunc, "test_failfunc", "Fails immediately."),
        TestRunner(test_segvfunc, "test_segvfunc", "Raises SIGSEGV."),
    )
    return suite


def main() -> int:
    suite = build_suite()

    print("Running tests ignoring failures.")
    suite.run(abort_on_failure=False)
    if suite.finished:
        print("Suite ran all tests.")
    else:
        print(f"Suite only ran {suite.cursor} tests.")
    print()

    # reset to show the suite can be rerun, this time with fatal failures
    suite.reset()

    print("Running tests with fatal failures.")
    suite.run(abort_on_failure=True)
    if suite.finished:
        print("Suite ran all tests.")
    else:
        print("Suite may not have run all tests!")

    stats = suite.stats()
    print(f"Suite encountered: {suite.crash_count} fatal memory faults.")
    suite.close()

    return stats.n_fail


if __name__ == "__main__":
    sys.exit(main())
