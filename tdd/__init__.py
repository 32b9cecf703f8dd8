"""
tdd - a small in-process unit-testing harness.

Register named test bodies in a Suite, run them one at a time on isolated
worker threads, survive intercepted memory faults, time ``bench_`` tests
and derive aggregate statistics.
"""

__version__ = "1.0.0"

from .errors import (
    TddError,
    InvalidArgument,
    ConfigError,
    EngineError,
    WorkerError,
    CrashGuardError,
    SuiteExhausted,
    SuiteClosed,
)
from .interfaces import (
    Outcome,
    TestReport,
    ClockInterface,
    CrashGuardInterface,
    ReporterInterface,
)
from .implementations import (
    CRASH_MESSAGE,
    MonotonicClock,
    SignalCrashGuard,
    ConsoleReporter,
    JsonReporter,
    get_crash_guard,
)
from .context import TestContext
from .runner import TestRunner, runner
from .stats import SuiteStats, TestOutcome, derive, format_stats
from .suite import Suite, SuiteState, classify
from .config import SuiteConfig, load_config, build_reporter

__all__ = [
    "TddError",
    "InvalidArgument",
    "ConfigError",
    "EngineError",
    "WorkerError",
    "CrashGuardError",
    "SuiteExhausted",
    "SuiteClosed",
    "Outcome",
    "TestReport",
    "ClockInterface",
    "CrashGuardInterface",
    "ReporterInterface",
    "CRASH_MESSAGE",
    "MonotonicClock",
    "SignalCrashGuard",
    "ConsoleReporter",
    "JsonReporter",
    "get_crash_guard",
    "TestContext",
    "TestRunner",
    "runner",
    "SuiteStats",
    "TestOutcome",
    "derive",
    "format_stats",
    "Suite",
    "SuiteState",
    "classify",
    "SuiteConfig",
    "load_config",
    "build_reporter",
]
