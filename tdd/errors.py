"""Exception hierarchy for the tdd harness.

Per-test problems (failures, errors, crashes) are recorded as data on a
``TestContext`` and never raised. The exceptions here cover misuse of the
API and conditions that stop the engine itself.
"""

from __future__ import annotations


class TddError(Exception):
    """Base class for all harness errors."""


class InvalidArgument(TddError, ValueError):
    """A runner or suite was built from missing or malformed arguments."""


class ConfigError(TddError):
    """Configuration file or environment could not be interpreted."""


class EngineError(TddError):
    """The engine could not execute a test.

    The suite cursor is left on the test that was being scheduled and the
    suite is not marked finished.
    """


class WorkerError(EngineError):
    """The isolated worker thread could not be started or joined."""


class CrashGuardError(EngineError):
    """The fault signal handler could not be installed."""


class SuiteExhausted(EngineError):
    """``step()`` was called with no tests left to run."""


class SuiteClosed(EngineError):
    """The suite was used after ``close()``."""
