"""Registration records pairing a test body with its name and description."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .context import TestContext
from .errors import InvalidArgument

BENCH_PREFIX = "bench_"

TestBody = Callable[[TestContext], object]


@dataclass(frozen=True)
class TestRunner:
    """A named, registered test body.

    ``name`` identifies the test in reports and stats. A name starting with
    ``bench_`` makes the engine time the body. ``description`` is free text
    and is never ``None``.
    """
    __test__ = False  # not a pytest test class

    body: TestBody
    name: str
    description: Optional[str] = ""

    def __post_init__(self) -> None:
        if self.body is None or not callable(self.body):
            raise InvalidArgument("test body must be callable")
        if not isinstance(self.name, str) or not self.name:
            raise InvalidArgument("test name must be a non-empty string")
        if self.description is None:
            object.__setattr__(self, "description", "")
        elif not isinstance(self.description, str):
            object.__setattr__(self, "description", str(self.description))

    @property
    def is_benchmark(self) -> bool:
        return self.name.startswith(BENCH_PREFIX)


def runner(name: Optional[str] = None, description: Optional[str] = None):
    """Decorator building a ``TestRunner`` from a test function.

    The function's ``__name__`` is used when ``name`` is omitted::

        @runner(description="Produces an error.")
        def test_errfunc(t):
            t.record_error("a non-critical error occurred.")
    """
    def wrap(fn: TestBody) -> TestRunner:
        return TestRunner(fn, name or getattr(fn, "__name__", ""), description)
    return wrap
