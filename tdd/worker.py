"""Scoped worker: runs one test body on its own short-lived thread.

The thread exists only to sandbox the body. It is always joined before
``run_isolated`` returns and no handle to it survives the call. There is
no timeout; a body that never returns hangs the caller.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from .context import TestContext
from .errors import WorkerError
from .runner import TestBody

logger = logging.getLogger(__name__)


class _Worker:
    """Thread target that keeps whatever escaped the test body."""

    def __init__(self, body: TestBody, ctx: TestContext) -> None:
        self._body = body
        self._ctx = ctx
        self.exception: Optional[BaseException] = None

    def __call__(self) -> None:
        try:
            self._body(self._ctx)
        except BaseException as exc:  # sys.exit() in a body ends only that test
            self.exception = exc


def run_isolated(body: TestBody, ctx: TestContext) -> Optional[BaseException]:
    """Run ``body(ctx)`` on a dedicated thread and block until it finishes.

    Returns:
        The exception that escaped the body, or ``None``.

    Raises:
        WorkerError: the thread could not be started or joined.
    """
    worker = _Worker(body, ctx)
    thread = threading.Thread(target=worker, name=f"tdd-test-{ctx.name}", daemon=True)
    try:
        thread.start()
    except RuntimeError as e:
        raise WorkerError(f"could not start worker thread for {ctx.name}: {e}") from e
    try:
        thread.join()
    except RuntimeError as e:
        raise WorkerError(f"could not join worker thread for {ctx.name}: {e}") from e
    logger.debug("Worker for %s joined", ctx.name)
    return worker.exception
