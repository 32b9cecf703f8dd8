"""``tddctl run``: load a suite from a module and run it."""

from __future__ import annotations

import importlib
import logging
import os
import sys
from typing import Any, Optional

from tdd.cli.helpers import _print, _print_line
from tdd.config import SuiteConfig, build_reporter, load_config
from tdd.errors import EngineError, TddError
from tdd.runner import TestRunner
from tdd.stats import format_stats
from tdd.suite import Suite

logger = logging.getLogger(__name__)


def _import_target(target: str) -> Any:
    """Resolve ``module:attr`` (attr may be dotted) to a Python object."""
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"target must look like module:attr, got {target!r}")

    obj: Any = importlib.import_module(module_name)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    return obj


def load_suite(target: str, config: SuiteConfig) -> Suite:
    """Build the suite named by ``target``, reporting as ``config`` says.

    The target may be a ``Suite``, an iterable of ``TestRunner``, or a
    zero-argument callable returning either.
    """
    obj = _import_target(target)
    if callable(obj) and not isinstance(obj, (Suite, TestRunner)):
        obj = obj()

    if isinstance(obj, Suite):
        obj.reporter = build_reporter(config)
        obj.quiet = config.quiet
        return obj

    if isinstance(obj, TestRunner):
        runners = [obj]
    else:
        try:
            runners = list(obj)
        except TypeError:
            raise TypeError(f"{target} is not a Suite or an iterable of TestRunner") from None

    suite = Suite.from_config(config)
    suite.add(*runners)
    return suite


def cmd_run(
    target: str,
    *,
    config_path: Optional[str] = None,
    abort_on_failure: Optional[bool] = None,
    quiet: Optional[bool] = None,
    color: Optional[bool] = None,
    json_mode: bool = False,
) -> int:
    """Entry point for ``tddctl run``."""
    try:
        config = load_config(config_path, overrides={
            "abort_on_failure": abort_on_failure,
            "quiet": quiet,
            "color": color,
            "output": "json" if json_mode else None,
        })
    except TddError as e:
        _print({"error": str(e)}, json_mode=json_mode)
        return 2

    # targets resolve against the working directory, as with `python -m`
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        suite = load_suite(target, config)
    except (ImportError, AttributeError, TypeError, ValueError, TddError) as e:
        logger.debug("Failed to load %s", target, exc_info=True)
        _print({"error": f"cannot load {target}: {e}"}, json_mode=json_mode)
        return 2

    try:
        completed = suite.run(abort_on_failure=config.abort_on_failure)
    except EngineError as e:
        logger.debug("Engine failure while running %s", target, exc_info=True)
        _print({"error": f"cannot run {target}: {e}", "ran": suite.cursor}, json_mode=json_mode)
        return 2
    stats = suite.stats()

    if json_mode:
        _print_line({
            "type": "summary",
            "data": {
                "finished": suite.finished,
                "stats": stats.to_dict(),
            },
        })
    else:
        print()
        print(format_stats(stats), end="")
        if suite.crash_count:
            print(f"Suite encountered: {suite.crash_count} fatal memory faults.")

    return 0 if completed and stats.n_fail == 0 else 1


def cmd_version(*, json_mode: bool) -> int:
    from tdd import __version__
    _print({"version": __version__} if json_mode else __version__, json_mode=json_mode)
    return 0
