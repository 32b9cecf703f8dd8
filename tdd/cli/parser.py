"""Argument parser for tddctl CLI."""

from __future__ import annotations

import argparse

from tdd import __version__


def _preprocess_argv(argv: list[str]) -> list[str]:
    """Move global flags (--json, -v/--verbose) in front of the subcommand.

    argparse only accepts parent-parser flags before the subcommand, but
    ``tddctl run mod:suite --json`` reads naturally, so reorder.

    Args:
        argv: Raw argument list (without ``sys.argv[0]``).

    Returns:
        Reordered argument list with global flags moved to the front.
    """
    global_args: list[str] = []
    rest: list[str] = []
    for token in argv:
        if token in ("--json", "-v", "--verbose"):
            global_args.append(token)
        else:
            rest.append(token)
    return global_args + rest


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser with all subcommands."""
    parser = argparse.ArgumentParser(prog="tddctl", description="Run tdd test suites")
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("--json", action="store_true", help="Output machine-parseable JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging on stderr")

    sub = parser.add_subparsers(dest="cmd", required=True)

    # --- run ---
    p_run = sub.add_parser("run", help="Run a suite and print summary statistics")
    p_run.add_argument(
        "target",
        help="module:attr naming a Suite, an iterable of TestRunner, or a callable returning either; "
        "the current directory is added to sys.path before importing",
    )
    p_run.add_argument(
        "--abort-on-failure",
        action="store_true",
        default=None,
        help="Stop scheduling tests after the first failure",
    )
    p_run.add_argument("--quiet", action="store_true", default=None, help="Suppress per-test output")
    p_run.add_argument("--color", action="store_true", default=None, help="Colour per-test output (ANSI)")
    p_run.add_argument("--config", default=None, help="YAML config file")

    # --- version ---
    sub.add_parser("version", help="Print the tdd version")

    return parser
