"""Command dispatch for tddctl CLI."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from tdd.cli.parser import _build_parser, _preprocess_argv


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the ``tddctl`` CLI.

    Args:
        argv: Argument list to parse.  Defaults to ``sys.argv[1:]``.

    Returns:
        Exit code: 0 on success, 1 when tests failed, 2 on usage errors.
    """
    if argv is None:
        argv = sys.argv[1:]

    argv = _preprocess_argv(argv)

    # Late import to allow tests to monkeypatch tdd.cli.cmd_xxx
    import tdd.cli as cli

    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "run":
        return cli.cmd_run(
            target=args.target,
            config_path=args.config,
            abort_on_failure=args.abort_on_failure,
            quiet=args.quiet,
            color=args.color,
            json_mode=args.json,
        )
    if args.cmd == "version":
        return cli.cmd_version(json_mode=args.json)

    parser.error(f"Unknown command: {args.cmd}")
    return 2
