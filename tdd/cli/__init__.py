"""
tddctl: command line front end for the tdd harness.

Main commands:
- run: import a suite (module:attr), run it, print summary statistics
- version: print the library version

Entry points:
- tddctl: main CLI entry point (installed via pip)
- python -m tdd
- Can also be imported and called programmatically via main(argv)
"""

from __future__ import annotations

from tdd.cli.helpers import _print
from tdd.cli.run_cmds import cmd_run, cmd_version, load_suite
from tdd.cli.dispatch import main

__all__ = [
    "_print",
    "cmd_run",
    "cmd_version",
    "load_suite",
    "main",
]
