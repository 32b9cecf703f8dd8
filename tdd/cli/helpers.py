"""Shared utilities for tddctl CLI commands."""

from __future__ import annotations

import json
from typing import Any


def _print(obj: Any, *, json_mode: bool) -> None:
    if json_mode:
        print(json.dumps(obj, indent=2, sort_keys=True))
    else:
        if isinstance(obj, str):
            print(obj)
        else:
            print(json.dumps(obj, indent=2, sort_keys=True))


def _print_line(obj: Any) -> None:
    """Single-line JSON, for output interleaved with JSON-lines reporters."""
    print(json.dumps(obj, sort_keys=True))
