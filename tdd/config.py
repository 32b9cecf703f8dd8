"""Suite configuration: YAML file, environment overrides, reporter factory.

Priority (highest first):
  1. explicit overrides passed by the caller (CLI flags)
  2. environment: TDD_ABORT_ON_FAILURE, TDD_QUIET, TDD_COLOR, TDD_OUTPUT,
     and NO_COLOR which turns colour off
  3. YAML config file
  4. dataclass defaults
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional, TextIO

import yaml

from .errors import ConfigError
from .implementations import ConsoleReporter, JsonReporter
from .interfaces import ReporterInterface

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("text", "json")

_ENV_KEYS = {
    "TDD_ABORT_ON_FAILURE": "abort_on_failure",
    "TDD_QUIET": "quiet",
    "TDD_COLOR": "color",
    "TDD_OUTPUT": "output",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass
class SuiteConfig:
    """How a suite runs and reports."""
    abort_on_failure: bool = False
    quiet: bool = False
    color: bool = False
    output: str = "text"           # "text" or "json"

    def __post_init__(self) -> None:
        if self.output not in OUTPUT_FORMATS:
            raise ConfigError(f"output must be one of {', '.join(OUTPUT_FORMATS)}, got {self.output!r}")


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"{key}: expected a boolean, got {value!r}")


def _coerce(values: Mapping[str, Any]) -> dict[str, Any]:
    known = {f.name for f in fields(SuiteConfig)}
    out: dict[str, Any] = {}
    for key, value in values.items():
        if key not in known:
            raise ConfigError(f"unknown config key: {key}")
        if key == "output":
            out[key] = str(value).strip().lower()
        else:
            out[key] = _parse_bool(key, value)
    return out


def load_config_file(path: str) -> dict[str, Any]:
    """Parse a YAML config file into validated keyword values."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config file (expected mapping): {path}")
    return _coerce(data)


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
    """Config values set through environment variables."""
    env = os.environ if environ is None else environ
    raw: dict[str, Any] = {}
    for var, key in _ENV_KEYS.items():
        if var in env:
            raw[key] = env[var]
    values = _coerce(raw)
    if "NO_COLOR" in env:
        values["color"] = False
    return values


def load_config(
    path: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SuiteConfig:
    """Resolve a ``SuiteConfig`` from file, environment and explicit overrides.

    ``None`` values in ``overrides`` are ignored so argparse defaults can be
    passed straight through.
    """
    config = SuiteConfig()
    if path:
        config = replace(config, **load_config_file(path))
        logger.debug("Loaded config from %s", path)
    config = replace(config, **env_overrides(environ))
    if overrides:
        explicit = {k: v for k, v in overrides.items() if v is not None}
        config = replace(config, **_coerce(explicit))
    return config


def build_reporter(config: SuiteConfig, stream: Optional[TextIO] = None) -> ReporterInterface:
    """Reporter matching ``config.output``."""
    if config.output == "json":
        return JsonReporter(stream=stream)
    return ConsoleReporter(stream=stream, color=config.color)
