"""Run configuration for API surface mapping.

Settings come from, in increasing priority: built-in defaults, an optional
YAML/JSON config file, ``CODEMAP_*`` environment flags, and command-line
overrides.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "codebase_ast"
DEFAULT_EXCLUDE_DIRS = ("bin", "obj")


class ConfigValidationError(RuntimeError):
    """Raised when a run configuration is invalid."""


class OutputFormat(str, Enum):
    """Artifact formats and their file extensions."""

    TEXT = "text"
    JSON = "json"

    @property
    def extension(self) -> str:
        return "txt" if self is OutputFormat.TEXT else "json"


@dataclass(frozen=True)
class RunConfig:
    """Settings for one mapping run."""

    output_format: OutputFormat = OutputFormat.TEXT
    output_dir: str = DEFAULT_OUTPUT_DIR
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    strict_syntax: bool = False
    contextual_visibility: bool = False

    def with_overrides(self, **overrides: Any) -> "RunConfig":
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if "output_format" in values:
            values["output_format"] = parse_output_format(values["output_format"])
        return replace(self, **values)

    def to_dict(self) -> dict[str, Any]:
        return {
            "output_format": self.output_format.value,
            "output_dir": self.output_dir,
            "exclude_dirs": list(self.exclude_dirs),
            "strict_syntax": self.strict_syntax,
            "contextual_visibility": self.contextual_visibility,
        }


def parse_output_format(value: Any) -> OutputFormat:
    if isinstance(value, OutputFormat):
        return value
    try:
        return OutputFormat(str(value).strip().lower())
    except ValueError as exc:
        allowed = ", ".join(f.value for f in OutputFormat)
        raise ConfigValidationError(
            f"Unknown output format '{value}' (expected one of: {allowed})"
        ) from exc


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _expect_bool(payload: dict[str, Any], key: str, default: bool) -> bool:
    value = payload.get(key, default)
    if not isinstance(value, bool):
        raise ConfigValidationError(f"'{key}' must be true or false")
    return value


def _load_config_payload(path: str) -> dict[str, Any]:
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigValidationError(f"Config file not found: {config_path}")

    text = config_path.read_text(encoding="utf-8")
    try:
        if config_path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigValidationError(f"Failed to parse config at {config_path}: {exc}") from exc

    if payload is None:
        logger.warning("Config file %s is empty; using defaults", config_path)
        return {}
    if not isinstance(payload, dict):
        raise ConfigValidationError(
            f"Config must be an object, got {type(payload).__name__}"
        )
    return payload


def load_run_config(path: str, base: RunConfig | None = None) -> RunConfig:
    """Load and validate a run configuration from a YAML or JSON file.

    Keys missing from the file keep the values of ``base`` (defaults when
    not given). Unknown keys are reported and ignored.
    """
    base = base or RunConfig()
    payload = _load_config_payload(path)

    known = set(base.to_dict())
    unknown = sorted(set(payload) - known)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))

    output_dir = str(payload.get("output_dir", base.output_dir)).strip()
    if not output_dir:
        raise ConfigValidationError("'output_dir' must not be empty")

    exclude_raw = payload.get("exclude_dirs", list(base.exclude_dirs))
    if not isinstance(exclude_raw, list) or not all(isinstance(d, str) for d in exclude_raw):
        raise ConfigValidationError("'exclude_dirs' must be a list of directory names")

    return RunConfig(
        output_format=parse_output_format(payload.get("output_format", base.output_format)),
        output_dir=output_dir,
        exclude_dirs=tuple(d.strip() for d in exclude_raw if d.strip()),
        strict_syntax=_expect_bool(payload, "strict_syntax", base.strict_syntax),
        contextual_visibility=_expect_bool(
            payload, "contextual_visibility", base.contextual_visibility
        ),
    )


def resolve_env_overrides(config: RunConfig) -> RunConfig:
    """Apply ``CODEMAP_STRICT_SYNTAX`` and ``CODEMAP_CONTEXTUAL_VISIBILITY``."""
    return replace(
        config,
        strict_syntax=_env_flag("CODEMAP_STRICT_SYNTAX", default=config.strict_syntax),
        contextual_visibility=_env_flag(
            "CODEMAP_CONTEXTUAL_VISIBILITY", default=config.contextual_visibility
        ),
    )
