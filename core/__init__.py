"""Core shared configuration, logging and artifact utilities."""

from core.structured_logging import (
    configure_structured_logging,
    get_run_id,
    phase_scope,
    set_run_id,
)
from core.run_config import (
    ConfigValidationError,
    OutputFormat,
    RunConfig,
    load_run_config,
    parse_output_format,
    resolve_env_overrides,
)
from core.run_artifacts import write_artifact, write_run_report, write_text_atomic

__all__ = [
    "configure_structured_logging",
    "get_run_id",
    "phase_scope",
    "set_run_id",
    "ConfigValidationError",
    "OutputFormat",
    "RunConfig",
    "load_run_config",
    "parse_output_format",
    "resolve_env_overrides",
    "write_artifact",
    "write_run_report",
    "write_text_atomic",
]
