#!/usr/bin/env python3
"""
Command-line entry point for C# public API surface mapping.

Discovers .csproj projects under a root directory (or treats the whole
directory as one project), maps each project's public/internal declarations
and writes one artifact per project.

Usage:
    python run_codemap.py ../MyRepo
    python run_codemap.py ../MyRepo --format json --output-dir out/api
    python run_codemap.py ../MyRepo --config codemap.yml --report-dir out/reports
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from core.run_artifacts import write_run_report
from core.run_config import (
    ConfigValidationError,
    OutputFormat,
    RunConfig,
    load_run_config,
    resolve_env_overrides,
)
from core.structured_logging import configure_structured_logging, set_run_id

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="C# Public API Surface Mapper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_codemap.py ../MyRepo\n"
            "  python run_codemap.py ../MyRepo --format json --output-dir out/api\n"
        ),
    )

    parser.add_argument(
        "root",
        nargs="?",
        default=os.getcwd(),
        help="Directory to map. Default: the current directory.",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=[f.value for f in OutputFormat],
        default=None,
        help="Artifact format. Default: text",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for the artifacts. Default: ./codebase_ast",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional YAML or JSON run configuration file.",
    )
    parser.add_argument(
        "--strict-syntax",
        action="store_true",
        default=None,
        help="Skip files whose syntax tree contains errors instead of mapping them.",
    )
    parser.add_argument(
        "--contextual-visibility",
        action="store_true",
        default=None,
        help="Treat unmarked members of classes and records as private.",
    )
    parser.add_argument(
        "--report-dir",
        default=None,
        help="If set, write a JSON run report into this directory.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging.",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> RunConfig:
    """Combine defaults, config file, environment flags and CLI overrides."""
    config = RunConfig(output_dir=os.path.join(os.getcwd(), "codebase_ast"))
    if args.config:
        config = load_run_config(args.config, base=config)
    config = resolve_env_overrides(config)
    return config.with_overrides(
        output_format=args.output_format,
        output_dir=args.output_dir,
        strict_syntax=args.strict_syntax,
        contextual_visibility=args.contextual_visibility,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the mapper."""
    args = parse_args(argv)
    configure_structured_logging(logging.DEBUG if args.verbose else logging.INFO)
    run_id = set_run_id()

    from codemap.mapper import run

    try:
        config = build_config(args)
        logger.info(f"Root directory   : {os.path.abspath(args.root)}")
        logger.info(f"Output format    : {config.output_format.value}")
        logger.info(f"Output directory : {os.path.abspath(config.output_dir)}")

        result = run(args.root, config)
    except FileNotFoundError as e:
        logger.error(f"File error: {e}")
        return 1
    except ConfigValidationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    if args.report_dir:
        try:
            path = write_run_report(result.to_report(config), run_id, args.report_dir)
            logger.info(f"Run report written to {path}")
        except OSError as e:
            logger.error(f"Failed to write run report: {e}")

    print(result.summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
