"""Artifact and run report writers."""

from __future__ import annotations

import json
import os
import tempfile
from datetime import datetime, timezone
from typing import Any


def write_text_atomic(path: str, content: str) -> str:
    """Write ``content`` to ``path`` through a temporary file in the same directory.

    The target is replaced only after the full content is on disk, so a
    failed write never leaves a truncated file behind.
    """
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=".codemap-", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
    return path


def write_artifact(content: str, output_dir: str, project_name: str, extension: str) -> str:
    """Write one project artifact named ``<project_name>.<extension>``."""
    path = os.path.join(output_dir, f"{project_name}.{extension}")
    return write_text_atomic(path, content)


def write_run_report(
    report: dict[str, Any],
    run_id: str,
    output_dir: str = "codebase_ast/run_reports",
) -> str:
    """Write a JSON run report and return its path."""
    payload = dict(report)
    payload.setdefault("run_id", run_id)
    payload.setdefault("timestamp_utc", datetime.now(timezone.utc).isoformat())
    path = os.path.join(output_dir, f"{run_id}.json")
    return write_text_atomic(path, json.dumps(payload, indent=2, sort_keys=True) + "\n")
