"""
High-level orchestrator for API surface mapping.

This module provides the main entry points for mapping single sources,
files, projects and whole directory trees, and for writing the resulting
artifacts.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from core.run_artifacts import write_artifact
from core.run_config import RunConfig
from core.structured_logging import phase_scope
from codemap.counts import count_files
from codemap.discovery import discover_projects
from codemap.errors import ArtifactWriteError, ParseError
from codemap.models import FileMap, ProjectMap, ProjectUnit, RunSummary
from codemap.parser import count_error_nodes, parse_bytes, parse_file
from codemap.serializers import render
from codemap.traversal import map_tree

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of one mapping run."""

    summary: RunSummary = field(default_factory=RunSummary)
    artifacts: List[str] = field(default_factory=list)
    failed_files: List[str] = field(default_factory=list)
    failed_writes: List[str] = field(default_factory=list)

    def to_report(self, config: RunConfig) -> Dict[str, object]:
        return {
            "summary": self.summary.to_dict(),
            "config": config.to_dict(),
            "artifacts": list(self.artifacts),
            "failed_files": list(self.failed_files),
            "failed_writes": list(self.failed_writes),
        }


def _relative_path(file_path: str, project_root: Optional[str]) -> str:
    if project_root is None:
        return os.path.basename(file_path)
    try:
        relative = os.path.relpath(file_path, project_root)
    except ValueError:
        logger.warning(
            "Cannot compute relative path for %s from %s. Using absolute path.",
            file_path,
            project_root,
        )
        relative = file_path
    return relative.replace(os.sep, "/")


def map_source(
    source: bytes,
    file_path: str = "<memory>",
    config: Optional[RunConfig] = None,
) -> Optional[FileMap]:
    """Map C# source bytes held in memory.

    Args:
        source: UTF-8 encoded C# source.
        file_path: Path recorded in the resulting FileMap.
        config: Run configuration; defaults apply when None.

    Returns:
        The FileMap, or None when the source has no included members.

    Raises:
        ParseError: If ``strict_syntax`` is set and the source has syntax errors.

    Example:
        >>> file_map = map_source(b"public enum Status { Active, Inactive }", "Status.cs")
        >>> file_map.members[0].signature
        'Status { Active, Inactive }'
    """
    config = config or RunConfig()
    tree = parse_bytes(source)
    _check_syntax(tree, file_path, config)
    return map_tree(tree, file_path, contextual_visibility=config.contextual_visibility)


def _check_syntax(tree, file_path: str, config: RunConfig) -> None:
    if not tree.root_node.has_error:
        return
    error_count = count_error_nodes(tree)
    if config.strict_syntax:
        raise ParseError(file_path, f"source contains {error_count} syntax error(s)")
    logger.warning(
        "File %s contains syntax errors (%d error nodes); mapping what parsed",
        file_path,
        error_count,
    )


def map_file(
    file_path: str,
    project_root: Optional[str] = None,
    config: Optional[RunConfig] = None,
) -> Optional[FileMap]:
    """Map a single C# source file.

    Args:
        file_path: Absolute or relative path to the .cs file.
        project_root: Directory the recorded path is relative to. If None,
            only the file name is recorded.
        config: Run configuration; defaults apply when None.

    Returns:
        The FileMap, or None when the file has no included members.

    Raises:
        ParseError: If the file cannot be read, decoded, parsed (in strict
            mode) or walked.
    """
    config = config or RunConfig()
    file_path = os.path.abspath(file_path)
    relative_path = _relative_path(file_path, project_root)

    tree, _ = parse_file(file_path)
    _check_syntax(tree, relative_path, config)
    try:
        return map_tree(tree, relative_path, contextual_visibility=config.contextual_visibility)
    except (RecursionError, UnicodeDecodeError, ValueError) as e:
        raise ParseError(relative_path, f"traversal failed: {e}") from e


def map_project(unit: ProjectUnit, config: Optional[RunConfig] = None) -> ProjectMap:
    """Map every source file of a project unit.

    A file that fails to parse is logged and skipped; it does not affect
    the other files. Files with no included members are dropped.

    Args:
        unit: The project unit to map.
        config: Run configuration; defaults apply when None.

    Returns:
        The ProjectMap with files in discovery order.
    """
    config = config or RunConfig()
    project_map = ProjectMap(name=unit.name)

    for file_path in unit.source_files:
        try:
            file_map = map_file(file_path, unit.root, config)
        except ParseError as e:
            logger.error(f"Error parsing {e.path}: {e.message}")
            project_map.failed_files.append(_relative_path(file_path, unit.root))
            continue
        if file_map is not None:
            project_map.files.append(file_map)

    project_map.counts = count_files(project_map.files)
    logger.info(
        f"Mapped {unit.name}: {len(project_map.files)} of {len(unit.source_files)} files"
    )
    return project_map


def write_project(project_map: ProjectMap, config: RunConfig) -> str:
    """Render a project map and write its artifact.

    Returns:
        Path of the written artifact.

    Raises:
        ArtifactWriteError: If the artifact cannot be written.
    """
    content = render(project_map, config.output_format)
    extension = config.output_format.extension
    try:
        return write_artifact(content, config.output_dir, project_map.name, extension)
    except OSError as e:
        target = os.path.join(config.output_dir, f"{project_map.name}.{extension}")
        raise ArtifactWriteError(target, str(e)) from e


def run(root: str, config: Optional[RunConfig] = None) -> RunResult:
    """Map every project under ``root`` and write one artifact per project.

    Projects without any non-empty file produce no artifact. A failed write
    is logged and does not stop the remaining projects.

    Args:
        root: Directory to map.
        config: Run configuration; defaults apply when None.

    Returns:
        RunResult with the run summary, written artifacts and failures.

    Raises:
        FileNotFoundError: If root is not a directory.
    """
    config = config or RunConfig()
    root = os.path.abspath(root)
    if not os.path.isdir(root):
        raise FileNotFoundError(f"Directory not found: {root}")

    result = RunResult()

    with phase_scope("discover"):
        units = discover_projects(root, config.exclude_dirs)

    for unit in units:
        with phase_scope(f"map:{unit.name}"):
            project_map = map_project(unit, config)
        result.failed_files.extend(f"{unit.name}/{path}" for path in project_map.failed_files)

        if not project_map.files:
            logger.info(f"Skipping {unit.name}: no public declarations found")
            continue

        with phase_scope("write"):
            try:
                path = write_project(project_map, config)
            except ArtifactWriteError as e:
                logger.error(f"Failed to write artifact {e.path}: {e.message}")
                result.failed_writes.append(e.path)
                continue

        result.summary.add_project(project_map)
        result.artifacts.append(path)
        logger.info(f"{unit.name}: {len(project_map.files)} files -> {path}")

    logger.info(str(result.summary))
    return result
