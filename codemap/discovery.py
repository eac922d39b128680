"""
Project and source file discovery.

Finds ``.csproj`` project units under a root directory and the ``.cs``
files that belong to each one.
"""

import logging
import os
from typing import Iterable, List, Sequence

from core.run_config import DEFAULT_EXCLUDE_DIRS
from codemap.config import (
    CS_EXTENSION,
    IMPLICIT_PROJECT_NAME,
    PROJECT_EXTENSION,
)
from codemap.errors import DiscoveryError
from codemap.models import ProjectUnit

logger = logging.getLogger(__name__)


def _walk_files(root: str, extension: str, exclude_dirs: Iterable[str]) -> List[str]:
    excluded = set(exclude_dirs)
    found = []
    for current, dirs, files in os.walk(root):
        # Skip hidden directories and build output
        dirs[:] = [d for d in dirs if not d.startswith(".") and d not in excluded]
        for name in files:
            if os.path.splitext(name)[1].lower() == extension:
                found.append(os.path.join(current, name))
    return sorted(found)


def discover_source_files(
    directory: str,
    exclude_dirs: Sequence[str] = DEFAULT_EXCLUDE_DIRS,
) -> List[str]:
    """Recursively discover all C# source files in a directory.

    Args:
        directory: Root directory to search.
        exclude_dirs: Directory names to skip (build output by default).

    Returns:
        Sorted list of absolute paths to .cs files.
    """
    directory = os.path.abspath(directory)
    files = _walk_files(directory, CS_EXTENSION, exclude_dirs)
    logger.debug(f"Found {len(files)} C# files in {directory}")
    return files


def find_project_units(
    root: str,
    exclude_dirs: Sequence[str] = DEFAULT_EXCLUDE_DIRS,
) -> List[ProjectUnit]:
    """Find every ``.csproj`` project under ``root``.

    Args:
        root: Directory to search.
        exclude_dirs: Directory names to skip.

    Returns:
        Project units sorted by project file path.

    Raises:
        FileNotFoundError: If root is not a directory.
        DiscoveryError: If no project file exists under root.
    """
    root = os.path.abspath(root)
    if not os.path.isdir(root):
        raise FileNotFoundError(f"Directory not found: {root}")

    project_files = _walk_files(root, PROJECT_EXTENSION, exclude_dirs)
    if not project_files:
        raise DiscoveryError(f"No {PROJECT_EXTENSION} files found under {root}")

    units = []
    for project_file in project_files:
        project_dir = os.path.dirname(project_file)
        name = os.path.splitext(os.path.basename(project_file))[0]
        units.append(
            ProjectUnit(
                name=name,
                root=project_dir,
                source_files=tuple(discover_source_files(project_dir, exclude_dirs)),
            )
        )
    return units


def discover_projects(
    root: str,
    exclude_dirs: Sequence[str] = DEFAULT_EXCLUDE_DIRS,
) -> List[ProjectUnit]:
    """Discover project units, falling back to one implicit project.

    When no ``.csproj`` exists under root, the whole root is mapped as a
    single project named ``codebase``.
    """
    try:
        units = find_project_units(root, exclude_dirs)
    except DiscoveryError as e:
        logger.warning(f"{e}; scanning the whole directory as one project")
        root = os.path.abspath(root)
        return [
            ProjectUnit(
                name=IMPLICIT_PROJECT_NAME,
                root=root,
                source_files=tuple(discover_source_files(root, exclude_dirs)),
            )
        ]

    logger.info(f"Found {len(units)} project(s) in {os.path.abspath(root)}")
    return units
