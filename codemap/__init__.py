"""
C# public API surface mapping.

Tree-sitter-based C# parser and member map builder. Produces a compact,
hierarchical outline of the public/internal declarations of a codebase.
"""

from codemap.models import (
    FileMap,
    Member,
    MemberCounts,
    MemberKind,
    ProjectMap,
    ProjectUnit,
    RunSummary,
)
from codemap.errors import ArtifactWriteError, CodeMapError, DiscoveryError, ParseError
from codemap.parser import create_parser, parse_file, parse_bytes, count_error_nodes
from codemap.visibility import is_visible
from codemap.signatures import format_signature
from codemap.doc_summary import extract_doc_summary, summarize_doc_text, truncate_summary
from codemap.traversal import map_tree
from codemap.counts import count_files, count_members
from codemap.serializers import load_json, render, render_json, render_text
from codemap.discovery import discover_projects, discover_source_files, find_project_units
from codemap.mapper import RunResult, map_file, map_project, map_source, run, write_project

__all__ = [
    # Data models
    "FileMap",
    "Member",
    "MemberCounts",
    "MemberKind",
    "ProjectMap",
    "ProjectUnit",
    "RunSummary",
    "RunResult",
    # Errors
    "ArtifactWriteError",
    "CodeMapError",
    "DiscoveryError",
    "ParseError",
    # Low-level parsing
    "create_parser",
    "parse_file",
    "parse_bytes",
    "count_error_nodes",
    # Mapping components
    "is_visible",
    "format_signature",
    "extract_doc_summary",
    "summarize_doc_text",
    "truncate_summary",
    "map_tree",
    "count_files",
    "count_members",
    # Output
    "load_json",
    "render",
    "render_json",
    "render_text",
    # High-level orchestration
    "discover_projects",
    "discover_source_files",
    "find_project_units",
    "map_file",
    "map_project",
    "map_source",
    "run",
    "write_project",
]
