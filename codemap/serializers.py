"""
Text and JSON renderers for project maps.

Both renderers emit the same content: a summary of counts followed by each
file's member outline. Optional member fields are written only when they
carry a value.
"""

import json
from typing import Any, Dict, List, Mapping, Tuple

from core.run_config import OutputFormat
from codemap.models import FileMap, Member, MemberKind, ProjectMap

_INDENT = "  "


# ---------------------------------------------------------------------------
# Text outline
# ---------------------------------------------------------------------------

def format_summary_line(summary: Mapping[str, int]) -> str:
    return (
        f"# Summary: files={summary['files']} namespaces={summary['namespaces']} "
        f"types={summary['types']} methods={summary['methods']}"
    )


def format_member_line(member: Member, depth: int) -> str:
    """Render one outline line for a member at the given depth."""
    kind = member.kind.value
    if member.is_static:
        kind += ":static"
    parts = [f"{_INDENT * depth}[{kind}] {member.signature}"]
    if member.base_types:
        parts.append(" : " + ", ".join(member.base_types))
    if member.attributes:
        parts.append(" [" + ", ".join(member.attributes) + "]")
    if member.line is not None:
        parts.append(f" :{member.line}")
    if member.doc:
        parts.append(f" // {member.doc}")
    return "".join(parts)


def _write_members(lines: List[str], members: Tuple[Member, ...], depth: int) -> None:
    for member in members:
        lines.append(format_member_line(member, depth))
        if member.children:
            _write_members(lines, member.children, depth + 1)


def render_text(project_map: ProjectMap) -> str:
    """Render a project map as an indented text outline.

    Args:
        project_map: The finished project map.

    Returns:
        The complete artifact text.
    """
    lines = [format_summary_line(project_map.to_summary()), ""]
    for file_map in project_map.files:
        lines.append(f"# {file_map.path}")
        _write_members(lines, file_map.members, 1)
        lines.append("")
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Structured JSON
# ---------------------------------------------------------------------------

def member_to_dict(member: Member) -> Dict[str, Any]:
    """Convert a member to a dictionary, omitting empty and default fields."""
    payload: Dict[str, Any] = {
        "kind": member.kind.value,
        "signature": member.signature,
        "line": member.line,
        "static": member.is_static,
        "doc": member.doc,
        "baseTypes": list(member.base_types),
        "attributes": list(member.attributes),
        "children": [member_to_dict(child) for child in member.children],
    }
    return {key: value for key, value in payload.items() if _is_populated(key, value)}


def _is_populated(key: str, value: Any) -> bool:
    if key in ("kind", "signature"):
        return True
    return value not in (None, False, 0, "", [])


def project_to_dict(project_map: ProjectMap) -> Dict[str, Any]:
    return {
        "summary": project_map.to_summary(),
        "files": [
            {
                "path": file_map.path,
                "members": [member_to_dict(m) for m in file_map.members],
            }
            for file_map in project_map.files
        ],
    }


def render_json(project_map: ProjectMap) -> str:
    """Render a project map as an indented JSON document."""
    return json.dumps(project_to_dict(project_map), indent=2, ensure_ascii=False) + "\n"


def member_from_dict(payload: Mapping[str, Any]) -> Member:
    """Rebuild a member from its JSON form.

    Raises:
        ValueError: If the payload lacks ``kind``/``signature`` or names an
            unknown kind.
    """
    if "kind" not in payload or "signature" not in payload:
        raise ValueError("member requires 'kind' and 'signature'")
    return Member(
        kind=MemberKind(payload["kind"]),
        signature=str(payload["signature"]),
        line=payload.get("line"),
        is_static=bool(payload.get("static", False)),
        doc=payload.get("doc"),
        base_types=tuple(payload.get("baseTypes", ())),
        attributes=tuple(payload.get("attributes", ())),
        children=tuple(member_from_dict(c) for c in payload.get("children", ())),
    )


def load_json(text: str) -> Tuple[Dict[str, int], List[FileMap]]:
    """Parse a JSON artifact back into its summary and file maps.

    Args:
        text: Artifact content produced by :func:`render_json`.

    Returns:
        A tuple of (summary, file_maps).

    Raises:
        ValueError: If the document does not have the artifact shape.
    """
    payload = json.loads(text)
    if not isinstance(payload, dict):
        raise ValueError("artifact must be an object")
    files = payload.get("files")
    if not isinstance(files, list):
        raise ValueError("artifact 'files' must be a list")

    file_maps = [
        FileMap(
            path=str(entry["path"]),
            members=tuple(member_from_dict(m) for m in entry.get("members", ())),
        )
        for entry in files
    ]
    return dict(payload.get("summary", {})), file_maps


RENDERERS = {
    OutputFormat.TEXT: render_text,
    OutputFormat.JSON: render_json,
}


def render(project_map: ProjectMap, output_format: OutputFormat) -> str:
    """Render a project map in the requested output format."""
    return RENDERERS[output_format](project_map)
