"""
Canonical one-line signatures for C# declarations.

Each member kind has one formatter. Verbatim clauses (parameter lists,
return and property types) are copied from the source with whitespace runs
collapsed so the result always fits on a single line.
"""

import re
from typing import Callable, Dict, List, Optional, Tuple

from tree_sitter import Node

from codemap.config import (
    ATTRIBUTE_LIST_NODE,
    ATTRIBUTE_NODE,
    BASE_LIST_NODE,
    COMMENT_NODE,
    ENUM_MEMBER_LIST_NODE,
    ENUM_MEMBER_NODE,
    PARAMETER_LIST_NODE,
    PRIMARY_CONSTRUCTOR_BASE_NODE,
)
from codemap.models import MemberKind

_SPACE_RE = re.compile(r"\s+")


def node_text(node: Optional[Node]) -> str:
    """Return the source text of a node on a single line."""
    if node is None or not node.text:
        return ""
    return _SPACE_RE.sub(" ", node.text.decode("utf-8")).strip()


def _name(node: Node) -> str:
    return _SPACE_RE.sub("", node_text(node.child_by_field_name("name")))


def _parameter_list(node: Node) -> Optional[Node]:
    params = node.child_by_field_name("parameters")
    if params is not None:
        return params
    for child in node.children:
        if child.type == PARAMETER_LIST_NODE:
            return child
    return None


def format_namespace(node: Node) -> str:
    return _name(node)


def format_type_name(node: Node) -> str:
    """Class and interface signatures are the bare identifier."""
    return _name(node)


def format_record(node: Node) -> str:
    return _name(node) + node_text(_parameter_list(node))


def enum_member_names(node: Node) -> List[str]:
    """Enum member identifiers in declaration order."""
    body = node.child_by_field_name("body")
    if body is None:
        body = next((c for c in node.children if c.type == ENUM_MEMBER_LIST_NODE), None)
    if body is None:
        return []
    names = []
    for child in body.named_children:
        if child.type != ENUM_MEMBER_NODE:
            continue
        name = _name(child)
        if name:
            names.append(name)
    return names


def format_enum(node: Node) -> str:
    names = enum_member_names(node)
    if not names:
        return f"{_name(node)} {{ }}"
    return f"{_name(node)} {{ {', '.join(names)} }}"


def format_constructor(node: Node) -> str:
    return _name(node) + node_text(_parameter_list(node))


def format_method(node: Node) -> str:
    returns = node.child_by_field_name("returns")
    if returns is None:
        # Older grammar releases label the return type as "type".
        returns = node.child_by_field_name("type")
    return f"{node_text(returns)} {_name(node)}{node_text(_parameter_list(node))}"


def format_property(node: Node) -> str:
    return f"{node_text(node.child_by_field_name('type'))} {_name(node)}"


SIGNATURE_FORMATTERS: Dict[MemberKind, Callable[[Node], str]] = {
    MemberKind.NAMESPACE: format_namespace,
    MemberKind.CLASS: format_type_name,
    MemberKind.INTERFACE: format_type_name,
    MemberKind.RECORD: format_record,
    MemberKind.ENUM: format_enum,
    MemberKind.CONSTRUCTOR: format_constructor,
    MemberKind.METHOD: format_method,
    MemberKind.PROPERTY: format_property,
}


def format_signature(kind: MemberKind, node: Node) -> str:
    """Format the canonical signature of a declaration node.

    Args:
        kind: Member kind the node was classified as.
        node: The declaration node.

    Returns:
        Single-line signature text.
    """
    return SIGNATURE_FORMATTERS[kind](node)


def extract_base_types(node: Node) -> Tuple[str, ...]:
    """Return base-list entries of a type declaration in declaration order.

    Primary-constructor arguments (``: Base(x)``) are dropped, generic
    arguments are kept.
    """
    for child in node.children:
        if child.type != BASE_LIST_NODE:
            continue
        names = []
        for entry in child.named_children:
            if entry.type == COMMENT_NODE or entry.type == "argument_list":
                continue
            if entry.type == PRIMARY_CONSTRUCTOR_BASE_NODE:
                entry = entry.child_by_field_name("type") or entry.named_children[0]
            text = node_text(entry)
            if text:
                names.append(text)
        return tuple(names)
    return ()


def extract_attributes(node: Node) -> Tuple[str, ...]:
    """Return attribute names applied to a declaration, arguments omitted."""
    names = []
    for child in node.children:
        if child.type != ATTRIBUTE_LIST_NODE:
            continue
        for attribute in child.named_children:
            if attribute.type != ATTRIBUTE_NODE:
                continue
            name = _SPACE_RE.sub("", node_text(attribute.child_by_field_name("name")))
            if name:
                names.append(name)
    return tuple(names)
