"""
Syntax tree traversal and member tree construction.

This module walks a parsed C# file in source order and builds the
hierarchical member map. Each walker function returns the finished subtree
for the nodes it visits, so no parent stack is kept during traversal.
"""

import logging
from typing import List, Optional, Tuple

from tree_sitter import Node, Tree

from codemap.config import (
    DECLARATION_KIND_MAP,
    FILE_SCOPED_NAMESPACE_NODE,
    NAMESPACE_NODE,
    TRANSPARENT_CONTAINERS,
)
from codemap.doc_summary import extract_doc_summary
from codemap.models import FileMap, Member, MemberKind
from codemap.signatures import (
    extract_attributes,
    extract_base_types,
    format_signature,
)
from codemap.visibility import get_modifiers, is_static, is_visible_in_context

logger = logging.getLogger(__name__)

_BODY_TYPES = ("declaration_list",)
_KINDS_WITH_BASE_TYPES = (MemberKind.CLASS, MemberKind.INTERFACE)


def get_declaration_kind(node: Node) -> Optional[MemberKind]:
    """Classify a node as one of the mapped member kinds, or None."""
    if node.type in (NAMESPACE_NODE, FILE_SCOPED_NAMESPACE_NODE):
        return MemberKind.NAMESPACE
    kind_name = DECLARATION_KIND_MAP.get(node.type)
    if kind_name is None:
        return None
    return MemberKind(kind_name)


def _get_body(node: Node) -> Optional[Node]:
    body = node.child_by_field_name("body")
    if body is not None:
        return body
    for child in node.children:
        if child.type in _BODY_TYPES:
            return child
    return None


def build_namespace(node: Node, children: Tuple[Member, ...]) -> Member:
    """Build a namespace member; both namespace forms share this shape."""
    return Member(
        kind=MemberKind.NAMESPACE,
        signature=format_signature(MemberKind.NAMESPACE, node),
        line=node.start_point.row + 1,
        children=children,
    )


def build_member(
    node: Node,
    kind: MemberKind,
    modifiers: List[str],
    children: Tuple[Member, ...] = (),
) -> Member:
    """Build a member for an included type or type member declaration.

    Args:
        node: The declaration node.
        kind: Member kind of the node.
        modifiers: Modifier keywords already read from the node.
        children: Finished child members (only for nesting kinds).

    Returns:
        The constructed Member.
    """
    base_types: Tuple[str, ...] = ()
    if kind in _KINDS_WITH_BASE_TYPES:
        base_types = extract_base_types(node)

    return Member(
        kind=kind,
        signature=format_signature(kind, node),
        line=node.start_point.row + 1,
        is_static=is_static(modifiers),
        doc=extract_doc_summary(node),
        base_types=base_types,
        attributes=extract_attributes(node),
        children=children,
    )


def walk_declaration(
    node: Node,
    kind: MemberKind,
    parent_kind: Optional[MemberKind],
    contextual_visibility: bool = False,
) -> Optional[Member]:
    """Build the member subtree for one type or type member declaration.

    Returns None when the declaration is not visible; its whole subtree is
    skipped in that case.
    """
    modifiers = get_modifiers(node)
    parent_name = parent_kind.value if parent_kind is not None else None
    if not is_visible_in_context(modifiers, parent_name, contextual=contextual_visibility):
        logger.debug(
            f"Skipping non-public {kind.value} at line {node.start_point.row + 1}"
        )
        return None

    children: Tuple[Member, ...] = ()
    if kind.can_nest:
        body = _get_body(node)
        if body is not None:
            children = walk_children(body, kind, contextual_visibility)

    return build_member(node, kind, modifiers, children)


def walk_children(
    container: Node,
    parent_kind: Optional[MemberKind],
    contextual_visibility: bool = False,
) -> Tuple[Member, ...]:
    """Walk the named children of a container node in source order.

    Args:
        container: A compilation unit, namespace body, type body or other
            transparent container.
        parent_kind: Kind of the nearest enclosing mapped declaration.
        contextual_visibility: Treat unmarked class/record members as private.

    Returns:
        Members for the included declarations found directly in the
        container, each with its own subtree.
    """
    members: List[Member] = []
    named = container.named_children

    for index, child in enumerate(named):
        if child.type == FILE_SCOPED_NAMESPACE_NODE:
            # Everything after `namespace X;` belongs to X. Older grammar
            # releases nest those declarations inside the namespace node.
            children = walk_children(child, MemberKind.NAMESPACE, contextual_visibility)
            for sibling in named[index + 1:]:
                children += walk_node(sibling, MemberKind.NAMESPACE, contextual_visibility)
            members.append(build_namespace(child, children))
            break
        members.extend(walk_node(child, parent_kind, contextual_visibility))

    return tuple(members)


def walk_node(
    node: Node,
    parent_kind: Optional[MemberKind],
    contextual_visibility: bool = False,
) -> Tuple[Member, ...]:
    """Map one node: a namespace, a declaration or a transparent container."""
    if node.type == NAMESPACE_NODE:
        body = _get_body(node)
        children = (
            walk_children(body, MemberKind.NAMESPACE, contextual_visibility)
            if body is not None
            else ()
        )
        return (build_namespace(node, children),)

    kind = get_declaration_kind(node)
    if kind is not None and kind is not MemberKind.NAMESPACE:
        member = walk_declaration(node, kind, parent_kind, contextual_visibility)
        return (member,) if member is not None else ()

    if node.type in TRANSPARENT_CONTAINERS:
        return walk_children(node, parent_kind, contextual_visibility)

    return ()


def map_tree(
    tree: Tree,
    file_path: str,
    contextual_visibility: bool = False,
) -> Optional[FileMap]:
    """Build the member map of a parsed C# file.

    This is the main entry point for traversal.

    Args:
        tree: The parsed syntax tree.
        file_path: File path relative to the project root.
        contextual_visibility: Treat unmarked class/record members as private.

    Returns:
        The FileMap, or None when the file has no included top-level members.
    """
    members = walk_children(tree.root_node, None, contextual_visibility)
    if not members:
        logger.debug(f"No public declarations in {file_path}")
        return None
    logger.debug(f"Mapped {len(members)} top-level members from {file_path}")
    return FileMap(path=file_path, members=members)
