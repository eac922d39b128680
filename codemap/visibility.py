"""
Visibility filtering for C# declarations.

Only the public/internal surface of a codebase ends up in the map.
"""

from typing import Iterable, List, Optional

from tree_sitter import Node

from codemap.config import (
    ACCESS_MODIFIERS,
    INCLUDED_ACCESS,
    MODIFIER_NODE,
    PRIVATE_BY_DEFAULT_PARENTS,
    STATIC_MODIFIER,
)


def get_modifiers(node: Node) -> List[str]:
    """Return the modifier keywords of a declaration node in source order."""
    return [
        child.text.decode("utf-8").strip()
        for child in node.children
        if child.type == MODIFIER_NODE and child.text
    ]


def is_visible(modifiers: Iterable[str]) -> bool:
    """Decide whether a declaration with these modifiers is part of the surface.

    A declaration is included when it carries no accessibility modifier or
    when ``public`` or ``internal`` is present. ``private``, ``protected`` and
    ``private protected`` are excluded; ``protected internal`` is included.

    Args:
        modifiers: Modifier keywords of the declaration.

    Returns:
        True if the declaration should be included.
    """
    access = {m for m in modifiers if m in ACCESS_MODIFIERS}
    if not access:
        return True
    if "private" in access:
        return False
    return bool(access & INCLUDED_ACCESS)


def is_visible_in_context(
    modifiers: Iterable[str],
    parent_kind: Optional[str],
    contextual: bool = False,
) -> bool:
    """Apply :func:`is_visible`, optionally treating unmarked nested members as private.

    Args:
        modifiers: Modifier keywords of the declaration.
        parent_kind: Kind name of the enclosing declaration, or None at file
            or namespace level.
        contextual: When True, an unmarked declaration directly inside a
            class or record body is excluded.
    """
    modifiers = list(modifiers)
    if contextual and parent_kind in PRIVATE_BY_DEFAULT_PARENTS:
        if not any(m in ACCESS_MODIFIERS for m in modifiers):
            return False
    return is_visible(modifiers)


def is_static(modifiers: Iterable[str]) -> bool:
    return STATIC_MODIFIER in modifiers
