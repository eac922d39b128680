"""
Documentation summary extraction.

This module locates the XML documentation comment attached to a declaration
and reduces its ``<summary>`` element to at most one short sentence.
"""

import html
import logging
import re
import xml.etree.ElementTree as ET
from typing import List, Optional

from tree_sitter import Node

from codemap.config import (
    COMMENT_NODE,
    DOC_COMMENT_PREFIXES,
    DOC_SUMMARY_ELLIPSIS,
    DOC_SUMMARY_MAX_CHARS,
)

logger = logging.getLogger(__name__)

_SPACE_RE = re.compile(r"\s+")
_TAG_RE = re.compile(r"<[^>]*>")
_SUMMARY_RE = re.compile(r"<summary\b[^>]*>(.*?)</summary\s*>", re.DOTALL | re.IGNORECASE)


def is_doc_comment(comment_text: str) -> bool:
    """Check if a comment is a C# documentation comment.

    Args:
        comment_text: The text content of the comment.

    Returns:
        True for ``///`` line comments and ``/** */`` block comments.
        ``////`` and the empty block ``/**/`` are ordinary comments.
    """
    stripped = comment_text.strip()
    if stripped.startswith("////") or stripped.startswith("/**/"):
        return False
    return any(stripped.startswith(prefix) for prefix in DOC_COMMENT_PREFIXES)


def clean_doc_comment(comment_text: str) -> str:
    """Strip ``///``, ``/**``, ``*/`` and leading ``*`` markers from a doc comment.

    Args:
        comment_text: Raw comment text with delimiters.

    Returns:
        The comment body, one source line per output line.
    """
    cleaned_lines = []
    for line in comment_text.split("\n"):
        stripped = line.strip()
        if stripped.startswith("///"):
            stripped = stripped[3:]
        elif stripped.startswith("/**"):
            stripped = stripped[3:]
        stripped = stripped.strip()
        if stripped.endswith("*/"):
            stripped = stripped[:-2].rstrip()
        if stripped.startswith("*"):
            stripped = stripped[1:].lstrip()
        cleaned_lines.append(stripped)
    return "\n".join(cleaned_lines)


def get_doc_comments(node: Node) -> List[str]:
    """Collect the doc comments directly preceding a declaration node.

    Walks backward through siblings while they are comments, allowing at
    most one line gap between pieces. Ordinary comments inside the run are
    skipped.

    Args:
        node: The declaration node.

    Returns:
        Raw doc comment texts in source order.
    """
    comments = []
    sibling = node.prev_named_sibling
    expected_end_row = node.start_point.row

    while sibling is not None and sibling.type == COMMENT_NODE:
        if expected_end_row - sibling.end_point.row > 1:
            break
        text = sibling.text.decode("utf-8") if sibling.text else ""
        if is_doc_comment(text):
            comments.append(text)
        expected_end_row = sibling.start_point.row
        sibling = sibling.prev_named_sibling

    comments.reverse()
    return comments


def _summary_from_xml(body: str) -> Optional[str]:
    try:
        root = ET.fromstring(f"<doc>{body}</doc>")
    except ET.ParseError:
        match = _SUMMARY_RE.search(body)
        if match is None:
            return None
        logger.debug("Doc comment is not well-formed XML; using raw summary text")
        return html.unescape(match.group(1))

    summary = root.find("summary")
    if summary is None:
        summary = root.find(".//summary")
    if summary is None:
        return None
    return " ".join(summary.itertext())


def truncate_summary(text: str) -> str:
    """Shorten a summary to its first sentence or the character limit.

    If a period occurs within the first 100 characters the text is cut
    through that period. Otherwise text longer than 100 characters is cut to
    100 characters followed by ``...``.
    """
    period = text.find(".")
    if 0 <= period < DOC_SUMMARY_MAX_CHARS:
        return text[: period + 1]
    if len(text) > DOC_SUMMARY_MAX_CHARS:
        return text[:DOC_SUMMARY_MAX_CHARS] + DOC_SUMMARY_ELLIPSIS
    return text


def summarize_doc_text(body: str) -> Optional[str]:
    """Reduce a cleaned doc comment body to its short summary.

    Args:
        body: Doc comment text with comment markers already removed.

    Returns:
        The short summary, or None when there is no non-empty ``<summary>``.
    """
    text = _summary_from_xml(body)
    if text is None:
        return None
    text = _TAG_RE.sub(" ", text)
    text = _SPACE_RE.sub(" ", text).strip()
    if not text:
        return None
    return truncate_summary(text)


def extract_doc_summary(node: Node) -> Optional[str]:
    """Return the short documentation summary of a declaration, or None."""
    comments = get_doc_comments(node)
    if not comments:
        return None
    body = "\n".join(clean_doc_comment(c) for c in comments)
    return summarize_doc_text(body)
