"""
Tree-sitter parser initialization and file parsing utilities.

This module provides functions to initialize the C# parser and parse source files.
"""

import codecs
import logging
from typing import Tuple

import tree_sitter_c_sharp as tscsharp
from tree_sitter import Language, Node, Parser, Tree

from codemap.errors import ParseError

# Configure logging
logger = logging.getLogger(__name__)

# Module-level language constant
CSHARP_LANGUAGE = Language(tscsharp.language())


def create_parser() -> Parser:
    """Create and configure a tree-sitter parser for C#.

    Returns:
        A Parser instance configured with the C# language.

    Example:
        >>> parser = create_parser()
        >>> tree = parser.parse(b"public class Foo { }")
    """
    parser = Parser(CSHARP_LANGUAGE)
    logger.debug("Created tree-sitter C# parser")
    return parser


def parse_bytes(source: bytes) -> Tree:
    """Parse raw bytes of C# source code.

    Args:
        source: UTF-8 encoded bytes of C# source code.

    Returns:
        A Tree object representing the parsed syntax tree.

    Raises:
        TypeError: If source is not bytes.

    Example:
        >>> tree = parse_bytes(b"public enum Status { Active }")
        >>> tree.root_node.type
        'compilation_unit'
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")

    parser = create_parser()
    tree = parser.parse(source)

    logger.debug(f"Parsed {len(source)} bytes of C# code")
    return tree


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and MISSING nodes in a parsed tree.

    Args:
        tree: A parsed tree.

    Returns:
        Number of error or missing nodes. Zero for a clean parse.
    """
    if not tree.root_node.has_error:
        return 0

    count = 0
    stack = [tree.root_node]
    while stack:
        node: Node = stack.pop()
        if node.is_error or node.is_missing:
            count += 1
        if node.has_error:
            stack.extend(node.children)
    return count


def parse_file(file_path: str) -> Tuple[Tree, bytes]:
    """Parse a C# source file from disk.

    Args:
        file_path: Path to the .cs file.

    Returns:
        A tuple of (Tree, source_bytes) where:
        - Tree is the parsed syntax tree
        - source_bytes is the raw file content as bytes

    Raises:
        ParseError: If the file cannot be read or is not valid UTF-8.

    Example:
        >>> tree, source = parse_file("Program.cs")
        >>> tree.root_node.type
        'compilation_unit'
    """
    try:
        with open(file_path, "rb") as f:
            source_bytes = f.read()
    except OSError as e:
        raise ParseError(file_path, f"cannot read file: {e}") from e

    if source_bytes.startswith(codecs.BOM_UTF8):
        source_bytes = source_bytes[len(codecs.BOM_UTF8):]

    try:
        source_bytes.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(file_path, f"file is not valid UTF-8: {e}") from e

    tree = parse_bytes(source_bytes)

    logger.debug(f"Successfully parsed file: {file_path}")
    return tree, source_bytes
