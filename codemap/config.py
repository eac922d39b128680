"""
Configuration constants for C# API surface mapping.

Defines the tree-sitter node type strings used by the walker and the
formatters.
"""

from typing import Dict, FrozenSet, Set

# Namespace forms: `namespace A.B { ... }` and `namespace A.B;`
NAMESPACE_NODE: str = "namespace_declaration"
FILE_SCOPED_NAMESPACE_NODE: str = "file_scoped_namespace_declaration"

# Declaration node type -> member kind name
DECLARATION_KIND_MAP: Dict[str, str] = {
    "class_declaration": "Class",
    "interface_declaration": "Interface",
    "record_declaration": "Record",
    "enum_declaration": "Enum",
    "constructor_declaration": "Constructor",
    "method_declaration": "Method",
    "property_declaration": "Property",
}

# Nodes whose named children are walked as if they belonged to the parent
TRANSPARENT_CONTAINERS: Set[str] = {
    "declaration_list",
    "preproc_if",
    "preproc_elif",
    "preproc_else",
    "preproc_region",
}

# Comment node type (covers //, ///, /* */ and /** */)
COMMENT_NODE: str = "comment"

# Documentation comment prefixes
DOC_COMMENT_PREFIXES: tuple = (
    "///",
    "/**",
)

MODIFIER_NODE: str = "modifier"
ATTRIBUTE_LIST_NODE: str = "attribute_list"
ATTRIBUTE_NODE: str = "attribute"
BASE_LIST_NODE: str = "base_list"
PARAMETER_LIST_NODE: str = "parameter_list"
ENUM_MEMBER_LIST_NODE: str = "enum_member_declaration_list"
ENUM_MEMBER_NODE: str = "enum_member_declaration"
PRIMARY_CONSTRUCTOR_BASE_NODE: str = "primary_constructor_base_type"

# Accessibility keywords
ACCESS_MODIFIERS: FrozenSet[str] = frozenset({"public", "internal", "protected", "private"})
INCLUDED_ACCESS: FrozenSet[str] = frozenset({"public", "internal"})

STATIC_MODIFIER: str = "static"

# Bodies where an unmarked declaration is private in C#
PRIVATE_BY_DEFAULT_PARENTS: Set[str] = {"Class", "Record"}

# C# source file extension and project file extension
CS_EXTENSION: str = ".cs"
PROJECT_EXTENSION: str = ".csproj"

# Name used when no project file is found under the root
IMPLICIT_PROJECT_NAME: str = "codebase"

# Doc summary truncation
DOC_SUMMARY_MAX_CHARS: int = 100
DOC_SUMMARY_ELLIPSIS: str = "..."
