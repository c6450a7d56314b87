"""
Configuration constants for Go declaration extraction.

Defines the tree-sitter node type strings, the directive vocabulary and the
file conventions used by the extractor.
"""

from typing import Set

# File root node type
SOURCE_FILE_NODE: str = "source_file"

# Package clause node type and its identifier child
PACKAGE_NODE: str = "package_clause"
PACKAGE_IDENTIFIER: str = "package_identifier"

# Comment node type (includes // and /* */)
COMMENT_NODE: str = "comment"

# Declaration group: `type X ...` or `type ( ... )`
TYPE_DECLARATION_NODE: str = "type_declaration"

# Individual type declarations inside a group
TYPE_SPEC_NODES: Set[str] = {
    "type_spec",
    "type_alias",
}

# Declarations whose doc comments never carry directives
FUNCTION_NODES: Set[str] = {
    "function_declaration",
    "method_declaration",
}

# Record shape
STRUCT_NODE: str = "struct_type"
FIELD_LIST_NODE: str = "field_declaration_list"
FIELD_NODE: str = "field_declaration"

# One-dimensional list shapes
LIST_NODES: Set[str] = {
    "slice_type",
    "array_type",
}

# Plain (unqualified) type name
TYPE_IDENTIFIER: str = "type_identifier"

# Directive comment vocabulary
DIRECTIVE_PREFIX: str = "easyscan"
SKIP_DIRECTIVE: str = f"{DIRECTIVE_PREFIX}:skip"
EXPLICIT_DIRECTIVE: str = f"{DIRECTIVE_PREFIX}:explicit"

# Go file conventions
GO_EXTENSION: str = ".go"
TEST_FILE_SUFFIX: str = "_test.go"

# Extraction policy defaults
DEFAULT_ALL_TYPES: bool = False
