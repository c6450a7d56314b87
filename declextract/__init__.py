"""
Declaration extraction engine.

Tree-sitter-based Go source parser that selects struct and list type
declarations through easyscan directive comments and describes their shape
for the scanner code generator.
"""

from declextract.models import Field, ListDescription, ParseResult, RecordDescription
from declextract.directives import DirectiveState, interpret_comment
from declextract.parser import (
    ExtractionError,
    GoSyntaxError,
    count_error_nodes,
    create_parser,
    parse_bytes,
    parse_file,
)
from declextract.structure import StructureError, extract_list, extract_record
from declextract.traversal import DeclarationVisitor, extract_declarations_from_tree
from declextract.extractor import (
    ExtractionStats,
    discover_go_files,
    extract_directory,
    extract_file,
    parse_path,
)

__all__ = [
    # Data models
    "Field",
    "RecordDescription",
    "ListDescription",
    "ParseResult",
    "ExtractionStats",
    # Directives
    "DirectiveState",
    "interpret_comment",
    # Low-level parsing
    "ExtractionError",
    "GoSyntaxError",
    "create_parser",
    "parse_bytes",
    "parse_file",
    "count_error_nodes",
    # Mid-level extraction
    "StructureError",
    "extract_record",
    "extract_list",
    "DeclarationVisitor",
    "extract_declarations_from_tree",
    # High-level orchestration
    "discover_go_files",
    "extract_file",
    "extract_directory",
    "parse_path",
]
