"""
Syntax-tree traversal and declaration selection.

This module walks a Go syntax tree depth-first, tracks directive comments
and hands each eligible type declaration to the structural extractor.
"""

import logging
from typing import Optional, Set

from tree_sitter import Node, Tree

from declextract.config import (
    COMMENT_NODE,
    DEFAULT_ALL_TYPES,
    FUNCTION_NODES,
    LIST_NODES,
    PACKAGE_IDENTIFIER,
    PACKAGE_NODE,
    SOURCE_FILE_NODE,
    STRUCT_NODE,
    TYPE_DECLARATION_NODE,
    TYPE_SPEC_NODES,
)
from declextract.directives import DirectiveState, interpret_comment
from declextract.models import ParseResult
from declextract.structure import (
    StructureError,
    collect_declared_types,
    extract_list,
    extract_record,
    node_text,
)

logger = logging.getLogger(__name__)


def attached_declaration(node: Node) -> Optional[Node]:
    """Find the declaration a comment documents.

    A comment is attached when it does not trail another node on the same
    line and its run of comments ends directly above (or on the same line
    as) the next non-comment sibling.

    Args:
        node: A comment node.

    Returns:
        The documented sibling node, or None for trailing and free-floating
        comments.
    """
    prev = node.prev_named_sibling
    if (
        prev is not None
        and prev.type != COMMENT_NODE
        and prev.end_point.row == node.start_point.row
    ):
        return None

    current = node
    sibling = node.next_named_sibling
    while sibling is not None and sibling.type == COMMENT_NODE:
        if sibling.start_point.row - current.end_point.row > 1:
            return None
        current = sibling
        sibling = sibling.next_named_sibling

    if sibling is None or sibling.start_point.row - current.end_point.row > 1:
        return None
    return sibling


def is_attached_comment(node: Node) -> bool:
    """Check if a comment belongs to the declaration that follows it."""
    return attached_declaration(node) is not None


class DeclarationVisitor:
    """Depth-first walker that fills a ParseResult.

    Only four node kinds are acted upon: the package clause, comments,
    type declaration groups and the type specs inside them. Everything else
    (functions, methods, var/const/import groups) is not entered.
    """

    def __init__(self, result: ParseResult, all_types: bool = DEFAULT_ALL_TYPES) -> None:
        self.result = result
        self.all_types = all_types
        self.state = DirectiveState()
        self._source_bytes = b""
        self._declared_types: Set[str] = set()
        self._file_path = "<memory>"

    def visit(self, tree: Tree, source_bytes: bytes, file_path: str = "<memory>") -> ParseResult:
        """Walk one parsed file.

        Args:
            tree: The parsed syntax tree.
            source_bytes: The raw source file bytes.
            file_path: Path used in diagnostics.

        Returns:
            The ParseResult this visitor appends to.
        """
        self._source_bytes = source_bytes
        self._declared_types = collect_declared_types(tree.root_node, source_bytes)
        self._file_path = file_path
        self.state.reset()
        self._visit_node(tree.root_node)
        return self.result

    def _visit_node(self, node: Node) -> None:
        if node.type in (SOURCE_FILE_NODE, TYPE_DECLARATION_NODE):
            for child in node.named_children:
                self._visit_node(child)
        elif node.type == PACKAGE_NODE:
            self._handle_package(node)
        elif node.type == COMMENT_NODE:
            self._handle_comment(node)
        elif node.type in TYPE_SPEC_NODES:
            self._handle_type_spec(node)

    def _handle_package(self, node: Node) -> None:
        for child in node.named_children:
            if child.type == PACKAGE_IDENTIFIER:
                self.result.set_package(node_text(child, self._source_bytes))
                return

    def _handle_comment(self, node: Node) -> None:
        target = attached_declaration(node)
        # Function and method docs never carry directives.
        if target is None or target.type in FUNCTION_NODES:
            return
        self.state.merge(interpret_comment(node_text(node, self._source_bytes)))

    def _handle_type_spec(self, node: Node) -> None:
        try:
            if self.state.includes(self.all_types):
                self._extract(node)
        finally:
            # Directives apply to exactly one type declaration.
            self.state.reset()

    def _extract(self, node: Node) -> None:
        name_node = node.child_by_field_name("name")
        type_node = node.child_by_field_name("type")
        if name_node is None or type_node is None:
            return
        name = node_text(name_node, self._source_bytes)

        if type_node.type == STRUCT_NODE:
            logger.info("Struct type %s in %s", name, self._file_path)
            self.result.add_record(extract_record(name, type_node, self._source_bytes))
        elif type_node.type in LIST_NODES:
            logger.info("List type %s in %s", name, self._file_path)
            try:
                list_desc = extract_list(
                    name, type_node, self._source_bytes, self._declared_types
                )
            except StructureError as e:
                logger.warning("Skipping list type %s in %s: %s", name, self._file_path, e)
                return
            self.result.add_list(list_desc)


def extract_declarations_from_tree(
    tree: Tree,
    source_bytes: bytes,
    result: Optional[ParseResult] = None,
    all_types: bool = DEFAULT_ALL_TYPES,
    file_path: str = "<memory>",
) -> ParseResult:
    """Extract all selected declarations from a parsed Go tree.

    This is the main entry point for in-memory extraction.

    Args:
        tree: The parsed syntax tree.
        source_bytes: The raw source file bytes.
        result: ParseResult to append to; a new one is created if None.
        all_types: Include every eligible declaration, not only explicit ones.
        file_path: Path used in diagnostics.

    Returns:
        The populated ParseResult.
    """
    if result is None:
        result = ParseResult(all_types=all_types)
    visitor = DeclarationVisitor(result, all_types=all_types)
    visitor.visit(tree, source_bytes, file_path)
    return result
