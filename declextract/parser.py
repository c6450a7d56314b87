"""
Tree-sitter parser initialization and file parsing utilities.

This module provides functions to initialize the Go parser, parse source
files and detect syntax errors.
"""

import logging
from typing import Tuple
import tree_sitter_go as tsgo
from tree_sitter import Language, Node, Parser, Tree

# Configure logging
logger = logging.getLogger(__name__)

# Module-level language constant
GO_LANGUAGE = Language(tsgo.language())


class ExtractionError(RuntimeError):
    """Raised when an input cannot be turned into declarations at all."""


class GoSyntaxError(ExtractionError):
    """Raised when a Go source file does not parse cleanly.

    Attributes:
        path: The offending file.
        error_count: Number of ERROR/MISSING nodes in its tree.
    """

    def __init__(self, path: str, error_count: int) -> None:
        super().__init__(f"Syntax error in {path} ({error_count} error nodes)")
        self.path = path
        self.error_count = error_count


def create_parser() -> Parser:
    """Create and configure a tree-sitter parser for Go.

    Returns:
        A Parser instance configured with the Go language.

    Example:
        >>> parser = create_parser()
        >>> tree = parser.parse(b"package main")
    """
    parser = Parser(GO_LANGUAGE)
    logger.debug("Created tree-sitter Go parser")
    return parser


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and MISSING nodes in a parsed tree.

    Args:
        tree: A parsed tree.

    Returns:
        Number of error nodes; 0 for a clean parse.
    """
    count = 0
    stack: list[Node] = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            count += 1
        if node.has_error:
            stack.extend(node.children)
    return count


def parse_bytes(source: bytes) -> Tree:
    """Parse raw bytes of Go source code.

    Args:
        source: UTF-8 encoded bytes of Go source code.

    Returns:
        A Tree object representing the parsed syntax tree. The tree may
        contain error nodes; callers decide whether that is fatal.

    Raises:
        TypeError: If source is not bytes.

    Example:
        >>> tree = parse_bytes(b"package main")
        >>> tree.root_node.type
        'source_file'
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")

    parser = create_parser()
    tree = parser.parse(source)

    logger.debug("Parsed %d bytes of Go code", len(source))
    return tree


def parse_file(file_path: str) -> Tuple[Tree, bytes]:
    """Parse a Go source file from disk, rejecting files with syntax errors.

    Args:
        file_path: Path to the .go file.

    Returns:
        A tuple of (Tree, source_bytes).

    Raises:
        FileNotFoundError: If the file does not exist.
        OSError: If the file cannot be read.
        GoSyntaxError: If the file contains syntax errors.
    """
    try:
        with open(file_path, "rb") as f:
            source_bytes = f.read()
    except FileNotFoundError:
        logger.error("File not found: %s", file_path)
        raise
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise

    tree = parse_bytes(source_bytes)

    if tree.root_node.has_error:
        error_count = count_error_nodes(tree)
        logger.error("File %s contains syntax errors (%d error nodes)", file_path, error_count)
        raise GoSyntaxError(file_path, error_count)

    logger.debug("Successfully parsed file: %s", file_path)
    return tree, source_bytes
