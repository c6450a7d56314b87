"""
High-level orchestrator for Go declaration extraction.

This module provides the main entry points for extracting declarations from
a single file or from one package directory.
"""

import logging
import os
from typing import Dict, List, Optional, Tuple

from tree_sitter import Tree

from declextract.config import DEFAULT_ALL_TYPES, GO_EXTENSION, TEST_FILE_SUFFIX
from declextract.models import ParseResult
from declextract.parser import parse_file
from declextract.traversal import DeclarationVisitor

logger = logging.getLogger(__name__)


class ExtractionStats:
    """Statistics for an extraction operation."""

    def __init__(self):
        self.files_processed = 0
        self.records_extracted = 0
        self.lists_extracted = 0

    @classmethod
    def from_result(cls, result: ParseResult, files_processed: int) -> "ExtractionStats":
        stats = cls()
        stats.files_processed = files_processed
        stats.records_extracted = len(result.records)
        stats.lists_extracted = len(result.lists)
        return stats

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "files_processed": self.files_processed,
            "records_extracted": self.records_extracted,
            "lists_extracted": self.lists_extracted,
        }

    def __str__(self) -> str:
        return (
            f"ExtractionStats(processed={self.files_processed}, "
            f"records={self.records_extracted}, lists={self.lists_extracted})"
        )


def is_test_file(file_name: str) -> bool:
    """Check if a file name follows the Go test-file convention."""
    return file_name.endswith(TEST_FILE_SUFFIX)


def discover_go_files(directory: str) -> List[str]:
    """List the non-test Go source files of one package directory.

    Sub-directories are not searched: a Go package is a single directory.

    Args:
        directory: Package directory.

    Returns:
        Sorted list of absolute paths to .go files, excluding *_test.go.
    """
    directory = os.path.abspath(directory)
    go_files = []
    for entry in sorted(os.listdir(directory)):
        path = os.path.join(directory, entry)
        if not os.path.isfile(path):
            continue
        if not entry.endswith(GO_EXTENSION) or is_test_file(entry):
            continue
        go_files.append(path)

    logger.info("Found %d Go files in %s", len(go_files), directory)
    return go_files


def extract_file(
    file_path: str,
    all_types: bool = DEFAULT_ALL_TYPES,
    result: Optional[ParseResult] = None,
) -> ParseResult:
    """Extract declarations from a single Go source file.

    Args:
        file_path: Absolute or relative path to the .go file.
        all_types: Include every eligible declaration, not only explicit ones.
        result: ParseResult to append to; a new one is created if None.

    Returns:
        The populated ParseResult.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a Go source file.
        GoSyntaxError: If the file does not parse cleanly.

    Example:
        >>> result = extract_file("models.go", all_types=True)
        >>> [record.name for record in result.records]
        ['User', 'Order']
    """
    file_path = os.path.abspath(file_path)

    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    if not file_path.endswith(GO_EXTENSION):
        raise ValueError(
            f"File {file_path} is not a Go source file. Expected {GO_EXTENSION}"
        )

    if result is None:
        result = ParseResult(all_types=all_types)
    result.package_dir = os.path.dirname(file_path)

    logger.info("Extracting declarations from %s", file_path)
    tree, source_bytes = parse_file(file_path)
    DeclarationVisitor(result, all_types=all_types).visit(tree, source_bytes, file_path)

    logger.info("Extraction complete: %s", ExtractionStats.from_result(result, 1))
    return result


def extract_directory(
    directory: str,
    all_types: bool = DEFAULT_ALL_TYPES,
    result: Optional[ParseResult] = None,
) -> ParseResult:
    """Extract declarations from every non-test Go file in a package directory.

    All files are parsed before any declaration is visited: a syntax error
    in one file aborts the whole directory and leaves ``result`` untouched.

    Args:
        directory: Package directory to process.
        all_types: Include every eligible declaration, not only explicit ones.
        result: ParseResult to append to; a new one is created if None.

    Returns:
        The populated ParseResult.

    Raises:
        FileNotFoundError: If directory does not exist.
        GoSyntaxError: If any selected file does not parse cleanly.
    """
    directory = os.path.abspath(directory)

    if not os.path.isdir(directory):
        raise FileNotFoundError(f"Directory not found: {directory}")

    go_files = discover_go_files(directory)
    if not go_files:
        logger.warning("No Go files found in %s", directory)

    parsed: List[Tuple[str, Tree, bytes]] = []
    for file_path in go_files:
        tree, source_bytes = parse_file(file_path)
        parsed.append((file_path, tree, source_bytes))

    if result is None:
        result = ParseResult(all_types=all_types)
    result.package_dir = directory

    logger.info("Processing %d Go files from %s", len(parsed), directory)
    visitor = DeclarationVisitor(result, all_types=all_types)
    for file_path, tree, source_bytes in parsed:
        visitor.visit(tree, source_bytes, file_path)

    logger.info("Extraction complete: %s", ExtractionStats.from_result(result, len(parsed)))
    return result


def parse_path(
    source: str,
    all_types: bool = DEFAULT_ALL_TYPES,
    result: Optional[ParseResult] = None,
) -> ParseResult:
    """Extract declarations from a file or a package directory.

    Args:
        source: Path to a .go file or a package directory.
        all_types: Include every eligible declaration, not only explicit ones.
        result: ParseResult to append to; a new one is created if None.

    Returns:
        The populated ParseResult.

    Raises:
        FileNotFoundError: If the source does not exist.
    """
    if os.path.isdir(source):
        return extract_directory(source, all_types=all_types, result=result)
    if os.path.isfile(source):
        return extract_file(source, all_types=all_types, result=result)
    raise FileNotFoundError(f"Source not found: {source}")
