"""
Structural extraction for eligible type declarations.

Turns a struct node into a RecordDescription and an array/slice node into a
ListDescription. Members that cannot be resolved are dropped with a warning;
list candidates that cannot be resolved are rejected as a whole.
"""

import logging
from typing import Optional, Set

from tree_sitter import Node

from declextract.config import (
    FIELD_LIST_NODE,
    FIELD_NODE,
    LIST_NODES,
    TYPE_DECLARATION_NODE,
    TYPE_IDENTIFIER,
    TYPE_SPEC_NODES,
)
from declextract.models import Field, ListDescription, RecordDescription

logger = logging.getLogger(__name__)


class StructureError(ValueError):
    """Raised when a declaration's structure cannot be resolved."""


def node_text(node: Node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def extract_field(node: Node, source_bytes: bytes) -> Field:
    """Build a Field from a field_declaration node.

    Only the first name of a multi-name slot (``A, B int``) is kept.

    Raises:
        StructureError: If the slot has no name (embedded field).
    """
    names = node.children_by_field_name("name")
    if not names:
        raise StructureError(
            f"field has no name at line {node.start_point.row + 1}"
        )
    name = node_text(names[0], source_bytes)
    if not name:
        raise StructureError(
            f"field has an empty name at line {node.start_point.row + 1}"
        )

    tag_node = node.child_by_field_name("tag")
    tag = node_text(tag_node, source_bytes) if tag_node is not None else ""
    return Field(name=name, tag=tag)


def extract_record(name: str, struct_node: Node, source_bytes: bytes) -> RecordDescription:
    """Describe a struct declaration.

    Args:
        name: Declared type name.
        struct_node: The struct_type node.
        source_bytes: The raw source file bytes.

    Returns:
        A RecordDescription whose fields follow source order. Unnamed
        members are logged and omitted; the record is kept even if empty.
    """
    record = RecordDescription(name=name)
    field_list = _first_child_of_type(struct_node, FIELD_LIST_NODE)
    if field_list is None:
        return record

    for child in field_list.named_children:
        if child.type != FIELD_NODE:
            continue
        try:
            record.fields.append(extract_field(child, source_bytes))
        except StructureError as e:
            logger.warning("Dropping member of struct %s: %s", name, e)

    logger.debug("Extracted struct %s with %d fields", name, len(record.fields))
    return record


def extract_list(
    name: str,
    list_node: Node,
    source_bytes: bytes,
    declared_types: Set[str],
) -> ListDescription:
    """Describe a one-dimensional array/slice declaration.

    Args:
        name: Declared type name.
        list_node: The slice_type or array_type node.
        source_bytes: The raw source file bytes.
        declared_types: Type names declared at the top level of the same file.

    Returns:
        A ListDescription over the element type.

    Raises:
        StructureError: If the element is not a plain identifier naming a
            type declared in the same file.
    """
    if list_node.type not in LIST_NODES:
        raise StructureError(f"{name} is not an array or slice type")

    element = list_node.child_by_field_name("element")
    if element is None or element.type != TYPE_IDENTIFIER:
        kind = element.type if element is not None else "nothing"
        raise StructureError(f"element of {name} is {kind}, not a plain type name")

    element_name = node_text(element, source_bytes)
    if element_name not in declared_types:
        raise StructureError(
            f"element {element_name} of {name} is not declared in this file"
        )

    return ListDescription(type_name=name, element_name=element_name)


def collect_declared_types(root: Node, source_bytes: bytes) -> Set[str]:
    """Collect type names declared at the top level of a file.

    Args:
        root: The source_file node.
        source_bytes: The raw source file bytes.

    Returns:
        Set of declared type names, including grouped and alias declarations.
    """
    declared: Set[str] = set()
    for child in root.named_children:
        if child.type != TYPE_DECLARATION_NODE:
            continue
        for spec in child.named_children:
            if spec.type not in TYPE_SPEC_NODES:
                continue
            name_node = spec.child_by_field_name("name")
            if name_node is not None:
                declared.add(node_text(name_node, source_bytes))
    return declared


def _first_child_of_type(node: Node, node_type: str) -> Optional[Node]:
    for child in node.named_children:
        if child.type == node_type:
            return child
    return None
