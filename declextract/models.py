"""
Data models for extracted Go declarations.
"""

import logging
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


@dataclass
class Field:
    """A named member of a record.

    Attributes:
        name: Member identifier. Never empty.
        tag: Raw tag literal text, including its quotes, or "" when absent.
    """

    name: str
    tag: str = ""


@dataclass
class RecordDescription:
    """A struct declaration selected for scanning.

    Attributes:
        name: Declared type identifier.
        fields: Members in source declaration order. May be empty.
    """

    name: str
    fields: List[Field] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ListDescription:
    """A one-dimensional array/slice alias over a locally declared type.

    Attributes:
        type_name: Declared alias identifier.
        element_name: Identifier of the element type.
    """

    type_name: str
    element_name: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ParseResult:
    """Accumulated extraction output handed to the code generator.

    Records and lists are appended in traversal order with no deduplication.
    The package name follows last-write-wins.
    """

    package_name: str = ""
    package_dir: str = ""
    all_types: bool = False
    records: List[RecordDescription] = field(default_factory=list)
    lists: List[ListDescription] = field(default_factory=list)

    def set_package(self, name: str) -> None:
        if self.package_name and name != self.package_name:
            logger.warning(
                "Package name changed from '%s' to '%s'; keeping '%s'",
                self.package_name,
                name,
                name,
            )
        self.package_name = name

    def add_record(self, record: RecordDescription) -> None:
        self.records.append(record)

    def add_list(self, list_desc: ListDescription) -> None:
        self.lists.append(list_desc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a dictionary suitable for JSON serialization."""
        return {
            "package": self.package_name,
            "package_dir": self.package_dir,
            "all_types": self.all_types,
            "records": [record.to_dict() for record in self.records],
            "lists": [list_desc.to_dict() for list_desc in self.lists],
        }
