"""
Identifier value objects for forms and the nodes of a form tree.

Node ids are opaque: callers may supply any non-empty string. Generated ids
are uuid4 hex strings.
"""

import uuid
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class NodeId:
    """Immutable identifier of a category, question or answer option."""

    value: str

    def __post_init__(self) -> None:
        """Validate node ID."""
        if not isinstance(self.value, str):
            raise ValueError("Node ID must be a string")

        if not self.value.strip():
            raise ValueError("Node ID cannot be empty")

    def __str__(self) -> str:
        """String representation."""
        return self.value

    def __eq__(self, other: Any) -> bool:
        """Equality comparison."""
        if not isinstance(other, NodeId):
            return False
        return self.value == other.value

    def __hash__(self) -> int:
        """Hash for use in sets and dictionaries."""
        return hash(self.value)

    @classmethod
    def generate(cls) -> "NodeId":
        """Generate a new node ID using UUID4."""
        return cls(uuid.uuid4().hex)


@dataclass(frozen=True)
class FormId(NodeId):
    """Identifier of an assessment form, assigned by the repository."""

    @classmethod
    def generate(cls) -> "FormId":
        """Generate a new form ID using UUID4."""
        return cls(uuid.uuid4().hex)

    def __eq__(self, other: Any) -> bool:
        """Equality comparison."""
        if not isinstance(other, FormId):
            return False
        return self.value == other.value

    def __hash__(self) -> int:
        """Hash for use in sets and dictionaries."""
        return hash(self.value)
