"""Specification pattern for filtering topology nodes."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from app.domain.entities import Node, NodeKind, NodeStatus


class Specification(ABC):
    """Abstract base for specifications (node filters)."""

    @abstractmethod
    def is_satisfied_by(self, candidate: Node) -> bool:
        """Check if candidate satisfies this specification."""
        pass

    def and_(self, other: Specification) -> Specification:
        """Combine with AND logic."""
        return AndSpecification(self, other)

    def or_(self, other: Specification) -> Specification:
        """Combine with OR logic."""
        return OrSpecification(self, other)

    def not_(self) -> Specification:
        """Negate this specification."""
        return NotSpecification(self)


class AndSpecification(Specification):
    """AND composite specification."""

    def __init__(self, left: Specification, right: Specification):
        self.left = left
        self.right = right

    def is_satisfied_by(self, candidate: Node) -> bool:
        return self.left.is_satisfied_by(candidate) and self.right.is_satisfied_by(candidate)


class OrSpecification(Specification):
    """OR composite specification."""

    def __init__(self, left: Specification, right: Specification):
        self.left = left
        self.right = right

    def is_satisfied_by(self, candidate: Node) -> bool:
        return self.left.is_satisfied_by(candidate) or self.right.is_satisfied_by(candidate)


class NotSpecification(Specification):
    """NOT specification."""

    def __init__(self, spec: Specification):
        self.spec = spec

    def is_satisfied_by(self, candidate: Node) -> bool:
        return not self.spec.is_satisfied_by(candidate)


class AnyNode(Specification):
    """Matches every node."""

    def is_satisfied_by(self, candidate: Node) -> bool:
        return True


class NodeByKind(Specification):
    """Nodes of a given kind (core, ai, database, external)."""

    def __init__(self, kind: NodeKind):
        self.kind = kind

    def is_satisfied_by(self, node: Node) -> bool:
        return node.kind == self.kind


class NodeByStatus(Specification):
    """Nodes currently reporting a given status."""

    def __init__(self, status: NodeStatus):
        self.status = status

    def is_satisfied_by(self, node: Node) -> bool:
        return node.status == self.status


class NodeByLabel(Specification):
    """Finds nodes by label (case-insensitive contains)."""

    def __init__(self, label_pattern: str):
        self.pattern = label_pattern.lower()

    def is_satisfied_by(self, node: Node) -> bool:
        return self.pattern in node.label.lower()


def build_node_filter(
    kind: Optional[NodeKind] = None,
    status: Optional[NodeStatus] = None,
    label: Optional[str] = None,
) -> Specification:
    """AND together whichever filters were given."""
    spec: Specification = AnyNode()
    if kind is not None:
        spec = spec.and_(NodeByKind(kind))
    if status is not None:
        spec = spec.and_(NodeByStatus(status))
    if label:
        spec = spec.and_(NodeByLabel(label))
    return spec


# Helper function to filter collections

def filter_by_specification(items: List[Node], spec: Specification) -> List[Node]:
    """Filter a collection using a specification."""
    return [item for item in items if spec.is_satisfied_by(item)]
