"""Catalogue of the operations the dashboard can dispatch."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List

from app.domain.errors import UnknownOperationError


@dataclass(frozen=True)
class OperationSpec:
    name: str
    label: str
    destructive: bool = False


DEFAULT_OPERATIONS: List[OperationSpec] = [
    OperationSpec("create-cluster", "Create Cluster"),
    OperationSpec("get-credentials", "Get Credentials"),
    OperationSpec("deploy-bank", "Deploy Bank of Anthos"),
    OperationSpec("deploy-orbital", "Deploy Orbital Agent"),
    OperationSpec("check-status", "Check Status"),
    OperationSpec("delete-cluster", "Delete Cluster", destructive=True),
]


class OperationCatalogue:
    """Registered operation names, in display order."""

    def __init__(self, operations: Iterable[OperationSpec] = DEFAULT_OPERATIONS) -> None:
        self._operations: Dict[str, OperationSpec] = {}
        for op in operations:
            self.register(op)

    def register(self, op: OperationSpec) -> None:
        self._operations[op.name] = op

    def names(self) -> List[str]:
        return list(self._operations)

    def all(self) -> List[OperationSpec]:
        return list(self._operations.values())

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    def require(self, name: str) -> OperationSpec:
        """Return the catalogue entry for ``name`` or raise UnknownOperationError."""
        op = self._operations.get(name)
        if op is None:
            raise UnknownOperationError(name)
        return op

    def label_for(self, name: str) -> str:
        op = self._operations.get(name)
        return op.label if op else name
