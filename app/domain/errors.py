"""Domain error hierarchy for clean exception handling."""
from __future__ import annotations


class DomainError(Exception):
    """Base for all domain errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Invalid input or state."""


class ConflictError(DomainError):
    """Resource conflict (e.g., duplicate name)."""


class UnknownOperationError(ValidationError):
    """Operation name is not registered in the catalogue."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown operation: {name}")
        self.name = name


class TransportError(DomainError, IOError):
    """Remote call could not be completed (network failure, malformed body)."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"{operation}: {reason}")
        self.operation = operation
        self.reason = reason
