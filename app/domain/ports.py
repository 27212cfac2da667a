"""Ports the application layer depends on."""
from __future__ import annotations

from typing import Any, Callable, Dict, Protocol

from app.domain.entities import OperationResult

# Returns the current time in milliseconds.
Clock = Callable[[], float]


class OperationPort(Protocol):
    async def invoke(self, name: str, payload: Dict[str, Any]) -> OperationResult:
        """Run one named operation remotely. Raises TransportError on transport failure."""
        ...


class ChatPort(Protocol):
    async def chat(self, message: str, context: str) -> Dict[str, Any]:
        """Send a chat message, return the decoded JSON reply."""
        ...
