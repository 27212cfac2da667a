"""Domain events for decoupled side effects and integrations."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional
from uuid import uuid4

logger = logging.getLogger(__name__)


@dataclass
class DomainEvent:
    """Base class for all domain events."""
    event_id: str
    timestamp: datetime
    aggregate_id: str

    def __post_init__(self):
        if not hasattr(self, 'event_id') or not self.event_id:
            object.__setattr__(self, 'event_id', str(uuid4()))
        if not hasattr(self, 'timestamp') or not self.timestamp:
            object.__setattr__(self, 'timestamp', datetime.now())


@dataclass
class OperationStarted(DomainEvent):
    """Raised when an operation is launched against the deployment API."""
    name: str
    seq: int


@dataclass
class OperationSettled(DomainEvent):
    """Raised when an operation's remote call settles.

    ``applied`` is False when a newer call for the same name was already
    running, so status and latest result were left alone.
    """
    name: str
    seq: int
    outcome: str
    elapsed_ms: float
    applied: bool
    detail: Optional[str] = None


@dataclass
class NodeSelected(DomainEvent):
    """Raised when the system map selection cursor moves."""
    node_id: Optional[str]


@dataclass
class NodeStatusChanged(DomainEvent):
    """Raised when an external poller refreshes a node's status."""
    node_id: str
    status: str


@dataclass
class TopologyRefreshed(DomainEvent):
    """Raised when the whole topology snapshot is replaced."""
    node_count: int
    edge_count: int


class DomainEventPublisher:
    """Singleton publisher for domain events."""

    _instance: DomainEventPublisher | None = None
    _subscribers: Dict[type, List[Callable[[DomainEvent], None]]]

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._subscribers = {}
        return cls._instance

    def subscribe(self, event_type: type[DomainEvent], handler: Callable[[DomainEvent], None]) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []
        self._subscribers[event_type].append(handler)

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers."""
        event_type = type(event)
        if event_type in self._subscribers:
            for handler in self._subscribers[event_type]:
                try:
                    handler(event)
                except Exception:
                    # Log error but don't fail the main operation
                    logger.exception(f"Event handler error for {event_type.__name__}")

    def clear_subscribers(self) -> None:
        """Clear all subscribers (useful for testing)."""
        self._subscribers = {}


# Singleton instance
event_publisher = DomainEventPublisher()
