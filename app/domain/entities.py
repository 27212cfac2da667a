"""Internal domain entities shared by the orchestration and topology layers."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class OperationStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"


class Outcome(str, Enum):
    SUCCESS = "success"
    ERROR = "error"

    @property
    def status(self) -> OperationStatus:
        return OperationStatus(self.value)


@dataclass
class OperationRecord:
    """One timed invocation of an operation.

    ``ended_at`` and ``outcome`` are set once, on settlement. Timestamps are
    milliseconds from the registry clock.
    """
    seq: int
    name: str
    started_at: float
    ended_at: Optional[float] = None
    outcome: Optional[Outcome] = None

    @property
    def is_open(self) -> bool:
        return self.ended_at is None


@dataclass(frozen=True)
class OperationResult:
    """What the remote API answered for one invocation."""
    payload: Any
    http_ok: bool
    status_code: int


class NodeKind(str, Enum):
    CORE = "core"
    AI = "ai"
    DATABASE = "database"
    EXTERNAL = "external"


class NodeStatus(str, Enum):
    RUNNING = "running"
    PENDING = "pending"
    ERROR = "error"


class EdgeKind(str, Enum):
    DATA = "data"
    AI = "ai"
    API = "api"


@dataclass(frozen=True)
class Node:
    id: str
    label: str
    kind: NodeKind
    status: NodeStatus
    position: Tuple[float, float] = (0.0, 0.0)
    description: str = ""

    def with_status(self, status: NodeStatus) -> Node:
        return replace(self, status=status)


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    kind: EdgeKind


@dataclass(frozen=True)
class ChatMessage:
    role: str  # "user" or "assistant"
    content: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }
