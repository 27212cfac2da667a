"""Owned dashboard state for one session."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from app.domain.entities import ChatMessage
from app.domain.status import StatusTracker
from app.domain.timers import TimerRegistry


@dataclass
class DashboardState:
    timers: TimerRegistry = field(default_factory=TimerRegistry)
    status: StatusTracker = field(default_factory=StatusTracker)
    latest_result: Optional[Any] = None
    latest_result_operation: Optional[str] = None
    chat: List[ChatMessage] = field(default_factory=list)

    def store_result(self, operation: str, payload: Any) -> None:
        self.latest_result = payload
        self.latest_result_operation = operation
