"""Lifecycle status of the most recent invocation per operation."""
from __future__ import annotations

from typing import Dict, Optional

from app.domain.entities import OperationStatus, Outcome
from app.domain.timers import TimerHandle


class StatusTracker:
    """Maps operation name to the state of its newest invocation.

    Settlements are keyed by the timer handle: only the handle that started
    most recently for a name may settle that name (last-started-wins).
    """

    def __init__(self) -> None:
        self._states: Dict[str, OperationStatus] = {}
        self._latest: Dict[str, int] = {}

    def set_running(self, handle: TimerHandle) -> None:
        current = self._latest.get(handle.name)
        if current is not None and current > handle.seq:
            return
        self._latest[handle.name] = handle.seq
        self._states[handle.name] = OperationStatus.RUNNING

    def is_current(self, handle: TimerHandle) -> bool:
        return self._latest.get(handle.name) == handle.seq

    def set_settled(self, handle: TimerHandle, outcome: Outcome) -> bool:
        """Apply ``outcome``; returns False if a newer call owns the name."""
        if not self.is_current(handle):
            return False
        self._states[handle.name] = outcome.status
        return True

    def get(self, name: str) -> OperationStatus:
        return self._states.get(name, OperationStatus.IDLE)

    def latest_seq(self, name: str) -> Optional[int]:
        return self._latest.get(name)

    def as_dict(self) -> Dict[str, OperationStatus]:
        return dict(self._states)

    def any_running(self) -> bool:
        return any(s is OperationStatus.RUNNING for s in self._states.values())
