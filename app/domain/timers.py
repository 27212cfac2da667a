"""Per-invocation operation timers.

Every launch appends a new :class:`OperationRecord`; re-running an operation
never replaces an earlier record. Durations are never stored: callers derive
them with :func:`elapsed_ms` against whatever "now" they render with.
"""
from __future__ import annotations

import itertools
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

from app.domain.entities import OperationRecord, Outcome
from app.domain.errors import NotFoundError
from app.domain.ports import Clock


def wall_clock_ms() -> float:
    return time.time() * 1000.0


@dataclass(frozen=True)
class TimerHandle:
    """Identifies one specific record, not just the operation name."""
    seq: int
    name: str


class TimerRegistry:
    """Append-only list of operation records, in start order."""

    def __init__(self, clock: Clock = wall_clock_ms) -> None:
        self._clock = clock
        self._records: List[OperationRecord] = []
        self._by_seq: Dict[int, OperationRecord] = {}
        self._seq = itertools.count(1)

    def now(self) -> float:
        return self._clock()

    def start(self, name: str) -> TimerHandle:
        record = OperationRecord(seq=next(self._seq), name=name, started_at=self._clock())
        self._records.append(record)
        self._by_seq[record.seq] = record
        return TimerHandle(seq=record.seq, name=name)

    def end(self, handle: TimerHandle, outcome: Optional[Outcome] = None) -> bool:
        """Close the record behind ``handle``.

        Returns False when it was already closed; the first close wins.
        """
        record = self.get(handle)
        if not record.is_open:
            return False
        # a wall clock can step backwards; never store ended < started
        record.ended_at = max(self._clock(), record.started_at)
        record.outcome = outcome
        return True

    def get(self, handle: TimerHandle) -> OperationRecord:
        record = self._by_seq.get(handle.seq)
        if record is None:
            raise NotFoundError(f"Timer not found: {handle.seq}")
        return record

    def records(self) -> List[OperationRecord]:
        return list(self._records)

    def for_name(self, name: str) -> List[OperationRecord]:
        return [r for r in self._records if r.name == name]

    def running(self) -> List[OperationRecord]:
        return [r for r in self._records if r.is_open]

    def __len__(self) -> int:
        return len(self._records)


def elapsed_ms(record: OperationRecord, now: float) -> float:
    """Elapsed time of ``record``; ``now`` is only used while it is open."""
    end = record.ended_at if record.ended_at is not None else now
    return max(end - record.started_at, 0.0)


def format_elapsed(ms: float) -> str:
    """Render milliseconds as ``m:ss``. Minutes are not capped at 60."""
    seconds = int(max(ms, 0) // 1000)
    minutes, seconds = divmod(seconds, 60)
    return f"{minutes}:{seconds:02d}"
