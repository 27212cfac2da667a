"""Runs dashboard operations and keeps their status and timers current."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from app.domain.entities import OperationRecord, OperationStatus, Outcome
from app.domain.errors import TransportError
from app.domain.events import event_publisher, OperationSettled, OperationStarted
from app.domain.operations import OperationCatalogue
from app.domain.ports import OperationPort
from app.domain.state import DashboardState
from app.domain.timers import TimerHandle, elapsed_ms, format_elapsed

logger = logging.getLogger(__name__)

EMPTY_RESULT_TEXT = "Ready to deploy..."


class OrchestrationController:
    """Facade the dashboard calls to launch operations.

    ``begin`` starts the timer and flips status to running; ``complete``
    performs the remote call and applies timer end, status and latest result
    in one synchronous block (no ``await`` in between), so a snapshot never
    sees them half-applied.

    Overlapping runs of the same name follow last-started-wins: an older call
    that settles late still closes its own timer record, but leaves status and
    latest result to the newer call.
    """

    def __init__(
        self,
        client: OperationPort,
        state: Optional[DashboardState] = None,
        catalogue: Optional[OperationCatalogue] = None,
    ) -> None:
        self._client = client
        self.state = state or DashboardState()
        self.catalogue = catalogue or OperationCatalogue()

    def begin(self, name: str) -> TimerHandle:
        """Start a timer and mark ``name`` running.

        Raises UnknownOperationError before touching any state.
        """
        self.catalogue.require(name)
        handle = self.state.timers.start(name)
        self.state.status.set_running(handle)
        event_publisher.publish(OperationStarted(
            event_id="",
            timestamp=None,
            aggregate_id=name,
            name=name,
            seq=handle.seq,
        ))
        return handle

    async def complete(self, handle: TimerHandle, payload: Dict[str, Any]) -> OperationStatus:
        """Call the remote API and settle. Remote errors become state, never raised."""
        detail: Optional[str] = None
        try:
            result = await self._client.invoke(handle.name, payload)
        except TransportError as exc:
            detail = exc.reason
            outcome = Outcome.ERROR
            shown: Any = self._transport_failure_payload(handle.name, detail)
        except Exception as exc:  # noqa: BLE001
            logger.exception(f"Unexpected failure while running {handle.name}")
            detail = type(exc).__name__
            outcome = Outcome.ERROR
            shown = self._transport_failure_payload(handle.name, detail)
        else:
            outcome = Outcome.SUCCESS if result.http_ok else Outcome.ERROR
            shown = result.payload
            if not result.http_ok:
                detail = f"HTTP {result.status_code}"

        applied = self._settle(handle, outcome, shown)

        record = self.state.timers.get(handle)
        event_publisher.publish(OperationSettled(
            event_id="",
            timestamp=None,
            aggregate_id=handle.name,
            name=handle.name,
            seq=handle.seq,
            outcome=outcome.value,
            elapsed_ms=elapsed_ms(record, self.state.timers.now()),
            applied=applied,
            detail=detail,
        ))
        return self.state.status.get(handle.name)

    async def run(self, name: str, payload: Dict[str, Any]) -> OperationStatus:
        handle = self.begin(name)
        return await self.complete(handle, payload)

    def _settle(self, handle: TimerHandle, outcome: Outcome, shown: Any) -> bool:
        self.state.timers.end(handle, outcome)
        applied = self.state.status.set_settled(handle, outcome)
        if applied:
            self.state.store_result(handle.name, shown)
        return applied

    @staticmethod
    def _transport_failure_payload(name: str, reason: str) -> Dict[str, Any]:
        return {
            "error": "Operation failed",
            "operation": name,
            "detail": reason,
        }

    # Snapshot helpers

    def statuses(self) -> Dict[str, OperationStatus]:
        names = self.catalogue.names()
        names += [n for n in self.state.status.as_dict() if n not in names]
        return {name: self.state.status.get(name) for name in names}

    def timer_views(self, now: Optional[float] = None) -> List[Dict[str, Any]]:
        if now is None:
            now = self.state.timers.now()
        return [self._timer_view(record, now) for record in self.state.timers.records()]

    def _timer_view(self, record: OperationRecord, now: float) -> Dict[str, Any]:
        ms = elapsed_ms(record, now)
        return {
            "seq": record.seq,
            "operation": record.name,
            "label": self.catalogue.label_for(record.name),
            "started_at": record.started_at,
            "ended_at": record.ended_at,
            "outcome": record.outcome.value if record.outcome else None,
            "running": record.is_open,
            "elapsed_ms": ms,
            "display": format_elapsed(ms),
        }

    def result_text(self) -> str:
        if self.state.latest_result is None:
            return EMPTY_RESULT_TEXT
        return json.dumps(self.state.latest_result, indent=2)

    def snapshot(self, now: Optional[float] = None) -> Dict[str, Any]:
        """Read-only view of the dashboard for rendering."""
        return {
            "status": {name: status.value for name, status in self.statuses().items()},
            "timers": self.timer_views(now),
            "busy": self.state.status.any_running(),
            "result": self.state.latest_result,
            "result_operation": self.state.latest_result_operation,
            "result_text": self.result_text(),
        }
