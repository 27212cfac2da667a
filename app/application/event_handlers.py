"""Event handlers for domain events."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.timers import format_elapsed

if TYPE_CHECKING:
    from app.domain.events import (
        OperationStarted,
        OperationSettled,
        NodeSelected,
        NodeStatusChanged,
        TopologyRefreshed,
    )

logger = logging.getLogger(__name__)


class AuditLogHandler:
    """Logs all domain events for audit trail."""

    def handle_operation_started(self, event: OperationStarted) -> None:
        logger.info(f"[AUDIT] Operation started: {event.name} (#{event.seq})")

    def handle_operation_settled(self, event: OperationSettled) -> None:
        took = format_elapsed(event.elapsed_ms)
        if not event.applied:
            logger.info(
                f"[AUDIT] Operation settled after newer run: {event.name} (#{event.seq}) "
                f"{event.outcome} in {took}, status left unchanged"
            )
            return
        logger.info(f"[AUDIT] Operation settled: {event.name} (#{event.seq}) {event.outcome} in {took}")

    def handle_node_selected(self, event: NodeSelected) -> None:
        logger.debug(f"[AUDIT] Node selected: {event.node_id}")

    def handle_node_status_changed(self, event: NodeStatusChanged) -> None:
        logger.info(f"[AUDIT] Node status changed: {event.node_id} -> {event.status}")

    def handle_topology_refreshed(self, event: TopologyRefreshed) -> None:
        logger.info(f"[AUDIT] Topology refreshed: {event.node_count} nodes, {event.edge_count} edges")


class FailureAlertHandler:
    """Surfaces failed operations at warning level."""

    def handle_operation_settled(self, event: OperationSettled) -> None:
        if event.applied and event.outcome == "error":
            logger.warning(f"[ALERT] Operation {event.name} failed: {event.detail or 'remote rejection'}")


def register_event_handlers():
    """Register all event handlers with the publisher."""
    from app.domain.events import (
        event_publisher,
        OperationStarted,
        OperationSettled,
        NodeSelected,
        NodeStatusChanged,
        TopologyRefreshed,
    )

    audit = AuditLogHandler()
    alerts = FailureAlertHandler()

    # Audit handlers (all events)
    event_publisher.subscribe(OperationStarted, audit.handle_operation_started)
    event_publisher.subscribe(OperationSettled, audit.handle_operation_settled)
    event_publisher.subscribe(NodeSelected, audit.handle_node_selected)
    event_publisher.subscribe(NodeStatusChanged, audit.handle_node_status_changed)
    event_publisher.subscribe(TopologyRefreshed, audit.handle_topology_refreshed)

    # Alerts
    event_publisher.subscribe(OperationSettled, alerts.handle_operation_settled)
