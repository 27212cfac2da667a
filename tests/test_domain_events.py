"""Tests for domain events and event handling."""
from __future__ import annotations

import logging
import pytest
from unittest.mock import Mock
from datetime import datetime

from app.application.event_handlers import register_event_handlers
from app.domain.events import (
    DomainEvent, OperationStarted, OperationSettled, NodeSelected,
    DomainEventPublisher, event_publisher
)


def settled(**overrides):
    fields = dict(
        event_id="",
        timestamp=None,
        aggregate_id="create-cluster",
        name="create-cluster",
        seq=1,
        outcome="success",
        elapsed_ms=65_000,
        applied=True,
    )
    fields.update(overrides)
    return OperationSettled(**fields)


class TestDomainEvent:
    """Test base domain event functionality."""

    def test_domain_event_with_custom_values(self):
        """Test domain event creation with custom values."""
        custom_timestamp = datetime(2024, 1, 1, 12, 0, 0)

        event = DomainEvent(
            event_id="custom-event-id",
            timestamp=custom_timestamp,
            aggregate_id="create-cluster"
        )

        assert event.event_id == "custom-event-id"
        assert event.timestamp == custom_timestamp
        assert event.aggregate_id == "create-cluster"

    def test_domain_event_defaults_filled(self):
        """Test that empty id and timestamp are generated."""
        event = OperationStarted(
            event_id="",
            timestamp=None,
            aggregate_id="deploy-bank",
            name="deploy-bank",
            seq=3,
        )

        assert event.event_id
        assert isinstance(event.timestamp, datetime)
        assert event.seq == 3


class TestDomainEventPublisher:
    """Test publisher behaviour."""

    def test_singleton(self):
        assert DomainEventPublisher() is event_publisher

    def test_publish_to_matching_subscribers_only(self):
        on_settled, on_selected = Mock(), Mock()
        event_publisher.subscribe(OperationSettled, on_settled)
        event_publisher.subscribe(NodeSelected, on_selected)

        event = settled()
        event_publisher.publish(event)

        on_settled.assert_called_once_with(event)
        on_selected.assert_not_called()

    def test_handler_error_is_logged_not_raised(self, caplog):
        failing, after = Mock(side_effect=RuntimeError("handler bug")), Mock()
        event_publisher.subscribe(OperationSettled, failing)
        event_publisher.subscribe(OperationSettled, after)

        with caplog.at_level(logging.ERROR):
            event_publisher.publish(settled())

        after.assert_called_once()
        assert "Event handler error" in caplog.text

    def test_clear_subscribers(self):
        handler = Mock()
        event_publisher.subscribe(OperationSettled, handler)
        event_publisher.clear_subscribers()

        event_publisher.publish(settled())

        handler.assert_not_called()


class TestEventHandlers:
    """Test the registered audit and alert handlers."""

    def test_audit_log(self, caplog):
        register_event_handlers()

        with caplog.at_level(logging.INFO):
            event_publisher.publish(settled())

        assert "[AUDIT] Operation settled: create-cluster (#1) success in 1:05" in caplog.text

    def test_stale_settlement_logged(self, caplog):
        register_event_handlers()

        with caplog.at_level(logging.INFO):
            event_publisher.publish(settled(applied=False, outcome="error"))

        assert "status left unchanged" in caplog.text
        assert "[ALERT]" not in caplog.text

    def test_failure_alert(self, caplog):
        register_event_handlers()

        with caplog.at_level(logging.WARNING):
            event_publisher.publish(settled(outcome="error", detail="ConnectError"))

        assert "[ALERT] Operation create-cluster failed: ConnectError" in caplog.text
