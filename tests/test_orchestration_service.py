"""Tests for the orchestration controller."""
from __future__ import annotations

import asyncio
import json
import pytest
from unittest.mock import Mock

from app.application.orchestration_service import EMPTY_RESULT_TEXT
from app.domain.entities import OperationStatus, Outcome
from app.domain.errors import UnknownOperationError
from app.domain.events import event_publisher, OperationSettled, OperationStarted
from tests.fakes import ok, rejected, transport_failure


class TestRunLifecycle:
    """Test status and timer transitions of a single run."""

    def test_create_cluster_success(self, controller, fake_api, cluster_config):
        """Test the happy path: 200 after 50ms."""
        fake_api.script = [ok({"status": "created"})]
        fake_api.delay_ms = 50

        final = asyncio.run(controller.run("create-cluster", cluster_config))

        assert final is OperationStatus.SUCCESS
        assert controller.state.status.get("create-cluster") is OperationStatus.SUCCESS
        records = controller.state.timers.records()
        assert len(records) == 1
        assert records[0].ended_at - records[0].started_at == 50
        assert records[0].outcome is Outcome.SUCCESS
        assert controller.state.latest_result == {"status": "created"}
        assert fake_api.calls == [("create-cluster", cluster_config)]

    def test_running_before_settlement(self, controller, fake_api):
        """Test that status is running while the remote call is pending."""
        seen = {}

        async def scenario():
            gate = asyncio.Event()
            fake_api.gates[0] = gate
            task = asyncio.create_task(controller.run("get-credentials", {}))
            await asyncio.sleep(0)
            seen["during"] = controller.state.status.get("get-credentials")
            seen["open"] = [r.name for r in controller.state.timers.running()]
            gate.set()
            return await task

        final = asyncio.run(scenario())

        assert seen["during"] is OperationStatus.RUNNING
        assert seen["open"] == ["get-credentials"]
        assert final is OperationStatus.SUCCESS
        assert controller.state.timers.running() == []

    def test_transport_failure_captured(self, controller, fake_api, cluster_config):
        """Test that a transport failure becomes error state, not an exception."""
        fake_api.script = [transport_failure("delete-cluster")]

        final = asyncio.run(controller.run("delete-cluster", cluster_config))

        assert final is OperationStatus.ERROR
        assert controller.state.latest_result == {
            "error": "Operation failed",
            "operation": "delete-cluster",
            "detail": "ConnectError",
        }
        record = controller.state.timers.records()[0]
        assert not record.is_open
        assert record.outcome is Outcome.ERROR

    def test_remote_rejection_keeps_payload(self, controller, fake_api):
        """Test that an HTTP failure still shows the remote diagnostic body."""
        body = {"error": "quota exceeded", "region": "us-central1-a"}
        fake_api.script = [rejected(body, status_code=429)]

        final = asyncio.run(controller.run("create-cluster", {}))

        assert final is OperationStatus.ERROR
        assert controller.state.latest_result == body
        assert controller.state.latest_result_operation == "create-cluster"

    def test_unexpected_client_error_captured(self, controller, fake_api):
        """Test that an unexpected client exception still settles the run."""
        fake_api.script = [RuntimeError("boom")]

        final = asyncio.run(controller.run("check-status", {}))

        assert final is OperationStatus.ERROR
        assert controller.state.latest_result["operation"] == "check-status"
        assert controller.state.timers.running() == []

    def test_unknown_operation_fails_fast(self, controller, fake_api):
        """Test that an unregistered name is rejected before any state changes."""
        with pytest.raises(UnknownOperationError, match="scale-cluster"):
            controller.begin("scale-cluster")

        assert len(controller.state.timers) == 0
        assert controller.state.status.as_dict() == {}
        assert fake_api.calls == []

    @pytest.mark.parametrize("name", [
        "create-cluster", "get-credentials", "deploy-bank",
        "deploy-orbital", "check-status", "delete-cluster",
    ])
    def test_every_operation_settles(self, controller, fake_api, name):
        """Test that no operation is left running after settlement."""
        fake_api.script = [rejected({}) if name == "deploy-orbital" else ok({})]

        asyncio.run(controller.run(name, {}))

        assert controller.state.status.get(name) in (OperationStatus.SUCCESS, OperationStatus.ERROR)


class TestOverlappingRuns:
    """Test concurrent runs."""

    def test_same_name_last_started_wins(self, controller, fake_api):
        """Test that an older run settling late does not overwrite the newer one."""
        # settlement order: the second run settles first
        fake_api.script = [ok({"status": "new"}), rejected({"error": "old"})]

        async def scenario():
            gate = asyncio.Event()
            fake_api.gates[0] = gate
            first = asyncio.create_task(controller.run("create-cluster", {}))
            await asyncio.sleep(0)
            await controller.run("create-cluster", {})
            gate.set()
            await first

        asyncio.run(scenario())

        assert controller.state.status.get("create-cluster") is OperationStatus.SUCCESS
        assert controller.state.latest_result == {"status": "new"}
        older, newer = controller.state.timers.records()
        assert older.outcome is Outcome.ERROR and not older.is_open
        assert newer.outcome is Outcome.SUCCESS and not newer.is_open

    def test_same_name_older_settles_first(self, controller, fake_api):
        """Test that an older run settling while the newer one is pending keeps it running."""
        fake_api.script = [ok({"status": "old"}), ok({"status": "new"})]

        async def scenario():
            second_gate = asyncio.Event()
            fake_api.gates[1] = second_gate
            first_gate = asyncio.Event()
            fake_api.gates[0] = first_gate
            first = asyncio.create_task(controller.run("deploy-bank", {}))
            second = asyncio.create_task(controller.run("deploy-bank", {}))
            await asyncio.sleep(0)
            first_gate.set()
            await first
            during = controller.state.status.get("deploy-bank")
            second_gate.set()
            await second
            return during

        during = asyncio.run(scenario())

        assert during is OperationStatus.RUNNING
        assert controller.state.status.get("deploy-bank") is OperationStatus.SUCCESS
        assert controller.state.latest_result == {"status": "new"}

    def test_different_names_do_not_interfere(self, controller, fake_api):
        """Test that runs of different operations are tracked independently."""
        fake_api.script = [rejected({"error": "no cluster"}), ok({"status": "created"})]

        async def scenario():
            gate = asyncio.Event()
            fake_api.gates[0] = gate
            create = asyncio.create_task(controller.run("create-cluster", {}))
            await asyncio.sleep(0)
            creds = asyncio.create_task(controller.run("get-credentials", {}))
            await asyncio.sleep(0)
            await creds
            gate.set()
            await create

        asyncio.run(scenario())

        status = controller.state.status
        assert status.get("get-credentials") is OperationStatus.ERROR
        assert status.get("create-cluster") is OperationStatus.SUCCESS
        assert [r.name for r in controller.state.timers.records()] == [
            "create-cluster", "get-credentials"
        ]


class TestSnapshot:
    """Test the read model handed to the dashboard."""

    def test_initial_snapshot(self, controller):
        snapshot = controller.snapshot()

        assert snapshot["status"] == {
            "create-cluster": "idle",
            "get-credentials": "idle",
            "deploy-bank": "idle",
            "deploy-orbital": "idle",
            "check-status": "idle",
            "delete-cluster": "idle",
        }
        assert snapshot["timers"] == []
        assert snapshot["busy"] is False
        assert snapshot["result"] is None
        assert snapshot["result_text"] == EMPTY_RESULT_TEXT

    def test_snapshot_after_run(self, controller, fake_api, clock):
        fake_api.script = [ok({"status": "created", "nodes": 4})]
        fake_api.delay_ms = 65_000

        asyncio.run(controller.run("create-cluster", {}))
        clock.advance(30_000)
        snapshot = controller.snapshot()

        assert snapshot["status"]["create-cluster"] == "success"
        assert snapshot["result_text"] == json.dumps({"status": "created", "nodes": 4}, indent=2)
        timer = snapshot["timers"][0]
        assert timer["label"] == "Create Cluster"
        assert timer["running"] is False
        assert timer["outcome"] == "success"
        assert timer["display"] == "1:05"

    def test_running_timer_ticks_with_now(self, controller, clock):
        """Test that rendering later shows more elapsed time without mutating state."""
        handle = controller.begin("deploy-orbital")
        start = controller.state.timers.get(handle).started_at

        first = controller.snapshot(now=start + 1_000)["timers"][0]
        second = controller.snapshot(now=start + 61_000)["timers"][0]

        assert (first["display"], second["display"]) == ("0:01", "1:01")
        assert controller.state.timers.get(handle).is_open
        assert controller.snapshot()["busy"] is True


class TestOrchestrationEvents:
    """Test domain events published by the controller."""

    def test_started_and_settled_events(self, controller, fake_api):
        started, settled = Mock(), Mock()
        event_publisher.subscribe(OperationStarted, started)
        event_publisher.subscribe(OperationSettled, settled)
        fake_api.script = [transport_failure("check-status")]

        asyncio.run(controller.run("check-status", {}))

        started.assert_called_once()
        assert started.call_args[0][0].name == "check-status"
        event = settled.call_args[0][0]
        assert event.outcome == "error"
        assert event.applied is True
        assert event.detail == "ConnectError"

    def test_failing_handler_does_not_break_run(self, controller, fake_api):
        event_publisher.subscribe(OperationSettled, Mock(side_effect=ValueError("handler bug")))
        fake_api.script = [ok({"status": "ok"})]

        final = asyncio.run(controller.run("check-status", {}))

        assert final is OperationStatus.SUCCESS
