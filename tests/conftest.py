"""
Test configuration and fixtures for dashboard API tests.
"""
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.dependencies import (
    get_chat_service,
    get_orchestration_controller,
    get_topology_service,
    reset_session,
)
from app.application.chat_service import ChatService
from app.application.orchestration_service import OrchestrationController
from app.application.topology_service import TopologyService
from app.domain.events import event_publisher
from app.domain.state import DashboardState
from app.domain.timers import TimerRegistry
from app.infrastructure.default_topology import build_default_topology
from tests.fakes import FakeClock, FakeDeployApi


@pytest.fixture(autouse=True)
def clean_session():
    """Fresh session singletons and no leftover event subscribers."""
    reset_session()
    event_publisher.clear_subscribers()
    yield
    app.dependency_overrides.clear()
    event_publisher.clear_subscribers()
    reset_session()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_api(clock):
    return FakeDeployApi(clock)


@pytest.fixture
def state(clock):
    return DashboardState(timers=TimerRegistry(clock=clock))


@pytest.fixture
def controller(fake_api, state):
    return OrchestrationController(client=fake_api, state=state)


@pytest.fixture
def topology_service():
    return TopologyService(build_default_topology())


@pytest.fixture
def chat_service(fake_api, state):
    return ChatService(
        client=fake_api,
        state=state,
        context="Bank of Anthos deployment assistant",
        fallback_reply="I can help you with deploying Bank of Anthos.",
    )


@pytest.fixture
def client(controller, topology_service, chat_service):
    """Test client wired to the fake deployment API."""
    app.dependency_overrides[get_orchestration_controller] = lambda: controller
    app.dependency_overrides[get_topology_service] = lambda: topology_service
    app.dependency_overrides[get_chat_service] = lambda: chat_service
    return TestClient(app)


@pytest.fixture
def cluster_config():
    return {
        "name": "whale-bank",
        "region": "us-central1-a",
        "numNodes": 4,
        "minNodes": 3,
        "maxNodes": 10,
    }
