from __future__ import annotations

from functools import lru_cache

from app.config import settings
from app.domain.state import DashboardState
from app.infrastructure.deploy_api_client import DeployApiClient
from app.infrastructure.default_topology import build_default_topology
from app.application.orchestration_service import OrchestrationController
from app.application.topology_service import TopologyService
from app.application.chat_service import ChatService


# Dashboard state lives for the whole process: one session per server.

@lru_cache
def get_deploy_api_client() -> DeployApiClient:
    return DeployApiClient(
        base_url=settings.DEPLOY_API_BASE_URL,
        timeout=settings.DEPLOY_API_TIMEOUT_SECONDS,
        chat_endpoint=settings.CHAT_ENDPOINT,
    )


@lru_cache
def get_dashboard_state() -> DashboardState:
    return DashboardState()


@lru_cache
def get_orchestration_controller() -> OrchestrationController:
    return OrchestrationController(
        client=get_deploy_api_client(),
        state=get_dashboard_state(),
    )


@lru_cache
def get_topology_service() -> TopologyService:
    return TopologyService(build_default_topology())


@lru_cache
def get_chat_service() -> ChatService:
    return ChatService(
        client=get_deploy_api_client(),
        state=get_dashboard_state(),
        context=settings.CHAT_CONTEXT,
        fallback_reply=settings.CHAT_FALLBACK_REPLY,
    )


def reset_session() -> None:
    """Drop all session singletons (useful for testing)."""
    for getter in (
        get_deploy_api_client,
        get_dashboard_state,
        get_orchestration_controller,
        get_topology_service,
        get_chat_service,
    ):
        getter.cache_clear()
