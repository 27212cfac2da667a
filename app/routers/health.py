"""
Health check endpoints for the API.
"""
from fastapi import APIRouter, Depends
from typing import Dict, Any
from datetime import datetime

from app.config import settings
from app.dependencies import get_orchestration_controller, get_topology_service
from app.application.orchestration_service import OrchestrationController
from app.application.topology_service import TopologyService

router = APIRouter()

@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.
    Returns API status and version information.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT
    }

@router.get("/health/detailed")
async def detailed_health(
    controller: OrchestrationController = Depends(get_orchestration_controller),
    topology: TopologyService = Depends(get_topology_service)
) -> Dict[str, Any]:
    """
    Detailed health of the dashboard session.
    """
    basic_health = await health_check()
    timers = controller.state.timers

    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "api": basic_health,
        "operations": {
            "launched": len(timers),
            "running": [r.name for r in timers.running()],
        },
        "topology": {
            "nodes": len(topology.model.nodes()),
            "edges": len(topology.model.raw_edges()),
            "resolved_edges": len(topology.model.edges()),
        },
        "config": {
            "deploy_api_base_url": settings.DEPLOY_API_BASE_URL,
            "environment": settings.ENVIRONMENT,
            "debug": settings.DEBUG
        }
    }
