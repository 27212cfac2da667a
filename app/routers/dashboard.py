from fastapi import APIRouter, Depends
from app.config import settings
from app.schemas.api_schemas import DashboardSnapshot, TimerView
from app.dependencies import get_orchestration_controller
from app.application.orchestration_service import OrchestrationController
from typing import List

router = APIRouter()

@router.get("/dashboard", response_model=DashboardSnapshot)
async def get_dashboard(
    controller: OrchestrationController = Depends(get_orchestration_controller)
):
    """
    Current operation status, timers and latest result.

    Elapsed times of running timers are computed at request time; polling
    this endpoint every refresh_interval_seconds keeps them ticking.
    """
    return DashboardSnapshot(
        **controller.snapshot(),
        refresh_interval_seconds=settings.REFRESH_INTERVAL_SECONDS,
    )

@router.get("/dashboard/timers", response_model=List[TimerView])
async def get_timers(
    controller: OrchestrationController = Depends(get_orchestration_controller)
):
    """
    Operation timers in start order.
    """
    return controller.timer_views()
