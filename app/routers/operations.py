from fastapi import APIRouter, BackgroundTasks, Body, Depends, Query
from app.schemas.api_schemas import ClusterConfig, OperationAccepted, OperationInfo
from app.dependencies import get_orchestration_controller
from app.application.orchestration_service import OrchestrationController
from app.domain.errors import NotFoundError, ValidationError
from typing import List, Optional

router = APIRouter()

@router.get("/operations", response_model=List[OperationInfo])
async def list_operations(
    controller: OrchestrationController = Depends(get_orchestration_controller)
):
    """
    List the operations the dashboard can run, in display order.
    """
    return [
        OperationInfo(name=op.name, label=op.label, destructive=op.destructive)
        for op in controller.catalogue.all()
    ]

@router.post("/operations/{name}", response_model=OperationAccepted, status_code=202)
async def run_operation(
    name: str,
    background_tasks: BackgroundTasks,
    config: Optional[ClusterConfig] = Body(None),
    confirm: bool = Query(False, description="Required for destructive operations"),
    controller: OrchestrationController = Depends(get_orchestration_controller)
):
    """
    Launch an operation against the deployment API.

    Returns as soon as the operation is marked running; the remote call
    settles in the background and is visible through /dashboard.
    """
    if name not in controller.catalogue:
        raise NotFoundError(f"Operation not found: {name}")

    op = controller.catalogue.require(name)
    if op.destructive and not confirm:
        raise ValidationError(f"{op.label} must be confirmed (confirm=true)")

    payload = (config or ClusterConfig()).to_payload()
    handle = controller.begin(name)
    background_tasks.add_task(controller.complete, handle, payload)

    return OperationAccepted(
        operation=name,
        seq=handle.seq,
        status=controller.state.status.get(name),
    )
