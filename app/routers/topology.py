from fastapi import APIRouter, Depends, Query
from app.config import settings
from app.schemas.api_schemas import (
    NodeDetail,
    NodeStatusUpdate,
    SelectionUpdate,
    SelectionView,
    TopologySnapshot,
)
from app.dependencies import get_topology_service
from app.application.topology_service import TopologyService
from app.domain.entities import NodeKind, NodeStatus
from typing import Optional

router = APIRouter()

@router.get("/topology", response_model=TopologySnapshot)
async def get_topology(
    kind: Optional[NodeKind] = Query(None, description="Only nodes of this kind"),
    status: Optional[NodeStatus] = Query(None, description="Only nodes with this status"),
    label: Optional[str] = Query(None, description="Label contains (case-insensitive)"),
    topology: TopologyService = Depends(get_topology_service)
):
    """
    Nodes, resolved edges and the current selection.

    Edges pointing at unknown nodes are left out.
    """
    return TopologySnapshot(
        **topology.snapshot(kind=kind, status=status, label=label),
        poll_interval_seconds=settings.TOPOLOGY_POLL_INTERVAL_SECONDS,
    )

@router.get("/topology/nodes/{node_id}", response_model=NodeDetail)
async def get_node(
    node_id: str,
    topology: TopologyService = Depends(get_topology_service)
):
    """
    One node with its description.
    """
    return topology.node_detail(node_id)

@router.put("/topology/nodes/{node_id}/status", response_model=NodeDetail)
async def update_node_status(
    node_id: str,
    update: NodeStatusUpdate,
    topology: TopologyService = Depends(get_topology_service)
):
    """
    Refresh a node's status (used by cluster pollers).
    """
    topology.update_status(node_id, update.status)
    return topology.node_detail(node_id)

@router.get("/topology/selection", response_model=SelectionView)
async def get_selection(
    topology: TopologyService = Depends(get_topology_service)
):
    """
    Selected node id and, if it exists, the node itself.
    """
    return topology.selection()

@router.put("/topology/selection", response_model=SelectionView)
async def set_selection(
    update: SelectionUpdate,
    topology: TopologyService = Depends(get_topology_service)
):
    """
    Move the selection cursor. Unknown ids are accepted and resolve to no node.
    """
    topology.select(update.node_id)
    return topology.selection()
