"""
API Request/Response Schemas using Pydantic.

Structure of HTTP requests and responses for the deployment dashboard API.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

from app.config import settings
from app.domain.entities import EdgeKind, NodeKind, NodeStatus, OperationStatus

# Operation schemas
class ClusterConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default_factory=lambda: settings.DEFAULT_CLUSTER_NAME, description="Cluster name")
    region: str = Field(default_factory=lambda: settings.DEFAULT_CLUSTER_REGION, description="Region or zone")
    num_nodes: int = Field(default_factory=lambda: settings.DEFAULT_NUM_NODES, alias="numNodes", description="Initial node count")
    min_nodes: int = Field(default_factory=lambda: settings.DEFAULT_MIN_NODES, alias="minNodes", description="Autoscaler minimum")
    max_nodes: int = Field(default_factory=lambda: settings.DEFAULT_MAX_NODES, alias="maxNodes", description="Autoscaler maximum")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

class OperationInfo(BaseModel):
    name: str = Field(..., description="Operation name used in the URL")
    label: str = Field(..., description="Display label")
    destructive: bool = Field(default=False, description="Whether the caller must confirm before running")

class OperationAccepted(BaseModel):
    operation: str = Field(..., description="Operation name")
    seq: int = Field(..., description="Sequence number of the timer record for this run")
    status: OperationStatus = Field(..., description="Status right after launch")

class TimerView(BaseModel):
    seq: int
    operation: str
    label: str
    started_at: float = Field(..., description="Start time in epoch milliseconds")
    ended_at: Optional[float] = Field(None, description="End time in epoch milliseconds, null while running")
    outcome: Optional[str] = None
    running: bool
    elapsed_ms: float
    display: str = Field(..., description="Elapsed time as m:ss")

class DashboardSnapshot(BaseModel):
    status: Dict[str, OperationStatus] = Field(..., description="Lifecycle state per operation")
    timers: List[TimerView] = Field(default_factory=list, description="Timer records in start order")
    busy: bool = Field(..., description="True while any operation is running")
    result: Optional[Any] = Field(None, description="Latest result payload")
    result_operation: Optional[str] = Field(None, description="Operation that produced the latest result")
    result_text: str = Field(..., description="Latest result, pretty-printed")
    refresh_interval_seconds: float = Field(..., description="How often the browser should redraw timers")

# Topology schemas
class NodeView(BaseModel):
    id: str
    label: str
    kind: NodeKind
    status: NodeStatus
    x: float
    y: float

class NodeDetail(NodeView):
    description: str

class EdgeView(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(..., alias="from")
    target: str = Field(..., alias="to")
    kind: EdgeKind

class TopologySnapshot(BaseModel):
    nodes: List[NodeView]
    edges: List[EdgeView]
    selected: Optional[str] = None
    poll_interval_seconds: float

class SelectionUpdate(BaseModel):
    node_id: Optional[str] = Field(None, description="Node to select, null to clear")

class SelectionView(BaseModel):
    node_id: Optional[str] = None
    node: Optional[NodeDetail] = None

class NodeStatusUpdate(BaseModel):
    status: NodeStatus

# Chat schemas
class ChatRequest(BaseModel):
    message: str = Field(..., description="User message")

class ChatMessageView(BaseModel):
    role: str
    content: str
    timestamp: str

class ChatTranscript(BaseModel):
    messages: List[ChatMessageView] = Field(default_factory=list)
