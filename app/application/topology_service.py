"""Service wrapping the topology model with lookups, filtering and events."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from app.domain.entities import Edge, Node, NodeKind, NodeStatus
from app.domain.errors import NotFoundError
from app.domain.events import event_publisher, NodeSelected, NodeStatusChanged, TopologyRefreshed
from app.domain.specifications import build_node_filter, filter_by_specification
from app.domain.topology import TopologyModel


def node_to_dict(node: Node) -> Dict[str, Any]:
    return {
        "id": node.id,
        "label": node.label,
        "kind": node.kind.value,
        "status": node.status.value,
        "x": node.position[0],
        "y": node.position[1],
    }


def edge_to_dict(edge: Edge) -> Dict[str, Any]:
    return {"from": edge.source, "to": edge.target, "kind": edge.kind.value}


class TopologyService:
    """Read/select access to the system map."""

    def __init__(self, model: TopologyModel) -> None:
        self._model = model

    @property
    def model(self) -> TopologyModel:
        return self._model

    def snapshot(
        self,
        kind: Optional[NodeKind] = None,
        status: Optional[NodeStatus] = None,
        label: Optional[str] = None,
    ) -> Dict[str, Any]:
        nodes = self._model.nodes()
        filtered = kind is not None or status is not None or bool(label)
        if filtered:
            nodes = filter_by_specification(nodes, build_node_filter(kind, status, label))
            edges = self._model.edges(node_ids=[n.id for n in nodes])
        else:
            edges = self._model.edges()
        return {
            "nodes": [node_to_dict(n) for n in nodes],
            "edges": [edge_to_dict(e) for e in edges],
            "selected": self._model.selected,
        }

    def require_node(self, node_id: str) -> Node:
        """Raise NotFoundError if node doesn't exist."""
        node = self._model.lookup(node_id)
        if node is None:
            raise NotFoundError(f"Node not found: {node_id}")
        return node

    def node_detail(self, node_id: str) -> Dict[str, Any]:
        node = self.require_node(node_id)
        return {**node_to_dict(node), "description": self._model.describe(node_id)}

    def select(self, node_id: Optional[str]) -> Optional[Node]:
        self._model.select(node_id)
        event_publisher.publish(NodeSelected(
            event_id="",
            timestamp=None,
            aggregate_id=node_id or "",
            node_id=node_id,
        ))
        return self._model.selected_node()

    def selection(self) -> Dict[str, Any]:
        selected = self._model.selected
        node = self._model.lookup(selected)
        return {
            "node_id": selected,
            "node": self.node_detail(selected) if node else None,
        }

    def update_status(self, node_id: str, status: NodeStatus) -> Node:
        node = self._model.update_status(node_id, status)
        event_publisher.publish(NodeStatusChanged(
            event_id="",
            timestamp=None,
            aggregate_id=node_id,
            node_id=node_id,
            status=status.value,
        ))
        return node

    def refresh(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        nodes, edges = list(nodes), list(edges)
        self._model.refresh(nodes, edges)
        event_publisher.publish(TopologyRefreshed(
            event_id="",
            timestamp=None,
            aggregate_id="topology",
            node_count=len(nodes),
            edge_count=len(edges),
        ))

    def nodes(self) -> List[Node]:
        return self._model.nodes()
