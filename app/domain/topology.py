"""Service topology shown on the system map."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from app.domain.entities import Edge, Node, NodeStatus
from app.domain.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_NODE_DESCRIPTION = "Service component"


class TopologyModel:
    """Typed nodes, typed edges and a single selection cursor.

    The raw edge list may reference node ids that do not exist; such edges
    are skipped (with a warning) whenever edges are resolved. Duplicate edges
    are kept.
    """

    def __init__(self, nodes: Iterable[Node] = (), edges: Iterable[Edge] = ()) -> None:
        self._nodes: Dict[str, Node] = {}
        self._edges: List[Edge] = []
        self._selected: Optional[str] = None
        self.refresh(nodes, edges)

    def refresh(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        """Replace the snapshot. The selection cursor is kept as-is."""
        indexed: Dict[str, Node] = {}
        for node in nodes:
            if node.id in indexed:
                raise ValidationError(f"Duplicate node id: {node.id}")
            indexed[node.id] = node
        self._nodes = indexed
        self._edges = list(edges)

    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    def raw_edges(self) -> List[Edge]:
        return list(self._edges)

    def edges(self, node_ids: Optional[Iterable[str]] = None) -> List[Edge]:
        """Edges whose endpoints both exist (within ``node_ids`` if given)."""
        known = set(self._nodes) if node_ids is None else set(node_ids) & set(self._nodes)
        resolved = []
        for edge in self._edges:
            if edge.source in known and edge.target in known:
                resolved.append(edge)
            elif edge.source not in self._nodes or edge.target not in self._nodes:
                logger.warning(
                    f"Dropping edge {edge.source} -> {edge.target}: unknown node"
                )
        return resolved

    def lookup(self, node_id: Optional[str]) -> Optional[Node]:
        if node_id is None:
            return None
        return self._nodes.get(node_id)

    def select(self, node_id: Optional[str]) -> None:
        # unknown ids are accepted; lookup() will return None for them
        self._selected = node_id

    @property
    def selected(self) -> Optional[str]:
        return self._selected

    def selected_node(self) -> Optional[Node]:
        return self.lookup(self._selected)

    def describe(self, node_id: str) -> str:
        node = self._nodes.get(node_id)
        if node is None or not node.description:
            return DEFAULT_NODE_DESCRIPTION
        return node.description

    def update_status(self, node_id: str, status: NodeStatus) -> Node:
        node = self._nodes.get(node_id)
        if node is None:
            raise NotFoundError(f"Node not found: {node_id}")
        updated = node.with_status(status)
        self._nodes[node_id] = updated
        return updated
