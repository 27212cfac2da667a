"""Bank of Anthos + Orbital system map, as deployed by the dashboard."""
from __future__ import annotations

from typing import List

from app.domain.entities import Edge, EdgeKind, Node, NodeKind, NodeStatus
from app.domain.topology import TopologyModel

_CORE, _AI, _DB, _EXT = NodeKind.CORE, NodeKind.AI, NodeKind.DATABASE, NodeKind.EXTERNAL
_RUN, _PEND = NodeStatus.RUNNING, NodeStatus.PENDING

DEFAULT_NODES: List[Node] = [
    # Bank of Anthos core services
    Node("frontend", "Frontend", _CORE, _RUN, (400, 50),
         "Python Flask app serving the web interface"),
    Node("loadgen", "Load Generator", _EXT, _RUN, (100, 50)),
    Node("userservice", "User Service", _CORE, _RUN, (200, 200),
         "Manages user accounts and JWT authentication"),
    Node("contacts", "Contacts", _CORE, _RUN, (350, 200)),
    Node("ledgerwriter", "Ledger Writer", _CORE, _RUN, (500, 200)),
    Node("balancereader", "Balance Reader", _CORE, _RUN, (650, 200),
         "Provides efficient cache of user balances"),
    Node("transactionhistory", "Transaction History", _CORE, _RUN, (800, 200)),
    # Databases
    Node("accountsdb", "Accounts DB", _DB, _RUN, (275, 350)),
    Node("ledgerdb", "Ledger DB", _DB, _RUN, (650, 350)),
    # Orbital AI components
    Node("orbital", "Orbital Agent", _AI, _PEND, (950, 100),
         "AI agent monitoring high-value accounts for growth opportunities"),
    Node("gemini", "Gemini AI", _AI, _PEND, (950, 200),
         "Google Gemini AI for business analysis"),
    Node("whalebox", "WhaleBox UI", _AI, _PEND, (950, 300),
         "React overlay UI for SME transformation"),
]

DEFAULT_EDGES: List[Edge] = [
    Edge("loadgen", "frontend", EdgeKind.API),
    Edge("frontend", "userservice", EdgeKind.API),
    Edge("frontend", "contacts", EdgeKind.API),
    Edge("frontend", "ledgerwriter", EdgeKind.API),
    Edge("frontend", "balancereader", EdgeKind.API),
    Edge("frontend", "transactionhistory", EdgeKind.API),
    Edge("userservice", "accountsdb", EdgeKind.DATA),
    Edge("contacts", "accountsdb", EdgeKind.DATA),
    Edge("ledgerwriter", "ledgerdb", EdgeKind.DATA),
    Edge("balancereader", "ledgerdb", EdgeKind.DATA),
    Edge("transactionhistory", "ledgerdb", EdgeKind.DATA),
    Edge("orbital", "balancereader", EdgeKind.AI),
    Edge("orbital", "transactionhistory", EdgeKind.AI),
    Edge("orbital", "gemini", EdgeKind.AI),
    Edge("whalebox", "frontend", EdgeKind.AI),
]


def build_default_topology() -> TopologyModel:
    return TopologyModel(DEFAULT_NODES, DEFAULT_EDGES)
