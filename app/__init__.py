"""
Whale-Kube Dashboard Application Package

Directory Structure:
├── routers/           # FastAPI route handlers
├── schemas/           # Pydantic models for API requests/responses
│   └── api_schemas.py # HTTP request/response structures
├── domain/            # Timers, status tracking, topology, events, errors
├── application/       # Orchestration, topology and chat services
├── infrastructure/    # Deployment API client, default system map
└── config.py          # Application configuration

The API drives a remote cluster-deployment service through named operations
(create cluster, get credentials, deploy Bank of Anthos, deploy the Orbital
agent, check status, delete cluster). For each launch it keeps a timer
record and the operation's lifecycle status, and it serves the static
service topology shown on the system map.
"""
