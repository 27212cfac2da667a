from pydantic_settings import BaseSettings
from pathlib import Path

# Get the repository root directory (parent of app directory)
REPO_ROOT = Path(__file__).parent.parent.absolute()

class Settings(BaseSettings):
    """Application settings."""

    # API settings
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_RELOAD: bool = True

    # Version and environment
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Remote deployment API
    DEPLOY_API_BASE_URL: str = "http://localhost:4000/api"
    DEPLOY_API_TIMEOUT_SECONDS: float = 600.0  # cluster creation takes minutes

    # Chat assistant (served by the same remote API)
    CHAT_ENDPOINT: str = "gemini-chat"
    CHAT_CONTEXT: str = "Bank of Anthos deployment assistant"
    CHAT_FALLBACK_REPLY: str = (
        "I can help you with deploying Bank of Anthos and setting up AI agents."
    )

    # Browser refresh hints
    REFRESH_INTERVAL_SECONDS: float = 1.0
    TOPOLOGY_POLL_INTERVAL_SECONDS: float = 5.0

    # Default cluster form
    DEFAULT_CLUSTER_NAME: str = "whale-bank"
    DEFAULT_CLUSTER_REGION: str = "us-central1-a"
    DEFAULT_NUM_NODES: int = 4
    DEFAULT_MIN_NODES: int = 3
    DEFAULT_MAX_NODES: int = 10

    class Config:
        env_file = str(REPO_ROOT / ".env")

settings = Settings()
