"""HTTP adapter for the remote cluster-deployment API."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import httpx

from app.domain.entities import OperationResult
from app.domain.errors import TransportError

logger = logging.getLogger(__name__)


class DeployApiClient:
    """Issues single operations against the deployment API.

    One POST per call to ``{base_url}/{operation}``, no retries. Transport
    failures (connection errors, timeouts, bodies that are not JSON) raise
    :class:`TransportError`; an HTTP error status with a JSON body is returned
    normally with ``http_ok=False``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        chat_endpoint: str = "gemini-chat",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.chat_endpoint = chat_endpoint
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
            headers={"Content-Type": "application/json"},
        )

    async def _post(self, endpoint: str, body: Dict[str, Any]) -> httpx.Response:
        try:
            async with self._client() as client:
                return await client.post(f"/{endpoint}", json=body)
        except httpx.RequestError as e:
            logger.warning(f"Deploy API request to {endpoint} failed: {e!r}")
            raise TransportError(endpoint, type(e).__name__) from e

    @staticmethod
    def _decode(endpoint: str, response: httpx.Response) -> Any:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(
                f"Deploy API returned non-JSON body for {endpoint} (HTTP {response.status_code})"
            )
            raise TransportError(endpoint, "invalid JSON response") from e

    async def invoke(self, name: str, payload: Dict[str, Any]) -> OperationResult:
        response = await self._post(name, payload)
        body = self._decode(name, response)
        return OperationResult(
            payload=body,
            http_ok=response.is_success,
            status_code=response.status_code,
        )

    async def chat(self, message: str, context: str) -> Dict[str, Any]:
        response = await self._post(self.chat_endpoint, {"message": message, "context": context})
        body = self._decode(self.chat_endpoint, response)
        return body if isinstance(body, dict) else {}
