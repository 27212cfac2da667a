"""Assistant chat next to the dashboard. Not tracked by status or timers."""
from __future__ import annotations

import logging
from typing import List, Optional

from app.domain.entities import ChatMessage
from app.domain.errors import TransportError
from app.domain.ports import ChatPort
from app.domain.state import DashboardState

logger = logging.getLogger(__name__)


class ChatService:
    def __init__(
        self,
        client: ChatPort,
        state: DashboardState,
        context: str,
        fallback_reply: str,
    ) -> None:
        self._client = client
        self._state = state
        self._context = context
        self._fallback = fallback_reply

    def transcript(self) -> List[ChatMessage]:
        return list(self._state.chat)

    async def send(self, text: str) -> Optional[ChatMessage]:
        """Append the user's message and, if the assistant answers, its reply.

        Blank input is ignored. On transport failure only the user's message
        stays in the transcript.
        """
        if not text or not text.strip():
            return None
        self._state.chat.append(ChatMessage(role="user", content=text))
        try:
            data = await self._client.chat(text, self._context)
        except TransportError:
            logger.exception("Chat request failed")
            return None
        reply = ChatMessage(role="assistant", content=data.get("response") or self._fallback)
        self._state.chat.append(reply)
        return reply
