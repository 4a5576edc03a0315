"""Session registry: one conversation state record per live voice connection."""

from __future__ import annotations

import uuid
import logging
from typing import Any

from talkback.state.session import Session

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Keyed by connection identity; records never outlive their connection."""

    def __init__(self, *, base_prompt: str) -> None:
        self._base_prompt = base_prompt
        self._sessions: dict[int, Session] = {}

    def create(self, conn: Any) -> Session:
        key = id(conn)
        if key in self._sessions:
            raise ValueError("connection already has a session")
        session = Session(
            id=uuid.uuid4().hex,
            base_prompt=self._base_prompt,
            system_prompt=self._base_prompt,
        )
        self._sessions[key] = session
        logger.debug("session %s created", session.id)
        return session

    def get(self, conn: Any) -> Session | None:
        return self._sessions.get(id(conn))

    def remove(self, conn: Any) -> Session | None:
        session = self._sessions.pop(id(conn), None)
        if session is not None:
            session.closed = True
            logger.debug("session %s removed", session.id)
        return session

    def __len__(self) -> int:
        return len(self._sessions)


__all__ = ["SessionRegistry"]
