"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from talkback.state.settings import AppSettings
    from talkback.realtime.bridge import RealtimeBridge
    from talkback.handlers.sessions import SessionRegistry
    from talkback.handlers.connections import ConnectionManager


@dataclass(slots=True)
class ServiceBundle:
    transcriber: Any
    generator: Any
    synthesizer: Any


@dataclass(slots=True)
class RuntimeDeps:
    connections: ConnectionManager
    sessions: SessionRegistry
    services: ServiceBundle
    realtime_bridge: RealtimeBridge
    settings: AppSettings
    _client: Any = None

    async def shutdown(self) -> None:
        if self._client is None:
            return
        try:
            await self._client.close()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps", "ServiceBundle"]
