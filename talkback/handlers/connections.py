"""Admission control shared by the voice and relay endpoints."""

from __future__ import annotations

import asyncio
from typing import Any
from collections import Counter

from talkback.config.limits import CONNECTION_KIND_VOICE


class ConnectionManager:
    def __init__(self, *, max_connections: int) -> None:
        self._max = max(1, int(max_connections))
        self._lock = asyncio.Lock()
        # id(ws) -> endpoint kind
        self._active: dict[int, str] = {}

    @property
    def capacity(self) -> int:
        return self._max

    async def connect(self, ws: Any, *, kind: str = CONNECTION_KIND_VOICE) -> bool:
        """Reserve a slot for `ws` before it is accepted; False when the server is full."""
        async with self._lock:
            if len(self._active) >= self._max:
                return False
            self._active[id(ws)] = kind
            return True

    async def disconnect(self, ws: Any) -> None:
        async with self._lock:
            self._active.pop(id(ws), None)

    def get_connection_count(self) -> int:
        return len(self._active)

    def counts_by_kind(self) -> dict[str, int]:
        return dict(Counter(self._active.values()))


__all__ = ["ConnectionManager"]
