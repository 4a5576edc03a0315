"""Single writer per connection so text and audio frames never interleave."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any

from fastapi import WebSocket

from .errors import dumps, safe_send_text, safe_send_bytes

logger = logging.getLogger(__name__)

_STOP = object()


class Outbox:
    def __init__(self, ws: WebSocket) -> None:
        self._ws = ws
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._task: asyncio.Task | None = None
        self._closed = False
        self._broken = False

    @property
    def broken(self) -> bool:
        """True once a send failed; later frames are discarded."""
        return self._broken

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._writer_loop())
        return self._task

    def put_json(self, payload: dict[str, Any]) -> None:
        if self._closed:
            return
        self._queue.put_nowait(dumps(payload))

    def put_bytes(self, data: bytes) -> None:
        if self._closed:
            return
        self._queue.put_nowait(bytes(data))

    async def close(self, *, drain_timeout_s: float = 1.0) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_STOP)
        if self._task is None:
            return
        try:
            await asyncio.wait_for(asyncio.shield(self._task), timeout=drain_timeout_s)
        except TimeoutError:
            self._task.cancel()
            with contextlib.suppress(Exception):
                await self._task
        self._task = None

    async def _writer_loop(self) -> None:
        try:
            while True:
                item = await self._queue.get()
                if item is _STOP:
                    return
                if self._broken:
                    continue
                if isinstance(item, bytes):
                    ok = await safe_send_bytes(self._ws, item)
                else:
                    ok = await safe_send_text(self._ws, item)
                if not ok:
                    logger.debug("outbox: client send failed; discarding further frames")
                    self._broken = True
        except asyncio.CancelledError:
            return


__all__ = ["Outbox"]
