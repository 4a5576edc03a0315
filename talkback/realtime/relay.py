"""Full-duplex relay between a client WebSocket and the upstream realtime channel.

Two tasks run per client: a pump that reads client frames and forwards them
upstream, and a supervisor that owns the upstream connection. The supervisor
connects, sends the session configuration once, forwards upstream frames to
the client, and on any upstream failure reconnects with exponential backoff
until the allowed retries are used up.
"""

from __future__ import annotations

import enum
import asyncio
import logging
import contextlib
from typing import Any
from collections import deque
from collections.abc import Callable, Awaitable

import orjson
import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from talkback.errors import UpstreamUnavailableError
from talkback.state.settings import RealtimeSettings
from talkback.config.realtime import REALTIME_BETA_HEADER
from talkback.config.websocket import WS_CLOSE_SERVICE_UNAVAILABLE_CODE, WS_CLOSE_SERVICE_UNAVAILABLE_REASON
from talkback.handlers.websocket.errors import safe_send_text, safe_send_bytes

from .backoff import compute_backoff_ms
from .envelope import wrap_audio_append, validate_client_text, build_session_update

logger = logging.getLogger(__name__)

ConnectFn = Callable[..., Awaitable[Any]]
SleepFn = Callable[[float], Awaitable[None]]


class RelayState(enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


class UpstreamRelay:
    def __init__(
        self,
        client: Any,
        *,
        settings: RealtimeSettings,
        api_key: str,
        connect: ConnectFn | None = None,
        sleep: SleepFn = asyncio.sleep,
        touch: Callable[[], None] | None = None,
    ) -> None:
        self._client = client
        self._settings = settings
        self._api_key = api_key
        self._connect = connect or websockets.connect
        self._sleep = sleep
        self._touch = touch
        self._upstream: Any = None
        self._pending: deque[str] = deque(maxlen=settings.pending_max_frames)
        self._send_lock = asyncio.Lock()
        self.state = RelayState.DISCONNECTED
        self.retries = 0
        self.connect_attempts = 0
        self.backoff_delays_ms: list[int] = []

    @property
    def connected(self) -> bool:
        return self.state is RelayState.OPEN and self._upstream is not None

    async def run(self) -> None:
        pump = asyncio.create_task(self._pump_client())
        supervisor = asyncio.create_task(self._supervise())
        exhausted: UpstreamUnavailableError | None = None
        try:
            done, _pending = await asyncio.wait({pump, supervisor}, return_when=asyncio.FIRST_COMPLETED)
            if supervisor in done and not supervisor.cancelled():
                exc = supervisor.exception()
                if isinstance(exc, UpstreamUnavailableError):
                    exhausted = exc
                elif exc is not None:
                    logger.error("relay supervisor failed", exc_info=exc)
            if pump in done and not pump.cancelled() and pump.exception() is not None:
                logger.error("relay client pump failed", exc_info=pump.exception())
        finally:
            for task in (pump, supervisor):
                if not task.done():
                    task.cancel()
                    with contextlib.suppress(asyncio.CancelledError, Exception):
                        await task
            self.state = RelayState.CLOSED
            await self._close_upstream()
            if exhausted is not None:
                logger.warning("relay: upstream unavailable after %s attempts; closing client", exhausted.attempts)
            await self._close_client()

    async def _supervise(self) -> None:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            REALTIME_BETA_HEADER[0]: REALTIME_BETA_HEADER[1],
        }
        while True:
            self.state = RelayState.CONNECTING
            self.connect_attempts += 1
            try:
                upstream = await self._connect(
                    self._settings.url,
                    additional_headers=headers,
                    open_timeout=self._settings.connect_timeout_s,
                    max_size=None,
                )
            except (OSError, TimeoutError, WebSocketException) as exc:
                logger.warning("relay: upstream connect failed: %s", exc)
            else:
                client_gone = await self._serve_upstream(upstream)
                if client_gone:
                    return

            self.state = RelayState.DISCONNECTED
            if self.retries >= self._settings.max_retries:
                raise UpstreamUnavailableError(attempts=self.connect_attempts)
            self.retries += 1
            delay_ms = compute_backoff_ms(
                self.retries,
                base_ms=self._settings.backoff_base_ms,
                cap_ms=self._settings.backoff_cap_ms,
            )
            self.backoff_delays_ms.append(delay_ms)
            logger.info("relay: reconnecting in %s ms (retry %s/%s)", delay_ms, self.retries, self._settings.max_retries)
            await self._sleep(delay_ms / 1000.0)

    async def _serve_upstream(self, upstream: Any) -> bool:
        """Run one upstream connection to completion. Returns True if the client went away."""
        # Left open when the relay is shutting down so run() can close it with a status code.
        keep_open = False
        try:
            self._upstream = upstream
            async with self._send_lock:
                await upstream.send(orjson.dumps(build_session_update(self._settings)).decode("utf-8"))
                self.state = RelayState.OPEN
                self.retries = 0
                logger.info("relay: upstream open")
                while self._pending:
                    await upstream.send(self._pending[0])
                    self._pending.popleft()

            async for message in upstream:
                if isinstance(message, bytes):
                    ok = await safe_send_bytes(self._client, message)
                else:
                    ok = await safe_send_text(self._client, message)
                if not ok:
                    keep_open = True
                    return True
            logger.info("relay: upstream closed")
        except asyncio.CancelledError:
            keep_open = True
            raise
        except ConnectionClosed as exc:
            logger.warning("relay: upstream connection lost: %s", exc)
        except (OSError, WebSocketException) as exc:
            logger.warning("relay: upstream error: %s", exc)
        finally:
            if not keep_open:
                self._upstream = None
                with contextlib.suppress(Exception):
                    await upstream.close()
        return False

    async def _pump_client(self) -> None:
        while True:
            message = await self._client.receive()
            if message.get("type") == "websocket.disconnect":
                logger.info("relay: client disconnected")
                return
            if self._touch is not None:
                self._touch()

            data = message.get("bytes")
            if data is not None:
                frame = orjson.dumps(wrap_audio_append(data)).decode("utf-8")
            else:
                text = message.get("text")
                if text is None:
                    continue
                try:
                    frame = validate_client_text(text)
                except ValueError as exc:
                    logger.warning("relay: dropping malformed client frame: %s", exc)
                    continue
            await self._forward(frame)

    async def _forward(self, frame: str) -> None:
        async with self._send_lock:
            upstream = self._upstream
            if self.state is not RelayState.OPEN or upstream is None:
                if len(self._pending) == self._pending.maxlen:
                    logger.debug("relay: pending queue full; dropping oldest frame")
                self._pending.append(frame)
                return
            try:
                await upstream.send(frame)
            except (ConnectionClosed, OSError, WebSocketException):
                # The supervisor sees the same failure on its read side and reconnects.
                self._pending.append(frame)

    async def _close_upstream(self) -> None:
        upstream = self._upstream
        self._upstream = None
        if upstream is None:
            return
        with contextlib.suppress(Exception):
            await upstream.close(code=WS_CLOSE_SERVICE_UNAVAILABLE_CODE, reason=WS_CLOSE_SERVICE_UNAVAILABLE_REASON)

    async def _close_client(self) -> None:
        with contextlib.suppress(Exception):
            await self._client.close(
                code=WS_CLOSE_SERVICE_UNAVAILABLE_CODE,
                reason=WS_CLOSE_SERVICE_UNAVAILABLE_REASON,
            )


__all__ = ["RelayState", "UpstreamRelay"]
