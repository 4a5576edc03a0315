"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from talkback.state.runtime import RuntimeDeps
from talkback.config.websocket import WS_CLOSE_BUSY_CODE
from talkback.config.limits import CONNECTION_KIND_VOICE, CONNECTION_KIND_REALTIME
from talkback.voice.controller import VoiceSessionController

from .outbox import Outbox
from .errors import reject_connection
from .lifecycle import WebSocketLifecycle
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


async def _prepare_connection(ws: WebSocket, runtime_deps: RuntimeDeps, *, kind: str) -> bool:
    if not await runtime_deps.connections.connect(ws, kind=kind):
        await reject_connection(
            ws,
            message="Server cannot accept new connections. Please try again later.",
            close_code=WS_CLOSE_BUSY_CODE,
        )
        return False

    try:
        await ws.accept()
    except Exception:
        with contextlib.suppress(Exception):
            await runtime_deps.connections.disconnect(ws)
        raise
    return True


def _new_lifecycle(ws: WebSocket, runtime_deps: RuntimeDeps, **kwargs) -> WebSocketLifecycle:
    ws_settings = runtime_deps.settings.websocket
    return WebSocketLifecycle(
        ws,
        idle_timeout_s=ws_settings.idle_timeout_s,
        watchdog_tick_s=ws_settings.watchdog_tick_s,
        max_connection_duration_s=ws_settings.max_connection_duration_s,
        **kwargs,
    )


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    lifecycle: WebSocketLifecycle | None = None
    outbox: Outbox | None = None
    controller: VoiceSessionController | None = None
    admitted = False
    session_id: str | None = None
    try:
        if not await _prepare_connection(ws, runtime_deps, kind=CONNECTION_KIND_VOICE):
            return
        admitted = True

        session = runtime_deps.sessions.create(ws)
        session_id = session.id
        outbox = Outbox(ws)
        outbox.start()
        controller = VoiceSessionController(
            session,
            outbox=outbox,
            services=runtime_deps.services,
            settings=runtime_deps.settings,
        )
        controller.start()

        lifecycle = _new_lifecycle(ws, runtime_deps, is_busy_fn=controller.is_busy)
        lifecycle.start()

        logger.info(
            "WebSocket connection accepted session_id=%s. Active: %s",
            session_id,
            runtime_deps.connections.get_connection_count(),
        )
        await run_message_loop(ws, lifecycle, controller, outbox, runtime_deps.settings.websocket)
    finally:
        if lifecycle is not None:
            with contextlib.suppress(Exception):
                await lifecycle.stop()
        if controller is not None:
            with contextlib.suppress(Exception):
                await controller.close()
        if outbox is not None:
            with contextlib.suppress(Exception):
                await outbox.close()
        if session_id is not None:
            runtime_deps.sessions.remove(ws)

        if admitted:
            with contextlib.suppress(Exception):
                await runtime_deps.connections.disconnect(ws)
            logger.info(
                "WebSocket connection closed session_id=%s. Active: %s",
                session_id,
                runtime_deps.connections.get_connection_count(),
            )


async def handle_realtime_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    lifecycle: WebSocketLifecycle | None = None
    admitted = False
    try:
        if not await _prepare_connection(ws, runtime_deps, kind=CONNECTION_KIND_REALTIME):
            return
        admitted = True

        lifecycle = _new_lifecycle(ws, runtime_deps)
        lifecycle.start()
        relay = runtime_deps.realtime_bridge.new_relay(ws, touch=lifecycle.touch)

        logger.info("Realtime relay accepted. Active: %s", runtime_deps.connections.get_connection_count())
        await relay.run()
    finally:
        if lifecycle is not None:
            with contextlib.suppress(Exception):
                await lifecycle.stop()
        if admitted:
            with contextlib.suppress(Exception):
                await runtime_deps.connections.disconnect(ws)
            logger.info("Realtime relay closed. Active: %s", runtime_deps.connections.get_connection_count())


__all__ = ["handle_realtime_connection", "handle_websocket_connection"]
