"""Receive loop and control-message dispatch for the voice endpoint (/ws)."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from collections.abc import Callable

from fastapi import WebSocket, WebSocketDisconnect

from talkback.state.settings import WebSocketSettings
from talkback.voice.controller import VoiceSessionController
from talkback.config.websocket import WS_KEY_TYPE, WS_MSG_PING, WS_MSG_PONG, WS_MSG_CONFIG

from .parser import parse_control_message
from .lifecycle import WebSocketLifecycle
from .errors import build_error, build_message

logger = logging.getLogger(__name__)

HandlerFn = Callable[[VoiceSessionController, Any, dict[str, Any]], None]


async def _recv_with_watchdog(ws: WebSocket, lifecycle: WebSocketLifecycle) -> tuple[dict[str, Any] | None, bool]:
    try:
        message = await asyncio.wait_for(ws.receive(), timeout=lifecycle.watchdog_tick_s * 2)
        return message, False
    except TimeoutError:
        return None, lifecycle.should_close()


def _handle_config(controller: VoiceSessionController, _outbox: Any, msg: dict[str, Any]) -> None:
    controller.handle_topic(msg["topic"])


def _handle_ping(_controller: VoiceSessionController, outbox: Any, _msg: dict[str, Any]) -> None:
    outbox.put_json(build_message(WS_MSG_PONG))


HANDLERS: dict[str, HandlerFn] = {
    WS_MSG_CONFIG: _handle_config,
    WS_MSG_PING: _handle_ping,
}


def _handle_text(controller: VoiceSessionController, outbox: Any, raw: str) -> None:
    try:
        msg = parse_control_message(raw)
    except ValueError as exc:
        logger.warning("session %s: ignoring malformed control message: %s", controller.session.id, exc)
        return

    handler = HANDLERS.get(msg[WS_KEY_TYPE])
    if handler is None:
        logger.warning("session %s: ignoring unknown message type %r", controller.session.id, msg[WS_KEY_TYPE])
        return
    handler(controller, outbox, msg)


def _handle_bytes(controller: VoiceSessionController, outbox: Any, data: bytes, *, max_frame_bytes: int) -> None:
    if max_frame_bytes > 0 and len(data) > max_frame_bytes:
        logger.warning("session %s: rejecting %s-byte audio frame", controller.session.id, len(data))
        outbox.put_json(build_error(f"audio frame too large ({len(data)} bytes, max {max_frame_bytes})"))
        return
    controller.handle_audio(data)


async def run_message_loop(
    ws: WebSocket,
    lifecycle: WebSocketLifecycle,
    controller: VoiceSessionController,
    outbox: Any,
    settings: WebSocketSettings,
) -> None:
    try:
        while True:
            message, should_exit = await _recv_with_watchdog(ws, lifecycle)
            if should_exit:
                return
            if message is None:
                continue
            if message.get("type") == "websocket.disconnect":
                return

            lifecycle.touch()

            data = message.get("bytes")
            if data is not None:
                _handle_bytes(controller, outbox, data, max_frame_bytes=settings.max_frame_bytes)
                continue
            text = message.get("text")
            if text is not None:
                _handle_text(controller, outbox, text)
    except WebSocketDisconnect:
        return


__all__ = ["HANDLERS", "run_message_loop"]
