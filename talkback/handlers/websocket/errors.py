"""Safe send and error helpers for the WebSocket endpoints."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from fastapi import WebSocket, WebSocketDisconnect

from talkback.config.websocket import WS_KEY_TYPE, WS_MSG_ERROR

logger = logging.getLogger(__name__)


def build_message(msg_type: str, **fields: Any) -> dict[str, Any]:
    return {WS_KEY_TYPE: msg_type, **fields}


def build_error(message: str) -> dict[str, Any]:
    return build_message(WS_MSG_ERROR, message=message)


def dumps(payload: dict[str, Any]) -> str:
    return orjson.dumps(payload).decode("utf-8")


async def safe_send_text(ws: WebSocket, text: str) -> bool:
    try:
        await ws.send_text(text)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def safe_send_bytes(ws: WebSocket, data: bytes) -> bool:
    try:
        await ws.send_bytes(data)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def safe_send_json(ws: WebSocket, payload: dict[str, Any]) -> bool:
    return await safe_send_text(ws, dumps(payload))


async def send_error(ws: WebSocket, message: str) -> bool:
    return await safe_send_json(ws, build_error(message))


async def reject_connection(ws: WebSocket, *, message: str, close_code: int) -> None:
    # Accept so we can send a structured error, then close.
    try:
        await ws.accept()
    except Exception:
        return
    await send_error(ws, message)
    try:
        await ws.close(code=close_code, reason=message)
    except Exception:
        return


__all__ = [
    "build_error",
    "build_message",
    "dumps",
    "reject_connection",
    "safe_send_bytes",
    "safe_send_json",
    "safe_send_text",
    "send_error",
]
