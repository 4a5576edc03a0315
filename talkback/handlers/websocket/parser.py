"""Client control message parsing/validation."""

from __future__ import annotations

import json
from typing import Any

from talkback.config.websocket import WS_KEY_TYPE, WS_MSG_CONFIG


def parse_control_message(raw: str) -> dict[str, Any]:
    try:
        msg = json.loads(raw)
    except Exception as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise ValueError("message must be a JSON object")

    msg_type = msg.get(WS_KEY_TYPE)
    if not isinstance(msg_type, str) or not msg_type.strip():
        raise ValueError("message missing non-empty 'type'")
    msg[WS_KEY_TYPE] = msg_type.strip()

    if msg[WS_KEY_TYPE] == WS_MSG_CONFIG:
        topic = msg.get("topic")
        if not isinstance(topic, str):
            raise ValueError("config message requires a string 'topic'")
    return msg


__all__ = ["parse_control_message"]
