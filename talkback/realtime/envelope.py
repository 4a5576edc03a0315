"""Frames exchanged with the upstream realtime channel."""

from __future__ import annotations

import base64
from typing import Any

import orjson

from talkback.state.settings import RealtimeSettings
from talkback.config.realtime import REALTIME_MODALITIES, REALTIME_AUDIO_FORMAT

SESSION_UPDATE = "session.update"
INPUT_AUDIO_APPEND = "input_audio_buffer.append"


def build_session_update(settings: RealtimeSettings) -> dict[str, Any]:
    return {
        "type": SESSION_UPDATE,
        "session": {
            "modalities": list(REALTIME_MODALITIES),
            "voice": settings.voice,
            "instructions": settings.instructions,
            "input_audio_format": REALTIME_AUDIO_FORMAT,
            "output_audio_format": REALTIME_AUDIO_FORMAT,
            "turn_detection": {
                "type": "server_vad",
                "threshold": settings.vad_threshold,
                "prefix_padding_ms": settings.vad_prefix_padding_ms,
                "silence_duration_ms": settings.vad_silence_duration_ms,
            },
        },
    }


def wrap_audio_append(pcm: bytes) -> dict[str, Any]:
    return {"type": INPUT_AUDIO_APPEND, "audio": base64.b64encode(pcm).decode("ascii")}


def validate_client_text(raw: str) -> str:
    """Return the frame unchanged if it is a JSON object, else raise ValueError."""
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc
    if not isinstance(msg, dict):
        raise ValueError("message must be a JSON object")
    return raw


__all__ = [
    "INPUT_AUDIO_APPEND",
    "SESSION_UPDATE",
    "build_session_update",
    "validate_client_text",
    "wrap_audio_append",
]
