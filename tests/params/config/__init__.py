"""Shared test client configuration."""

from __future__ import annotations

from .websocket import (
    WS_ENDPOINT_PATH,
    WS_PING_TIMEOUT_S,
    WS_PING_INTERVAL_S,
    DEFAULT_REPLY_TIMEOUT_S,
    WS_REALTIME_ENDPOINT_PATH,
)
from .audio import (
    CHUNK_MS,
    FILE_EXTS,
    SAMPLE_RATE,
    CHUNK_SAMPLES,
    SAMPLES_DIR_NAME,
    PCM16_MAX_VALUE,
    TRAILING_SILENCE_S,
)

__all__ = [
    "CHUNK_MS",
    "CHUNK_SAMPLES",
    "DEFAULT_REPLY_TIMEOUT_S",
    "FILE_EXTS",
    "PCM16_MAX_VALUE",
    "SAMPLES_DIR_NAME",
    "SAMPLE_RATE",
    "TRAILING_SILENCE_S",
    "WS_ENDPOINT_PATH",
    "WS_PING_INTERVAL_S",
    "WS_PING_TIMEOUT_S",
    "WS_REALTIME_ENDPOINT_PATH",
]
