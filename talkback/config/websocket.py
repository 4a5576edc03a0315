"""WebSocket protocol configuration and constants."""

from __future__ import annotations

WS_ENDPOINT_PATH = "/ws"
WS_REALTIME_ENDPOINT_PATH = "/ws/realtime"

WS_KEY_TYPE = "type"

# Client -> server control messages
WS_MSG_CONFIG = "config"
WS_MSG_PING = "ping"

# Server -> client notifications
WS_MSG_PONG = "pong"
WS_MSG_SPEECH_START = "vad.speech_start"
WS_MSG_SPEECH_END = "vad.speech_end"
WS_MSG_THINKING = "assistant.thinking"
WS_MSG_RESPONSE_TEXT = "assistant.response.text"
WS_MSG_AUDIO_START = "assistant.audio.start"
WS_MSG_AUDIO_END = "assistant.audio.end"
WS_MSG_ERROR = "error"

# Close codes
WS_CLOSE_SERVICE_UNAVAILABLE_CODE = 1013
WS_CLOSE_IDLE_CODE = 4000
WS_CLOSE_BUSY_CODE = 4002
WS_CLOSE_MAX_DURATION_CODE = 4003

WS_CLOSE_IDLE_REASON = "idle timeout"
WS_CLOSE_MAX_DURATION_REASON = "max connection duration reached"
WS_CLOSE_SERVICE_UNAVAILABLE_REASON = "upstream unavailable"

# Idle watchdog
ENV_WS_IDLE_TIMEOUT_S = "WS_IDLE_TIMEOUT_S"
DEFAULT_WS_IDLE_TIMEOUT_S: float = 150.0

ENV_WS_WATCHDOG_TICK_S = "WS_WATCHDOG_TICK_S"
DEFAULT_WS_WATCHDOG_TICK_S: float = 5.0

ENV_WS_MAX_CONNECTION_DURATION_S = "WS_MAX_CONNECTION_DURATION_S"
DEFAULT_WS_MAX_CONNECTION_DURATION_S: float = 5400.0

# Largest binary audio frame accepted from a client.
ENV_WS_MAX_FRAME_BYTES = "WS_MAX_FRAME_BYTES"
DEFAULT_WS_MAX_FRAME_BYTES: int = 64 * 1024

__all__ = [
    "DEFAULT_WS_IDLE_TIMEOUT_S",
    "DEFAULT_WS_MAX_CONNECTION_DURATION_S",
    "DEFAULT_WS_MAX_FRAME_BYTES",
    "DEFAULT_WS_WATCHDOG_TICK_S",
    "ENV_WS_IDLE_TIMEOUT_S",
    "ENV_WS_MAX_CONNECTION_DURATION_S",
    "ENV_WS_MAX_FRAME_BYTES",
    "ENV_WS_WATCHDOG_TICK_S",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_IDLE_REASON",
    "WS_CLOSE_MAX_DURATION_CODE",
    "WS_CLOSE_MAX_DURATION_REASON",
    "WS_CLOSE_SERVICE_UNAVAILABLE_CODE",
    "WS_CLOSE_SERVICE_UNAVAILABLE_REASON",
    "WS_ENDPOINT_PATH",
    "WS_KEY_TYPE",
    "WS_MSG_AUDIO_END",
    "WS_MSG_AUDIO_START",
    "WS_MSG_CONFIG",
    "WS_MSG_ERROR",
    "WS_MSG_PING",
    "WS_MSG_PONG",
    "WS_MSG_RESPONSE_TEXT",
    "WS_MSG_SPEECH_END",
    "WS_MSG_SPEECH_START",
    "WS_MSG_THINKING",
    "WS_REALTIME_ENDPOINT_PATH",
]
