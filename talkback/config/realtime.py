"""Upstream realtime channel configuration (env names + defaults only)."""

from __future__ import annotations

ENV_REALTIME_URL = "REALTIME_URL"
DEFAULT_REALTIME_URL: str = "wss://api.openai.com/v1/realtime?model=gpt-4o-realtime-preview"

ENV_REALTIME_VOICE = "REALTIME_VOICE"
DEFAULT_REALTIME_VOICE: str = "alloy"

ENV_REALTIME_INSTRUCTIONS = "REALTIME_INSTRUCTIONS"

REALTIME_MODALITIES: tuple[str, ...] = ("text", "audio")
REALTIME_AUDIO_FORMAT: str = "pcm16"

# Server-side turn detection sensitivity.
ENV_REALTIME_VAD_THRESHOLD = "REALTIME_VAD_THRESHOLD"
DEFAULT_REALTIME_VAD_THRESHOLD: float = 0.5

ENV_REALTIME_VAD_PREFIX_PADDING_MS = "REALTIME_VAD_PREFIX_PADDING_MS"
DEFAULT_REALTIME_VAD_PREFIX_PADDING_MS: int = 300

ENV_REALTIME_VAD_SILENCE_DURATION_MS = "REALTIME_VAD_SILENCE_DURATION_MS"
DEFAULT_REALTIME_VAD_SILENCE_DURATION_MS: int = 500

# Reconnect backoff: wait min(base * 2**attempt, cap) after the attempt-th failure.
ENV_REALTIME_MAX_RETRIES = "REALTIME_MAX_RETRIES"
DEFAULT_REALTIME_MAX_RETRIES: int = 3

ENV_REALTIME_BACKOFF_BASE_MS = "REALTIME_BACKOFF_BASE_MS"
DEFAULT_REALTIME_BACKOFF_BASE_MS: int = 1000

ENV_REALTIME_BACKOFF_CAP_MS = "REALTIME_BACKOFF_CAP_MS"
DEFAULT_REALTIME_BACKOFF_CAP_MS: int = 30000

ENV_REALTIME_CONNECT_TIMEOUT_S = "REALTIME_CONNECT_TIMEOUT_S"
DEFAULT_REALTIME_CONNECT_TIMEOUT_S: float = 10.0

# Client frames held while the upstream is not open.
ENV_REALTIME_PENDING_MAX_FRAMES = "REALTIME_PENDING_MAX_FRAMES"
DEFAULT_REALTIME_PENDING_MAX_FRAMES: int = 256

REALTIME_BETA_HEADER: tuple[str, str] = ("OpenAI-Beta", "realtime=v1")

__all__ = [
    "DEFAULT_REALTIME_BACKOFF_BASE_MS",
    "DEFAULT_REALTIME_BACKOFF_CAP_MS",
    "DEFAULT_REALTIME_CONNECT_TIMEOUT_S",
    "DEFAULT_REALTIME_MAX_RETRIES",
    "DEFAULT_REALTIME_PENDING_MAX_FRAMES",
    "DEFAULT_REALTIME_URL",
    "DEFAULT_REALTIME_VAD_PREFIX_PADDING_MS",
    "DEFAULT_REALTIME_VAD_SILENCE_DURATION_MS",
    "DEFAULT_REALTIME_VAD_THRESHOLD",
    "DEFAULT_REALTIME_VOICE",
    "ENV_REALTIME_BACKOFF_BASE_MS",
    "ENV_REALTIME_BACKOFF_CAP_MS",
    "ENV_REALTIME_CONNECT_TIMEOUT_S",
    "ENV_REALTIME_INSTRUCTIONS",
    "ENV_REALTIME_MAX_RETRIES",
    "ENV_REALTIME_PENDING_MAX_FRAMES",
    "ENV_REALTIME_URL",
    "ENV_REALTIME_VAD_PREFIX_PADDING_MS",
    "ENV_REALTIME_VAD_SILENCE_DURATION_MS",
    "ENV_REALTIME_VAD_THRESHOLD",
    "ENV_REALTIME_VOICE",
    "REALTIME_AUDIO_FORMAT",
    "REALTIME_BETA_HEADER",
    "REALTIME_MODALITIES",
]
