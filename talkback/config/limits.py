"""Admission control configuration (env names + defaults only)."""

from __future__ import annotations

ENV_MAX_CONCURRENT_CONNECTIONS = "MAX_CONCURRENT_CONNECTIONS"
DEFAULT_MAX_CONCURRENT_CONNECTIONS: int = 100

# Endpoint kinds share one admission pool.
CONNECTION_KIND_VOICE = "voice"
CONNECTION_KIND_REALTIME = "realtime"

__all__ = [
    "CONNECTION_KIND_REALTIME",
    "CONNECTION_KIND_VOICE",
    "DEFAULT_MAX_CONCURRENT_CONNECTIONS",
    "ENV_MAX_CONCURRENT_CONNECTIONS",
]
