"""Logging configuration."""

from __future__ import annotations

import os

LOG_LEVEL: str = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Loggers that are chatty at INFO during normal request traffic.
THIRD_PARTY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "openai", "websockets")

__all__ = ["LOG_FORMAT", "LOG_LEVEL", "THIRD_PARTY_LOGGERS"]
