"""Shared error types for the talkback server."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False, slots=True)
class ServiceError(Exception):
    """Raised when an external transcription, generation or synthesis call fails."""

    stage: str
    message: str

    def __str__(self) -> str:
        return f"{self.stage} failed: {self.message}"


@dataclass(eq=False, slots=True)
class UpstreamUnavailableError(Exception):
    """Raised when the upstream realtime channel cannot be reached within the allowed retries."""

    attempts: int


__all__ = ["ServiceError", "UpstreamUnavailableError"]
