"""Single-shot timer whose callbacks carry a generation token.

Every arm/cancel bumps the generation, so a callback that was already queued
on the loop when it got superseded sees a stale token and does nothing.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class GenerationTimer:
    def __init__(self, *, name: str = "timer", loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._name = name
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._generation = 0
        self._disposed = False

    @property
    def armed(self) -> bool:
        return self._handle is not None

    @property
    def generation(self) -> int:
        return self._generation

    def arm(self, delay_s: float, callback: Callable[[], None]) -> int:
        """(Re)arm the timer, replacing any pending callback. Returns the new token."""
        if self._disposed:
            return self._generation
        self.cancel()
        self._generation += 1
        token = self._generation
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(max(0.0, float(delay_s)), self._fire, token, callback)
        return token

    def cancel(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def dispose(self) -> None:
        self._disposed = True
        self.cancel()

    def _fire(self, token: int, callback: Callable[[], None]) -> None:
        if self._disposed or token != self._generation:
            logger.debug("%s: stale callback ignored (token=%s current=%s)", self._name, token, self._generation)
            return
        self._handle = None
        try:
            callback()
        except Exception:
            logger.exception("%s: callback failed", self._name)


__all__ = ["GenerationTimer"]
