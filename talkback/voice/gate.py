"""Echo gate: suppresses ingestion while synthesized audio is playing."""

from __future__ import annotations

import logging
from collections.abc import Callable

from talkback.state.session import Session, AudioGate

from .timer import GenerationTimer

logger = logging.getLogger(__name__)


class EchoGate:
    def __init__(
        self,
        session: Session,
        *,
        on_close: Callable[[], None] | None = None,
        timer: GenerationTimer | None = None,
    ) -> None:
        self._session = session
        self._on_close = on_close
        self._release_timer = timer or GenerationTimer(name="echo-release")

    @property
    def is_closed(self) -> bool:
        return self._session.gate is AudioGate.CLOSED

    def close(self) -> None:
        # A pending release must not reopen the gate under a new reply.
        self._release_timer.cancel()
        if self._session.gate is AudioGate.CLOSED:
            return
        self._session.gate = AudioGate.CLOSED
        logger.debug("session %s: echo gate closed", self._session.id)
        if self._on_close is not None:
            self._on_close()

    def release_after(self, delay_ms: float) -> None:
        if not self.is_closed:
            return
        self._release_timer.arm(max(0.0, delay_ms) / 1000.0, self._open)

    def release_now(self) -> None:
        self._release_timer.cancel()
        self._open()

    def dispose(self) -> None:
        self._release_timer.dispose()

    def _open(self) -> None:
        if self._session.gate is AudioGate.OPEN:
            return
        self._session.gate = AudioGate.OPEN
        logger.debug("session %s: echo gate open", self._session.id)


__all__ = ["EchoGate"]
