"""Per-session orchestration for the voice endpoint.

Frames are classified synchronously on the receive path. Completed utterances
go onto a queue drained by a single worker task, so replies for one session are
produced strictly one at a time and in the order their boundaries fired.
"""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import TYPE_CHECKING, Any

from talkback.state.session import Session
from talkback.pipeline.runner import SentencePipeline
from talkback.config.websocket import WS_KEY_TYPE, WS_MSG_ERROR

from .gate import EchoGate
from .segmenter import FrameVerdict, VadSegmenter

if TYPE_CHECKING:
    from talkback.state.runtime import ServiceBundle
    from talkback.state.settings import AppSettings

logger = logging.getLogger(__name__)


class VoiceSessionController:
    def __init__(
        self,
        session: Session,
        *,
        outbox: Any,
        services: ServiceBundle,
        settings: AppSettings,
    ) -> None:
        self._session = session
        self._outbox = outbox
        self._settings = settings
        self._queue: asyncio.Queue[bytes] = asyncio.Queue()
        self._worker: asyncio.Task | None = None
        self._processing = False

        vad = settings.vad
        self.segmenter = VadSegmenter(
            session,
            notify=outbox.put_json,
            on_utterance=self._enqueue_utterance,
            rms_threshold=vad.rms_threshold,
            silence_duration_ms=vad.silence_duration_ms,
            max_recording_ms=vad.max_recording_ms,
            sample_rate=settings.audio.input_sample_rate,
        )
        self.gate = EchoGate(session, on_close=self.segmenter.hand_off)
        self.pipeline = SentencePipeline(
            services=services,
            outbox=outbox,
            gate=self.gate,
            audio=settings.audio,
            vad=vad,
            pipeline=settings.pipeline,
        )

    @property
    def session(self) -> Session:
        return self._session

    def is_busy(self) -> bool:
        return self._processing or not self._queue.empty() or self._session.ai_speaking

    def start(self) -> asyncio.Task:
        if self._worker is None:
            self._worker = asyncio.create_task(self._worker_loop())
        return self._worker

    def handle_audio(self, frame: bytes) -> FrameVerdict:
        return self.segmenter.feed(frame)

    def handle_topic(self, topic: str) -> None:
        limit = self._settings.pipeline.max_topic_chars
        if limit > 0:
            topic = topic[:limit]
        self._session.apply_topic(topic)
        logger.info("session %s: topic set to %r", self._session.id, self._session.topic)

    async def close(self) -> None:
        self._session.closed = True
        self.segmenter.dispose()
        self.gate.dispose()
        if self._worker is not None:
            self._worker.cancel()
            with contextlib.suppress(Exception):
                await self._worker
            self._worker = None

    def _enqueue_utterance(self, pcm: bytes) -> None:
        if self._session.closed:
            return
        self._queue.put_nowait(pcm)
        if self._queue.qsize() > 1:
            logger.debug("session %s: %s utterances waiting", self._session.id, self._queue.qsize())

    async def _worker_loop(self) -> None:
        try:
            while True:
                pcm = await self._queue.get()
                self._processing = True
                try:
                    await self.pipeline.run(self._session, pcm)
                except Exception:
                    logger.exception("session %s: pipeline crashed", self._session.id)
                    self._session.rollback_user_turn()
                    self.gate.release_now()
                    self._outbox.put_json({WS_KEY_TYPE: WS_MSG_ERROR, "message": "internal error"})
                finally:
                    self._processing = False
                    self._queue.task_done()
        except asyncio.CancelledError:
            return


__all__ = ["VoiceSessionController"]
