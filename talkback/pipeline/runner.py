"""Sentence-streaming pipeline: transcribe, generate, synthesize per sentence.

One `run()` call handles one utterance. Reply tokens are fed through the
sentence splitter as they arrive so the first sentence is synthesized and
streamed while the rest of the reply is still being generated.
"""

from __future__ import annotations

import time
import logging
from typing import TYPE_CHECKING, Any
from dataclasses import dataclass
from collections.abc import Callable, AsyncIterator

from talkback.errors import ServiceError
from talkback.audio.wav import encode_wav
from talkback.state.session import Session
from talkback.audio.chunks import iter_chunks
from talkback.audio.levels import pcm16_duration_ms
from talkback.config.websocket import (
    WS_KEY_TYPE,
    WS_MSG_ERROR,
    WS_MSG_THINKING,
    WS_MSG_AUDIO_END,
    WS_MSG_AUDIO_START,
    WS_MSG_RESPONSE_TEXT,
)
from talkback.state.settings import VadSettings, AudioSettings, PipelineSettings

from .history import build_chat_messages
from .sentences import SentenceSplitter

if TYPE_CHECKING:
    from talkback.voice.gate import EchoGate
    from talkback.state.runtime import ServiceBundle

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Playback:
    """Audio sent to the client for one reply, used to estimate the playback tail."""

    started: bool = False
    num_bytes: int = 0
    first_chunk_at: float | None = None
    spoken: str = ""


class SentencePipeline:
    def __init__(
        self,
        *,
        services: ServiceBundle,
        outbox: Any,
        gate: EchoGate,
        audio: AudioSettings,
        vad: VadSettings,
        pipeline: PipelineSettings,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._services = services
        self._outbox = outbox
        self._gate = gate
        self._audio = audio
        self._vad = vad
        self._cfg = pipeline
        self._clock = clock

    async def run(self, session: Session, pcm: bytes) -> None:
        if len(pcm) < self._cfg.min_utterance_bytes:
            logger.debug("session %s: utterance too short (%s bytes); skipping", session.id, len(pcm))
            return

        try:
            transcript = await self._services.transcriber.transcribe(encode_wav(pcm, self._audio.input_sample_rate))
        except ServiceError as exc:
            self._fail(session, exc)
            return

        transcript = (transcript or "").strip()
        if len(transcript) < self._cfg.min_transcript_chars:
            logger.debug("session %s: transcript below minimum length; ignoring", session.id)
            return

        logger.info("session %s: user said %r", session.id, transcript[:100])
        messages = build_chat_messages(
            session.system_prompt,
            session.history,
            transcript,
            max_pairs=self._cfg.history_turn_pairs,
            turn_chars=self._cfg.history_turn_chars,
        )
        session.add_user_turn(transcript)
        self._outbox.put_json({WS_KEY_TYPE: WS_MSG_THINKING, "text": transcript})

        playback = _Playback()
        splitter = SentenceSplitter(soft_max_chars=self._cfg.soft_sentence_chars)
        reply_parts: list[str] = []
        committed = False
        try:
            async for token in self._reply_tokens(messages):
                reply_parts.append(token)
                for sentence in splitter.feed(token):
                    await self._speak(sentence, playback)

            reply = "".join(reply_parts).strip()
            if reply:
                session.add_assistant_turn(reply, max_pairs=self._cfg.max_stored_turn_pairs)
                committed = True
            else:
                logger.warning("session %s: empty reply from generator", session.id)
                session.rollback_user_turn()

            tail = splitter.flush()
            if tail is not None:
                await self._speak(tail, playback)
        except ServiceError as exc:
            if not committed:
                session.rollback_user_turn()
            self._end_audio(playback)
            self._fail(session, exc)
            return

        self._end_audio(playback)
        self._gate.release_after(self._vad.echo_grace_ms + self._remaining_playback_ms(playback))
        logger.info(
            "session %s: reply done (%s chars, %.0f ms audio)",
            session.id,
            len("".join(reply_parts)),
            pcm16_duration_ms(playback.num_bytes, self._audio.output_sample_rate),
        )

    async def _reply_tokens(self, messages: list[dict[str, str]]) -> AsyncIterator[str]:
        generator = self._services.generator
        if self._cfg.stream_reply:
            async for token in generator.stream_reply(messages):
                yield token
            return
        yield await generator.complete(messages)

    async def _speak(self, sentence: str, playback: _Playback) -> None:
        playback.spoken += sentence
        self._outbox.put_json({WS_KEY_TYPE: WS_MSG_RESPONSE_TEXT, "text": playback.spoken.strip()})

        self._gate.close()
        audio = await self._services.synthesizer.synthesize(sentence)
        if not audio:
            return

        if not playback.started:
            playback.started = True
            self._outbox.put_json({WS_KEY_TYPE: WS_MSG_AUDIO_START})
        if playback.first_chunk_at is None:
            playback.first_chunk_at = self._clock()
        for chunk in iter_chunks(audio, self._audio.output_chunk_bytes):
            self._outbox.put_bytes(chunk)
        playback.num_bytes += len(audio)

    def _end_audio(self, playback: _Playback) -> None:
        if playback.started:
            self._outbox.put_json({WS_KEY_TYPE: WS_MSG_AUDIO_END})

    def _remaining_playback_ms(self, playback: _Playback) -> float:
        if playback.first_chunk_at is None:
            return 0.0
        total_ms = pcm16_duration_ms(playback.num_bytes, self._audio.output_sample_rate)
        elapsed_ms = (self._clock() - playback.first_chunk_at) * 1000.0
        return max(0.0, total_ms - elapsed_ms)

    def _fail(self, session: Session, exc: ServiceError) -> None:
        logger.warning("session %s: %s", session.id, exc)
        self._outbox.put_json({WS_KEY_TYPE: WS_MSG_ERROR, "message": str(exc)})
        self._gate.release_now()


__all__ = ["SentencePipeline"]
