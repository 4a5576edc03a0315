"""Energy-based voice activity segmentation of a live PCM16 stream.

Each inbound frame is classified by RMS level. The first speech frame opens an
utterance; a silence frame while buffering arms the silence timer, and any
later speech frame cancels it. When the timer fires, or the buffered audio
reaches the recording ceiling, the utterance is handed off. Closing the echo
gate mid-utterance hands off whatever was buffered so far.
"""

from __future__ import annotations

import enum
import logging
from typing import Any
from collections.abc import Callable

from talkback.audio.levels import frame_rms
from talkback.state.session import Session, SpeechPhase
from talkback.config.websocket import WS_KEY_TYPE, WS_MSG_SPEECH_END, WS_MSG_SPEECH_START

from .timer import GenerationTimer

logger = logging.getLogger(__name__)


class FrameVerdict(enum.Enum):
    DROPPED = "dropped"
    SPEECH = "speech"
    SILENCE = "silence"


class VadSegmenter:
    def __init__(
        self,
        session: Session,
        *,
        notify: Callable[[dict[str, Any]], None],
        on_utterance: Callable[[bytes], None],
        rms_threshold: float,
        silence_duration_ms: int,
        max_recording_ms: int,
        sample_rate: int,
        timer: GenerationTimer | None = None,
    ) -> None:
        self._session = session
        self._notify = notify
        self._on_utterance = on_utterance
        self._threshold = float(rms_threshold)
        self._silence_s = max(0, int(silence_duration_ms)) / 1000.0
        self._max_recording_ms = int(max_recording_ms)
        self._sample_rate = int(sample_rate)
        self._silence_timer = timer or GenerationTimer(name="silence")

    @property
    def silence_timer(self) -> GenerationTimer:
        return self._silence_timer

    def feed(self, frame: bytes) -> FrameVerdict:
        session = self._session
        if session.closed or session.ai_speaking:
            return FrameVerdict.DROPPED

        if frame_rms(frame) >= self._threshold:
            verdict = FrameVerdict.SPEECH
            if session.phase is SpeechPhase.LISTENING:
                session.phase = SpeechPhase.BUFFERING
                self._notify({WS_KEY_TYPE: WS_MSG_SPEECH_START})
            self._silence_timer.cancel()
            session.utterance.append(frame)
        else:
            verdict = FrameVerdict.SILENCE
            if session.phase is SpeechPhase.BUFFERING:
                session.utterance.append(frame)
                if not self._silence_timer.armed:
                    self._silence_timer.arm(self._silence_s, self._on_silence_elapsed)

        if (
            session.phase is SpeechPhase.BUFFERING
            and self._max_recording_ms > 0
            and session.utterance.duration_ms(self._sample_rate) >= self._max_recording_ms
        ):
            logger.info("session %s: max recording duration reached; forcing hand-off", session.id)
            self._end_utterance()
        return verdict

    def hand_off(self) -> None:
        """End the utterance in progress now, as if its silence boundary had fired."""
        if self._session.phase is not SpeechPhase.BUFFERING:
            self._silence_timer.cancel()
            return
        logger.debug("session %s: ending partial utterance early", self._session.id)
        self._end_utterance()

    def dispose(self) -> None:
        self._silence_timer.dispose()

    def _on_silence_elapsed(self) -> None:
        if self._session.closed or self._session.phase is not SpeechPhase.BUFFERING:
            return
        self._end_utterance()

    def _end_utterance(self) -> None:
        self._silence_timer.cancel()
        self._session.phase = SpeechPhase.LISTENING
        self._notify({WS_KEY_TYPE: WS_MSG_SPEECH_END})
        pcm = self._session.utterance.take()
        if not pcm:
            return
        self._on_utterance(pcm)


__all__ = ["FrameVerdict", "VadSegmenter"]
