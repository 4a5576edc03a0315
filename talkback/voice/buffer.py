"""Accumulates raw PCM frames for the utterance in progress."""

from __future__ import annotations

from talkback.audio.levels import pcm16_duration_ms


class UtteranceBuffer:
    def __init__(self) -> None:
        self._frames: list[bytes] = []
        self._num_bytes = 0

    def append(self, frame: bytes) -> None:
        if not frame:
            return
        self._frames.append(frame)
        self._num_bytes += len(frame)

    def take(self) -> bytes:
        """Return the buffered audio and leave the buffer empty."""
        data = b"".join(self._frames)
        self._frames = []
        self._num_bytes = 0
        return data

    def clear(self) -> None:
        self._frames = []
        self._num_bytes = 0

    def duration_ms(self, sample_rate: int) -> float:
        return pcm16_duration_ms(self._num_bytes, sample_rate)

    @property
    def num_bytes(self) -> int:
        return self._num_bytes

    def is_empty(self) -> bool:
        return self._num_bytes == 0


__all__ = ["UtteranceBuffer"]
