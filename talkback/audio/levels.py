"""Amplitude analysis for PCM16 frames."""

from __future__ import annotations

import numpy as np

from talkback.config.audio import PCM16_FULL_SCALE, PCM16_SAMPLE_WIDTH


def frame_rms(frame: bytes) -> float:
    """Root-mean-square level of a little-endian PCM16 frame, normalized to [0, 1].

    A trailing unpaired byte is ignored. Empty frames have level 0.0.
    """
    usable = len(frame) - (len(frame) % PCM16_SAMPLE_WIDTH)
    if usable <= 0:
        return 0.0
    samples = np.frombuffer(frame, dtype="<i2", count=usable // PCM16_SAMPLE_WIDTH).astype(np.float64)
    samples /= PCM16_FULL_SCALE
    return float(np.sqrt(np.mean(samples * samples)))


def pcm16_duration_ms(num_bytes: int, sample_rate: int) -> float:
    if sample_rate <= 0:
        return 0.0
    return (num_bytes / (sample_rate * PCM16_SAMPLE_WIDTH)) * 1000.0


__all__ = ["frame_rms", "pcm16_duration_ms"]
