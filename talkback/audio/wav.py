"""Minimal RIFF/WAVE container for mono PCM16 payloads."""

from __future__ import annotations

import struct

from talkback.config.audio import PCM16_SAMPLE_WIDTH

WAV_HEADER_BYTES = 44
_PCM_FORMAT_TAG = 1
_CHANNELS = 1
_BITS_PER_SAMPLE = 16


def encode_wav(pcm: bytes, sample_rate: int) -> bytes:
    block_align = _CHANNELS * PCM16_SAMPLE_WIDTH
    byte_rate = sample_rate * block_align
    header = struct.pack(
        "<4sI4s4sIHHIIHH4sI",
        b"RIFF",
        36 + len(pcm),
        b"WAVE",
        b"fmt ",
        16,
        _PCM_FORMAT_TAG,
        _CHANNELS,
        sample_rate,
        byte_rate,
        block_align,
        _BITS_PER_SAMPLE,
        b"data",
        len(pcm),
    )
    return header + pcm


__all__ = ["WAV_HEADER_BYTES", "encode_wav"]
