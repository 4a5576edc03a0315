from .wav import encode_wav
from .chunks import iter_chunks
from .levels import frame_rms, pcm16_duration_ms

__all__ = ["encode_wav", "frame_rms", "iter_chunks", "pcm16_duration_ms"]
