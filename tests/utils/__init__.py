"""Client script utilities.

Focused modules:
- files.py: audio decoding and sample discovery
- fmt.py: console formatting
- streamer.py: real-time paced audio upload
"""

from __future__ import annotations

from .streamer import AudioStreamer
from .fmt import dim, section_header, print_file_not_found
from .files import (
    EXTS,
    SAMPLES_DIR,
    find_sample_files,
    make_silence_pcm16,
    find_sample_by_name,
    file_duration_seconds,
    file_to_pcm16_mono_16k,
)

__all__ = [
    "EXTS",
    "SAMPLES_DIR",
    "AudioStreamer",
    "dim",
    "file_duration_seconds",
    "file_to_pcm16_mono_16k",
    "find_sample_by_name",
    "find_sample_files",
    "make_silence_pcm16",
    "print_file_not_found",
    "section_header",
]
