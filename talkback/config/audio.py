"""Audio format and voice activity detection defaults (env names + defaults only)."""

from __future__ import annotations

# Inbound microphone audio: PCM16 little-endian mono.
ENV_AUDIO_INPUT_SAMPLE_RATE = "AUDIO_INPUT_SAMPLE_RATE"
DEFAULT_AUDIO_INPUT_SAMPLE_RATE: int = 16000

# Synthesized audio is requested as raw PCM16 mono; OpenAI speech "pcm" is 24kHz.
ENV_AUDIO_OUTPUT_SAMPLE_RATE = "AUDIO_OUTPUT_SAMPLE_RATE"
DEFAULT_AUDIO_OUTPUT_SAMPLE_RATE: int = 24000

ENV_AUDIO_OUTPUT_CHUNK_BYTES = "AUDIO_OUTPUT_CHUNK_BYTES"
DEFAULT_AUDIO_OUTPUT_CHUNK_BYTES: int = 4096

PCM16_SAMPLE_WIDTH: int = 2
PCM16_FULL_SCALE: float = 32768.0

# RMS over samples normalized to [-1, 1].
ENV_VAD_RMS_THRESHOLD = "VAD_RMS_THRESHOLD"
DEFAULT_VAD_RMS_THRESHOLD: float = 0.02

ENV_VAD_SILENCE_DURATION_MS = "VAD_SILENCE_DURATION_MS"
DEFAULT_VAD_SILENCE_DURATION_MS: int = 700

ENV_VAD_MAX_RECORDING_MS = "VAD_MAX_RECORDING_MS"
DEFAULT_VAD_MAX_RECORDING_MS: int = 30000

# Added after playback should have finished before ingestion resumes.
ENV_ECHO_GRACE_MS = "ECHO_GRACE_MS"
DEFAULT_ECHO_GRACE_MS: int = 1000

__all__ = [
    "DEFAULT_AUDIO_INPUT_SAMPLE_RATE",
    "DEFAULT_AUDIO_OUTPUT_CHUNK_BYTES",
    "DEFAULT_AUDIO_OUTPUT_SAMPLE_RATE",
    "DEFAULT_ECHO_GRACE_MS",
    "DEFAULT_VAD_MAX_RECORDING_MS",
    "DEFAULT_VAD_RMS_THRESHOLD",
    "DEFAULT_VAD_SILENCE_DURATION_MS",
    "ENV_AUDIO_INPUT_SAMPLE_RATE",
    "ENV_AUDIO_OUTPUT_CHUNK_BYTES",
    "ENV_AUDIO_OUTPUT_SAMPLE_RATE",
    "ENV_ECHO_GRACE_MS",
    "ENV_VAD_MAX_RECORDING_MS",
    "ENV_VAD_RMS_THRESHOLD",
    "ENV_VAD_SILENCE_DURATION_MS",
    "PCM16_FULL_SCALE",
    "PCM16_SAMPLE_WIDTH",
]
