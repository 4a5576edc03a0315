"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class OpenAISettings:
    api_key: str
    base_url: str | None
    request_timeout_s: float


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_connections: int


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    idle_timeout_s: float
    watchdog_tick_s: float
    max_connection_duration_s: float
    max_frame_bytes: int


@dataclass(frozen=True, slots=True)
class AudioSettings:
    input_sample_rate: int
    output_sample_rate: int
    output_chunk_bytes: int


@dataclass(frozen=True, slots=True)
class VadSettings:
    rms_threshold: float
    silence_duration_ms: int
    max_recording_ms: int
    echo_grace_ms: int


@dataclass(frozen=True, slots=True)
class PipelineSettings:
    system_prompt: str
    transcribe_model: str
    transcribe_language: str
    chat_model: str
    chat_temperature: float
    chat_max_tokens: int
    stream_reply: bool
    tts_model: str
    tts_voice: str
    tts_speed: float
    min_utterance_bytes: int
    min_transcript_chars: int
    history_turn_pairs: int
    history_turn_chars: int
    max_stored_turn_pairs: int
    soft_sentence_chars: int
    max_topic_chars: int


@dataclass(frozen=True, slots=True)
class RealtimeSettings:
    url: str
    voice: str
    instructions: str
    vad_threshold: float
    vad_prefix_padding_ms: int
    vad_silence_duration_ms: int
    max_retries: int
    backoff_base_ms: int
    backoff_cap_ms: int
    connect_timeout_s: float
    pending_max_frames: int


@dataclass(frozen=True, slots=True)
class AppSettings:
    openai: OpenAISettings
    limits: LimitsSettings
    websocket: WebSocketSettings
    audio: AudioSettings
    vad: VadSettings
    pipeline: PipelineSettings
    realtime: RealtimeSettings


__all__ = [
    "AppSettings",
    "AudioSettings",
    "LimitsSettings",
    "OpenAISettings",
    "PipelineSettings",
    "RealtimeSettings",
    "VadSettings",
    "WebSocketSettings",
]
