"""Environment parsing for runtime settings.

Env names and defaults live in `talkback/config/*`; this module resolves them
into the frozen dataclasses from `talkback.state.settings`.
"""

from __future__ import annotations

import os

from talkback.config.limits import ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS
from talkback.config.secrets import ENV_OPENAI_API_KEY, ENV_OPENAI_BASE_URL
from talkback.state.settings import (
    VadSettings,
    AppSettings,
    AudioSettings,
    LimitsSettings,
    OpenAISettings,
    PipelineSettings,
    RealtimeSettings,
    WebSocketSettings,
)
from talkback.config.websocket import (
    ENV_WS_IDLE_TIMEOUT_S,
    ENV_WS_MAX_FRAME_BYTES,
    ENV_WS_WATCHDOG_TICK_S,
    DEFAULT_WS_IDLE_TIMEOUT_S,
    DEFAULT_WS_MAX_FRAME_BYTES,
    DEFAULT_WS_WATCHDOG_TICK_S,
    ENV_WS_MAX_CONNECTION_DURATION_S,
    DEFAULT_WS_MAX_CONNECTION_DURATION_S,
)
from talkback.config.audio import (
    ENV_ECHO_GRACE_MS,
    DEFAULT_ECHO_GRACE_MS,
    ENV_VAD_RMS_THRESHOLD,
    ENV_VAD_MAX_RECORDING_MS,
    DEFAULT_VAD_RMS_THRESHOLD,
    ENV_VAD_SILENCE_DURATION_MS,
    ENV_AUDIO_INPUT_SAMPLE_RATE,
    DEFAULT_VAD_MAX_RECORDING_MS,
    ENV_AUDIO_OUTPUT_CHUNK_BYTES,
    ENV_AUDIO_OUTPUT_SAMPLE_RATE,
    DEFAULT_VAD_SILENCE_DURATION_MS,
    DEFAULT_AUDIO_INPUT_SAMPLE_RATE,
    DEFAULT_AUDIO_OUTPUT_CHUNK_BYTES,
    DEFAULT_AUDIO_OUTPUT_SAMPLE_RATE,
)
from talkback.config.realtime import (
    ENV_REALTIME_URL,
    ENV_REALTIME_VOICE,
    DEFAULT_REALTIME_URL,
    DEFAULT_REALTIME_VOICE,
    ENV_REALTIME_MAX_RETRIES,
    ENV_REALTIME_INSTRUCTIONS,
    DEFAULT_REALTIME_MAX_RETRIES,
    ENV_REALTIME_VAD_THRESHOLD,
    ENV_REALTIME_BACKOFF_CAP_MS,
    DEFAULT_REALTIME_VAD_THRESHOLD,
    ENV_REALTIME_BACKOFF_BASE_MS,
    DEFAULT_REALTIME_BACKOFF_CAP_MS,
    DEFAULT_REALTIME_BACKOFF_BASE_MS,
    ENV_REALTIME_CONNECT_TIMEOUT_S,
    ENV_REALTIME_PENDING_MAX_FRAMES,
    DEFAULT_REALTIME_CONNECT_TIMEOUT_S,
    ENV_REALTIME_VAD_PREFIX_PADDING_MS,
    DEFAULT_REALTIME_PENDING_MAX_FRAMES,
    ENV_REALTIME_VAD_SILENCE_DURATION_MS,
    DEFAULT_REALTIME_VAD_PREFIX_PADDING_MS,
    DEFAULT_REALTIME_VAD_SILENCE_DURATION_MS,
)
from talkback.config.pipeline import (
    DEFAULT_SYSTEM_PROMPT,
    ENV_PIPELINE_TTS_MODEL,
    ENV_PIPELINE_TTS_SPEED,
    ENV_PIPELINE_TTS_VOICE,
    ENV_PIPELINE_CHAT_MODEL,
    DEFAULT_PIPELINE_TTS_MODEL,
    DEFAULT_PIPELINE_TTS_SPEED,
    DEFAULT_PIPELINE_TTS_VOICE,
    ENV_PIPELINE_STREAM_REPLY,
    ENV_PIPELINE_SYSTEM_PROMPT,
    DEFAULT_PIPELINE_CHAT_MODEL,
    ENV_PIPELINE_CHAT_MAX_TOKENS,
    DEFAULT_PIPELINE_STREAM_REPLY,
    ENV_PIPELINE_MAX_TOPIC_CHARS,
    ENV_PIPELINE_CHAT_TEMPERATURE,
    ENV_PIPELINE_TRANSCRIBE_MODEL,
    DEFAULT_PIPELINE_CHAT_MAX_TOKENS,
    DEFAULT_PIPELINE_MAX_TOPIC_CHARS,
    ENV_PIPELINE_REQUEST_TIMEOUT_S,
    DEFAULT_PIPELINE_CHAT_TEMPERATURE,
    DEFAULT_PIPELINE_TRANSCRIBE_MODEL,
    ENV_PIPELINE_HISTORY_TURN_CHARS,
    ENV_PIPELINE_HISTORY_TURN_PAIRS,
    ENV_PIPELINE_MIN_UTTERANCE_BYTES,
    ENV_PIPELINE_TRANSCRIBE_LANGUAGE,
    DEFAULT_PIPELINE_REQUEST_TIMEOUT_S,
    ENV_PIPELINE_SOFT_SENTENCE_CHARS,
    ENV_PIPELINE_MIN_TRANSCRIPT_CHARS,
    DEFAULT_PIPELINE_HISTORY_TURN_CHARS,
    DEFAULT_PIPELINE_HISTORY_TURN_PAIRS,
    DEFAULT_PIPELINE_MIN_UTTERANCE_BYTES,
    DEFAULT_PIPELINE_TRANSCRIBE_LANGUAGE,
    ENV_PIPELINE_MAX_STORED_TURN_PAIRS,
    DEFAULT_PIPELINE_SOFT_SENTENCE_CHARS,
    DEFAULT_PIPELINE_MIN_TRANSCRIPT_CHARS,
    DEFAULT_PIPELINE_MAX_STORED_TURN_PAIRS,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _load_openai_settings() -> OpenAISettings:
    api_key = (os.getenv(ENV_OPENAI_API_KEY) or "").strip()
    base_url = (os.getenv(ENV_OPENAI_BASE_URL) or "").strip() or None
    return OpenAISettings(
        api_key=api_key,
        base_url=base_url,
        request_timeout_s=_float_env(ENV_PIPELINE_REQUEST_TIMEOUT_S, DEFAULT_PIPELINE_REQUEST_TIMEOUT_S),
    )


def _load_limits_settings() -> LimitsSettings:
    max_connections = _int_env(ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS)
    return LimitsSettings(max_concurrent_connections=max(1, max_connections))


def _load_websocket_settings() -> WebSocketSettings:
    return WebSocketSettings(
        idle_timeout_s=_float_env(ENV_WS_IDLE_TIMEOUT_S, DEFAULT_WS_IDLE_TIMEOUT_S),
        watchdog_tick_s=_float_env(ENV_WS_WATCHDOG_TICK_S, DEFAULT_WS_WATCHDOG_TICK_S),
        max_connection_duration_s=_float_env(ENV_WS_MAX_CONNECTION_DURATION_S, DEFAULT_WS_MAX_CONNECTION_DURATION_S),
        max_frame_bytes=_int_env(ENV_WS_MAX_FRAME_BYTES, DEFAULT_WS_MAX_FRAME_BYTES),
    )


def _load_audio_settings() -> AudioSettings:
    return AudioSettings(
        input_sample_rate=_int_env(ENV_AUDIO_INPUT_SAMPLE_RATE, DEFAULT_AUDIO_INPUT_SAMPLE_RATE),
        output_sample_rate=_int_env(ENV_AUDIO_OUTPUT_SAMPLE_RATE, DEFAULT_AUDIO_OUTPUT_SAMPLE_RATE),
        output_chunk_bytes=max(1, _int_env(ENV_AUDIO_OUTPUT_CHUNK_BYTES, DEFAULT_AUDIO_OUTPUT_CHUNK_BYTES)),
    )


def _load_vad_settings() -> VadSettings:
    return VadSettings(
        rms_threshold=_float_env(ENV_VAD_RMS_THRESHOLD, DEFAULT_VAD_RMS_THRESHOLD),
        silence_duration_ms=_int_env(ENV_VAD_SILENCE_DURATION_MS, DEFAULT_VAD_SILENCE_DURATION_MS),
        max_recording_ms=_int_env(ENV_VAD_MAX_RECORDING_MS, DEFAULT_VAD_MAX_RECORDING_MS),
        echo_grace_ms=_int_env(ENV_ECHO_GRACE_MS, DEFAULT_ECHO_GRACE_MS),
    )


def _load_pipeline_settings() -> PipelineSettings:
    return PipelineSettings(
        system_prompt=_str_env(ENV_PIPELINE_SYSTEM_PROMPT, DEFAULT_SYSTEM_PROMPT),
        transcribe_model=_str_env(ENV_PIPELINE_TRANSCRIBE_MODEL, DEFAULT_PIPELINE_TRANSCRIBE_MODEL),
        transcribe_language=_str_env(ENV_PIPELINE_TRANSCRIBE_LANGUAGE, DEFAULT_PIPELINE_TRANSCRIBE_LANGUAGE),
        chat_model=_str_env(ENV_PIPELINE_CHAT_MODEL, DEFAULT_PIPELINE_CHAT_MODEL),
        chat_temperature=_float_env(ENV_PIPELINE_CHAT_TEMPERATURE, DEFAULT_PIPELINE_CHAT_TEMPERATURE),
        chat_max_tokens=_int_env(ENV_PIPELINE_CHAT_MAX_TOKENS, DEFAULT_PIPELINE_CHAT_MAX_TOKENS),
        stream_reply=_bool_env(ENV_PIPELINE_STREAM_REPLY, DEFAULT_PIPELINE_STREAM_REPLY),
        tts_model=_str_env(ENV_PIPELINE_TTS_MODEL, DEFAULT_PIPELINE_TTS_MODEL),
        tts_voice=_str_env(ENV_PIPELINE_TTS_VOICE, DEFAULT_PIPELINE_TTS_VOICE),
        tts_speed=_float_env(ENV_PIPELINE_TTS_SPEED, DEFAULT_PIPELINE_TTS_SPEED),
        min_utterance_bytes=_int_env(ENV_PIPELINE_MIN_UTTERANCE_BYTES, DEFAULT_PIPELINE_MIN_UTTERANCE_BYTES),
        min_transcript_chars=_int_env(ENV_PIPELINE_MIN_TRANSCRIPT_CHARS, DEFAULT_PIPELINE_MIN_TRANSCRIPT_CHARS),
        history_turn_pairs=max(0, _int_env(ENV_PIPELINE_HISTORY_TURN_PAIRS, DEFAULT_PIPELINE_HISTORY_TURN_PAIRS)),
        history_turn_chars=_int_env(ENV_PIPELINE_HISTORY_TURN_CHARS, DEFAULT_PIPELINE_HISTORY_TURN_CHARS),
        max_stored_turn_pairs=_int_env(ENV_PIPELINE_MAX_STORED_TURN_PAIRS, DEFAULT_PIPELINE_MAX_STORED_TURN_PAIRS),
        soft_sentence_chars=_int_env(ENV_PIPELINE_SOFT_SENTENCE_CHARS, DEFAULT_PIPELINE_SOFT_SENTENCE_CHARS),
        max_topic_chars=_int_env(ENV_PIPELINE_MAX_TOPIC_CHARS, DEFAULT_PIPELINE_MAX_TOPIC_CHARS),
    )


def _load_realtime_settings() -> RealtimeSettings:
    return RealtimeSettings(
        url=_str_env(ENV_REALTIME_URL, DEFAULT_REALTIME_URL),
        voice=_str_env(ENV_REALTIME_VOICE, DEFAULT_REALTIME_VOICE),
        instructions=_str_env(ENV_REALTIME_INSTRUCTIONS, DEFAULT_SYSTEM_PROMPT),
        vad_threshold=_float_env(ENV_REALTIME_VAD_THRESHOLD, DEFAULT_REALTIME_VAD_THRESHOLD),
        vad_prefix_padding_ms=_int_env(ENV_REALTIME_VAD_PREFIX_PADDING_MS, DEFAULT_REALTIME_VAD_PREFIX_PADDING_MS),
        vad_silence_duration_ms=_int_env(
            ENV_REALTIME_VAD_SILENCE_DURATION_MS, DEFAULT_REALTIME_VAD_SILENCE_DURATION_MS
        ),
        max_retries=max(0, _int_env(ENV_REALTIME_MAX_RETRIES, DEFAULT_REALTIME_MAX_RETRIES)),
        backoff_base_ms=_int_env(ENV_REALTIME_BACKOFF_BASE_MS, DEFAULT_REALTIME_BACKOFF_BASE_MS),
        backoff_cap_ms=_int_env(ENV_REALTIME_BACKOFF_CAP_MS, DEFAULT_REALTIME_BACKOFF_CAP_MS),
        connect_timeout_s=_float_env(ENV_REALTIME_CONNECT_TIMEOUT_S, DEFAULT_REALTIME_CONNECT_TIMEOUT_S),
        pending_max_frames=max(1, _int_env(ENV_REALTIME_PENDING_MAX_FRAMES, DEFAULT_REALTIME_PENDING_MAX_FRAMES)),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        openai=_load_openai_settings(),
        limits=_load_limits_settings(),
        websocket=_load_websocket_settings(),
        audio=_load_audio_settings(),
        vad=_load_vad_settings(),
        pipeline=_load_pipeline_settings(),
        realtime=_load_realtime_settings(),
    )


__all__ = ["load_settings"]
