"""Transcription / generation / synthesis pipeline defaults (env names + defaults only)."""

from __future__ import annotations

DEFAULT_SYSTEM_PROMPT: str = (
    "You are a friendly voice assistant having a spoken conversation. "
    "Keep replies short and natural for speech: no markdown, no lists."
)

ENV_PIPELINE_SYSTEM_PROMPT = "PIPELINE_SYSTEM_PROMPT"

ENV_PIPELINE_TRANSCRIBE_MODEL = "PIPELINE_TRANSCRIBE_MODEL"
DEFAULT_PIPELINE_TRANSCRIBE_MODEL: str = "whisper-1"

ENV_PIPELINE_TRANSCRIBE_LANGUAGE = "PIPELINE_TRANSCRIBE_LANGUAGE"
DEFAULT_PIPELINE_TRANSCRIBE_LANGUAGE: str = "en"

ENV_PIPELINE_CHAT_MODEL = "PIPELINE_CHAT_MODEL"
DEFAULT_PIPELINE_CHAT_MODEL: str = "gpt-4o-mini"

ENV_PIPELINE_CHAT_TEMPERATURE = "PIPELINE_CHAT_TEMPERATURE"
DEFAULT_PIPELINE_CHAT_TEMPERATURE: float = 0.7

ENV_PIPELINE_CHAT_MAX_TOKENS = "PIPELINE_CHAT_MAX_TOKENS"
DEFAULT_PIPELINE_CHAT_MAX_TOKENS: int = 200

ENV_PIPELINE_STREAM_REPLY = "PIPELINE_STREAM_REPLY"
DEFAULT_PIPELINE_STREAM_REPLY: bool = True

ENV_PIPELINE_TTS_MODEL = "PIPELINE_TTS_MODEL"
DEFAULT_PIPELINE_TTS_MODEL: str = "tts-1"

ENV_PIPELINE_TTS_VOICE = "PIPELINE_TTS_VOICE"
DEFAULT_PIPELINE_TTS_VOICE: str = "alloy"

ENV_PIPELINE_TTS_SPEED = "PIPELINE_TTS_SPEED"
DEFAULT_PIPELINE_TTS_SPEED: float = 1.0

# Utterances below this many PCM bytes never reach the transcriber.
ENV_PIPELINE_MIN_UTTERANCE_BYTES = "PIPELINE_MIN_UTTERANCE_BYTES"
DEFAULT_PIPELINE_MIN_UTTERANCE_BYTES: int = 1000

ENV_PIPELINE_MIN_TRANSCRIPT_CHARS = "PIPELINE_MIN_TRANSCRIPT_CHARS"
DEFAULT_PIPELINE_MIN_TRANSCRIPT_CHARS: int = 2

ENV_PIPELINE_HISTORY_TURN_PAIRS = "PIPELINE_HISTORY_TURN_PAIRS"
DEFAULT_PIPELINE_HISTORY_TURN_PAIRS: int = 5

ENV_PIPELINE_HISTORY_TURN_CHARS = "PIPELINE_HISTORY_TURN_CHARS"
DEFAULT_PIPELINE_HISTORY_TURN_CHARS: int = 500

ENV_PIPELINE_MAX_STORED_TURN_PAIRS = "PIPELINE_MAX_STORED_TURN_PAIRS"
DEFAULT_PIPELINE_MAX_STORED_TURN_PAIRS: int = 50

# Break a run-on reply at the next whitespace once a segment gets this long.
ENV_PIPELINE_SOFT_SENTENCE_CHARS = "PIPELINE_SOFT_SENTENCE_CHARS"
DEFAULT_PIPELINE_SOFT_SENTENCE_CHARS: int = 160

ENV_PIPELINE_MAX_TOPIC_CHARS = "PIPELINE_MAX_TOPIC_CHARS"
DEFAULT_PIPELINE_MAX_TOPIC_CHARS: int = 200

ENV_PIPELINE_REQUEST_TIMEOUT_S = "PIPELINE_REQUEST_TIMEOUT_S"
DEFAULT_PIPELINE_REQUEST_TIMEOUT_S: float = 30.0

__all__ = [
    "DEFAULT_PIPELINE_CHAT_MAX_TOKENS",
    "DEFAULT_PIPELINE_CHAT_MODEL",
    "DEFAULT_PIPELINE_CHAT_TEMPERATURE",
    "DEFAULT_PIPELINE_HISTORY_TURN_CHARS",
    "DEFAULT_PIPELINE_HISTORY_TURN_PAIRS",
    "DEFAULT_PIPELINE_MAX_STORED_TURN_PAIRS",
    "DEFAULT_PIPELINE_MAX_TOPIC_CHARS",
    "DEFAULT_PIPELINE_MIN_TRANSCRIPT_CHARS",
    "DEFAULT_PIPELINE_MIN_UTTERANCE_BYTES",
    "DEFAULT_PIPELINE_REQUEST_TIMEOUT_S",
    "DEFAULT_PIPELINE_SOFT_SENTENCE_CHARS",
    "DEFAULT_PIPELINE_STREAM_REPLY",
    "DEFAULT_PIPELINE_TRANSCRIBE_LANGUAGE",
    "DEFAULT_PIPELINE_TRANSCRIBE_MODEL",
    "DEFAULT_PIPELINE_TTS_MODEL",
    "DEFAULT_PIPELINE_TTS_SPEED",
    "DEFAULT_PIPELINE_TTS_VOICE",
    "DEFAULT_SYSTEM_PROMPT",
    "ENV_PIPELINE_CHAT_MAX_TOKENS",
    "ENV_PIPELINE_CHAT_MODEL",
    "ENV_PIPELINE_CHAT_TEMPERATURE",
    "ENV_PIPELINE_HISTORY_TURN_CHARS",
    "ENV_PIPELINE_HISTORY_TURN_PAIRS",
    "ENV_PIPELINE_MAX_STORED_TURN_PAIRS",
    "ENV_PIPELINE_MAX_TOPIC_CHARS",
    "ENV_PIPELINE_MIN_TRANSCRIPT_CHARS",
    "ENV_PIPELINE_MIN_UTTERANCE_BYTES",
    "ENV_PIPELINE_REQUEST_TIMEOUT_S",
    "ENV_PIPELINE_SOFT_SENTENCE_CHARS",
    "ENV_PIPELINE_STREAM_REPLY",
    "ENV_PIPELINE_SYSTEM_PROMPT",
    "ENV_PIPELINE_TRANSCRIBE_LANGUAGE",
    "ENV_PIPELINE_TRANSCRIBE_MODEL",
    "ENV_PIPELINE_TTS_MODEL",
    "ENV_PIPELINE_TTS_SPEED",
    "ENV_PIPELINE_TTS_VOICE",
]
