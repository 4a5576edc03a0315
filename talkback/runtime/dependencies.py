"""Runtime dependency construction (OpenAI services + admission control)."""

from __future__ import annotations

import logging

from talkback.state.settings import AppSettings
from talkback.realtime.bridge import RealtimeBridge
from talkback.handlers.sessions import SessionRegistry
from talkback.state.runtime import RuntimeDeps, ServiceBundle
from talkback.handlers.connections import ConnectionManager
from talkback.services import (
    OpenAISynthesizer,
    OpenAITranscriber,
    OpenAIReplyGenerator,
    build_openai_client,
)

from .settings import load_settings

logger = logging.getLogger(__name__)


async def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()
    pipeline = settings.pipeline

    client = build_openai_client(settings.openai)
    services = ServiceBundle(
        transcriber=OpenAITranscriber(
            client,
            model=pipeline.transcribe_model,
            language=pipeline.transcribe_language,
        ),
        generator=OpenAIReplyGenerator(
            client,
            model=pipeline.chat_model,
            temperature=pipeline.chat_temperature,
            max_tokens=pipeline.chat_max_tokens,
        ),
        synthesizer=OpenAISynthesizer(
            client,
            model=pipeline.tts_model,
            voice=pipeline.tts_voice,
            speed=pipeline.tts_speed,
        ),
    )

    logger.info(
        "runtime: stt=%s llm=%s tts=%s/%s max_connections=%s",
        pipeline.transcribe_model,
        pipeline.chat_model,
        pipeline.tts_model,
        pipeline.tts_voice,
        settings.limits.max_concurrent_connections,
    )

    return RuntimeDeps(
        connections=ConnectionManager(max_connections=settings.limits.max_concurrent_connections),
        sessions=SessionRegistry(base_prompt=pipeline.system_prompt),
        services=services,
        realtime_bridge=RealtimeBridge(settings=settings.realtime, api_key=settings.openai.api_key),
        settings=settings,
        _client=client,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
