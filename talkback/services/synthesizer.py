"""Text-to-speech over the OpenAI speech endpoint (raw PCM16 output)."""

from __future__ import annotations

import logging

from openai import AsyncOpenAI, OpenAIError

from talkback.errors import ServiceError

logger = logging.getLogger(__name__)

STAGE = "synthesis"


class OpenAISynthesizer:
    def __init__(self, client: AsyncOpenAI, *, model: str, voice: str, speed: float = 1.0) -> None:
        self._client = client
        self._model = model
        self._voice = voice
        self._speed = speed

    async def synthesize(self, text: str) -> bytes:
        text = text.strip()
        if not text:
            return b""
        try:
            response = await self._client.audio.speech.create(
                model=self._model,
                voice=self._voice,
                input=text,
                response_format="pcm",
                speed=self._speed,
            )
        except OpenAIError as exc:
            raise ServiceError(STAGE, str(exc) or exc.__class__.__name__) from exc
        audio = response.content
        logger.debug("synthesized %s chars -> %s bytes", len(text), len(audio))
        return audio


__all__ = ["OpenAISynthesizer"]
