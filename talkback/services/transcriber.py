"""Speech-to-text over the OpenAI transcription endpoint."""

from __future__ import annotations

import logging

from openai import AsyncOpenAI, OpenAIError

from talkback.errors import ServiceError

logger = logging.getLogger(__name__)

STAGE = "transcription"


class OpenAITranscriber:
    def __init__(self, client: AsyncOpenAI, *, model: str, language: str | None = None) -> None:
        self._client = client
        self._model = model
        self._language = language or None

    async def transcribe(self, wav: bytes) -> str:
        kwargs = {"language": self._language} if self._language else {}
        try:
            result = await self._client.audio.transcriptions.create(
                model=self._model,
                file=("utterance.wav", wav, "audio/wav"),
                response_format="json",
                **kwargs,
            )
        except OpenAIError as exc:
            raise ServiceError(STAGE, str(exc) or exc.__class__.__name__) from exc
        text = getattr(result, "text", None) or ""
        logger.debug("transcribed %s bytes -> %s chars", len(wav), len(text))
        return text


__all__ = ["OpenAITranscriber"]
