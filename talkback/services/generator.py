"""Reply generation over the OpenAI chat completions endpoint."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from openai import AsyncOpenAI, OpenAIError

from talkback.errors import ServiceError

logger = logging.getLogger(__name__)

STAGE = "generation"


class OpenAIReplyGenerator:
    def __init__(self, client: AsyncOpenAI, *, model: str, temperature: float, max_tokens: int) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def stream_reply(self, messages: list[dict[str, str]]) -> AsyncIterator[str]:
        """Yield reply text deltas as the model produces them."""
        try:
            stream = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
                stream=True,
            )
            async for chunk in stream:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta.content
                if delta:
                    yield delta
        except OpenAIError as exc:
            raise ServiceError(STAGE, str(exc) or exc.__class__.__name__) from exc

    async def complete(self, messages: list[dict[str, str]]) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except OpenAIError as exc:
            raise ServiceError(STAGE, str(exc) or exc.__class__.__name__) from exc
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


__all__ = ["OpenAIReplyGenerator"]
