"""Shared AsyncOpenAI client construction."""

from __future__ import annotations

import logging

from openai import AsyncOpenAI

from talkback.config.secrets import ENV_OPENAI_API_KEY
from talkback.state.settings import OpenAISettings

logger = logging.getLogger(__name__)


def build_openai_client(settings: OpenAISettings) -> AsyncOpenAI:
    if not settings.api_key:
        logger.warning("%s is not set; external service calls will fail", ENV_OPENAI_API_KEY)
    return AsyncOpenAI(
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout=settings.request_timeout_s,
    )


__all__ = ["build_openai_client"]
