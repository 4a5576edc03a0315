from .client import build_openai_client
from .generator import OpenAIReplyGenerator
from .synthesizer import OpenAISynthesizer
from .transcriber import OpenAITranscriber

__all__ = ["OpenAIReplyGenerator", "OpenAISynthesizer", "OpenAITranscriber", "build_openai_client"]
