from .runner import SentencePipeline
from .history import build_chat_messages
from .sentences import SentenceSplitter, split_sentences

__all__ = ["SentencePipeline", "SentenceSplitter", "build_chat_messages", "split_sentences"]
