"""Per-connection conversation state."""

from __future__ import annotations

import enum
from dataclasses import field, dataclass

from talkback.voice.buffer import UtteranceBuffer

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"


class SpeechPhase(enum.Enum):
    LISTENING = "listening"
    BUFFERING = "buffering"


class AudioGate(enum.Enum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True, slots=True)
class Turn:
    role: str
    text: str


@dataclass(slots=True)
class Session:
    id: str
    base_prompt: str
    system_prompt: str
    history: list[Turn] = field(default_factory=list)
    utterance: UtteranceBuffer = field(default_factory=UtteranceBuffer)
    phase: SpeechPhase = SpeechPhase.LISTENING
    gate: AudioGate = AudioGate.OPEN
    topic: str | None = None
    closed: bool = False

    @property
    def speaking(self) -> bool:
        return self.phase is SpeechPhase.BUFFERING

    @property
    def ai_speaking(self) -> bool:
        return self.gate is AudioGate.CLOSED

    def apply_topic(self, topic: str) -> None:
        """Rebuild the system prompt from the base prompt plus the given topic."""
        topic = topic.strip()
        self.topic = topic or None
        if self.topic is None:
            self.system_prompt = self.base_prompt
            return
        self.system_prompt = f"{self.base_prompt}\n\nThe conversation topic is: {self.topic}"

    def add_user_turn(self, text: str) -> None:
        self.history.append(Turn(ROLE_USER, text))

    def add_assistant_turn(self, text: str, *, max_pairs: int = 0) -> None:
        self.history.append(Turn(ROLE_ASSISTANT, text))
        if max_pairs > 0 and len(self.history) > max_pairs * 2:
            del self.history[: len(self.history) - max_pairs * 2]

    def rollback_user_turn(self) -> bool:
        if self.history and self.history[-1].role == ROLE_USER:
            self.history.pop()
            return True
        return False


__all__ = ["ROLE_ASSISTANT", "ROLE_USER", "AudioGate", "Session", "SpeechPhase", "Turn"]
