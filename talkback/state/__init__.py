from .settings import AppSettings
from .session import Turn, Session, AudioGate, SpeechPhase
from .runtime import RuntimeDeps, ServiceBundle

__all__ = ["AppSettings", "AudioGate", "RuntimeDeps", "ServiceBundle", "Session", "SpeechPhase", "Turn"]
