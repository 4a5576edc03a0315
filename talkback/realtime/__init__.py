from .bridge import RealtimeBridge
from .relay import RelayState, UpstreamRelay
from .backoff import compute_backoff_ms

__all__ = ["RealtimeBridge", "RelayState", "UpstreamRelay", "compute_backoff_ms"]
