"""Reconnect delay schedule for the upstream channel."""

from __future__ import annotations


def compute_backoff_ms(attempt: int, *, base_ms: int, cap_ms: int) -> int:
    """Delay before reconnect number `attempt` (1-based): min(base * 2**attempt, cap)."""
    if attempt <= 0:
        return 0
    # Avoid building huge ints for pathological attempt counts.
    if attempt >= 32:
        return int(cap_ms)
    return int(min(base_ms * (2**attempt), cap_ms))


__all__ = ["compute_backoff_ms"]
