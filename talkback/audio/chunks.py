"""Fixed-size chunking for outbound audio."""

from __future__ import annotations

from collections.abc import Iterator


def iter_chunks(data: bytes, chunk_bytes: int) -> Iterator[bytes]:
    if chunk_bytes <= 0:
        raise ValueError("chunk_bytes must be positive")
    view = memoryview(data)
    for start in range(0, len(view), chunk_bytes):
        yield bytes(view[start : start + chunk_bytes])


__all__ = ["iter_chunks"]
