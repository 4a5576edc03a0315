from __future__ import annotations

import asyncio

import pytest

from talkback.handlers.websocket.lifecycle import WebSocketLifecycle
from talkback.config.websocket import (
    WS_CLOSE_IDLE_CODE,
    WS_CLOSE_IDLE_REASON,
    WS_CLOSE_MAX_DURATION_CODE,
    WS_CLOSE_MAX_DURATION_REASON,
)


class _FakeWebSocket:
    def __init__(self) -> None:
        self.closed = asyncio.Event()
        self.close_code: int | None = None
        self.close_reason: str | None = None

    async def close(self, *, code: int = 1000, reason: str | None = None) -> None:
        self.close_code = code
        self.close_reason = reason or ""
        self.closed.set()


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.mark.asyncio
async def test_websocket_lifecycle_closes_on_max_duration() -> None:
    ws = _FakeWebSocket()
    lifecycle = WebSocketLifecycle(
        ws,
        idle_timeout_s=9999.0,
        watchdog_tick_s=0.01,
        max_connection_duration_s=0.05,
    )
    lifecycle.start()

    await asyncio.wait_for(ws.closed.wait(), timeout=1.0)
    assert ws.close_code == WS_CLOSE_MAX_DURATION_CODE
    assert ws.close_reason == WS_CLOSE_MAX_DURATION_REASON
    assert lifecycle.should_close()

    await lifecycle.stop()


@pytest.mark.asyncio
async def test_websocket_lifecycle_closes_when_idle() -> None:
    ws = _FakeWebSocket()
    lifecycle = WebSocketLifecycle(
        ws,
        idle_timeout_s=0.05,
        watchdog_tick_s=0.01,
        max_connection_duration_s=9999.0,
    )
    lifecycle.start()

    await asyncio.wait_for(ws.closed.wait(), timeout=1.0)
    assert ws.close_code == WS_CLOSE_IDLE_CODE
    assert ws.close_reason == WS_CLOSE_IDLE_REASON

    await lifecycle.stop()


@pytest.mark.asyncio
async def test_touch_resets_idle_deadline() -> None:
    clock = _Clock()
    lifecycle = WebSocketLifecycle(
        _FakeWebSocket(),
        idle_timeout_s=10.0,
        max_connection_duration_s=0,
        clock=clock,
    )

    clock.now = 9.0
    lifecycle.touch()
    clock.now = 15.0
    assert lifecycle.expired() is None

    clock.now = 19.5
    assert lifecycle.expired() == (WS_CLOSE_IDLE_CODE, WS_CLOSE_IDLE_REASON)


@pytest.mark.asyncio
async def test_busy_session_is_not_idle_but_still_hits_max_duration() -> None:
    clock = _Clock()
    lifecycle = WebSocketLifecycle(
        _FakeWebSocket(),
        is_busy_fn=lambda: True,
        idle_timeout_s=10.0,
        max_connection_duration_s=100.0,
        clock=clock,
    )

    clock.now = 50.0
    assert lifecycle.expired() is None

    clock.now = 100.0
    assert lifecycle.expired() == (WS_CLOSE_MAX_DURATION_CODE, WS_CLOSE_MAX_DURATION_REASON)


@pytest.mark.asyncio
async def test_stop_prevents_close() -> None:
    ws = _FakeWebSocket()
    lifecycle = WebSocketLifecycle(ws, idle_timeout_s=0.05, watchdog_tick_s=0.01)
    lifecycle.start()
    await lifecycle.stop()
    await asyncio.sleep(0.1)

    assert ws.close_code is None
    assert lifecycle.should_close()
