"""Factory for per-client upstream relays."""

from __future__ import annotations

from typing import Any
from collections.abc import Callable

from fastapi import WebSocket

from talkback.state.settings import RealtimeSettings

from .relay import ConnectFn, UpstreamRelay


class RealtimeBridge:
    def __init__(self, *, settings: RealtimeSettings, api_key: str, connect: ConnectFn | None = None) -> None:
        self._settings = settings
        self._api_key = api_key
        self._connect = connect

    def new_relay(self, ws: WebSocket | Any, *, touch: Callable[[], None] | None = None) -> UpstreamRelay:
        return UpstreamRelay(
            ws,
            settings=self._settings,
            api_key=self._api_key,
            connect=self._connect,
            touch=touch,
        )


__all__ = ["RealtimeBridge"]
