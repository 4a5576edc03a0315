"""Main FastAPI server for the talkback voice conversation service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket
from fastapi.responses import ORJSONResponse

from talkback.runtime.logging import configure_logging
from talkback.runtime.dependencies import build_runtime_deps
from talkback.config.websocket import WS_ENDPOINT_PATH, WS_REALTIME_ENDPOINT_PATH
from talkback.handlers.websocket.manager import handle_realtime_connection, handle_websocket_connection

logger = logging.getLogger(__name__)

configure_logging()


@asynccontextmanager
async def _lifespan(app: FastAPI):
    runtime_deps = await build_runtime_deps()
    app.state.runtime_deps = runtime_deps
    logger.info("runtime: ready")
    try:
        yield
    finally:
        deps = getattr(app.state, "runtime_deps", None)
        if deps is not None:
            await deps.shutdown()


app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)


def _runtime_deps():
    runtime_deps = getattr(app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    return runtime_deps


@app.get("/health")
async def health() -> dict[str, object]:
    deps = getattr(app.state, "runtime_deps", None)
    if deps is None:
        return {"status": "starting", "connections": 0}
    connections = deps.connections
    return {
        "status": "ok",
        "connections": connections.get_connection_count(),
        "capacity": connections.capacity,
        "by_kind": connections.counts_by_kind(),
    }


@app.websocket(WS_ENDPOINT_PATH)
async def websocket_endpoint(websocket: WebSocket) -> None:
    await handle_websocket_connection(websocket, _runtime_deps())


@app.websocket(WS_REALTIME_ENDPOINT_PATH)
async def realtime_endpoint(websocket: WebSocket) -> None:
    await handle_realtime_connection(websocket, _runtime_deps())
