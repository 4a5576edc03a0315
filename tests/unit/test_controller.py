from __future__ import annotations

import json
import struct
import asyncio
import dataclasses
from typing import Any

import pytest

from talkback.state.session import Session
from talkback.state.runtime import ServiceBundle
from talkback.runtime.settings import load_settings
from talkback.voice.controller import VoiceSessionController
from talkback.handlers.websocket.lifecycle import WebSocketLifecycle
from talkback.handlers.websocket.message_loop import run_message_loop

LOUD = struct.pack("<160h", *([8000, -8000] * 80))


class _RecordingOutbox:
    def __init__(self) -> None:
        self.frames: list[Any] = []

    def put_json(self, payload: dict[str, Any]) -> None:
        self.frames.append(payload)

    def put_bytes(self, data: bytes) -> None:
        self.frames.append(bytes(data))

    def types(self) -> list[str]:
        return [f["type"] for f in self.frames if isinstance(f, dict)]


class _GatedTranscriber:
    def __init__(self) -> None:
        self.release = asyncio.Event()
        self.started = 0
        self.finished = 0

    async def transcribe(self, wav: bytes) -> str:
        self.started += 1
        await self.release.wait()
        self.finished += 1
        return f"utterance {self.finished}"


class _EchoGenerator:
    async def stream_reply(self, messages: list[dict[str, str]]):
        yield f"You said {messages[-1]['content']}."

    async def complete(self, messages: list[dict[str, str]]) -> str:
        return f"You said {messages[-1]['content']}."


class _BrokenGenerator:
    async def stream_reply(self, messages: list[dict[str, str]]):
        raise RuntimeError("generator bug")
        yield ""


class _SilentSynthesizer:
    async def synthesize(self, text: str) -> bytes:
        return b""


class _FakeWebSocket:
    def __init__(self, messages: list[dict[str, Any]]) -> None:
        self._messages = list(messages)

    async def receive(self) -> dict[str, Any]:
        if self._messages:
            return self._messages.pop(0)
        return {"type": "websocket.disconnect", "code": 1000}


def _controller(
    *, max_recording_ms: int = 30000, generator: Any = None
) -> tuple[VoiceSessionController, _RecordingOutbox, ServiceBundle]:
    settings = load_settings()
    settings = dataclasses.replace(
        settings,
        vad=dataclasses.replace(settings.vad, max_recording_ms=max_recording_ms, echo_grace_ms=0),
    )
    services = ServiceBundle(
        transcriber=_GatedTranscriber(),
        generator=generator or _EchoGenerator(),
        synthesizer=_SilentSynthesizer(),
    )
    outbox = _RecordingOutbox()
    session = Session(id="s1", base_prompt="p", system_prompt="p")
    controller = VoiceSessionController(session, outbox=outbox, services=services, settings=settings)
    return controller, outbox, services


async def _wait_until(predicate, timeout: float = 1.0) -> None:
    async def _poll() -> None:
        while not predicate():
            await asyncio.sleep(0.005)

    await asyncio.wait_for(_poll(), timeout=timeout)


@pytest.mark.asyncio
async def test_utterances_are_processed_one_at_a_time_in_order() -> None:
    controller, outbox, services = _controller(max_recording_ms=100)
    controller.start()

    for _ in range(20):
        controller.handle_audio(LOUD)
    await _wait_until(lambda: services.transcriber.started == 1)
    await asyncio.sleep(0.02)

    assert services.transcriber.started == 1
    assert controller.is_busy()

    services.transcriber.release.set()
    await _wait_until(lambda: services.transcriber.finished == 2)
    await _wait_until(lambda: not controller.is_busy())

    user_turns = [t.text for t in controller.session.history if t.role == "user"]
    assert user_turns == ["utterance 1", "utterance 2"]
    assert outbox.types().count("assistant.thinking") == 2

    await controller.close()


@pytest.mark.asyncio
async def test_close_stops_worker_and_drops_new_utterances() -> None:
    controller, _outbox, services = _controller(max_recording_ms=100)
    controller.start()
    await controller.close()

    for _ in range(10):
        controller.handle_audio(LOUD)
    await asyncio.sleep(0.02)

    assert services.transcriber.started == 0
    assert controller.session.closed


@pytest.mark.asyncio
async def test_topic_is_truncated_and_applied() -> None:
    controller, _outbox, _services = _controller()

    controller.handle_topic("x" * 500)

    assert controller.session.topic == "x" * 200
    assert controller.session.system_prompt.endswith("x" * 200)


@pytest.mark.asyncio
async def test_message_loop_dispatches_control_and_audio_frames() -> None:
    controller, outbox, _services = _controller()
    ws = _FakeWebSocket(
        [
            {"type": "websocket.receive", "text": json.dumps({"type": "ping"})},
            {"type": "websocket.receive", "text": json.dumps({"type": "config", "topic": "gardening"})},
            {"type": "websocket.receive", "text": "not json"},
            {"type": "websocket.receive", "text": json.dumps({"type": "mystery"})},
            {"type": "websocket.receive", "bytes": bytes(70000)},
            {"type": "websocket.receive", "bytes": LOUD},
        ]
    )
    lifecycle = WebSocketLifecycle(ws, watchdog_tick_s=0.05)

    await asyncio.wait_for(
        run_message_loop(ws, lifecycle, controller, outbox, load_settings().websocket),
        timeout=1.0,
    )

    assert outbox.types() == ["pong", "error", "vad.speech_start"]
    assert "too large" in outbox.frames[1]["message"]
    assert controller.session.topic == "gardening"
    assert controller.session.speaking

    await controller.close()


@pytest.mark.asyncio
async def test_speech_started_during_processing_is_kept_when_gate_closes() -> None:
    controller, outbox, services = _controller(max_recording_ms=100)
    controller.start()

    for _ in range(10):
        controller.handle_audio(LOUD)
    await _wait_until(lambda: services.transcriber.started == 1)

    # The user starts talking again before the first reply has any audio.
    for _ in range(5):
        controller.handle_audio(LOUD)
    assert outbox.types().count("vad.speech_start") == 2

    services.transcriber.release.set()
    await _wait_until(lambda: services.transcriber.finished == 2)
    await _wait_until(lambda: not controller.is_busy())

    types = outbox.types()
    assert types.count("vad.speech_start") == types.count("vad.speech_end") == 2
    vad_events = [t for t in types if t.startswith("vad.")]
    assert vad_events == ["vad.speech_start", "vad.speech_end"] * 2
    user_turns = [t.text for t in controller.session.history if t.role == "user"]
    assert user_turns == ["utterance 1", "utterance 2"]

    await controller.close()


@pytest.mark.asyncio
async def test_unexpected_pipeline_error_keeps_history_paired() -> None:
    controller, outbox, services = _controller(max_recording_ms=100, generator=_BrokenGenerator())
    services.transcriber.release.set()
    controller.start()

    for _ in range(10):
        controller.handle_audio(LOUD)
    await _wait_until(lambda: "error" in outbox.types())
    await _wait_until(lambda: not controller.is_busy())

    assert controller.session.history == []
    assert not controller.gate.is_closed
    assert outbox.frames[-1] == {"type": "error", "message": "internal error"}

    await controller.close()
