from __future__ import annotations

import asyncio
import dataclasses
from typing import Any

import pytest

from talkback.errors import ServiceError
from talkback.voice.gate import EchoGate
from talkback.state.runtime import ServiceBundle
from talkback.runtime.settings import load_settings
from talkback.pipeline.runner import SentencePipeline
from talkback.state.session import Session, AudioGate, Turn

UTTERANCE = bytes(4000)
SENTENCE_AUDIO = bytes(480)  # 10 ms at 24 kHz


class _FakeTranscriber:
    def __init__(self, text: str = "hello there", error: ServiceError | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[bytes] = []

    async def transcribe(self, wav: bytes) -> str:
        self.calls.append(wav)
        if self.error is not None:
            raise self.error
        return self.text


class _FakeGenerator:
    def __init__(self, tokens: list[str], error: ServiceError | None = None) -> None:
        self.tokens = tokens
        self.error = error
        self.requests: list[list[dict[str, str]]] = []

    async def stream_reply(self, messages: list[dict[str, str]]):
        self.requests.append(messages)
        for token in self.tokens:
            await asyncio.sleep(0)
            yield token
        if self.error is not None:
            raise self.error

    async def complete(self, messages: list[dict[str, str]]) -> str:
        self.requests.append(messages)
        if self.error is not None:
            raise self.error
        return "".join(self.tokens)


class _FakeSynthesizer:
    def __init__(self, session: Session, audio: bytes = SENTENCE_AUDIO, error: ServiceError | None = None) -> None:
        self._session = session
        self.audio = audio
        self.error = error
        self.calls: list[str] = []
        self.gate_during_call: list[AudioGate] = []

    async def synthesize(self, text: str) -> bytes:
        self.calls.append(text)
        self.gate_during_call.append(self._session.gate)
        if self.error is not None:
            raise self.error
        return self.audio


class _RecordingOutbox:
    def __init__(self) -> None:
        self.frames: list[Any] = []

    def put_json(self, payload: dict[str, Any]) -> None:
        self.frames.append(payload)

    def put_bytes(self, data: bytes) -> None:
        self.frames.append(bytes(data))

    def kinds(self) -> list[str]:
        return ["<audio>" if isinstance(f, bytes) else f["type"] for f in self.frames]

    def texts(self) -> list[str]:
        return [f["text"] for f in self.frames if isinstance(f, dict) and f["type"] == "assistant.response.text"]


def _build(
    *,
    transcriber: _FakeTranscriber | None = None,
    generator: _FakeGenerator | None = None,
    synth_error: ServiceError | None = None,
    echo_grace_ms: int = 20,
    **pipeline_overrides: Any,
) -> tuple[Session, SentencePipeline, _RecordingOutbox, ServiceBundle]:
    settings = load_settings()
    session = Session(id="s1", base_prompt="be brief", system_prompt="be brief")
    outbox = _RecordingOutbox()
    services = ServiceBundle(
        transcriber=transcriber or _FakeTranscriber(),
        generator=generator or _FakeGenerator(["Hello", "!", " How", " are", " you", "?"]),
        synthesizer=_FakeSynthesizer(session, error=synth_error),
    )
    pipeline = SentencePipeline(
        services=services,
        outbox=outbox,
        gate=EchoGate(session),
        audio=settings.audio,
        vad=dataclasses.replace(settings.vad, echo_grace_ms=echo_grace_ms),
        pipeline=dataclasses.replace(settings.pipeline, **pipeline_overrides),
        clock=lambda: 100.0,
    )
    return session, pipeline, outbox, services


@pytest.mark.asyncio
async def test_reply_streams_sentence_by_sentence() -> None:
    session, pipeline, outbox, services = _build(transcriber=_FakeTranscriber("  hello there "))

    await pipeline.run(session, UTTERANCE)

    assert outbox.kinds() == [
        "assistant.thinking",
        "assistant.response.text",
        "assistant.audio.start",
        "<audio>",
        "assistant.response.text",
        "<audio>",
        "assistant.audio.end",
    ]
    assert outbox.frames[0]["text"] == "hello there"
    assert outbox.texts() == ["Hello!", "Hello! How are you?"]
    assert services.synthesizer.calls == ["Hello!", " How are you?"]
    assert session.history == [Turn("user", "hello there"), Turn("assistant", "Hello! How are you?")]


@pytest.mark.asyncio
async def test_transcription_receives_wav_wrapped_audio() -> None:
    session, pipeline, _outbox, services = _build()

    await pipeline.run(session, UTTERANCE)

    wav = services.transcriber.calls[0]
    assert wav[:4] == b"RIFF"
    assert len(wav) == 44 + len(UTTERANCE)


@pytest.mark.asyncio
async def test_empty_transcript_produces_nothing() -> None:
    session, pipeline, outbox, services = _build(transcriber=_FakeTranscriber("   "))

    await pipeline.run(session, UTTERANCE)

    assert outbox.frames == []
    assert session.history == []
    assert services.generator.requests == []


@pytest.mark.asyncio
async def test_undersized_utterance_is_skipped() -> None:
    session, pipeline, outbox, services = _build()

    await pipeline.run(session, bytes(999))

    assert services.transcriber.calls == []
    assert outbox.frames == []


@pytest.mark.asyncio
async def test_transcription_failure_sends_error() -> None:
    transcriber = _FakeTranscriber(error=ServiceError("transcription", "boom"))
    session, pipeline, outbox, _services = _build(transcriber=transcriber)

    await pipeline.run(session, UTTERANCE)

    assert outbox.frames == [{"type": "error", "message": "transcription failed: boom"}]
    assert session.history == []
    assert session.gate is AudioGate.OPEN


@pytest.mark.asyncio
async def test_generation_failure_mid_stream_rolls_back_user_turn() -> None:
    generator = _FakeGenerator(["Hi there. Next"], error=ServiceError("generation", "down"))
    session, pipeline, outbox, _services = _build(generator=generator)

    await pipeline.run(session, UTTERANCE)

    assert outbox.kinds() == [
        "assistant.thinking",
        "assistant.response.text",
        "assistant.audio.start",
        "<audio>",
        "assistant.audio.end",
        "error",
    ]
    assert session.history == []
    assert session.gate is AudioGate.OPEN


@pytest.mark.asyncio
async def test_synthesis_failure_after_commit_keeps_turn_pair() -> None:
    generator = _FakeGenerator(["Only sentence."])
    session, pipeline, outbox, _services = _build(
        generator=generator, synth_error=ServiceError("synthesis", "quota")
    )

    await pipeline.run(session, UTTERANCE)

    assert outbox.kinds() == ["assistant.thinking", "assistant.response.text", "error"]
    assert session.history == [Turn("user", "hello there"), Turn("assistant", "Only sentence.")]
    assert session.gate is AudioGate.OPEN


@pytest.mark.asyncio
async def test_empty_reply_rolls_back_user_turn() -> None:
    session, pipeline, outbox, _services = _build(generator=_FakeGenerator(["  "]))

    await pipeline.run(session, UTTERANCE)

    assert outbox.kinds() == ["assistant.thinking"]
    assert session.history == []


@pytest.mark.asyncio
async def test_history_window_caps_request_size() -> None:
    session, pipeline, _outbox, services = _build()
    for i in range(12):
        session.add_user_turn(f"question {i}")
        session.add_assistant_turn(f"answer {i}")

    await pipeline.run(session, UTTERANCE)

    request = services.generator.requests[0]
    assert len(request) == 12
    assert request[0] == {"role": "system", "content": "be brief"}
    assert request[1]["content"] == "question 7"
    assert request[-1] == {"role": "user", "content": "hello there"}


@pytest.mark.asyncio
async def test_gate_closed_while_speaking_and_released_after_grace() -> None:
    session, pipeline, _outbox, services = _build(echo_grace_ms=30)

    await pipeline.run(session, UTTERANCE)

    assert services.synthesizer.gate_during_call == [AudioGate.CLOSED, AudioGate.CLOSED]
    assert session.gate is AudioGate.CLOSED
    await asyncio.sleep(0.15)
    assert session.gate is AudioGate.OPEN


@pytest.mark.asyncio
async def test_one_shot_reply_is_split_after_completion() -> None:
    generator = _FakeGenerator(["One. Two."])
    session, pipeline, outbox, services = _build(generator=generator, stream_reply=False)

    await pipeline.run(session, UTTERANCE)

    assert services.synthesizer.calls == ["One.", " Two."]
    assert outbox.texts() == ["One.", "One. Two."]
    assert session.history[-1] == Turn("assistant", "One. Two.")


@pytest.mark.asyncio
async def test_large_sentence_audio_is_chunked() -> None:
    session, pipeline, outbox, services = _build(generator=_FakeGenerator(["Long one."]))
    services.synthesizer.audio = bytes(10000)

    await pipeline.run(session, UTTERANCE)

    chunks = [f for f in outbox.frames if isinstance(f, bytes)]
    assert [len(c) for c in chunks] == [4096, 4096, 1808]
