from __future__ import annotations

import pytest

from talkback.handlers.sessions import SessionRegistry
from talkback.handlers.connections import ConnectionManager
from talkback.state.session import Session, AudioGate, Turn, SpeechPhase


def _session() -> Session:
    return Session(id="s1", base_prompt="base", system_prompt="base")


def test_registry_creates_one_session_per_connection() -> None:
    registry = SessionRegistry(base_prompt="be brief")
    conn_a, conn_b = object(), object()

    a = registry.create(conn_a)
    b = registry.create(conn_b)

    assert a.id != b.id
    assert a.system_prompt == "be brief"
    assert a.phase is SpeechPhase.LISTENING
    assert a.gate is AudioGate.OPEN
    assert registry.get(conn_a) is a
    assert len(registry) == 2

    with pytest.raises(ValueError):
        registry.create(conn_a)


def test_registry_remove_closes_session() -> None:
    registry = SessionRegistry(base_prompt="p")
    conn = object()
    session = registry.create(conn)

    assert registry.remove(conn) is session
    assert session.closed
    assert registry.get(conn) is None
    assert registry.remove(conn) is None


def test_apply_topic_replaces_previous_topic() -> None:
    session = _session()

    session.apply_topic("  cooking ")
    assert session.topic == "cooking"
    assert session.system_prompt == "base\n\nThe conversation topic is: cooking"

    session.apply_topic("astronomy")
    assert session.system_prompt == "base\n\nThe conversation topic is: astronomy"

    session.apply_topic("   ")
    assert session.topic is None
    assert session.system_prompt == "base"


def test_stored_history_is_bounded_in_pairs() -> None:
    session = _session()
    for i in range(4):
        session.add_user_turn(f"u{i}")
        session.add_assistant_turn(f"a{i}", max_pairs=2)

    assert session.history == [Turn("user", "u2"), Turn("assistant", "a2"), Turn("user", "u3"), Turn("assistant", "a3")]


def test_rollback_only_removes_trailing_user_turn() -> None:
    session = _session()
    session.add_user_turn("hi")
    session.add_assistant_turn("hello")
    assert not session.rollback_user_turn()

    session.add_user_turn("again")
    assert session.rollback_user_turn()
    assert session.history == [Turn("user", "hi"), Turn("assistant", "hello")]


@pytest.mark.asyncio
async def test_connection_manager_caps_admission() -> None:
    manager = ConnectionManager(max_connections=2)
    a, b, c = object(), object(), object()

    assert await manager.connect(a)
    assert await manager.connect(b)
    assert not await manager.connect(c)
    assert manager.get_connection_count() == 2
    assert manager.capacity == 2

    await manager.disconnect(a)
    assert await manager.connect(c)


@pytest.mark.asyncio
async def test_connection_manager_counts_by_endpoint_kind() -> None:
    manager = ConnectionManager(max_connections=5)
    voice, relay = object(), object()

    await manager.connect(voice)
    await manager.connect(relay, kind="realtime")
    assert manager.counts_by_kind() == {"voice": 1, "realtime": 1}

    await manager.disconnect(relay)
    await manager.disconnect(relay)
    assert manager.counts_by_kind() == {"voice": 1}
