"""Build the bounded chat request from session history."""

from __future__ import annotations

from collections.abc import Sequence

from talkback.state.session import ROLE_USER, ROLE_ASSISTANT, Turn


def _truncate(text: str, max_chars: int) -> str:
    if max_chars > 0 and len(text) > max_chars:
        return text[:max_chars]
    return text


def recent_pairs(history: Sequence[Turn], max_pairs: int) -> list[tuple[Turn, Turn]]:
    """Complete (user, assistant) pairs from history, most recent `max_pairs` only."""
    if max_pairs <= 0:
        return []
    pairs: list[tuple[Turn, Turn]] = []
    pending_user: Turn | None = None
    for turn in history:
        if turn.role == ROLE_USER:
            pending_user = turn
        elif turn.role == ROLE_ASSISTANT and pending_user is not None:
            pairs.append((pending_user, turn))
            pending_user = None
    return pairs[-max_pairs:]


def build_chat_messages(
    system_prompt: str,
    history: Sequence[Turn],
    user_text: str,
    *,
    max_pairs: int,
    turn_chars: int,
) -> list[dict[str, str]]:
    messages: list[dict[str, str]] = [{"role": "system", "content": system_prompt}]
    for user_turn, assistant_turn in recent_pairs(history, max_pairs):
        messages.append({"role": ROLE_USER, "content": _truncate(user_turn.text, turn_chars)})
        messages.append({"role": ROLE_ASSISTANT, "content": _truncate(assistant_turn.text, turn_chars)})
    messages.append({"role": ROLE_USER, "content": user_text})
    return messages


__all__ = ["build_chat_messages", "recent_pairs"]
