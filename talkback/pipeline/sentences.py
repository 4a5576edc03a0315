"""Incremental sentence splitting over a streamed reply.

The splitter keeps a small state machine instead of re-scanning the growing
reply on every token: `.`, `!` and `?` move it to a boundary candidate, and the
next whitespace character confirms the boundary. Punctuation stays with the
sentence it ends; the whitespace that follows opens the next one. Run-on text
is broken at whitespace past a soft length cap, and cut mid-run past twice
that cap.
"""

from __future__ import annotations

import enum

from talkback.config.pipeline import DEFAULT_PIPELINE_SOFT_SENTENCE_CHARS

_TERMINATORS = frozenset(".!?")
# A segment with no whitespace to break on is cut outright at this multiple of the soft cap.
_HARD_CAP_FACTOR = 2


class SplitterState(enum.Enum):
    IN_WORD = "in_word"
    AT_BOUNDARY_CANDIDATE = "at_boundary_candidate"


class SentenceSplitter:
    def __init__(self, *, soft_max_chars: int = DEFAULT_PIPELINE_SOFT_SENTENCE_CHARS) -> None:
        self._soft_max_chars = int(soft_max_chars)
        self._parts: list[str] = []
        self._length = 0
        self._state = SplitterState.IN_WORD

    @property
    def state(self) -> SplitterState:
        return self._state

    @property
    def pending(self) -> str:
        return "".join(self._parts)

    def feed(self, text: str) -> list[str]:
        """Consume a chunk of reply text and return the sentences it completed."""
        done: list[str] = []
        for ch in text:
            if ch == "\n":
                self._close_into(done)
                self._push(ch)
                self._state = SplitterState.IN_WORD
                continue

            if self._state is SplitterState.AT_BOUNDARY_CANDIDATE:
                if ch in _TERMINATORS:
                    self._push(ch)
                elif ch.isspace():
                    self._close_into(done)
                    self._push(ch)
                    self._state = SplitterState.IN_WORD
                else:
                    self._push(ch)
                    self._state = SplitterState.IN_WORD
                continue

            if ch in _TERMINATORS:
                self._push(ch)
                self._state = SplitterState.AT_BOUNDARY_CANDIDATE
            elif ch.isspace() and self._soft_max_chars > 0 and self._length >= self._soft_max_chars:
                self._close_into(done)
                self._push(ch)
            else:
                self._push(ch)
                if self._soft_max_chars > 0 and self._length >= self._soft_max_chars * _HARD_CAP_FACTOR:
                    self._close_into(done)
        return done

    def flush(self) -> str | None:
        """Return whatever is left once the stream has ended."""
        done: list[str] = []
        self._close_into(done)
        self._state = SplitterState.IN_WORD
        return done[0] if done else None

    def _push(self, ch: str) -> None:
        self._parts.append(ch)
        self._length += 1

    def _close_into(self, done: list[str]) -> None:
        segment = "".join(self._parts)
        self._parts = []
        self._length = 0
        if segment.strip():
            done.append(segment)


def split_sentences(text: str, *, soft_max_chars: int = DEFAULT_PIPELINE_SOFT_SENTENCE_CHARS) -> list[str]:
    splitter = SentenceSplitter(soft_max_chars=soft_max_chars)
    sentences = splitter.feed(text)
    tail = splitter.flush()
    if tail is not None:
        sentences.append(tail)
    return sentences


__all__ = ["SentenceSplitter", "SplitterState", "split_sentences"]
