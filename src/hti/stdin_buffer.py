"""StdinBuffer splits raw input into complete key sequences.

Reads from a terminal can return partial escape sequences (``"\\x1b["`` in
one read, ``"A"`` in the next), or several keys at once.  The buffer keeps
incomplete sequences until the rest arrives; a lone ``ESC`` that is not
followed by anything within ``timeout`` seconds is emitted as the escape
key itself.
"""

from __future__ import annotations

import time
from typing import Callable

ESC = "\x1b"


def _is_complete_sequence(data: str) -> str:
    """Classify *data* as 'complete', 'incomplete' or 'not-escape'."""
    if not data.startswith(ESC):
        return "not-escape"

    if len(data) == 1:
        return "incomplete"

    after_esc = data[1:]

    # CSI sequences: ESC [ <params> <final byte 0x40-0x7e>
    if after_esc.startswith("["):
        if len(data) < 3:
            return "incomplete"
        if 0x40 <= ord(data[-1]) <= 0x7E:
            return "complete"
        return "incomplete"

    # SS3 sequences: ESC O <char>
    if after_esc.startswith("O"):
        return "complete" if len(after_esc) >= 2 else "incomplete"

    # Meta key: ESC followed by a single character
    return "complete"


def _extract_complete_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete sequences and an incomplete remainder."""
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        remaining = buffer[pos:]

        if not remaining.startswith(ESC):
            sequences.append(remaining[0])
            pos += 1
            continue

        seq_end = 1
        while seq_end <= len(remaining):
            candidate = remaining[:seq_end]
            if _is_complete_sequence(candidate) == "complete":
                sequences.append(candidate)
                pos += seq_end
                break
            seq_end += 1
        else:
            return sequences, remaining

    return sequences, ""


class StdinBuffer:
    """Buffers input and hands back complete sequences synchronously."""

    def __init__(
        self,
        *,
        timeout: float = 0.01,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._buffer: str = ""
        self._timeout = timeout
        self._clock = clock
        self._pending_since: float | None = None

    def process(self, data: str) -> list[str]:
        """Feed *data* and return every sequence it completes."""
        self._buffer += data
        sequences, remainder = _extract_complete_sequences(self._buffer)
        self._buffer = remainder
        if remainder:
            if self._pending_since is None:
                self._pending_since = self._clock()
        else:
            self._pending_since = None
        return sequences

    def flush_stale(self) -> list[str]:
        """Emit a held incomplete sequence once it has waited ``timeout``."""
        if self._pending_since is None:
            return []
        if self._clock() - self._pending_since < self._timeout:
            return []
        return self.flush()

    def flush(self) -> list[str]:
        self._pending_since = None
        if not self._buffer:
            return []
        sequences = [self._buffer]
        self._buffer = ""
        return sequences

    def clear(self) -> None:
        self._buffer = ""
        self._pending_since = None

    def get_buffer(self) -> str:
        return self._buffer
