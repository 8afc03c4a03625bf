"""Key classification for terminal input.

Raw terminal input arrives as short strings: a printable character, a
control byte, or an escape sequence such as ``"\\x1b[A"`` for the up arrow.
:func:`parse_key` names the sequence and :class:`Key` answers the semantic
questions the navigation widgets ask (previous/next, up/down/left/right,
activate).  Both the WASD letters and the arrow keys count as directions.
"""

from __future__ import annotations

from dataclasses import dataclass

KeyId = str

# ---------------------------------------------------------------------------
# Sequence tables
# ---------------------------------------------------------------------------

# Legacy (xterm / vt100) sequences, in both CSI and SS3 forms.
_LEGACY_SEQUENCES: dict[str, KeyId] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[7~": "home",
    "\x1b[8~": "end",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
    "\x1b[Z": "shift+tab",
}

_CONTROL_NAMES: dict[str, KeyId] = {
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    " ": "space",
    "\x1b": "escape",
    "\x7f": "backspace",
    "\x08": "backspace",
}

_UP_LETTERS = frozenset("wW")
_DOWN_LETTERS = frozenset("sS")
_LEFT_LETTERS = frozenset("aA")
_RIGHT_LETTERS = frozenset("dD")

_ACTIVATE_NAMES = frozenset({"space", "enter"})


def parse_key(data: str) -> KeyId | None:
    """Return the key identifier for *data*, or ``None`` if unrecognised.

    Printable characters map to themselves, control bytes ``0x01``-``0x1a``
    to ``"ctrl+<letter>"`` and ``ESC`` followed by a printable character to
    ``"alt+<char>"``.
    """
    if not data:
        return None

    named = _CONTROL_NAMES.get(data)
    if named is not None:
        return named

    named = _LEGACY_SEQUENCES.get(data)
    if named is not None:
        return named

    if len(data) == 1:
        code = ord(data)
        if 1 <= code <= 26:
            return "ctrl+" + chr(code + 96)
        if data.isprintable():
            return data
        return None

    if len(data) == 2 and data[0] == "\x1b" and data[1].isprintable():
        return "alt+" + data[1]

    return None


@dataclass(frozen=True)
class Key:
    """One input sample: the raw sequence plus its classification."""

    data: str
    name: KeyId | None = None

    @classmethod
    def from_data(cls, data: str) -> Key:
        return cls(data, parse_key(data))

    def is_none(self) -> bool:
        return not self.data

    def matches(self, key_id: KeyId) -> bool:
        return self.name is not None and self.name == key_id

    def is_up(self) -> bool:
        return self.data in _UP_LETTERS or self.name == "up"

    def is_down(self) -> bool:
        return self.data in _DOWN_LETTERS or self.name == "down"

    def is_left(self) -> bool:
        return self.data in _LEFT_LETTERS or self.name == "left"

    def is_right(self) -> bool:
        return self.data in _RIGHT_LETTERS or self.name == "right"

    def is_prev(self) -> bool:
        return self.is_up() or self.is_left()

    def is_next(self) -> bool:
        return self.is_down() or self.is_right()

    def is_press(self) -> bool:
        """Return ``True`` for the activate keys (space, enter)."""
        return self.name in _ACTIVATE_NAMES
