"""Terminal abstraction: non-blocking key polling, geometry and output.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal`` backed by
the process's stdin/stdout.  ``ProcessTerminal`` puts the tty in cbreak mode
(keys arrive unbuffered and unechoed, Ctrl-C still interrupts), hides the
cursor while running and polls stdin with a zero-timeout ``select`` so the UI
loop never blocks on input.
"""

from __future__ import annotations

import logging
import os
import select
import sys
import termios
import tty
from collections import deque
from typing import IO, Protocol

from hti.keys import Key
from hti.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

__all__ = ["ProcessTerminal", "Terminal"]

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"

_DEFAULT_SIZE = (80, 24)


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface the application loop needs from a terminal."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def poll(self) -> Key | None:
        """Return the next pending key, or ``None``; must never block."""
        ...

    def size(self) -> tuple[int, int]:
        """Return ``(width, height)`` in character cells."""
        ...

    def write(self, data: str) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Terminal backed by ``sys.stdin``/``sys.stdout`` on POSIX systems."""

    def __init__(
        self,
        *,
        write_log: str = "",
        stdin: IO[str] | None = None,
        stdout: IO[str] | None = None,
        escape_timeout: float = 0.01,
    ) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._write_log_path = write_log
        self._write_log_failed = False
        self._stdin_buffer = StdinBuffer(timeout=escape_timeout)
        self._pending: deque[str] = deque()
        self._original_termios: list | None = None
        self._started = False

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Enter cbreak mode, hide the cursor and clear the screen."""
        if self._started:
            return
        fd = self._stdin.fileno()
        if os.isatty(fd):
            self._original_termios = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        else:
            logger.debug("stdin is not a tty; leaving terminal modes alone")
        self._started = True
        self.write(_HIDE_CURSOR + _CLEAR_SCREEN)

    def stop(self) -> None:
        """Restore the terminal modes saved by :meth:`start`."""
        if not self._started:
            return
        self._started = False
        self.write(_SHOW_CURSOR + "\n")
        if self._original_termios is not None:
            termios.tcsetattr(
                self._stdin.fileno(), termios.TCSADRAIN, self._original_termios
            )
            self._original_termios = None
        self._stdin_buffer.clear()
        self._pending.clear()

    # -- input --------------------------------------------------------------

    def poll(self) -> Key | None:
        if not self._pending:
            self._read_available()
            self._pending.extend(self._stdin_buffer.flush_stale())
        if not self._pending:
            return None
        return Key.from_data(self._pending.popleft())

    def _read_available(self) -> None:
        fd = self._stdin.fileno()
        readable, _, _ = select.select([fd], [], [], 0)
        if not readable:
            return
        raw = os.read(fd, 4096)
        if not raw:
            return
        data = raw.decode("utf-8", errors="replace")
        self._pending.extend(self._stdin_buffer.process(data))

    # -- geometry -----------------------------------------------------------

    def size(self) -> tuple[int, int]:
        try:
            geometry = os.get_terminal_size(self._stdout.fileno())
        except (ValueError, OSError):
            return _DEFAULT_SIZE
        return geometry.columns, geometry.lines

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write *data* to stdout and, if configured, to the write log."""
        self._stdout.write(data)
        self._stdout.flush()

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a", encoding="utf-8") as f:
                    f.write(data)
            except OSError as exc:
                if not self._write_log_failed:
                    logger.warning("Cannot write to %s: %s", self._write_log_path, exc)
                    self._write_log_failed = True
