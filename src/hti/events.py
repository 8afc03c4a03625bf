"""Deferred UI-thread work: events and the FIFO that carries them.

Worker threads never touch the widget tree directly.  They wrap the work in
an :class:`Event` and push it onto the application's :class:`EventQueue`;
the UI thread pops and runs one event per loop tick.  Events that must hand
a value back carry a :class:`concurrent.futures.Future` as a one-shot result
channel.
"""

from __future__ import annotations

import enum
import logging
import threading
from collections import deque
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

__all__ = ["Event", "EventKind", "EventQueue"]


class EventKind(enum.Enum):
    CALL = "call"
    RENDER = "render"
    EXIT = "exit"


@dataclass(eq=False)
class Event:
    """A single deferred action, run exactly once on the UI thread.

    ``render`` marks whether running the event dirties the frame.
    ``future``, when present, receives the closure's result or exception
    instead of letting the exception escape into the loop.
    """

    func: Callable[[], Any]
    kind: EventKind = EventKind.CALL
    render: bool = True
    future: Future | None = None

    def run(self) -> Any:
        if self.future is None:
            return self.func()
        if not self.future.set_running_or_notify_cancel():
            return None
        try:
            result = self.func()
        except Exception as exc:
            self.future.set_exception(exc)
            return None
        except BaseException as exc:
            self.future.set_exception(exc)
            raise
        self.future.set_result(result)
        return result

    def fail(self, exc: BaseException) -> None:
        """Deliver *exc* to a waiting caller without running the closure."""
        if self.future is not None and self.future.set_running_or_notify_cancel():
            self.future.set_exception(exc)


class EventQueue:
    """Lock-guarded FIFO of :class:`Event` objects.

    Delivery order is exactly insertion order: there is no priority and no
    coalescing, so posts from one thread are observed in the order they
    were made.  Once closed the queue refuses new events.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: deque[Event] = deque()
        self._closed = False

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, event: Event) -> bool:
        """Append *event*; return ``False`` if the queue is closed."""
        with self._lock:
            if self._closed:
                return False
            self._events.append(event)
            return True

    def pop(self) -> Event | None:
        """Remove and return the oldest event, or ``None`` when empty."""
        with self._lock:
            if not self._events:
                return None
            return self._events.popleft()

    def close(self) -> list[Event]:
        """Refuse further events and return the ones never drained."""
        with self._lock:
            self._closed = True
            pending = list(self._events)
            self._events.clear()
        if pending:
            logger.debug("Event queue closed with %d pending event(s)", len(pending))
        return pending
