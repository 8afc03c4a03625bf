"""The Application: root widget, event queue owner and UI loop.

The thread that constructs the :class:`Application` is the UI thread.  Only
that thread touches the widget tree, the language table and the terminal;
every other thread goes through the posting protocol:

* :meth:`Application.post_checked` runs the closure in place on the UI
  thread and enqueues it from anywhere else.  All structural and
  render-affecting operations use it.
* :meth:`Application.post` always enqueues and refuses UI-thread callers.
* :meth:`Application.submit` / :meth:`Application.query` hand a value back
  to a worker through a one-shot :class:`~concurrent.futures.Future`.

Each loop tick renders if something changed, drains at most one event,
polls at most one key and dispatches it, then sleeps briefly.
"""

from __future__ import annotations

import itertools
import logging
import threading
import time
import weakref
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from hti.config import AppConfig
from hti.errors import ApplicationClosedError, ThreadAffinityError
from hti.events import Event, EventKind, EventQueue
from hti.i18n import Language, LanguageManager
from hti.render import compose_frame
from hti.widgets.widget import Widget

if TYPE_CHECKING:
    from hti.keys import Key
    from hti.terminal import Terminal

logger = logging.getLogger(__name__)

__all__ = ["Application"]

T = TypeVar("T")

_UNSET: Any = object()


class Application(Widget):
    """Root of the widget tree.

    The application hosts at most one direct child, the top-level layout
    widget, and renders it with focus.  Use it as a context manager so the
    tree is torn down when the program leaves the block::

        with Application() as app:
            root = app.add(List)
            root.add(Button, "Quit", lambda _: app.exit())
            app.run()
    """

    def __init__(
        self,
        terminal: Terminal | None = None,
        config: AppConfig | None = None,
    ) -> None:
        super().__init__()
        self.config = config if config is not None else AppConfig.from_env()
        if terminal is None:
            from hti.terminal import ProcessTerminal

            terminal = ProcessTerminal(write_log=self.config.write_log)
        self.terminal: Terminal = terminal
        self.languages = LanguageManager()

        self._app_ref = weakref.ref(self)
        self._registry: dict[int, Widget] = {}
        self._ids = itertools.count(1)
        self._queue = EventQueue()
        self._ui_thread = threading.get_ident()

        self._should_exit = False
        self._dirty = True
        self._closed = False

    def __enter__(self) -> Application:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _allocate_id(self) -> int:
        return next(self._ids)

    # ------------------------------------------------------------------
    # Threading
    # ------------------------------------------------------------------

    def is_ui_thread(self) -> bool:
        return threading.get_ident() == self._ui_thread

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending_events(self) -> int:
        return len(self._queue)

    def post(
        self,
        func: Callable[[], Any],
        *,
        render: bool = True,
        kind: EventKind = EventKind.CALL,
    ) -> None:
        """Enqueue *func* for the UI thread.

        Raises:
            ThreadAffinityError: when called on the UI thread.  Use
                :meth:`post_checked` there.
        """
        if self.is_ui_thread():
            raise ThreadAffinityError(
                "Application.post() called from the UI thread; use post_checked()"
            )
        self._enqueue(Event(func, kind=kind, render=render))

    def post_checked(
        self,
        func: Callable[[], Any],
        *,
        render: bool = True,
        kind: EventKind = EventKind.CALL,
    ) -> None:
        """Run *func* now if on the UI thread, otherwise enqueue it."""
        if not self.is_ui_thread():
            self._enqueue(Event(func, kind=kind, render=render))
            return
        func()
        if render:
            self._dirty = True

    def submit(self, func: Callable[[], T]) -> Future[T]:
        """Run *func* on the UI thread and return a future for its result.

        On the UI thread the closure runs in place and the returned future
        is already done.  After :meth:`close` the future fails with
        :class:`ApplicationClosedError`.
        """
        future: Future[T] = Future()
        if self._closed:
            future.set_exception(ApplicationClosedError("Application is closed"))
            return future

        if self.is_ui_thread():
            event = Event(func, render=False, future=future)
            event.run()
            return future

        if not self._queue.put(Event(func, render=False, future=future)):
            future.set_exception(ApplicationClosedError("Application is closed"))
        return future

    def query(self, func: Callable[[], T], timeout: float | None = _UNSET) -> T:
        """Block until the UI thread has computed ``func()`` and return it.

        *timeout* defaults to ``config.query_timeout``; when it expires
        :class:`concurrent.futures.TimeoutError` is raised and the queued
        call is cancelled, so it never runs.
        """
        if timeout is _UNSET:
            timeout = self.config.query_timeout
        future = self.submit(func)
        try:
            return future.result(timeout)
        except FutureTimeoutError:
            future.cancel()
            raise

    def _enqueue(self, event: Event) -> None:
        if not self._queue.put(event):
            logger.warning("Dropping %s event posted after close", event.kind.value)

    # ------------------------------------------------------------------
    # Registry and languages
    # ------------------------------------------------------------------

    def widgets(self) -> list[Widget]:
        """Snapshot of every linked widget except the application itself."""
        if self.is_ui_thread():
            return list(self._registry.values())
        return self.query(lambda: list(self._registry.values()))

    def find(self, widget_id: int) -> Widget | None:
        if self.is_ui_thread():
            return self._registry.get(widget_id)
        return self.query(lambda: self._registry.get(widget_id))

    def load_language(
        self,
        name: str,
        content: str | bytes | None = None,
        *,
        path: str | Path | None = None,
        package: str | None = None,
        resource: str | None = None,
    ) -> None:
        """Parse a language on the calling thread, install it on the UI thread.

        Exactly one source is used: *content* (JSON text), *path*, or
        *package* plus *resource*.

        Raises:
            LanguageLoadError: if the source cannot be read or parsed; the
                language table is left untouched.
        """
        if content is not None:
            language = Language.from_json(content)
        elif path is not None:
            language = Language.from_file(path)
        elif package is not None and resource is not None:
            language = Language.from_resource(package, resource)
        else:
            raise TypeError("load_language() needs content, path, or package and resource")

        self.post_checked(lambda: self.languages.install(name, language))

    def switch_language(self, name: str) -> None:
        def apply() -> None:
            self.languages.switch(name)
            logger.debug("Active language is now %r", self.languages.current)

        self.post_checked(apply)

    # ------------------------------------------------------------------
    # Rendering and input
    # ------------------------------------------------------------------

    @property
    def content(self) -> Widget | None:
        return self._children[0] if self._children else None

    def render(self, focus: bool = True) -> str:
        content = self.content
        if content is None or not content.visible:
            return ""
        return content.render(focus)

    def key_press(self, key: Key) -> bool:
        content = self.content
        if content is None or not content.visible:
            return False
        return content.key_press(key)

    def frame(self) -> str:
        """Compose the full frame for the current tree and terminal size."""
        width, height = self.terminal.size()
        return compose_frame(self.render(True), width, height)

    def repaint(self) -> None:
        self.terminal.write(self.frame())
        self._dirty = False

    def request_render(self) -> None:
        self.post_checked(lambda: None, kind=EventKind.RENDER)

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def exit(self) -> None:
        """Ask the loop to stop after the current tick.  Safe from any thread."""

        def apply() -> None:
            self._should_exit = True

        self.post_checked(apply, render=False, kind=EventKind.EXIT)

    @property
    def exiting(self) -> bool:
        return self._should_exit

    def drain_one(self) -> bool:
        """Run the oldest queued event, if any; return whether one ran."""
        event = self._queue.pop()
        if event is None:
            return False
        logger.debug("Draining %s event", event.kind.value)
        event.run()
        if event.render:
            self._dirty = True
        return True

    def tick(self) -> None:
        """Run one loop iteration without sleeping."""
        if self._dirty:
            self.repaint()
        self.drain_one()
        key = self.terminal.poll()
        if key is not None:
            self.key_press(key)
            self.repaint()

    def run(self) -> None:
        """Run the UI loop until :meth:`exit` takes effect.

        Raises:
            ThreadAffinityError: when not called on the UI thread.
            ApplicationClosedError: when the application is closed.
        """
        if not self.is_ui_thread():
            raise ThreadAffinityError("Application.run() must be called on the UI thread")
        if self._closed:
            raise ApplicationClosedError("Application is closed")

        self.terminal.start()
        self._dirty = True
        try:
            while not self._should_exit:
                self.tick()
                if self._should_exit:
                    break
                time.sleep(self.config.tick_interval)
        finally:
            self.terminal.stop()
        logger.debug("UI loop finished")

    def close(self) -> None:
        """Destroy the tree and fail every query still waiting on the loop.

        Raises:
            ThreadAffinityError: when not called on the UI thread.
        """
        if self._closed:
            return
        if not self.is_ui_thread():
            raise ThreadAffinityError("Application.close() must be called on the UI thread")

        self._destroy_now()
        self._closed = True
        for event in self._queue.close():
            event.fail(ApplicationClosedError("Application closed before the event ran"))
        logger.debug("Application closed")
