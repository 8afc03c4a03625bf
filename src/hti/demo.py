"""Demo dashboard: a counter, a clock fed by a worker thread, and settings."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass

from hti.application import Application
from hti.i18n import LocalizingString as L
from hti.widgets import Button, Label, List, ListStyle, PageStack, TitledList

logger = logging.getLogger(__name__)

LANGUAGES = ("en", "zh")


@dataclass
class Demo:
    stack: PageStack
    counter: Label
    clock: Label
    ticks: Label


def build_demo(app: Application) -> Demo:
    """Build the demo tree under *app* and install the bundled languages."""
    for name in LANGUAGES:
        app.load_language(name, package="hti", resource=f"locales/{name}.json")
    app.switch_language("en")

    stack = app.add(PageStack, L("app.title"))

    counter_page = stack.add_page(L("page.counter"), TitledList, L("counter.title"))
    counter_page.add(Button, L("button.test"))
    inner = counter_page.add(TitledList, L("counter.value"))
    counter = inner.add(Label, "0")
    value = 0

    def step(delta: int) -> None:
        nonlocal value
        value += delta
        counter.text = str(value)

    inner.add(Button, L("button.prev"), lambda _: step(-1))
    inner.add(Button, L("button.next"), lambda _: step(1))

    clock_page = stack.add_page(L("page.clock"), List)
    clock = clock_page.add(Label, L("clock.now"))
    ticks = clock_page.add(Label, L("clock.ticks") + "0")

    settings = stack.add_page(L("page.settings"), List)
    languages = settings.add(List, ListStyle.HORIZONTAL)
    languages.add(Button, L("button.english"), lambda _: app.switch_language("en"))
    languages.add(Button, L("button.chinese"), lambda _: app.switch_language("zh"))
    settings.add(Label, L("help"))
    settings.add(Button, L("button.quit"), lambda _: app.exit())

    return Demo(stack=stack, counter=counter, clock=clock, ticks=ticks)


class ClockWorker(threading.Thread):
    """Updates the clock labels from outside the UI thread."""

    def __init__(self, demo: Demo, interval: float = 1.0) -> None:
        super().__init__(name="hti-clock", daemon=True)
        self._demo = demo
        self._interval = interval
        self._stop_event = threading.Event()

    def run(self) -> None:
        count = 0
        while not self._stop_event.is_set():
            count += 1
            self._demo.clock.text = L("clock.now") + time.strftime("%H:%M:%S")
            self._demo.ticks.text = L("clock.ticks") + str(count)
            self._stop_event.wait(self._interval)
        logger.debug("Clock worker stopped after %d tick(s)", count)

    def stop(self) -> None:
        self._stop_event.set()


def run_demo(language: str = "en") -> None:
    with Application() as app:
        demo = build_demo(app)
        app.switch_language(language)
        worker = ClockWorker(demo)
        worker.start()
        try:
            app.run()
        finally:
            worker.stop()
            worker.join()
