"""Pages: exactly one active child at a time."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from hti.widgets.widget import Selectable, Widget

if TYPE_CHECKING:
    from hti.keys import Key

__all__ = ["Pages"]


class Pages(Selectable, Widget):
    """Proxies rendering and input to the active page only.

    The first page added becomes active.  Navigation is bounded: the
    ``select_*`` methods never wrap around.  Like all tree state, the
    selection is only changed on the UI thread.
    """

    def __init__(self) -> None:
        super().__init__()
        self._index: int | None = None
        self.on_page_removed: Callable[[Widget], None] | None = None

    @property
    def index(self) -> int | None:
        return self._index

    @property
    def active(self) -> Widget | None:
        if self._index is None:
            return None
        return self._children[self._index]

    def render(self, focus: bool) -> str:
        page = self.active
        return page.render(focus) if page is not None else ""

    def key_press(self, key: Key) -> bool:
        page = self.active
        return page.key_press(key) if page is not None else False

    def can_be_selected(self) -> bool:
        page = self.active
        return page is not None and page.can_be_selected()

    def select_prev(self) -> bool:
        if self._index is None or self._index == 0:
            return False
        self._index -= 1
        return True

    def select_next(self) -> bool:
        if self._index is None or self._index + 1 >= len(self._children):
            return False
        self._index += 1
        return True

    def select_first(self) -> None:
        self._index = 0 if self._children else None

    def select_last(self) -> None:
        self._index = len(self._children) - 1 if self._children else None

    def select(self, index: int) -> None:
        """Activate the page at *index*, stopping at the last page."""
        self.select_first()
        for _ in range(index):
            if not self.select_next():
                break

    def on_child_added(self, child: Widget) -> None:
        if self._index is None:
            self._index = 0

    def on_child_removed(self, child: Widget, index: int) -> None:
        if self.on_page_removed is not None:
            self.on_page_removed(child)
        if self._index is None:
            return
        if not self._children:
            self._index = None
        elif index < self._index:
            self._index -= 1
        elif index == self._index:
            self._index = min(index, len(self._children) - 1)
