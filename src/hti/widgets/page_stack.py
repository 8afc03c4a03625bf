"""PageStack: a navigation bar over a :class:`~hti.widgets.pages.Pages`."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from hti.i18n import Text, TextLike
from hti.widgets.pages import Pages
from hti.widgets.widget import Selectable, Textual, Widget

if TYPE_CHECKING:
    from hti.keys import Key

__all__ = ["FocusPosition", "PageStack", "PageStackStyle"]

W = TypeVar("W", bound=Widget)


class PageStackStyle(enum.Enum):
    # up/down switch between bar and content, left/right move in the bar
    UP_DOWN = "up_down"
    # left/right switch between bar and content, up/down move in the bar
    LEFT_RIGHT = "left_right"


class FocusPosition(enum.Enum):
    NAV = "nav"
    CONTENT = "content"


class PageStack(Textual, Selectable, Widget):
    """Titled navigation bar plus the page it points at.

    Focus starts on the bar.  In the bar, the "move" directions step
    between pages and the "to content" direction enters the active page if
    that page is selectable.  In the content, keys go to the page first;
    an unhandled "to nav" direction returns to the bar.
    """

    UP_DOWN = PageStackStyle.UP_DOWN
    LEFT_RIGHT = PageStackStyle.LEFT_RIGHT

    def __init__(
        self,
        title: TextLike = "",
        style: PageStackStyle = PageStackStyle.UP_DOWN,
    ) -> None:
        super().__init__(text=title)
        self.style = style
        self.position = FocusPosition.NAV
        self._pages: Pages | None = None
        self._labels: dict[int, Text] = {}

    def on_attached(self) -> None:
        self._pages = self.add(Pages)
        self._pages.on_page_removed = self._forget_label

    @property
    def pages(self) -> Pages:
        if self._pages is None:
            raise RuntimeError(f"{self!r} has no pages until it is added to a tree")
        return self._pages

    def add_page(
        self, label: TextLike, cls: Callable[..., W], *args: Any, **kwargs: Any
    ) -> W:
        """Add a page built from ``cls(*args, **kwargs)`` under *label*."""
        page = self.pages.add(cls, *args, **kwargs)
        text = Text.of(label)

        def apply() -> None:
            if not page.destroyed:
                self._labels[page.id] = text

        self._post(apply)
        return page

    def label_of(self, page: Widget) -> Text:
        return self._labels.get(page.id, Text())

    def _forget_label(self, page: Widget) -> None:
        self._labels.pop(page.id, None)

    def on_child_removed(self, child: Widget, index: int) -> None:
        if child is self._pages:
            self._labels.clear()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def _directions(self, key: Key) -> tuple[bool, bool, bool, bool]:
        """Return ``(to_nav, to_content, move_prev, move_next)``."""
        if self.style is PageStackStyle.UP_DOWN:
            return key.is_up(), key.is_down(), key.is_left(), key.is_right()
        return key.is_left(), key.is_right(), key.is_up(), key.is_down()

    def key_press(self, key: Key) -> bool:
        pages = self.pages
        to_nav, to_content, move_prev, move_next = self._directions(key)

        if self.position is FocusPosition.NAV:
            if move_prev and pages.select_prev():
                return True
            if move_next and pages.select_next():
                return True
        elif pages.key_press(key):
            return True

        if to_nav and self.position is FocusPosition.CONTENT:
            self.position = FocusPosition.NAV
            return True
        if to_content and self.position is FocusPosition.NAV and pages.can_be_selected():
            self.position = FocusPosition.CONTENT
            return True
        return False

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, focus: bool) -> str:
        pages = self.pages
        out: list[str] = []

        title = self.localize(self.text)
        if title:
            out.append(f"<{title}>\n" if focus else f".{title}.\n")

        bar_focus = focus and self.position is FocusPosition.NAV
        entries: list[str] = []
        for i, page in enumerate(pages._children):
            label = self.localize(self.label_of(page))
            if i == pages.index:
                entries.append(f"[{label}]" if bar_focus else f".{label}.")
            else:
                entries.append(f" {label} ")
        separator = "" if self.style is PageStackStyle.UP_DOWN else "\n"
        out.append(separator.join(entries))
        out.append("\n")

        out.append(pages.render(focus and self.position is FocusPosition.CONTENT))
        return "".join(out)
