"""List: linear focus over the children."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any

from hti.i18n import TextLike
from hti.widgets.widget import Selectable, Textual, Widget

if TYPE_CHECKING:
    from hti.keys import Key

__all__ = ["List", "ListStyle", "TitledList"]


class ListStyle(enum.Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class List(Selectable, Widget):
    """Shows every child and moves the selection with prev/next keys.

    Keys go to the selected child first.  If it does not consume a
    prev/next key, the selection steps towards the list boundary until it
    lands on a child that is selectable and visible; when there is none the
    selection stays where it was.  There is no wraparound, which lets an
    enclosing list take over at the edges.
    """

    VERTICAL = ListStyle.VERTICAL
    HORIZONTAL = ListStyle.HORIZONTAL

    def __init__(self, style: ListStyle = ListStyle.VERTICAL, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.style = style
        self._index: int | None = None

    @property
    def index(self) -> int | None:
        return self._index

    @property
    def selected(self) -> Widget | None:
        if self._index is None or self._index >= len(self._children):
            return None
        return self._children[self._index]

    @staticmethod
    def _is_candidate(child: Widget) -> bool:
        return child.can_be_selected() and child.visible

    def render(self, focus: bool) -> str:
        separator = "\n" if self.style is ListStyle.VERTICAL else " "
        parts: list[str] = []
        for i, child in enumerate(self._children):
            # Hidden children keep their slot.
            if not child.visible:
                parts.append("")
                continue
            parts.append(child.render(focus and i == self._index))
        return separator.join(parts)

    def key_press(self, key: Key) -> bool:
        selected = self.selected
        if selected is None:
            return False
        if selected.visible and selected.key_press(key):
            return True

        if key.is_prev():
            step = -1
        elif key.is_next():
            step = 1
        else:
            return False

        index = self._index
        assert index is not None
        while 0 <= index + step < len(self._children):
            index += step
            if self._is_candidate(self._children[index]):
                self._index = index
                return True
        return False

    def on_child_added(self, child: Widget) -> None:
        if self._index is None:
            self._index = 0
        current = self.selected
        if current is not None and self._is_candidate(current):
            return
        for index in range(len(self._children) - 1, -1, -1):
            if self._is_candidate(self._children[index]):
                self._index = index
                return

    def on_child_removed(self, child: Widget, index: int) -> None:
        if self._index is None:
            return
        if not self._children:
            self._index = None
            return
        if index < self._index:
            self._index -= 1
            return
        if index > self._index:
            return

        # The selected child went away: prefer the next candidate, then the
        # previous one, else just stay in range.
        self._index = min(index, len(self._children) - 1)
        if self._is_candidate(self._children[self._index]):
            return
        for candidate in range(self._index + 1, len(self._children)):
            if self._is_candidate(self._children[candidate]):
                self._index = candidate
                return
        for candidate in range(self._index - 1, -1, -1):
            if self._is_candidate(self._children[candidate]):
                self._index = candidate
                return


class TitledList(Textual, List):
    """A List with a title line above it."""

    def __init__(self, title: TextLike = "", style: ListStyle = ListStyle.VERTICAL) -> None:
        super().__init__(text=title, style=style)

    def render(self, focus: bool) -> str:
        title = self.localize(self.text)
        header = f"<{title}>\n" if focus else f" {title} \n"
        return header + super().render(focus)
