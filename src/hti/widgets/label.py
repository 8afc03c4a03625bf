"""Label: static, localizable text."""

from __future__ import annotations

from hti.i18n import TextLike
from hti.widgets.widget import Textual, Widget

__all__ = ["Label"]


class Label(Textual, Widget):
    def __init__(self, text: TextLike = "") -> None:
        super().__init__(text=text)

    def render(self, focus: bool) -> str:
        return self.localize(self.text)
