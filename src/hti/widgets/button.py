"""Button: selectable text that runs an action when activated."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional

from hti.i18n import TextLike
from hti.widgets.widget import Selectable, Textual, Widget

if TYPE_CHECKING:
    from hti.keys import Key

__all__ = ["Button", "ButtonAction"]

ButtonAction = Callable[["Button"], None]


class Button(Textual, Selectable, Widget):
    """Renders as ``[text]`` when focused and ``.text.`` otherwise.

    Space or enter invokes the bound action with the button itself; the
    key counts as handled even when no action is bound.
    """

    def __init__(self, text: TextLike = "", action: Optional[ButtonAction] = None) -> None:
        super().__init__(text=text)
        self._action = action

    def bind(self, action: Optional[ButtonAction]) -> None:
        def apply() -> None:
            self._action = action

        self._post(apply, render=False)

    def render(self, focus: bool) -> str:
        label = self.localize(self.text)
        return f"[{label}]" if focus else f".{label}."

    def key_press(self, key: Key) -> bool:
        if not key.is_press():
            return False
        if self._action is not None:
            self._action(self)
        return True
