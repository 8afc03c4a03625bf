"""Widgets."""

from hti.widgets.button import Button, ButtonAction
from hti.widgets.label import Label
from hti.widgets.list import List, ListStyle, TitledList
from hti.widgets.page_stack import FocusPosition, PageStack, PageStackStyle
from hti.widgets.pages import Pages
from hti.widgets.widget import Selectable, TextSlot, Textual, Widget

__all__ = [
    "Button",
    "ButtonAction",
    "FocusPosition",
    "Label",
    "List",
    "ListStyle",
    "PageStack",
    "PageStackStyle",
    "Pages",
    "Selectable",
    "TextSlot",
    "Textual",
    "TitledList",
    "Widget",
]
