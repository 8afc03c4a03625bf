"""Tests for Pages and PageStack."""

from __future__ import annotations

import pytest

from hti.i18n import Text
from hti.keys import Key
from hti.widgets import Button, Label, List, Pages, PageStack, PageStackStyle, Widget
from hti.widgets.page_stack import FocusPosition

from .workers import drain, run_in_worker

UP = Key.from_data("\x1b[A")
DOWN = Key.from_data("\x1b[B")
LEFT = Key.from_data("\x1b[D")
RIGHT = Key.from_data("\x1b[C")
ENTER = Key.from_data("\r")


class TestPages:
    def test_first_page_becomes_active(self, app) -> None:
        pages = app.add(Pages)
        assert pages.active is None
        first = pages.add(Label, "one")
        pages.add(Label, "two")
        assert pages.active is first
        assert pages.render(True) == "one"

    def test_empty_pages(self, app) -> None:
        pages = app.add(Pages)
        assert pages.render(True) == ""
        assert not pages.key_press(ENTER)
        assert not pages.can_be_selected()
        assert not pages.select_next()
        assert not pages.select_prev()

    def test_bounded_navigation(self, app) -> None:
        pages = app.add(Pages)
        for name in ("a", "b", "c"):
            pages.add(Label, name)
        assert not pages.select_prev()
        assert pages.select_next()
        assert pages.select_next()
        assert not pages.select_next()
        assert pages.index == 2
        assert pages.select_prev()
        assert pages.index == 1

    def test_select_first_last_and_index(self, app) -> None:
        pages = app.add(Pages)
        for name in ("a", "b", "c"):
            pages.add(Label, name)
        pages.select_last()
        assert pages.render(False) == "c"
        pages.select_first()
        assert pages.render(False) == "a"
        pages.select(1)
        assert pages.index == 1
        pages.select(10)
        assert pages.index == 2

    def test_keys_go_to_active_page(self, app) -> None:
        pressed: list[str] = []
        pages = app.add(Pages)
        pages.add(Button, "A", lambda b: pressed.append("A"))
        pages.add(Button, "B", lambda b: pressed.append("B"))
        pages.select_next()
        assert pages.key_press(ENTER)
        assert pressed == ["B"]

    def test_selectability_follows_active_page(self, app) -> None:
        pages = app.add(Pages)
        pages.add(Label, "text")
        pages.add(Button, "go")
        assert not pages.can_be_selected()
        pages.select_next()
        assert pages.can_be_selected()

    def test_removing_pages_adjusts_index(self, app) -> None:
        pages = app.add(Pages)
        a = pages.add(Label, "a")
        pages.add(Label, "b")
        c = pages.add(Label, "c")
        pages.select_last()
        a.destroy()
        assert pages.active is c
        c.destroy()
        assert pages.index == 0
        assert pages.render(False) == "b"


def _two_page_stack(app, title: str = "") -> tuple[PageStack, Widget, Widget]:
    stack = app.add(PageStack, title)
    first = stack.add_page("P1", Label, "first page")
    second = stack.add_page("P2", List)
    second.add(Button, "OK")
    return stack, first, second


class TestPageStackRender:
    def test_navigation_bar_marks_current_page(self, app) -> None:
        stack, _, _ = _two_page_stack(app)
        assert stack.position is FocusPosition.NAV
        assert stack.render(True) == "[P1] P2 \nfirst page"

    def test_unfocused_bar_uses_dots(self, app) -> None:
        stack, _, _ = _two_page_stack(app)
        assert stack.render(False) == ".P1. P2 \nfirst page"

    def test_title_line(self, app) -> None:
        stack, _, _ = _two_page_stack(app, "Demo")
        assert stack.render(True).startswith("<Demo>\n")
        assert stack.render(False).startswith(".Demo.\n")

    def test_content_focus_moves_marker(self, app) -> None:
        stack, _, _ = _two_page_stack(app)
        stack.key_press(RIGHT)
        stack.key_press(DOWN)
        assert stack.render(True) == " P1 .P2.\n[OK]"

    def test_left_right_style_stacks_entries(self, app) -> None:
        stack = app.add(PageStack, "", PageStackStyle.LEFT_RIGHT)
        stack.add_page("P1", Label, "x")
        stack.add_page("P2", Label, "y")
        assert stack.render(True) == "[P1]\n P2 \nx"

    def test_pages_is_created_on_attach(self, app) -> None:
        stack = app.add(PageStack, "T")
        assert isinstance(stack.pages, Pages)
        assert stack.children() == [stack.pages]

    def test_unattached_stack_has_no_pages(self) -> None:
        stack = PageStack("T")
        with pytest.raises(RuntimeError):
            _ = stack.pages


class TestPageStackNavigation:
    def test_right_switches_active_page(self, app) -> None:
        stack, first, second = _two_page_stack(app)
        assert stack.pages.active is first
        assert stack.key_press(RIGHT)
        assert stack.pages.active is second
        assert stack.render(True) == " P1 [P2]\n.OK."

    def test_bar_navigation_is_bounded(self, app) -> None:
        stack, first, second = _two_page_stack(app)
        assert not stack.key_press(LEFT)
        stack.key_press(RIGHT)
        assert not stack.key_press(RIGHT)
        assert stack.pages.active is second

    def test_down_enters_selectable_page(self, app) -> None:
        stack, _, _ = _two_page_stack(app)
        stack.key_press(RIGHT)
        assert stack.key_press(DOWN)
        assert stack.position is FocusPosition.CONTENT

    def test_down_ignored_for_unselectable_page(self, app) -> None:
        stack, _, _ = _two_page_stack(app)
        assert not stack.key_press(DOWN)
        assert stack.position is FocusPosition.NAV

    def test_up_returns_to_bar(self, app) -> None:
        stack, _, _ = _two_page_stack(app)
        stack.key_press(RIGHT)
        stack.key_press(DOWN)
        assert stack.key_press(UP)
        assert stack.position is FocusPosition.NAV

    def test_content_gets_keys_first(self, app) -> None:
        pressed: list[str] = []
        stack = app.add(PageStack)
        page = stack.add_page("P", List)
        page.add(Button, "A", lambda b: pressed.append("A"))
        page.add(Button, "B", lambda b: pressed.append("B"))
        stack.key_press(DOWN)

        # Down is consumed by the list until it reaches its end.
        assert stack.key_press(DOWN)
        assert page.index == 1
        assert stack.key_press(ENTER)
        assert pressed == ["B"]
        # Up walks back through the list before leaving the content.
        assert stack.key_press(UP)
        assert stack.position is FocusPosition.CONTENT
        assert stack.key_press(UP)
        assert stack.position is FocusPosition.NAV

    def test_left_right_ignored_in_content(self, app) -> None:
        stack, _, second = _two_page_stack(app)
        stack.key_press(RIGHT)
        stack.key_press(DOWN)
        assert not stack.key_press(LEFT)
        assert stack.pages.active is second

    def test_left_right_style_swaps_axes(self, app) -> None:
        stack = app.add(PageStack, "", PageStackStyle.LEFT_RIGHT)
        stack.add_page("P1", Label, "x")
        page = stack.add_page("P2", List)
        page.add(Button, "OK")

        assert stack.key_press(DOWN)
        assert stack.pages.active is page
        assert stack.key_press(RIGHT)
        assert stack.position is FocusPosition.CONTENT
        assert stack.key_press(LEFT)
        assert stack.position is FocusPosition.NAV


class TestPageStackLabels:
    def test_labels_follow_page_destruction(self, app) -> None:
        stack, first, _ = _two_page_stack(app)
        first.destroy()
        assert stack.render(True) == "[P2]\n.OK."

    def test_destroyed_pages_drop_their_labels(self, app) -> None:
        stack = app.add(PageStack)
        keep = stack.add_page("keep", Label, "k")
        for i in range(5):
            stack.add_page(f"temp{i}", Label, "t").destroy()
        assert list(stack._labels) == [keep.id]
        assert stack.label_of(keep) == Text("keep")

    def test_worker_add_and_destroy_leaves_no_label(self, app) -> None:
        stack = app.add(PageStack)

        def churn() -> None:
            stack.add_page("temp", Label, "t").destroy()

        run_in_worker(churn)
        drain(app)
        assert stack._labels == {}
        assert stack.pages.children() == []

    def test_worker_built_stack(self, app) -> None:
        def build() -> PageStack:
            stack = app.add(PageStack, "W")
            stack.add_page("P1", Label, "one")
            stack.add_page("P2", Label, "two")
            return stack

        stack = run_in_worker(build)
        drain(app)
        assert stack.render(True) == "<W>\n[P1] P2 \none"

    def test_localized_labels(self, app) -> None:
        from hti.i18n import LocalizingString

        app.load_language("en", '{"tab.home": "Home"}')
        app.switch_language("en")
        stack = app.add(PageStack)
        stack.add_page(LocalizingString("tab.home"), Label, "x")
        assert stack.render(True) == "[Home]\nx"
