"""Tests for List and TitledList navigation and rendering."""

from __future__ import annotations

from hti.keys import Key
from hti.widgets import Button, Label, List, ListStyle, TitledList

from .workers import drain, run_in_worker

UP = Key.from_data("\x1b[A")
DOWN = Key.from_data("\x1b[B")
LEFT = Key.from_data("\x1b[D")
RIGHT = Key.from_data("\x1b[C")
ENTER = Key.from_data("\r")
OTHER = Key.from_data("x")


class TestListRender:
    def test_focused_list_marks_selected_child(self, app) -> None:
        root = app.add(List)
        root.add(Button, "A")
        root.add(Button, "B")
        assert root.render(True) == "[A]\n.B."

    def test_unfocused_list_focuses_nothing(self, app) -> None:
        root = app.add(List)
        root.add(Button, "A")
        root.add(Button, "B")
        assert root.render(False) == ".A.\n.B."

    def test_horizontal_style_joins_with_space(self, app) -> None:
        root = app.add(List, ListStyle.HORIZONTAL)
        root.add(Button, "A")
        root.add(Button, "B")
        assert root.render(True) == "[A] .B."

    def test_hidden_child_keeps_separator_slot(self, app) -> None:
        root = app.add(List)
        root.add(Label, "one")
        hidden = root.add(Label, "two")
        root.add(Label, "three")
        hidden.visible = False
        assert root.render(False) == "one\n\nthree"

    def test_empty_list_renders_nothing(self, app) -> None:
        root = app.add(List)
        assert root.render(True) == ""
        assert root.index is None
        assert root.selected is None

    def test_application_frame_shows_list(self, app, terminal) -> None:
        root = app.add(List)
        root.add(Button, "A")
        root.add(Button, "B")
        app.repaint()
        lines = terminal.last_write.split("\n")
        assert lines[0].endswith("[A]" + " " * 17)
        assert lines[1] == ".B." + " " * 17


class TestListNavigation:
    def test_next_moves_selection(self, app) -> None:
        root = app.add(List)
        root.add(Button, "A")
        root.add(Button, "B")
        assert root.key_press(DOWN)
        assert root.index == 1
        assert root.render(True) == ".A.\n[B]"

    def test_right_also_moves_next(self, app) -> None:
        root = app.add(List, ListStyle.HORIZONTAL)
        root.add(Button, "A")
        root.add(Button, "B")
        assert root.key_press(RIGHT)
        assert root.index == 1
        assert root.key_press(LEFT)
        assert root.index == 0

    def test_wasd_letters_navigate(self, app) -> None:
        root = app.add(List)
        root.add(Button, "A")
        root.add(Button, "B")
        assert root.key_press(Key.from_data("s"))
        assert root.index == 1
        assert root.key_press(Key.from_data("w"))
        assert root.index == 0

    def test_no_wraparound(self, app) -> None:
        root = app.add(List)
        root.add(Button, "A")
        root.add(Button, "B")
        assert not root.key_press(UP)
        assert root.index == 0
        root.key_press(DOWN)
        assert not root.key_press(DOWN)
        assert root.index == 1

    def test_skips_unselectable_children(self, app) -> None:
        root = app.add(List)
        root.add(Button, "A")
        root.add(Label, "text")
        root.add(Button, "B")
        assert root.key_press(DOWN)
        assert root.index == 2
        assert root.key_press(UP)
        assert root.index == 0

    def test_skips_hidden_children(self, app) -> None:
        root = app.add(List)
        root.add(Button, "A")
        hidden = root.add(Button, "H")
        root.add(Button, "B")
        hidden.visible = False
        assert root.key_press(DOWN)
        assert root.index == 2

    def test_no_candidate_leaves_index_unchanged(self, app) -> None:
        root = app.add(List)
        root.add(Button, "A")
        root.add(Label, "x")
        root.add(Label, "y")
        assert not root.key_press(DOWN)
        assert root.index == 0

    def test_other_keys_are_not_consumed(self, app) -> None:
        root = app.add(List)
        root.add(Button, "A")
        assert not root.key_press(OTHER)

    def test_selected_child_gets_keys_first(self, app) -> None:
        pressed: list[str] = []
        root = app.add(List)
        root.add(Button, "A", lambda b: pressed.append("A"))
        root.add(Button, "B", lambda b: pressed.append("B"))
        assert root.key_press(ENTER)
        root.key_press(DOWN)
        root.key_press(ENTER)
        assert pressed == ["A", "B"]

    def test_nested_list_hands_over_at_edges(self, app) -> None:
        outer = app.add(List)
        inner = outer.add(List)
        inner.add(Button, "a1")
        inner.add(Button, "a2")
        outer.add(Button, "B")

        assert outer.key_press(DOWN)
        assert (outer.index, inner.index) == (0, 1)
        assert outer.key_press(DOWN)
        assert (outer.index, inner.index) == (1, 1)
        assert outer.key_press(UP)
        assert outer.index == 0
        assert outer.render(True) == ".a1.\n[a2]\n.B."

    def test_hidden_selected_child_does_not_get_keys(self, app) -> None:
        pressed: list[str] = []
        root = app.add(List)
        first = root.add(Button, "A", lambda b: pressed.append("A"))
        root.add(Button, "B")
        first.visible = False
        assert not root.key_press(ENTER)
        assert pressed == []
        assert root.key_press(DOWN)
        assert root.index == 1


class TestListSelectionBookkeeping:
    def test_first_child_is_selected(self, app) -> None:
        root = app.add(List)
        a = root.add(Button, "A")
        assert root.selected is a

    def test_selection_moves_to_first_selectable_from_tail(self, app) -> None:
        root = app.add(List)
        root.add(Label, "header")
        assert root.index == 0
        button = root.add(Button, "go")
        assert root.selected is button

    def test_valid_selection_is_kept_when_adding(self, app) -> None:
        root = app.add(List)
        a = root.add(Button, "A")
        root.add(Button, "B")
        assert root.selected is a

    def test_removing_before_selection_shifts_index(self, app) -> None:
        root = app.add(List)
        a = root.add(Button, "A")
        root.add(Button, "B")
        c = root.add(Button, "C")
        root.key_press(DOWN)
        root.key_press(DOWN)
        a.destroy()
        assert root.selected is c
        assert root.index == 1

    def test_removing_selected_moves_to_next_candidate(self, app) -> None:
        root = app.add(List)
        a = root.add(Button, "A")
        root.add(Label, "x")
        c = root.add(Button, "C")
        a.destroy()
        assert root.selected is c

    def test_removing_last_selected_falls_back(self, app) -> None:
        root = app.add(List)
        a = root.add(Button, "A")
        b = root.add(Button, "B")
        root.key_press(DOWN)
        b.destroy()
        assert root.selected is a

    def test_removing_everything_clears_selection(self, app) -> None:
        root = app.add(List)
        a = root.add(Button, "A")
        a.destroy()
        assert root.index is None
        assert root.key_press(DOWN) is False

    def test_worker_built_list_selects_on_drain(self, app) -> None:
        root = app.add(List)

        def build() -> None:
            root.add(Label, "title")
            root.add(Button, "A")
            root.add(Button, "B")

        run_in_worker(build)
        assert root.index is None
        drain(app)
        assert root.index == 1
        assert root.render(True) == "title\n[A]\n.B."


class TestTitledList:
    def test_focused_title_uses_angle_brackets(self, app) -> None:
        root = app.add(TitledList, "Menu")
        root.add(Button, "A")
        assert root.render(True) == "<Menu>\n[A]"

    def test_unfocused_title_is_padded(self, app) -> None:
        root = app.add(TitledList, "Menu")
        root.add(Button, "A")
        assert root.render(False) == " Menu \n.A."

    def test_navigates_like_a_list(self, app) -> None:
        root = app.add(TitledList, "Menu", ListStyle.HORIZONTAL)
        root.add(Button, "A")
        root.add(Button, "B")
        assert root.key_press(RIGHT)
        assert root.render(True) == "<Menu>\n.A. [B]"

    def test_title_can_change_from_worker(self, app) -> None:
        root = app.add(TitledList, "Old")
        run_in_worker(lambda: setattr(root, "text", "New"))
        assert root.render(False).startswith(" Old ")
        drain(app)
        assert root.render(False).startswith(" New ")
