"""Widget base class and capability mixins.

Widgets form a tree owned by the :class:`~hti.application.Application`.
Each widget owns its children; parent and application are held as weak
back-references.  Structural changes (linking a new child, destroying a
subtree) and render-affecting state changes are routed through the
application's checked post, so they run on the UI thread no matter which
thread asked for them.

Capabilities are mixins:

* :class:`Selectable` -- the widget may receive focus.
* :class:`Textual` -- the widget carries a :class:`~hti.i18n.Text`, stored
  in a :class:`TextSlot` it owns.
"""

from __future__ import annotations

import logging
import weakref
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from hti.errors import StructureError
from hti.i18n import Text, TextLike

if TYPE_CHECKING:
    from hti.application import Application
    from hti.keys import Key

logger = logging.getLogger(__name__)

__all__ = ["Selectable", "TextSlot", "Textual", "Widget"]

W = TypeVar("W", bound="Widget")


class Widget:
    """A node in the UI tree.

    The defaults render nothing, handle no keys and cannot be selected.
    Subclasses override :meth:`render`, :meth:`key_press`,
    :meth:`can_be_selected` and the child hooks as needed.

    Widgets are created with :meth:`add` on their parent, never attached by
    hand.
    """

    def __init__(self) -> None:
        self.id: int = 0
        self._parent_ref: weakref.ReferenceType[Widget] | None = None
        self._app_ref: weakref.ReferenceType[Application] | None = None
        self._children: list[Widget] = []
        self._visible: bool = True
        self._destroyed: bool = False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id}>"

    # ------------------------------------------------------------------
    # Tree accessors
    # ------------------------------------------------------------------

    @property
    def app(self) -> Application:
        app = self._app_ref() if self._app_ref is not None else None
        if app is None:
            raise StructureError(
                f"{self!r} is not attached to an application; create it with parent.add()"
            )
        return app

    @property
    def parent(self) -> Widget | None:
        return self._parent_ref() if self._parent_ref is not None else None

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def visible(self) -> bool:
        return self._visible

    @visible.setter
    def visible(self, value: bool) -> None:
        def apply() -> None:
            self._visible = bool(value)

        self._post(apply)

    def children(self) -> list[Widget]:
        """Return a snapshot of the child list.

        Off the UI thread this waits for the UI thread to take the snapshot,
        so it never observes a list that is being mutated.
        """
        if self._app_ref is None:
            return list(self._children)
        app = self.app
        if app.is_ui_thread():
            return list(self._children)
        return app.query(lambda: list(self._children))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def add(self, cls: Callable[..., W], *args: Any, **kwargs: Any) -> W:
        """Construct ``cls(*args, **kwargs)`` as a child of this widget.

        The returned widget is usable immediately.  It joins
        :meth:`children` and the application registry once the UI thread
        has run the link step, which happens in place when called on the UI
        thread.

        Raises:
            StructureError: if this widget is destroyed or unattached, or
                (at link time) if this is the application and it already has
                a child.
        """
        if self._destroyed:
            raise StructureError(f"Cannot add a child to destroyed {self!r}")
        app = self.app
        child = cls(*args, **kwargs)
        child._bind(self, app)
        app.post_checked(lambda: self._link(child))
        child.on_attached()
        return child

    def destroy(self) -> None:
        """Destroy this widget and its whole subtree on the UI thread."""
        self._post(self._destroy_now, render=True)

    def _bind(self, parent: Widget, app: Application) -> None:
        self._parent_ref = weakref.ref(parent)
        self._app_ref = weakref.ref(app)
        self.id = app._allocate_id()

    def _link(self, child: Widget) -> None:
        app = self.app
        if self._destroyed:
            logger.debug("Dropping link of %r under destroyed %r", child, self)
            child._destroyed = True
            return
        if child._destroyed:
            return
        if self is app and self._children:
            raise StructureError("Application can only have one child")
        app._registry[child.id] = child
        self._children.append(child)
        logger.debug("Linked %r under %r", child, self)
        self.on_child_added(child)

    def _destroy_now(self) -> None:
        if self._destroyed:
            return
        while self._children:
            self._children[0]._destroy_now()
        self._destroyed = True

        parent = self.parent
        if parent is not None:
            for index, sibling in enumerate(parent._children):
                if sibling is self:
                    del parent._children[index]
                    parent.on_child_removed(self, index)
                    break
        app = self._app_ref() if self._app_ref is not None else None
        if app is not None:
            app._registry.pop(self.id, None)
        logger.debug("Destroyed %r", self)

    def _post(self, func: Callable[[], None], render: bool = True) -> None:
        """Run *func* on the UI thread (in place when already there)."""
        if self._app_ref is None:
            func()
            return
        self.app.post_checked(func, render=render)

    # ------------------------------------------------------------------
    # Overridable behaviour
    # ------------------------------------------------------------------

    def render(self, focus: bool) -> str:
        return ""

    def key_press(self, key: Key) -> bool:
        """Handle *key*; return ``True`` if it was consumed."""
        return False

    def can_be_selected(self) -> bool:
        return False

    def on_attached(self) -> None:
        """Called once, on the adding thread, after back-references are bound."""

    def on_child_added(self, child: Widget) -> None:
        pass

    def on_child_removed(self, child: Widget, index: int) -> None:
        pass

    def localize(self, text: Text) -> str:
        return text.localize(self.app.languages)


class Selectable:
    """Capability: the widget can receive focus."""

    def can_be_selected(self) -> bool:
        return True


class TextSlot:
    """Owned storage for a widget's :class:`~hti.i18n.Text`."""

    __slots__ = ("value",)

    def __init__(self, value: Text) -> None:
        self.value = value


class Textual:
    """Capability: the widget carries localizable text.

    Assigning :attr:`text` is routed through the checked post, so worker
    threads may set it safely.  Plain strings are wrapped in ``Text``.
    """

    def __init__(self, text: TextLike = "", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._text_slot = TextSlot(Text.of(text))

    @property
    def text(self) -> Text:
        return self._text_slot.value

    @text.setter
    def text(self, value: TextLike) -> None:
        new_text = Text.of(value)

        def apply() -> None:
            self._text_slot.value = new_text

        self._post(apply)  # type: ignore[attr-defined]
