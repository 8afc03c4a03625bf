"""hti: terminal widget toolkit with a thread-safe, single-owner UI loop."""

# Core
from hti.application import Application
from hti.config import AppConfig

# Errors
from hti.errors import (
    ApplicationClosedError,
    HtiError,
    LanguageLoadError,
    StructureError,
    ThreadAffinityError,
)

# Events
from hti.events import Event, EventKind, EventQueue

# Localization
from hti.i18n import Language, LanguageManager, LocalizingString, Text

# Keyboard input handling
from hti.keys import Key, KeyId, parse_key

# Rendering
from hti.render import compose_frame, rasterize

# Input buffering
from hti.stdin_buffer import StdinBuffer

# Terminal interface and implementations
from hti.terminal import ProcessTerminal, Terminal

# Widgets
from hti.widgets import (
    Button,
    FocusPosition,
    Label,
    List,
    ListStyle,
    PageStack,
    PageStackStyle,
    Pages,
    Selectable,
    Textual,
    TitledList,
    Widget,
)

__all__ = [
    # Core
    "AppConfig",
    "Application",
    # Errors
    "ApplicationClosedError",
    "HtiError",
    "LanguageLoadError",
    "StructureError",
    "ThreadAffinityError",
    # Events
    "Event",
    "EventKind",
    "EventQueue",
    # Localization
    "Language",
    "LanguageManager",
    "LocalizingString",
    "Text",
    # Keys
    "Key",
    "KeyId",
    "parse_key",
    # Rendering
    "compose_frame",
    "rasterize",
    # Stdin buffer
    "StdinBuffer",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # Widgets
    "Button",
    "FocusPosition",
    "Label",
    "List",
    "ListStyle",
    "PageStack",
    "PageStackStyle",
    "Pages",
    "Selectable",
    "Textual",
    "TitledList",
    "Widget",
]
