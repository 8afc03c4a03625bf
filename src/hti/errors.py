"""Exception types raised by the widget toolkit.

Each error derives from the built-in type callers would naturally catch
(``RuntimeError`` for programming errors, ``ValueError`` for bad payloads)
and from :class:`HtiError`, so embedding programs can catch either.
"""

from __future__ import annotations


class HtiError(Exception):
    """Base class for all toolkit errors."""


class StructureError(HtiError, RuntimeError):
    """The widget tree invariants were violated.

    Raised when the application is given a second direct child, or when a
    widget is added under a destroyed or unattached parent.
    """


class ThreadAffinityError(HtiError, RuntimeError):
    """A UI-thread-only operation was issued from the wrong thread.

    The unconditional post refuses callers on the UI thread: the UI thread
    only drains the queue between ticks, so anything it waits on after
    posting to itself would never complete.
    """


class ApplicationClosedError(HtiError, RuntimeError):
    """A result was requested from an application that has been closed."""


class LanguageLoadError(HtiError, ValueError):
    """A language table could not be read or parsed."""
