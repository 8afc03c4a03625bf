"""Rasterize a rendered text blob into a fixed-size terminal frame.

Widgets render to one string.  :func:`rasterize` walks it cluster by
cluster with a ``(row, col)`` cursor bounded by the terminal geometry and
returns exactly ``height - 1`` lines of exactly ``width`` cells, so every
frame overwrites everything the previous one drew.  The last terminal row
is never written; writing a newline there would scroll the screen.

Control characters inside the blob:

* ``\\n`` ends the current line (the rest is padded with spaces).
* ``\\r`` returns to column 0 of the current line without ending it, so
  following characters overwrite what is already there.
* ``\\b`` moves one column back.

A character that does not fit on the current line wraps to the next one.
"""

from __future__ import annotations

from hti.utils import grapheme_width, split_graphemes

__all__ = ["CURSOR_HOME", "compose_frame", "rasterize"]

CURSOR_HOME = "\x1b[H"

# Continuation marker for the second cell of a wide character.
_WIDE_TAIL = ""


def rasterize(blob: str, width: int, height: int) -> list[str]:
    """Lay *blob* out on a ``width`` x ``height`` grid."""
    if width < 1 or height < 2:
        return []

    limit = height - 1
    lines: list[str] = []
    cells = [" "] * width
    col = 0

    def flush() -> None:
        nonlocal cells, col
        lines.append("".join(cells))
        cells = [" "] * width
        col = 0

    for cluster in split_graphemes(blob.replace("\t", "   ")):
        if len(lines) >= limit:
            break

        if cluster == "\r\n":
            flush()
        elif cluster == "\n":
            flush()
        elif cluster == "\r":
            col = 0
        elif cluster == "\b":
            col = max(0, col - 1)
        else:
            cell_width = grapheme_width(cluster)
            if cell_width == 0 or cell_width > width:
                continue
            if col + cell_width > width:
                flush()
                if len(lines) >= limit:
                    break
            _put(cells, col, cluster, cell_width)
            col += cell_width

    if len(lines) < limit:
        flush()
    while len(lines) < limit:
        lines.append(" " * width)
    return lines


def _put(cells: list[str], col: int, cluster: str, cell_width: int) -> None:
    """Write *cluster* at *col*, repairing any wide character it splits."""
    if cells[col] == _WIDE_TAIL and col > 0:
        cells[col - 1] = " "
    end = col + cell_width
    if end < len(cells) and cells[end] == _WIDE_TAIL:
        cells[end] = " "
    cells[col] = cluster
    for tail in range(col + 1, end):
        cells[tail] = _WIDE_TAIL


def compose_frame(blob: str, width: int, height: int) -> str:
    """Return the bytes for one full in-place repaint of the terminal."""
    lines = rasterize(blob, width, height)
    return CURSOR_HOME + "".join(line + "\n" for line in lines)
