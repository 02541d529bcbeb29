from __future__ import annotations

from .document import Document
from .models import Viewport
from .rowrender import rendered_col_of_cursor


def compute_offsets(
    rowoff: int,
    coloff: int,
    cy: int,
    rx: int,
    screenrows: int,
    screencols: int,
) -> tuple[int, int]:
    """Return the smallest offset change that keeps ``(cy, rx)`` on screen."""
    if cy < rowoff:
        rowoff = cy
    if cy >= rowoff + screenrows:
        rowoff = cy - screenrows + 1
    if rx < coloff:
        coloff = rx
    if rx >= coloff + screencols:
        coloff = rx - screencols + 1
    return rowoff, coloff


def scroll(viewport: Viewport, doc: Document) -> int:
    """Update the viewport offsets for the current cursor; return its rendered column."""
    rx = rendered_col_of_cursor(doc.current_row(), doc.cursor)
    viewport.rowoff, viewport.coloff = compute_offsets(
        viewport.rowoff,
        viewport.coloff,
        doc.cursor.cy,
        rx,
        max(1, viewport.screenrows),
        max(1, viewport.screencols),
    )
    return rx
