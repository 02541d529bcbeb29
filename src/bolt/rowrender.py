"""Mapping between raw columns and rendered (tab-expanded) columns."""

from __future__ import annotations

from .constants import BOLT_TAB_STOP
from .errors import InvalidIndex
from .models import Cursor, Row


def render_row(chars: str) -> str:
    out: list[str] = []
    idx = 0
    for ch in chars:
        if ch == "\t":
            out.append(" ")
            idx += 1
            while idx % BOLT_TAB_STOP != 0:
                out.append(" ")
                idx += 1
        else:
            out.append(ch)
            idx += 1
    return "".join(out)


def raw_to_rendered(row: Row, cx: int) -> int:
    """Return the rendered column of raw column ``cx``.

    ``cx`` may equal ``row.size``; larger values clamp to the row end.
    """
    if cx < 0:
        raise InvalidIndex(f"raw column {cx} is negative")
    rx = 0
    for ch in row.chars[:cx]:
        if ch == "\t":
            rx += (BOLT_TAB_STOP - 1) - (rx % BOLT_TAB_STOP)
        rx += 1
    return rx


def rendered_to_raw(row: Row, rx: int) -> int:
    """Return the raw column whose rendered span covers ``rx``."""
    if rx < 0:
        raise InvalidIndex(f"rendered column {rx} is negative")
    cur_rx = 0
    for cx, ch in enumerate(row.chars):
        if ch == "\t":
            cur_rx += (BOLT_TAB_STOP - 1) - (cur_rx % BOLT_TAB_STOP)
        cur_rx += 1
        if cur_rx > rx:
            return cx
    return row.size


def rendered_col_of_cursor(row: Row | None, cursor: Cursor) -> int:
    # The virtual row past the end renders as empty.
    if row is None:
        return 0
    return raw_to_rendered(row, cursor.cx)
