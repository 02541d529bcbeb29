"""Row storage and the edit operations that keep it consistent.

Every mutation of a row's raw text is followed by re-rendering and
re-highlighting that row before the method returns, so ``render`` and ``hl``
never go stale across a call boundary.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .constants import Highlight
from .errors import EmptyDocument, InvalidIndex
from .models import Cursor, Grammar, Row
from .rowrender import render_row
from .syntax import update_syntax

log = logging.getLogger(__name__)


def _require_bytes(s: str) -> str:
    # Rows hold one byte per character; saving encodes them as latin-1.
    for ch in s:
        if ord(ch) > 0xFF:
            raise ValueError(f"character {ch!r} does not fit in a byte")
    return s


class Document:
    def __init__(self, grammar: Grammar | None = None) -> None:
        self.rows: list[Row] = []
        self.cursor = Cursor()
        self.grammar = grammar
        self.dirty = False

    # -- Read-only views ---------------------------------------------------

    @property
    def numrows(self) -> int:
        return len(self.rows)

    def row_count(self) -> int:
        return len(self.rows)

    def row(self, at: int) -> Row:
        if not self.rows:
            raise EmptyDocument("document has no rows")
        if not 0 <= at < len(self.rows):
            raise InvalidIndex(f"row {at} outside 0..{len(self.rows) - 1}")
        return self.rows[at]

    def rendered_row(self, at: int) -> str:
        return self.row(at).render

    def highlight_row(self, at: int) -> tuple[Highlight, ...]:
        return tuple(self.row(at).hl)

    def current_row(self) -> Row | None:
        if self.cursor.cy < len(self.rows):
            return self.rows[self.cursor.cy]
        return None

    def is_dirty(self) -> bool:
        return self.dirty

    def mark_saved(self) -> None:
        self.dirty = False

    # -- Derived state -----------------------------------------------------

    def update_row(self, row: Row) -> None:
        row.render = render_row(row.chars)
        update_syntax(row, self.grammar)

    def set_grammar(self, grammar: Grammar | None) -> None:
        self.grammar = grammar
        for row in self.rows:
            update_syntax(row, grammar)

    # -- Row operations ----------------------------------------------------

    def insert_row(self, at: int, s: str) -> None:
        if not 0 <= at <= len(self.rows):
            raise InvalidIndex(f"cannot insert row at {at}")
        row = Row(chars=_require_bytes(s))
        self.update_row(row)
        self.rows.insert(at, row)
        self.dirty = True

    def del_row(self, at: int) -> None:
        if not 0 <= at < len(self.rows):
            raise InvalidIndex(f"cannot delete row {at}")
        del self.rows[at]
        self.dirty = True

    def row_insert_char(self, row: Row, at: int, c: str) -> None:
        _require_bytes(c)
        if at < 0 or at > row.size:
            at = row.size
        row.chars = row.chars[:at] + c + row.chars[at:]
        self.update_row(row)
        self.dirty = True

    def row_append_string(self, row: Row, s: str) -> None:
        row.chars += _require_bytes(s)
        self.update_row(row)
        self.dirty = True

    def row_del_char(self, row: Row, at: int) -> None:
        if not 0 <= at < row.size:
            raise InvalidIndex(f"no character at column {at}")
        row.chars = row.chars[:at] + row.chars[at + 1 :]
        self.update_row(row)
        self.dirty = True

    # -- Cursor-relative edits ---------------------------------------------

    def _check_cursor(self) -> None:
        cur = self.cursor
        if not 0 <= cur.cy <= len(self.rows):
            raise InvalidIndex(f"cursor row {cur.cy} outside 0..{len(self.rows)}")
        if cur.cx < 0:
            raise InvalidIndex(f"cursor column {cur.cx} is negative")
        self.clamp_cursor()

    def clamp_cursor(self) -> None:
        row = self.current_row()
        rowlen = row.size if row is not None else 0
        if self.cursor.cx > rowlen:
            self.cursor.cx = rowlen

    def insert_char(self, c: str) -> None:
        _require_bytes(c)
        self._check_cursor()
        cur = self.cursor
        if cur.cy == len(self.rows):
            self.insert_row(len(self.rows), "")
        self.row_insert_char(self.rows[cur.cy], cur.cx, c)
        cur.cx += 1

    def insert_newline(self) -> None:
        self._check_cursor()
        cur = self.cursor
        if cur.cx == 0:
            self.insert_row(cur.cy, "")
        else:
            row = self.rows[cur.cy]
            tail = row.chars[cur.cx :]
            row.chars = row.chars[: cur.cx]
            self.update_row(row)
            self.insert_row(cur.cy + 1, tail)
        cur.cy += 1
        cur.cx = 0

    def del_char(self) -> None:
        self._check_cursor()
        cur = self.cursor
        if cur.cy == len(self.rows):
            return
        if cur.cx == 0 and cur.cy == 0:
            return

        row = self.rows[cur.cy]
        if cur.cx > 0:
            self.row_del_char(row, cur.cx - 1)
            cur.cx -= 1
        else:
            prev = self.rows[cur.cy - 1]
            cur.cx = prev.size
            self.row_append_string(prev, row.chars)
            self.del_row(cur.cy)
            cur.cy -= 1

    # -- Persistence -------------------------------------------------------

    def load_from_lines(self, lines: Iterable[str]) -> None:
        rows = []
        for line in lines:
            row = Row(chars=_require_bytes(line))
            self.update_row(row)
            rows.append(row)
        self.rows = rows
        self.cursor = Cursor()
        self.dirty = False
        log.debug("loaded %d rows", len(self.rows))

    def rows_to_string(self) -> str:
        return "".join(f"{row.chars}\n" for row in self.rows)

    def document_to_text(self) -> bytes:
        return self.rows_to_string().encode("latin-1")
