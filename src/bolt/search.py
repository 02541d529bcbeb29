"""Incremental search over a document's raw text.

The engine owns the only piece of state that reaches into a row's highlight
list from outside the classifier: the saved copy of the row it last painted
with ``Highlight.MATCH``. Every update restores that row first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum, auto

from .constants import Highlight
from .document import Document
from .rowrender import raw_to_rendered

log = logging.getLogger(__name__)


class SearchDirection(IntEnum):
    FORWARD = 1
    BACKWARD = -1


class SearchEvent(Enum):
    EDIT = auto()
    NEXT = auto()
    PREVIOUS = auto()
    ACCEPT = auto()
    CANCEL = auto()


@dataclass(slots=True)
class SearchMatch:
    row: int
    col: int


class SearchEngine:
    def __init__(self) -> None:
        self.last_match: int | None = None
        self.direction = SearchDirection.FORWARD
        self.saved_hl_line: int | None = None
        self.saved_hl: list[Highlight] | None = None

    def reset(self) -> None:
        self.last_match = None
        self.direction = SearchDirection.FORWARD

    def restore_overlay(self, doc: Document) -> None:
        if self.saved_hl is not None and self.saved_hl_line is not None:
            if self.saved_hl_line < doc.numrows:
                doc.rows[self.saved_hl_line].hl = self.saved_hl
        self.saved_hl = None
        self.saved_hl_line = None

    def update(self, doc: Document, query: str, event: SearchEvent) -> SearchMatch | None:
        """Advance the session by one event and return the new match, if any.

        ``ACCEPT`` and ``CANCEL`` end the session; the caller restores the
        cursor on cancel.
        """
        self.restore_overlay(doc)

        if event in (SearchEvent.ACCEPT, SearchEvent.CANCEL):
            self.reset()
            return None
        if event == SearchEvent.NEXT:
            self.direction = SearchDirection.FORWARD
        elif event == SearchEvent.PREVIOUS:
            self.direction = SearchDirection.BACKWARD
        else:
            self.reset()

        if not query:
            return None

        match = self._scan(doc, query)
        if match is None:
            return None

        self.last_match = match.row
        doc.cursor.cy = match.row
        doc.cursor.cx = match.col
        self._apply_overlay(doc, match, len(query))
        log.debug("search %r matched row %d col %d", query, match.row, match.col)
        return match

    def _scan(self, doc: Document, query: str) -> SearchMatch | None:
        numrows = doc.numrows
        if self.last_match is not None:
            current = self.last_match
        elif self.direction == SearchDirection.FORWARD:
            current = -1
        else:
            current = numrows

        for _ in range(numrows):
            current += self.direction
            if current == -1:
                current = numrows - 1
            elif current == numrows:
                current = 0
            pos = doc.rows[current].chars.find(query)
            if pos != -1:
                return SearchMatch(current, pos)
        return None

    def _apply_overlay(self, doc: Document, match: SearchMatch, length: int) -> None:
        row = doc.rows[match.row]
        self.saved_hl_line = match.row
        self.saved_hl = row.hl.copy()
        start = raw_to_rendered(row, match.col)
        end = raw_to_rendered(row, match.col + length)
        for i in range(start, min(end, row.rsize)):
            row.hl[i] = Highlight.MATCH
