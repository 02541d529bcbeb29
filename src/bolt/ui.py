from __future__ import annotations

import os
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from .constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    BOLT_QUERY_LEN,
    BOLT_VERSION,
    CTRL_H,
    DEL_KEY,
    ENTER,
    ESC,
    Highlight,
)
from .models import Cursor
from .search import SearchEngine, SearchEvent
from .syntax import syntax_to_color
from .viewport import scroll

if TYPE_CHECKING:
    from .editor import Editor


def _draw_welcome(editor: Editor, ab: list[str]) -> None:
    cols = editor.view.screencols
    welcome = f"Bolt editor -- version {BOLT_VERSION}"
    if len(welcome) > cols:
        welcome = welcome[:cols]
    padding = (cols - len(welcome)) // 2
    if padding:
        ab.append("~")
        padding -= 1
    if padding > 0:
        ab.append(" " * padding)
    ab.append(welcome)


def _is_control(ch: str) -> bool:
    # C0, DEL and C1 bytes are never written to the terminal as-is.
    code = ord(ch)
    return code < 32 or 127 <= code < 160


def _draw_rows(editor: Editor, ab: list[str]) -> None:
    doc = editor.doc
    view = editor.view
    for y in range(view.screenrows):
        filerow = view.rowoff + y
        if filerow >= doc.numrows:
            if doc.numrows == 0 and y == view.screenrows // 3:
                _draw_welcome(editor, ab)
            else:
                ab.append("~")
        else:
            row = doc.rows[filerow]
            c = row.render[view.coloff : view.coloff + view.screencols]
            hl = row.hl[view.coloff : view.coloff + view.screencols]
            current_color = -1
            for ch, h in zip(c, hl):
                if _is_control(ch):
                    code = ord(ch)
                    sym = chr(ord("@") + code) if code <= 26 else "?"
                    ab.append("\x1b[7m")
                    ab.append(sym)
                    ab.append("\x1b[m")
                    if current_color != -1:
                        ab.append(f"\x1b[{current_color}m")
                    continue
                if h == Highlight.NORMAL:
                    if current_color != -1:
                        ab.append("\x1b[39m")
                        current_color = -1
                else:
                    color = syntax_to_color(h)
                    if color != current_color:
                        ab.append(f"\x1b[{color}m")
                        current_color = color
                ab.append(ch)
            ab.append("\x1b[39m")
        ab.append("\x1b[K")
        ab.append("\r\n")


def _draw_status_bar(editor: Editor, ab: list[str]) -> None:
    doc = editor.doc
    cols = editor.view.screencols
    ab.append("\x1b[7m")
    filename = editor.filename or "[No Name]"
    status = f"{filename:.20} - {doc.numrows} lines{' (modified)' if doc.dirty else ''}"
    filetype = doc.grammar.filetype if doc.grammar is not None else "no ft"
    rstatus = f"{filetype} | {doc.cursor.cy + 1}/{doc.numrows}"
    if len(status) > cols:
        status = status[:cols]
    ab.append(status)
    fill = len(status)
    while fill < cols:
        if cols - fill == len(rstatus):
            ab.append(rstatus)
            break
        ab.append(" ")
        fill += 1
    ab.append("\x1b[m")
    ab.append("\r\n")


def _draw_message_bar(editor: Editor, ab: list[str]) -> None:
    ab.append("\x1b[K")
    if editor.statusmsg and time.time() - editor.statusmsg_time < editor.settings.status_timeout:
        ab.append(editor.statusmsg[: editor.view.screencols])


def build_frame(editor: Editor) -> str:
    rx = scroll(editor.view, editor.doc)
    view = editor.view
    ab: list[str] = ["\x1b[?25l", "\x1b[H"]
    _draw_rows(editor, ab)
    _draw_status_bar(editor, ab)
    _draw_message_bar(editor, ab)
    ab.append(f"\x1b[{editor.doc.cursor.cy - view.rowoff + 1};{rx - view.coloff + 1}H")
    ab.append("\x1b[?25h")
    return "".join(ab)


def refresh_screen(editor: Editor) -> None:
    os.write(editor.stdout_fd, build_frame(editor).encode("latin-1", errors="replace"))


def prompt(
    editor: Editor,
    template: str,
    callback: Callable[[str, int], None] | None = None,
) -> str | None:
    """Read a line in the message bar; ``None`` when cancelled with ESC."""
    text = ""
    while True:
        editor.set_status_message(template, text)
        editor.refresh_screen()

        c = editor.read_key()
        if c in (DEL_KEY, CTRL_H, BACKSPACE):
            text = text[:-1]
        elif c == ESC:
            editor.set_status_message("")
            if callback is not None:
                callback(text, c)
            return None
        elif c == ENTER:
            if text:
                editor.set_status_message("")
                if callback is not None:
                    callback(text, c)
                return text
        elif 32 <= c < 127 and len(text) < BOLT_QUERY_LEN:
            text += chr(c)

        if callback is not None:
            callback(text, c)


def search_event_for_key(c: int) -> SearchEvent:
    if c == ESC:
        return SearchEvent.CANCEL
    if c == ENTER:
        return SearchEvent.ACCEPT
    if c in (ARROW_RIGHT, ARROW_DOWN):
        return SearchEvent.NEXT
    if c in (ARROW_LEFT, ARROW_UP):
        return SearchEvent.PREVIOUS
    return SearchEvent.EDIT


def find(editor: Editor) -> None:
    doc = editor.doc
    view = editor.view
    saved_cursor = Cursor(doc.cursor.cx, doc.cursor.cy)
    saved_rowoff = view.rowoff
    saved_coloff = view.coloff
    engine = SearchEngine()

    def on_key(query: str, c: int) -> None:
        if engine.update(doc, query, search_event_for_key(c)) is not None:
            # Past the end, so the next scroll puts the match row on top.
            view.rowoff = doc.numrows

    if prompt(editor, "Search: %s (Use ESC/Arrows/Enter)", on_key) is None:
        doc.cursor = saved_cursor
        view.rowoff = saved_rowoff
        view.coloff = saved_coloff
