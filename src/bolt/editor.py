from __future__ import annotations

import errno
import logging
import os
import signal
import sys
import time

from .config import EditorSettings
from .constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    CTRL_C,
    CTRL_F,
    CTRL_H,
    CTRL_L,
    CTRL_Q,
    CTRL_S,
    DEL_KEY,
    END_KEY,
    ENTER,
    ESC,
    HOME_KEY,
    PAGE_DOWN,
    PAGE_UP,
    TAB,
)
from .document import Document
from .models import Viewport
from .syntax import select_grammar
from .terminal import KeyDecoder, RawMode, get_window_size, read_key
from .ui import build_frame, find, prompt, refresh_screen

log = logging.getLogger(__name__)


class QuitEditor(Exception):
    pass


class Editor:
    def __init__(
        self,
        settings: EditorSettings | None = None,
        stdin_fd: int = 0,
        stdout_fd: int = 1,
        screen_size: tuple[int, int] | None = None,
    ) -> None:
        self.settings = settings or EditorSettings()
        self.doc = Document()
        self.view = Viewport()
        self.filename: str | None = None
        self.statusmsg = ""
        self.statusmsg_time = 0.0
        self.quit_times = self.settings.quit_times
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.decoder = KeyDecoder()
        if screen_size is None:
            self.update_window_size()
        else:
            self.set_screen_size(*screen_size)

    def set_screen_size(self, rows: int, cols: int) -> None:
        # Two lines are reserved for the status and message bars.
        self.view.screenrows = max(1, rows - 2)
        self.view.screencols = max(1, cols)

    def update_window_size(self) -> None:
        try:
            rows, cols = get_window_size(self.stdin_fd, self.stdout_fd)
        except OSError as exc:
            raise OSError(exc.errno, "Unable to query screen size") from exc
        self.set_screen_size(rows, cols)

    def handle_sigwinch(self, _signum: int, _frame) -> None:
        self.update_window_size()
        self.refresh_screen()

    def set_status_message(self, fmt: str, *args: object) -> None:
        self.statusmsg = fmt % args if args else fmt
        self.statusmsg_time = time.time()

    def read_key(self) -> int:
        return read_key(self.stdin_fd, self.decoder)

    def build_frame(self) -> str:
        return build_frame(self)

    def refresh_screen(self) -> None:
        refresh_screen(self)

    def find(self) -> None:
        find(self)

    def select_syntax_highlight(self, filename: str) -> None:
        self.doc.set_grammar(select_grammar(filename))

    # -- File I/O ----------------------------------------------------------

    def open_file(self, filename: str) -> None:
        self.filename = filename
        self.select_syntax_highlight(filename)
        lines: list[str] = []
        try:
            with open(filename, "rb") as f:
                for line in f:
                    if line.endswith(b"\n"):
                        line = line[:-1]
                    if line.endswith(b"\r"):
                        line = line[:-1]
                    lines.append(line.decode("latin-1"))
        except FileNotFoundError:
            log.info("%s does not exist yet, starting empty", filename)
        self.doc.load_from_lines(lines)
        log.info("opened %s (%d lines)", filename, len(lines))

    def save(self) -> bool:
        if not self.filename:
            name = prompt(self, "Save as: %s (ESC to cancel)")
            if name is None:
                self.set_status_message("Save aborted")
                return False
            self.filename = name
            self.select_syntax_highlight(name)

        data = self.doc.document_to_text()
        try:
            with open(self.filename, "wb") as f:
                f.write(data)
        except OSError as exc:
            log.warning("saving %s failed: %s", self.filename, exc)
            self.set_status_message("Can't save! I/O error: %s", os.strerror(exc.errno or errno.EIO))
            return False

        self.doc.mark_saved()
        log.info("wrote %d bytes to %s", len(data), self.filename)
        self.set_status_message("%d bytes written to disk", len(data))
        return True

    # -- Input -------------------------------------------------------------

    def move_cursor(self, key: int) -> None:
        doc = self.doc
        cur = doc.cursor
        row = doc.current_row()

        if key == ARROW_LEFT:
            if cur.cx > 0:
                cur.cx -= 1
            elif cur.cy > 0:
                cur.cy -= 1
                cur.cx = doc.rows[cur.cy].size
        elif key == ARROW_RIGHT:
            if row is not None and cur.cx < row.size:
                cur.cx += 1
            elif row is not None and cur.cy < doc.numrows - 1:
                cur.cy += 1
                cur.cx = 0
        elif key == ARROW_UP:
            if cur.cy > 0:
                cur.cy -= 1
        elif key == ARROW_DOWN:
            if cur.cy < doc.numrows:
                cur.cy += 1

        doc.clamp_cursor()

    def process_keypress(self) -> None:
        self.handle_key(self.read_key())

    def handle_key(self, c: int) -> None:
        doc = self.doc
        if c == ENTER:
            doc.insert_newline()
        elif c == CTRL_Q:
            if doc.dirty and self.quit_times > 0:
                self.set_status_message(
                    "WARNING!!! File has unsaved changes. Press Ctrl-Q %d more times to quit.",
                    self.quit_times,
                )
                self.quit_times -= 1
                return
            raise QuitEditor
        elif c == CTRL_S:
            self.save()
        elif c == CTRL_F:
            self.find()
        elif c in (BACKSPACE, CTRL_H, DEL_KEY):
            if c == DEL_KEY:
                self.move_cursor(ARROW_RIGHT)
            doc.del_char()
        elif c == HOME_KEY:
            doc.cursor.cx = 0
        elif c == END_KEY:
            row = doc.current_row()
            doc.cursor.cx = row.size if row is not None else 0
        elif c in (PAGE_UP, PAGE_DOWN):
            if c == PAGE_UP:
                doc.cursor.cy = self.view.rowoff
            else:
                doc.cursor.cy = min(self.view.rowoff + self.view.screenrows - 1, doc.numrows)
            for _ in range(self.view.screenrows):
                self.move_cursor(ARROW_UP if c == PAGE_UP else ARROW_DOWN)
        elif c in (ARROW_UP, ARROW_DOWN, ARROW_LEFT, ARROW_RIGHT):
            self.move_cursor(c)
        elif c in (CTRL_C, CTRL_L, ESC):
            pass
        elif c == TAB or 32 <= c < 127:
            doc.insert_char(chr(c))

        self.quit_times = self.settings.quit_times


def run(filename: str, settings: EditorSettings | None = None) -> int:
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd) or not os.isatty(stdout_fd):
        print("bolt: stdin/stdout must be a tty", file=sys.stderr)
        return 1

    editor = Editor(settings, stdin_fd, stdout_fd)
    editor.open_file(filename)

    signal.signal(signal.SIGWINCH, editor.handle_sigwinch)
    try:
        with RawMode(stdin_fd):
            editor.set_status_message("HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find")
            while True:
                editor.refresh_screen()
                editor.process_keypress()
    except QuitEditor:
        os.write(stdout_fd, b"\x1b[2J\x1b[H")
        return 0
    except OSError as exc:
        if exc.errno == errno.ENOTTY:
            print("bolt: stdin is not a tty", file=sys.stderr)
            return 1
        raise
