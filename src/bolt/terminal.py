from __future__ import annotations

import errno
import fcntl
import os
import re
import struct
import termios
from contextlib import AbstractContextManager
from enum import Enum, auto

from .constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    DEL_KEY,
    END_KEY,
    ESC,
    HOME_KEY,
    PAGE_DOWN,
    PAGE_UP,
)

CSI_SIMPLE_MAP = {
    ord("A"): ARROW_UP,
    ord("B"): ARROW_DOWN,
    ord("C"): ARROW_RIGHT,
    ord("D"): ARROW_LEFT,
    ord("H"): HOME_KEY,
    ord("F"): END_KEY,
}
CSI_TILDE_MAP = {
    ord("1"): HOME_KEY,
    ord("3"): DEL_KEY,
    ord("4"): END_KEY,
    ord("5"): PAGE_UP,
    ord("6"): PAGE_DOWN,
    ord("7"): HOME_KEY,
    ord("8"): END_KEY,
}
SS3_SIMPLE_MAP = {
    ord("H"): HOME_KEY,
    ord("F"): END_KEY,
}


class DecodeState(Enum):
    NONE = auto()
    ESC = auto()
    BRACKET = auto()
    SS3 = auto()
    DIGIT = auto()


class KeyDecoder:
    """Turn a byte stream into logical key codes.

    ``feed`` returns a key code once a sequence is complete, or ``None``
    while it still needs bytes. Unknown sequences decode to ``ESC``.
    """

    def __init__(self) -> None:
        self.state = DecodeState.NONE
        self.digit = 0

    def reset(self) -> None:
        self.state = DecodeState.NONE
        self.digit = 0

    @property
    def pending(self) -> bool:
        return self.state != DecodeState.NONE

    def timeout(self) -> int | None:
        if self.state == DecodeState.NONE:
            return None
        self.reset()
        return ESC

    def feed(self, c: int) -> int | None:
        state = self.state
        if state == DecodeState.NONE:
            if c == ESC:
                self.state = DecodeState.ESC
                return None
            return c

        if state == DecodeState.ESC:
            if c == ord("["):
                self.state = DecodeState.BRACKET
                return None
            if c == ord("O"):
                self.state = DecodeState.SS3
                return None
        elif state == DecodeState.BRACKET:
            if ord("0") <= c <= ord("9"):
                self.state = DecodeState.DIGIT
                self.digit = c
                return None
            self.reset()
            return CSI_SIMPLE_MAP.get(c, ESC)
        elif state == DecodeState.SS3:
            self.reset()
            return SS3_SIMPLE_MAP.get(c, ESC)
        elif state == DecodeState.DIGIT:
            digit = self.digit
            self.reset()
            if c == ord("~"):
                return CSI_TILDE_MAP.get(digit, ESC)

        self.reset()
        return ESC


def _read_byte_once(fd: int) -> int | None:
    try:
        data = os.read(fd, 1)
    except InterruptedError:
        return None
    if not data:
        return None
    return data[0]


def read_key(fd: int, decoder: KeyDecoder | None = None) -> int:
    decoder = decoder or KeyDecoder()
    while True:
        c = _read_byte_once(fd)
        if c is None:
            # VTIME expired: a lone ESC, or a truncated sequence.
            key = decoder.timeout()
        else:
            key = decoder.feed(c)
        if key is not None:
            return key


def get_cursor_position(ifd: int, ofd: int) -> tuple[int, int]:
    if os.write(ofd, b"\x1b[6n") != 4:
        raise OSError(errno.EIO, "cursor query write failed")

    buf = bytearray()
    while len(buf) < 31:
        c = _read_byte_once(ifd)
        if c is None:
            break
        buf.append(c)
        if c == ord("R"):
            break

    match = re.match(rb"\x1b\[(\d+);(\d+)R", bytes(buf))
    if not match:
        raise OSError(errno.EIO, "invalid cursor position response")
    return int(match.group(1)), int(match.group(2))


def get_window_size(ifd: int, ofd: int) -> tuple[int, int]:
    try:
        packed = fcntl.ioctl(ofd, termios.TIOCGWINSZ, struct.pack("HHHH", 0, 0, 0, 0))
        rows, cols, _, _ = struct.unpack("HHHH", packed)
        if cols:
            return rows, cols
    except OSError:
        pass

    orig_row, orig_col = get_cursor_position(ifd, ofd)
    if os.write(ofd, b"\x1b[999C\x1b[999B") != 12:
        raise OSError(errno.EIO, "window query write failed")
    rows, cols = get_cursor_position(ifd, ofd)
    restore = f"\x1b[{orig_row};{orig_col}H".encode()
    os.write(ofd, restore)
    return rows, cols


class RawMode(AbstractContextManager["RawMode"]):
    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._orig: list | None = None

    def __enter__(self) -> "RawMode":
        if not os.isatty(self.fd):
            raise OSError(errno.ENOTTY, "stdin is not a tty")

        self._orig = termios.tcgetattr(self.fd)
        raw = termios.tcgetattr(self.fd)
        raw[0] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
        raw[1] &= ~termios.OPOST
        raw[2] |= termios.CS8
        raw[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        raw[6][termios.VMIN] = 0
        raw[6][termios.VTIME] = 1
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, raw)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._orig is not None:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._orig)
