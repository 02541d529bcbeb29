from __future__ import annotations

from dataclasses import dataclass, field

from .constants import Highlight


@dataclass(frozen=True, slots=True)
class Keyword:
    text: str
    secondary: bool = False


@dataclass(frozen=True, slots=True)
class Grammar:
    filetype: str
    filematch: tuple[str, ...]
    keywords: tuple[Keyword, ...]
    comment_start: str
    numbers: bool = True
    strings: bool = True


@dataclass(slots=True)
class Row:
    chars: str
    render: str = ""
    hl: list[Highlight] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)


@dataclass(slots=True)
class Cursor:
    cx: int = 0
    cy: int = 0


@dataclass(slots=True)
class Viewport:
    rowoff: int = 0
    coloff: int = 0
    screenrows: int = 0
    screencols: int = 0
