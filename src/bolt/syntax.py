from __future__ import annotations

import logging
from collections.abc import Iterable

from .constants import (
    C_HL_EXTENSIONS,
    C_HL_KEYWORDS,
    PY_HL_EXTENSIONS,
    PY_HL_KEYWORDS,
    DIGITS,
    SEPARATORS,
    WHITESPACE,
    Highlight,
)
from .models import Grammar, Keyword, Row

log = logging.getLogger(__name__)


def parse_keywords(words: Iterable[str]) -> tuple[Keyword, ...]:
    """Build keywords from ``"word"`` / ``"word|"`` notation, ``|`` marking secondary."""
    out: list[Keyword] = []
    for word in words:
        if word.endswith("|"):
            out.append(Keyword(word[:-1], secondary=True))
        else:
            out.append(Keyword(word))
    return tuple(out)


HLDB: tuple[Grammar, ...] = (
    Grammar(
        filetype="c",
        filematch=C_HL_EXTENSIONS,
        keywords=parse_keywords(C_HL_KEYWORDS),
        comment_start="//",
    ),
    Grammar(
        filetype="python",
        filematch=PY_HL_EXTENSIONS,
        keywords=parse_keywords(PY_HL_KEYWORDS),
        comment_start="#",
    ),
)


def is_separator(c: str) -> bool:
    return not c or c == "\0" or c in WHITESPACE or c in SEPARATORS


def syntax_to_color(hl: Highlight) -> int:
    if hl == Highlight.COMMENT:
        return 36
    if hl == Highlight.KEYWORD1:
        return 33
    if hl == Highlight.KEYWORD2:
        return 32
    if hl == Highlight.STRING:
        return 35
    if hl == Highlight.NUMBER:
        return 31
    if hl == Highlight.MATCH:
        return 34
    return 37


def select_grammar(filename: str, table: Iterable[Grammar] = HLDB) -> Grammar | None:
    for grammar in table:
        for pattern in grammar.filematch:
            if pattern.startswith("."):
                if filename.endswith(pattern):
                    log.debug("grammar %s selected for %s", grammar.filetype, filename)
                    return grammar
            elif pattern in filename:
                log.debug("grammar %s selected for %s", grammar.filetype, filename)
                return grammar
    return None


def _match_keyword(p: str, i: int, keywords: tuple[Keyword, ...]) -> Keyword | None:
    for kw in keywords:
        klen = len(kw.text)
        if not klen or p[i : i + klen] != kw.text:
            continue
        tail = p[i + klen] if i + klen < len(p) else ""
        if is_separator(tail):
            return kw
    return None


def highlight_line(render: str, grammar: Grammar | None) -> list[Highlight]:
    """Classify every rendered character of one row.

    Rows are classified independently: a comment never continues onto the
    next row.
    """
    hl = [Highlight.NORMAL] * len(render)
    if grammar is None:
        return hl

    scs = grammar.comment_start
    p = render
    i = 0
    prev_sep = True
    in_string = ""

    while i < len(p):
        if scs and not in_string and p.startswith(scs, i):
            for h in range(i, len(hl)):
                hl[h] = Highlight.COMMENT
            break

        ch = p[i]
        prev_hl = hl[i - 1] if i > 0 else Highlight.NORMAL

        if in_string:
            hl[i] = Highlight.STRING
            if ch == in_string:
                in_string = ""
            i += 1
            prev_sep = True
            continue

        if grammar.strings and ch in ("'", '"'):
            in_string = ch
            hl[i] = Highlight.STRING
            i += 1
            continue

        if grammar.numbers and (
            (ch in DIGITS and (prev_sep or prev_hl == Highlight.NUMBER))
            or (ch == "." and prev_hl == Highlight.NUMBER)
        ):
            hl[i] = Highlight.NUMBER
            i += 1
            prev_sep = False
            continue

        if prev_sep:
            kw = _match_keyword(p, i, grammar.keywords)
            if kw is not None:
                mark = Highlight.KEYWORD2 if kw.secondary else Highlight.KEYWORD1
                klen = len(kw.text)
                for h in range(i, i + klen):
                    hl[h] = mark
                i += klen
                prev_sep = False
                continue

        prev_sep = is_separator(ch)
        i += 1

    return hl


def update_syntax(row: Row, grammar: Grammar | None) -> None:
    row.hl = highlight_line(row.render, grammar)
