from __future__ import annotations

from enum import IntEnum

BOLT_VERSION = "0.1.0"
BOLT_TAB_STOP = 8
BOLT_QUERY_LEN = 256
BOLT_QUIT_TIMES = 3
BOLT_STATUS_TIMEOUT = 5.0


class Highlight(IntEnum):
    NORMAL = 0
    COMMENT = 1
    KEYWORD1 = 2
    KEYWORD2 = 3
    STRING = 4
    NUMBER = 5
    MATCH = 6


# Byte classes follow the C locale, so latin-1 letters never count.
SEPARATORS = ",.()+-/*=~%<>[];"
WHITESPACE = " \t\n\v\f\r"
DIGITS = "0123456789"

# Key actions.
CTRL_C = 3
CTRL_F = 6
CTRL_H = 8
TAB = 9
CTRL_L = 12
ENTER = 13
CTRL_Q = 17
CTRL_S = 19
ESC = 27
BACKSPACE = 127

ARROW_LEFT = 1000
ARROW_RIGHT = 1001
ARROW_UP = 1002
ARROW_DOWN = 1003
DEL_KEY = 1004
HOME_KEY = 1005
END_KEY = 1006
PAGE_UP = 1007
PAGE_DOWN = 1008

C_HL_EXTENSIONS = (".c", ".h", ".cpp", ".hpp", ".cc")
C_HL_KEYWORDS = (
    "switch",
    "if",
    "while",
    "for",
    "break",
    "continue",
    "return",
    "else",
    "struct",
    "union",
    "typedef",
    "static",
    "enum",
    "class",
    "case",
    "default",
    "do",
    "goto",
    "sizeof",
    "extern",
    "volatile",
    "NULL",
    "namespace",
    "new",
    "delete",
    "template",
    "typename",
    "this",
    "true",
    "false",
    "nullptr",
    "public",
    "private",
    "protected",
    "virtual",
    "try",
    "throw",
    # Types (secondary class).
    "int|",
    "long|",
    "double|",
    "float|",
    "char|",
    "unsigned|",
    "signed|",
    "void|",
    "short|",
    "const|",
    "bool|",
    "auto|",
)

PY_HL_EXTENSIONS = (".py",)
PY_HL_KEYWORDS = (
    "and",
    "as",
    "assert",
    "break",
    "class",
    "continue",
    "def",
    "del",
    "elif",
    "else",
    "except",
    "finally",
    "for",
    "from",
    "global",
    "if",
    "import",
    "in",
    "is",
    "lambda",
    "nonlocal",
    "not",
    "or",
    "pass",
    "raise",
    "return",
    "try",
    "while",
    "with",
    "yield",
    # Builtin constants and types (secondary class).
    "None|",
    "True|",
    "False|",
    "int|",
    "str|",
    "bytes|",
    "float|",
    "bool|",
    "list|",
    "dict|",
    "tuple|",
    "set|",
    "self|",
)
