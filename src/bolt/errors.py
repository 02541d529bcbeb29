"""Exceptions raised by the text engine.

A search that finds nothing is not an error; it is reported by returning
``None`` and leaving the search state unset.
"""

from __future__ import annotations


class BoltError(Exception):
    """Base class for every error raised by bolt."""


class InvalidIndex(BoltError, IndexError):
    """A row or column lies outside the document's valid range."""


class EmptyDocument(BoltError):
    """The operation needs a current row but the document has none."""
