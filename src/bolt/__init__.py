"""Terminal text editor built around a small in-memory row engine."""

from __future__ import annotations

import logging

from .constants import BOLT_VERSION as __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())
