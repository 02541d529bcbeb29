"""Persistent JSON preferences.

Missing or malformed config falls back to built-in defaults; the editor never
refuses to start because of its config file.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from .constants import BOLT_QUIT_TIMES, BOLT_STATUS_TIMEOUT

log = logging.getLogger(__name__)

CONFIG_PATH = Path.home() / ".config" / "bolt.json"


@dataclass(frozen=True, slots=True)
class EditorSettings:
    quit_times: int = BOLT_QUIT_TIMES
    status_timeout: float = BOLT_STATUS_TIMEOUT


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        log.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _load_quit_times(data: dict[str, object]) -> int:
    value = data.get("quit_times", BOLT_QUIT_TIMES)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        log.warning("invalid quit_times %r, using %d", value, BOLT_QUIT_TIMES)
        return BOLT_QUIT_TIMES
    return value


def _load_status_timeout(data: dict[str, object]) -> float:
    value = data.get("status_timeout", BOLT_STATUS_TIMEOUT)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        log.warning("invalid status_timeout %r, using %s", value, BOLT_STATUS_TIMEOUT)
        return BOLT_STATUS_TIMEOUT
    return float(value)


def load_settings() -> EditorSettings:
    data = load_config()
    return EditorSettings(
        quit_times=_load_quit_times(data),
        status_timeout=_load_status_timeout(data),
    )
