"""Defaults and numeric limits - no internal imports."""

from __future__ import annotations

import os

DEFAULT_PATH_WIDTH = 60
DEFAULT_TRUNCATOR = "…"
DEFAULT_HOME_MARKER = "~"
DEFAULT_TIME_FORMAT = "epoch"

FIRST_LINE_GLYPH = "┌╼ "
SECOND_LINE_GLYPH = "└╼ "

# Lightness range for hashed user@host colors, readable on a dark background.
MIN_LIGHTNESS = 0.3
MAX_LIGHTNESS = 0.85


GIT_DIR_NAME = ".git"
GIT_TIMEOUT = 2.0
SHORT_HASH_LENGTH = 7
FULL_HASH_LENGTH = 40


MAX_LOG_LINES = 500
MAX_LOG_MESSAGE_LENGTH = 4096


def _is_debug_enabled() -> bool:
    """Check the PROMPTLINE_DEBUG environment variable ("1" or "true")."""
    return os.environ.get("PROMPTLINE_DEBUG", "").lower() in ("1", "true")


DEBUG_ENABLED: bool = _is_debug_enabled()
