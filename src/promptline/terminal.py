"""Pick the color system used for the hashed ``[user@host]`` color."""

from __future__ import annotations

import os
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

# TERM_PROGRAM values, lowercased. Terminal.app advertises COLORTERM in some
# setups but renders 24-bit escapes wrongly.
_PALETTE_ONLY = frozenset({"apple_terminal"})
_TRUECOLOR = frozenset(
    {
        "iterm.app",
        "vscode",
        "hyper",
        "alacritty",
        "kitty",
        "wezterm",
        "ghostty",
        "warp",
        "tabby",
        "rio",
        "contour",
    }
)

_FRIENDLY_NAMES = {
    "Apple_Terminal": "macOS Terminal.app",
    "iTerm.app": "iTerm2",
    "vscode": "VS Code Terminal",
}


class ColorSystem(Enum):
    """How colors that are not one of the 16 basics get rendered."""

    TRUECOLOR = "truecolor"
    PALETTE_256 = "256"


_OVERRIDES = {system.value: system for system in ColorSystem}


def detect_color_system(env: Mapping[str, str] | None = None) -> ColorSystem:
    """Guess the color system of the terminal described by ``env``.

    ``PROMPTLINE_COLOR_SYSTEM`` (``truecolor`` or ``256``) wins outright. After
    that ``TERM_PROGRAM`` is trusted over ``COLORTERM``, then Windows Terminal
    is recognized by ``WT_SESSION``. Anything else gets the 256 color palette.
    """
    if env is None:
        env = os.environ

    override = env.get("PROMPTLINE_COLOR_SYSTEM", "").lower()
    if override in _OVERRIDES:
        return _OVERRIDES[override]

    term_program = env.get("TERM_PROGRAM", "").lower()
    if term_program in _PALETTE_ONLY:
        return ColorSystem.PALETTE_256
    if term_program in _TRUECOLOR:
        return ColorSystem.TRUECOLOR

    if env.get("COLORTERM", "").lower() in ("truecolor", "24bit"):
        return ColorSystem.TRUECOLOR
    if env.get("WT_SESSION"):
        return ColorSystem.TRUECOLOR
    return ColorSystem.PALETTE_256


def supports_truecolor(env: Mapping[str, str] | None = None) -> bool:
    return detect_color_system(env) is ColorSystem.TRUECOLOR


def get_terminal_name(env: Mapping[str, str] | None = None) -> str:
    """Human-readable terminal name, for ``promptline config show``."""
    if env is None:
        env = os.environ

    term_program = env.get("TERM_PROGRAM", "")
    if term_program:
        return _FRIENDLY_NAMES.get(term_program, term_program)
    if env.get("WT_SESSION"):
        return "Windows Terminal"
    return env.get("TERM") or "Unknown terminal"
