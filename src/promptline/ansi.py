"""ANSI escape sequence formatting and stripping."""

from __future__ import annotations

import re
from enum import IntEnum

from promptline.colors import hex_to_rgb

ESC = "\x1b"
RESET = f"{ESC}[0m"

FOREGROUND = 38
BACKGROUND = 48

ANSI_ESCAPE = re.compile(r"\x1B(?:\[[0-?]*[ -/]*[@-~]|\][^\x07]*\x07|[@-Z\\^_-])")

# Channel levels of the xterm-256 6x6x6 color cube.
_CUBE_LEVELS = (0, 95, 135, 175, 215, 255)


class Color(IntEnum):
    """The eight standard terminal colors."""

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


def color(code: Color | int) -> str:
    """Foreground escape for a standard color."""
    return f"{ESC}[3{int(code)}m"


def colored(text: str, code: Color | int) -> str:
    return color(code) + text + RESET


def true_color(hex_color: int, layer: int = FOREGROUND) -> str:
    """24-bit escape for ``hex_color`` on the given layer (38 or 48)."""
    r, g, b = hex_to_rgb(hex_color)
    return f"{ESC}[{layer};2;{r};{g};{b}m"


def true_colored(text: str, hex_color: int) -> str:
    return true_color(hex_color) + text + RESET


def _nearest_level(value: int) -> int:
    return min(range(len(_CUBE_LEVELS)), key=lambda i: abs(_CUBE_LEVELS[i] - value))


def color_256(hex_color: int) -> int:
    """Return the xterm-256 palette index closest to ``hex_color``.

    Picks between the 6x6x6 color cube (16-231) and the grayscale ramp
    (232-255), whichever is nearer in RGB space.
    """
    r, g, b = hex_to_rgb(hex_color)
    ri, gi, bi = _nearest_level(r), _nearest_level(g), _nearest_level(b)
    cube = (_CUBE_LEVELS[ri], _CUBE_LEVELS[gi], _CUBE_LEVELS[bi])
    cube_index = 16 + 36 * ri + 6 * gi + bi

    gray_step = min(23, max(0, round(((r + g + b) / 3 - 8) / 10)))
    gray_value = 8 + 10 * gray_step
    gray = (gray_value, gray_value, gray_value)

    def distance(candidate: tuple[int, int, int]) -> int:
        return sum((a - c) ** 2 for a, c in zip((r, g, b), candidate, strict=True))

    if distance(gray) < distance(cube):
        return 232 + gray_step
    return cube_index


def colored_256(text: str, hex_color: int) -> str:
    """Color ``text`` with the xterm-256 approximation of ``hex_color``."""
    return f"{ESC}[{FOREGROUND};5;{color_256(hex_color)}m" + text + RESET


def strip_ansi(text: str) -> str:
    """Remove all ANSI escape sequences from text.

    Args:
        text: Input text potentially containing ANSI codes.

    Returns:
        Clean text with all escape sequences removed.
    """
    if not text:
        return ""
    return ANSI_ESCAPE.sub("", text)


def visible_length(text: str) -> int:
    """Length of ``text`` as shown on the terminal, ignoring escapes."""
    return len(strip_ansi(text))
