"""Color math for prompt segments.

Hex colors are plain ints (``0xRRGGBB``); HSL components are floats in
``[0, 1]``.
"""

from __future__ import annotations

import colorsys
import hashlib

from promptline.constants import MAX_LIGHTNESS, MIN_LIGHTNESS


def rgb_to_hex(r: int, g: int, b: int) -> int:
    return (r << 16) | (g << 8) | b


def hex_to_rgb(hex_color: int) -> tuple[int, int, int]:
    return (hex_color >> 16) & 0xFF, (hex_color >> 8) & 0xFF, hex_color & 0xFF


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[float, float, float]:
    """Convert 8-bit RGB to ``(hue, saturation, lightness)``."""
    h, l, s = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)  # noqa: E741
    return h, s, l


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[int, int, int]:  # noqa: E741
    """Convert HSL back to 8-bit RGB, truncating each channel."""
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return _channel(r), _channel(g), _channel(b)


def _channel(value: float) -> int:
    return min(255, max(0, int(value * 255)))


def color_hash(
    text: str,
    min_lightness: float = MIN_LIGHTNESS,
    max_lightness: float = MAX_LIGHTNESS,
) -> int:
    """Derive a stable hex color from ``text``.

    The first three bytes of the MD5 digest are used as an RGB color whose
    lightness is then squeezed into ``[min_lightness, max_lightness]`` so the
    result stays readable. The same text always gives the same color, which
    makes terminals on different hosts easy to tell apart.
    """
    digest = hashlib.md5(text.encode("utf-8"), usedforsecurity=False).digest()
    h, s, l = rgb_to_hsl(digest[0], digest[1], digest[2])  # noqa: E741
    l = l * (max_lightness - min_lightness) + min_lightness  # noqa: E741
    return rgb_to_hex(*hsl_to_rgb(h, s, l))
