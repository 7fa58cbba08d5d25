"""Packed RGBA colour constants and helpers."""

from __future__ import annotations

from .canvas import Image

BLACK = 0x000000FF
WHITE = 0xFFFFFFFF
RED = 0xFF000088
LIME = 0x00FF0088
BLUE = 0x0000FF88
YELLOW = 0xFFFF0088
CYAN = 0x00FFFF88
MAGENTA = 0xFF00FF88
SILVER = 0xC0C0C0FF
GRAY = 0x808080FF
MAROON = 0x800000FF
OLIVE = 0x808000FF
GREEN = 0x008000FF
PURPLE = 0x800080FF
TEAL = 0x008080FF
NAVY = 0x000080FF
CLEAR = 0xFFFFFFCC
BRIGHTRED = 0xFF0000CC


def pack_rgba(r: int, g: int, b: int, a: int) -> int:
    """Combine channels into a 32-bit 0xRRGGBBAA value."""
    return (int(r) << 24 | int(g) << 16 | int(b) << 8 | int(a)) & 0xFFFFFFFF


def unpack_rgba(color: int) -> tuple[int, int, int, int]:
    """Split a packed colour into (r, g, b, a)."""
    color &= 0xFFFFFFFF
    return (color >> 24) & 0xFF, (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def texture_pixel(texture: Image, x: int, y: int, shade: int) -> int:
    """Read a texel with its alpha cleared and ``shade`` added.

    ``x == -1`` gives a near-black marker colour; other out-of-range
    coordinates give 0.
    """
    if x == -1:
        return pack_rgba(5, 5, 5, 5)
    if not (0 <= x < texture.width and 0 <= y < texture.height):
        return 0
    r, g, b, _ = (int(v) for v in texture.pixels[y, x])
    return (pack_rgba(r, g, b, 0) + shade) & 0xFFFFFFFF