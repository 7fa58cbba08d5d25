"""Four-connected line rasterisation."""

from __future__ import annotations

from .canvas import Image


def line_points(start: tuple[int, int], end: tuple[int, int]) -> list[tuple[int, int]]:
    """Return the pixels from ``start`` to ``end``, stepping one axis at a time."""
    x, y = int(start[0]), int(start[1])
    x1, y1 = int(end[0]), int(end[1])
    adx, ady = abs(x1 - x), abs(y1 - y)
    step_x = 1 if x < x1 else -1
    step_y = 1 if y < y1 else -1
    err = adx - ady
    points = [(x, y)]
    while (x, y) != (x1, y1):
        if 2 * err > -ady:
            err -= ady
            x += step_x
        elif 2 * err < adx:
            err += adx
            y += step_y
        points.append((x, y))
    return points


def draw_line(image: Image, start: tuple[int, int], end: tuple[int, int],
              color: int) -> None:
    """Draw a line, skipping pixels on or outside the image's edges."""
    for x, y in line_points(start, end):
        if 0 < x < image.width and 0 < y < image.height:
            image.put_pixel(x, y, color)