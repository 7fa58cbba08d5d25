"""Drawing the 3D view: sky, textured walls and floor, one column per ray."""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np

from .canvas import Image
from .colors import pack_rgba, texture_pixel, unpack_rgba
from .raycast import RayHit, cast_ray, ray_angles
from .settings import DEFAULT_FOV, MINIMAP_SIZE, Player, Side
from .validation import Level

_BAND_ALPHA = 150
_INT_MAX = 2**31 - 1


def _tdiv(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def shade_for(distance: float) -> int:
    """Brightness offset for a wall at ``distance``; 1 marks far walls red."""
    shade = int(256 / (1.0 + distance * 0.03))
    if 25.0 <= distance < 50.0:
        shade = int(distance)
    if shade <= 0 or distance >= 50.0:
        shade = 1
    return shade


def shaded_color(color: int, factor: float, shade: int) -> int:
    """Dim green and blue by ``factor`` and add ``shade``; shade 1 gives red."""
    if shade == 1:
        return pack_rgba(230, 5, 5, 1)
    r, g, b, a = unpack_rgba(color)
    return (pack_rgba(r, int(g * factor), int(b * factor), a) + shade) & 0xFFFFFFFF


def sky_floor_color(color: int, percentage: float, column: int, y: int) -> int:
    """Scale the alpha of a sky/floor colour; it is cleared under the minimap."""
    if column <= MINIMAP_SIZE and y <= MINIMAP_SIZE:
        return color & 0xFFFFFF00
    alpha = color & 0xFF
    return (color & 0xFFFFFF00) | (int(alpha * percentage) & 0xFF)


def _draw_band(frame: Image, column: int, ys: np.ndarray, color: int,
               percentage: np.ndarray) -> None:
    if ys.size == 0:
        return
    r, g, b, a = unpack_rgba(color)
    alpha = (a * percentage).astype(np.int64) & 0xFF
    if column <= MINIMAP_SIZE:
        alpha[ys <= MINIMAP_SIZE] = 0
    frame.pixels[ys, column, 0] = r
    frame.pixels[ys, column, 1] = g
    frame.pixels[ys, column, 2] = b
    frame.pixels[ys, column, 3] = alpha.astype(np.uint8)


def _draw_wall(frame: Image, column: int, hit: RayHit, texture: Image,
               wall_start: int, wall_end: int) -> None:
    span = wall_end - wall_start
    if span <= 0:
        return
    ys = np.arange(max(wall_start, 1), min(wall_end, frame.height), dtype=np.int64)
    if column < MINIMAP_SIZE:
        ys = ys[ys >= MINIMAP_SIZE]
    if ys.size == 0:
        return
    shade = shade_for(hit.distance)
    factor = 1.0 - hit.distance * 0.02
    tex_x = int(texture.width * hit.tile_offset)
    tex_ys = np.floor(texture.height * ((ys - wall_start) / span) + 0.5).astype(np.int64)
    unique, inverse = np.unique(tex_ys, return_inverse=True)
    palette = np.array(
        [unpack_rgba(shaded_color(texture_pixel(texture, tex_x, int(t), shade), factor, shade))
         for t in unique],
        dtype=np.uint8,
    )
    frame.pixels[ys, column] = palette[np.asarray(inverse).reshape(-1)]


def draw_column(frame: Image, column: int, hit: RayHit, textures: Mapping[Side, Image],
                sky_rgb: tuple[int, int, int], floor_rgb: tuple[int, int, int]) -> None:
    """Draw one screen column: sky above the wall, the wall, floor below."""
    if not 0 < column < frame.width:
        return
    height = frame.height
    wall_height = int(height / hit.distance) if hit.distance != 0 else _INT_MAX
    wall_start = _tdiv(height - wall_height, 2)
    wall_end = _tdiv(height + wall_height, 2)

    sky_ys = np.arange(1, min(wall_start - 1, height), dtype=np.int64)
    _draw_band(frame, column, sky_ys, pack_rgba(*sky_rgb, _BAND_ALPHA),
               1.0 - sky_ys / height)

    _draw_wall(frame, column, hit, textures[hit.side], wall_start, wall_end)

    floor_ys = np.arange(max(wall_end, 1), height, dtype=np.int64)
    _draw_band(frame, column, floor_ys, pack_rgba(*floor_rgb, _BAND_ALPHA),
               (floor_ys - height) / floor_ys * 0.9)


def draw_scene(frame: Image, level: Level, player: Player, textures: Mapping[Side, Image],
               fov: float = DEFAULT_FOV) -> None:
    """Cast one ray per column of ``frame`` and draw the whole view."""
    sky = level.textures.ceiling or (0, 0, 0)
    floor = level.textures.floor or (0, 0, 0)
    for column, angle in enumerate(ray_angles(player.angle, fov, frame.width)):
        hit = cast_ray(level.walk_map, level.rows, level.cols, player.x, player.y,
                       player.angle, angle)
        draw_column(frame, column, hit, textures, sky, floor)