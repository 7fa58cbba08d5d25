"""Heads-up display: the compass and the rotating minimap."""

from __future__ import annotations

import math

from .canvas import Image
from .colors import BLACK, CLEAR, CYAN, GREEN, RED, WHITE
from .lines import draw_line
from .settings import CENTER, COMPASS_SIZE, MINIMAP_SIZE, Player
from .validation import Level, Tile

_NEEDLE_COLOR = 0xFF0000FF
_NEEDLE_LENGTH = CENTER - 5
_RING_THICKNESS = 3
_RING_STEP = 5


def _rgba(color: int) -> tuple[int, int, int, int]:
    return tuple((color & 0xFFFFFFFF).to_bytes(4, "big"))


def rotate_point(x: int, y: int, angle: float, center: int) -> tuple[int, int]:
    """Rotate (x, y) by ``angle`` around (center, center), truncating to ints."""
    s, c = math.sin(angle), math.cos(angle)
    new_x = int((x - center) * c - (y - center) * s + center)
    new_y = int((x - center) * s + (y - center) * c + center)
    return new_x, new_y


def minimap_position(cell_x: int, cell_y: int, offset_x: int, offset_y: int,
                     player: Player, wall_size: int, half_size: int) -> tuple[int, int]:
    """Minimap pixel for a point inside a map cell, centred on the player."""
    x = int((cell_y * wall_size + offset_y) - player.y * wall_size + half_size)
    y = int((cell_x * wall_size + offset_x) - player.x * wall_size + half_size)
    return x, MINIMAP_SIZE - y - 1


def _clear_compass(image: Image, color: int) -> None:
    rgba = _rgba(color)
    for y in range(1, COMPASS_SIZE):
        for x in range(1, COMPASS_SIZE):
            dx, dy = x - CENTER, y - CENTER
            if dx * dx + dy * dy <= CENTER * CENTER:
                image.pixels[y, x] = rgba


def _draw_ring(image: Image, color: int) -> None:
    for thickness in range(_RING_THICKNESS):
        radius = CENTER - 1 - thickness
        for degrees in range(0, 360, _RING_STEP):
            rad = degrees * math.pi / 180
            x = int(CENTER + radius * math.cos(rad))
            y = int(CENTER + radius * math.sin(rad))
            if x > 0 and y > 0:
                image.put_pixel(x, y, color)


def draw_compass(image: Image, angle: float) -> tuple[int, int]:
    """Draw the compass for view ``angle``; return the needle tip."""
    if image.width < COMPASS_SIZE or image.height < COMPASS_SIZE:
        raise ValueError(f"compass needs an image of at least {COMPASS_SIZE}x{COMPASS_SIZE}")
    ring_color = (CLEAR + 0xCC) & 0xFFFFFFFF
    image.pixels[0, 0, 3] = 255
    _clear_compass(image, BLACK)
    _draw_ring(image, ring_color)
    center = (CENTER, CENTER)
    for end in ((CENTER, COMPASS_SIZE), (CENTER, -COMPASS_SIZE),
                (CENTER + COMPASS_SIZE, CENTER), (CENTER - COMPASS_SIZE, CENTER)):
        draw_line(image, center, end, ring_color)
    tip = (int(CENTER + _NEEDLE_LENGTH * math.cos(angle)),
           int(CENTER + _NEEDLE_LENGTH * math.sin(angle)))
    draw_line(image, center, tip, _NEEDLE_COLOR)
    return tip


def _draw_tile(image: Image, cell_x: int, cell_y: int, player: Player,
               wall_size: int, half_size: int, color: int) -> None:
    for offset_y in range(1, wall_size):
        for offset_x in range(1, wall_size):
            x, y = minimap_position(cell_x, cell_y, offset_x, offset_y, player,
                                    wall_size, half_size)
            x, y = rotate_point(x, y, -player.angle, half_size)
            if 0 < x < MINIMAP_SIZE and 0 < y < MINIMAP_SIZE:
                image.put_pixel(x, y, color)


def _tile_color(level: Level, x: int, y: int) -> int | None:
    row = level.grid[y] if y < len(level.grid) else ""
    cell = row[x] if x < len(row) else ""
    if cell == "1":
        return WHITE
    if cell == "D":
        state = level.walk_map[y][x]
        if state == Tile.DOOR:
            return CYAN
        if state == Tile.OPEN_DOOR:
            return GREEN
    return None


def draw_minimap(image: Image, level: Level, player: Player) -> None:
    """Draw walls and doors around the player, rotated with the view."""
    image.pixels[1:MINIMAP_SIZE, 1:MINIMAP_SIZE] = _rgba(BLACK)
    if level.rows == 0 or level.cols == 0:
        return
    wall_size = MINIMAP_SIZE // level.rows
    half_size = MINIMAP_SIZE // 2
    for y in range(level.rows):
        for x in range(level.cols):
            color = _tile_color(level, x, y)
            if color is not None:
                _draw_tile(image, x, y, player, wall_size, half_size, color)
    for py in range(-2, 3):
        for px in range(-2, 3):
            image.put_pixel(half_size + px, half_size + py, RED)