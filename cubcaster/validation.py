"""Map validation: characters, flood fill, border and door checks."""

from __future__ import annotations

import os
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum

from .mapfile import MapError, Scene, TextureSpec, read_scene
from .player import find_player_start
from .settings import Player

_WHITESPACE = " \t\n\v\f\r"
_SPAWNS = frozenset("NSWE")
_VALID = frozenset("01NSWED")
_DIRECTIONS = ((0, -1), (0, 1), (-1, 0), (1, 0))
_MINIMAP_CODES = {"1": 1, "0": 0, "N": 2, "S": 2, "W": 2, "E": 2, "D": 3}


class Tile(IntEnum):
    """Values of the walk map built by the flood fill."""

    EMPTY = 0
    WALL = 1
    FLOOR = 2
    DOOR = 3
    OPEN_DOOR = 4


@dataclass
class Level:
    """A validated scene ready to be played."""

    textures: TextureSpec
    grid: list[str]
    rows: int
    cols: int
    player: Player
    walk_map: list[list[int]]
    minimap: list[list[int]]


def validate_characters(grid: Sequence[str]) -> tuple[int, int]:
    """Check the map characters and return the (x, y) of the single player."""
    spawn = None
    players = 0
    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            if cell in _WHITESPACE:
                continue
            if cell in _SPAWNS:
                players += 1
                if players > 1:
                    raise MapError("Multiple players found in map")
                spawn = (x, y)
            elif cell not in _VALID:
                raise MapError("Invalid character inside map")
    if spawn is None:
        raise MapError("No player found in map")
    return spawn


def build_minimap(grid: Sequence[str], rows: int, cols: int) -> list[list[int]]:
    """Encode the grid for the minimap: wall 1, player 2, door 3, else 0."""
    minimap = []
    for y in range(rows):
        row = grid[y] if y < len(grid) else ""
        minimap.append(
            [_MINIMAP_CODES.get(row[x], 0) if x < len(row) else 0 for x in range(cols)]
        )
    return minimap


def flood_fill(grid: Sequence[str], rows: int, cols: int,
               start: tuple[int, int]) -> list[list[int]]:
    """Walk the map from ``start`` and mark every reachable tile.

    Reaching anything other than floor, wall or door (including the end of
    a short row) means the walls leak.
    """
    walk_map = [[int(Tile.EMPTY)] * cols for _ in range(rows)]
    sx, sy = start
    walk_map[sy][sx] = int(Tile.FLOOR)
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for dx, dy in _DIRECTIONS:
            nx, ny = x + dx, y + dy
            if not (0 <= nx < cols and 0 <= ny < rows) or walk_map[ny][nx]:
                continue
            row = grid[ny] if ny < len(grid) else ""
            cell = row[nx] if nx < len(row) else ""
            if cell == "0":
                walk_map[ny][nx] = int(Tile.FLOOR)
                queue.append((nx, ny))
            elif cell == "1":
                walk_map[ny][nx] = int(Tile.WALL)
            elif cell == "D":
                walk_map[ny][nx] = int(Tile.DOOR)
                queue.append((nx, ny))
            else:
                raise MapError("Leaky walls")
    return walk_map


def check_borders(walk_map: Sequence[Sequence[int]], rows: int, cols: int) -> None:
    """Raise MapError if a reachable floor or door lies on the map border."""
    open_tiles = (Tile.FLOOR, Tile.DOOR)
    border = [walk_map[0][x] for x in range(cols)]
    border += [walk_map[rows - 1][x] for x in range(cols)]
    border += [walk_map[y][0] for y in range(rows)]
    border += [walk_map[y][cols - 1] for y in range(rows)]
    if any(value in open_tiles for value in border):
        raise MapError("Map has leaky walls")


def _cell(grid: Sequence[str], x: int, y: int) -> str:
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x]
    return ""


def _is_valid_door(grid: Sequence[str], x: int, y: int, rows: int, cols: int) -> bool:
    horizontal = (0 < x < cols - 1
                  and _cell(grid, x - 1, y) == "1" and _cell(grid, x + 1, y) == "1")
    vertical = (0 < y < rows - 1
                and _cell(grid, x, y - 1) == "1" and _cell(grid, x, y + 1) == "1")
    return horizontal or vertical


def validate_doors(grid: Sequence[str], walk_map: Sequence[Sequence[int]],
                   rows: int, cols: int, doors_enabled: bool) -> None:
    """Require every reachable door to sit between two walls."""
    if not doors_enabled:
        return
    for y in range(rows):
        for x in range(cols):
            if walk_map[y][x] == Tile.DOOR and not _is_valid_door(grid, x, y, rows, cols):
                raise MapError("Invalid door placement")


def validate_scene(scene: Scene) -> Level:
    """Validate a parsed scene and build its level."""
    grid = scene.grid
    rows, cols = scene.rows, scene.cols
    validate_characters(grid)
    start = find_player_start(grid)
    if start is None:
        raise MapError("No player found")
    x, y, angle = start
    minimap = build_minimap(grid, rows, cols)
    walk_map = flood_fill(grid, rows, cols, (x, y))
    check_borders(walk_map, rows, cols)
    validate_doors(grid, walk_map, rows, cols, scene.textures.door is not None)
    return Level(
        textures=scene.textures,
        grid=list(grid),
        rows=rows,
        cols=cols,
        player=Player(start_x=x, start_y=y, angle=angle),
        walk_map=walk_map,
        minimap=minimap,
    )


def load_level(path: str | os.PathLike) -> Level:
    """Read a scene file and validate it."""
    return validate_scene(read_scene(path))