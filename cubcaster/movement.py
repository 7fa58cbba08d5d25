"""Player movement with wall collision, and the door open/close logic."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum

from .settings import PLAYER_SIZE, Player
from .validation import Tile

DOOR_CLOSE_DELAY = 100

_QUARTER = math.pi / 4


class Collision(IntEnum):
    """What the player's bounding box touches at a position."""

    NONE = 0
    WALL = 1
    DOOR = 2


def wall_collision(walk_map: Sequence[Sequence[int]], rows: int, cols: int,
                   x: float, y: float) -> Collision:
    """Check the player's box at (x, y) against walls, closed doors and the map edge."""
    min_x = int(x - PLAYER_SIZE)
    max_x = int(x + PLAYER_SIZE)
    min_y = int(y - PLAYER_SIZE)
    max_y = int(y + PLAYER_SIZE)
    if min_x < 0 or max_x >= cols or min_y < 0 or max_y >= rows:
        return Collision.WALL
    corners = [walk_map[cy][cx] for cy in (min_y, max_y) for cx in (min_x, max_x)]
    if Tile.WALL in corners:
        return Collision.WALL
    if Tile.DOOR in corners:
        return Collision.DOOR
    return Collision.NONE


def try_move(player: Player, walk_map: Sequence[Sequence[int]], rows: int, cols: int,
             new_x: float, new_y: float) -> tuple[bool, bool]:
    """Move along x, then along y, each only if free; return which axes moved."""
    moved_x = wall_collision(walk_map, rows, cols, new_x, player.y) == Collision.NONE
    if moved_x:
        player.x = new_x
    moved_y = wall_collision(walk_map, rows, cols, player.x, new_y) == Collision.NONE
    if moved_y:
        player.y = new_y
    return moved_x, moved_y


def walk(player: Player, walk_map: Sequence[Sequence[int]], rows: int, cols: int,
         speed: float, forward: bool) -> tuple[bool, bool]:
    """Step forwards or backwards along the view direction."""
    sign = 1.0 if forward else -1.0
    new_x = player.x + sign * speed * math.cos(player.angle)
    new_y = player.y + sign * speed * math.sin(player.angle)
    return try_move(player, walk_map, rows, cols, new_x, new_y)


def strafe(player: Player, walk_map: Sequence[Sequence[int]], rows: int, cols: int,
           speed: float, right: bool) -> tuple[bool, bool]:
    """Step sideways, to the right or to the left of the view direction."""
    sign = 1.0 if right else -1.0
    new_x = player.x - sign * speed * math.sin(player.angle)
    new_y = player.y + sign * speed * math.cos(player.angle)
    return try_move(player, walk_map, rows, cols, new_x, new_y)


def facing_cell(player: Player) -> tuple[float, float]:
    """Return the position one tile ahead in the cardinal direction faced.

    Angles exactly on a diagonal or on zero leave the position unchanged.
    """
    x, y, angle = player.x, player.y, player.angle
    if (2 * math.pi - _QUARTER < angle < 2 * math.pi) or (0 < angle < _QUARTER):
        x += 1.0
    elif math.pi / 2 - _QUARTER < angle < math.pi / 2 + _QUARTER:
        y += 1.0
    elif math.pi - _QUARTER < angle < math.pi + _QUARTER:
        x -= 1.0
    elif 3 * math.pi / 2 - _QUARTER < angle < 3 * math.pi / 2 + _QUARTER:
        y -= 1.0
    return x, y


@dataclass
class DoorState:
    """The most recently opened door and the countdown until it closes."""

    last_x: int = -1
    last_y: int = -1
    counter: int = 0

    def _has_open_door(self) -> bool:
        return self.last_x != -1 and self.last_y != -1

    def open_ahead(self, player: Player, walk_map: list[list[int]]) -> bool:
        """Open a closed door in front of the player; return whether one opened."""
        fx, fy = facing_cell(player)
        cx, cy = int(fx), int(fy)
        if not (0 <= cy < len(walk_map) and 0 <= cx < len(walk_map[cy])):
            return False
        if walk_map[cy][cx] != Tile.DOOR:
            return False
        if self._has_open_door() and walk_map[self.last_y][self.last_x] == Tile.OPEN_DOOR:
            walk_map[self.last_y][self.last_x] = int(Tile.DOOR)
        walk_map[cy][cx] = int(Tile.OPEN_DOOR)
        self.counter = DOOR_CLOSE_DELAY
        self.last_x, self.last_y = cx, cy
        return True

    def tick(self, player: Player, walk_map: list[list[int]]) -> None:
        """Count down while the player is away and close the door at zero."""
        away = int(player.x) != self.last_x and int(player.y) != self.last_y
        if self.counter > 0 and away:
            self.counter -= 1
        if self._has_open_door() and self.counter == 0 and away:
            walk_map[self.last_y][self.last_x] = int(Tile.DOOR)
            self.last_x = -1
            self.last_y = -1