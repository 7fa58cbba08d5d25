"""Game-wide constants, tile/hit enumerations and the player state."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum

COMPASS_SIZE = 81
CENTER = 40
MINIMAP_SIZE = 100
MINIMAP_PLAYER = 5
MAX_LINE_LENGTH = 1024

WINDOW_WIDTH = 960
WINDOW_HEIGHT = 960

PLAYER_SIZE = 0.2
PLAYER_MOVE_SPEED = 0.06
PLAYER_ROTATE_SPEED = 0.06

DEFAULT_FOV = math.pi / 3


class Hit(IntEnum):
    """How a ray struck its target."""

    VERTICAL = 0
    NONVERTICAL = 1
    DOOR_VERTICAL = 2
    DOOR_HORIZONTAL = 3


class Side(IntEnum):
    """Which face of a tile a ray sees."""

    NORTH = 1
    EAST = 2
    SOUTH = 3
    WEST = 4
    DOOR = 5


class WeaponState(IntEnum):
    """State of the player's weapon."""

    HOLSTERED = 0
    ACTIVE = 1
    ANIMATE = 2


@dataclass
class Player:
    """Player position and view angle, with the spawn values kept for resets.

    Positions left unset are derived from the start tile: the player stands
    ``PLAYER_SIZE`` into the tile, and the spawn values copy the current ones.
    """

    start_x: int = 0
    start_y: int = 0
    angle: float = 0.0
    x: float | None = None
    y: float | None = None
    std_x: float | None = None
    std_y: float | None = None
    std_angle: float | None = None

    def __post_init__(self) -> None:
        if self.x is None:
            self.x = float(self.start_x) + PLAYER_SIZE
        if self.y is None:
            self.y = float(self.start_y) + PLAYER_SIZE
        if self.std_x is None:
            self.std_x = self.x
        if self.std_y is None:
            self.std_y = self.y
        if self.std_angle is None:
            self.std_angle = self.angle

    def reset(self) -> None:
        """Move the player back to the spawn position and angle."""
        self.x = self.std_x
        self.y = self.std_y
        self.angle = self.std_angle