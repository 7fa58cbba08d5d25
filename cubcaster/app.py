"""The game itself: level, input handling, per-frame update and the window loop."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field

from .canvas import Image
from .hud import draw_compass, draw_minimap
from .mapfile import MapError, TextureSpec
from .mathutil import normalize_angle
from .manual import Manual
from .movement import DoorState, strafe, walk
from .render import draw_scene
from .settings import (
    COMPASS_SIZE,
    DEFAULT_FOV,
    MINIMAP_SIZE,
    PLAYER_MOVE_SPEED,
    PLAYER_ROTATE_SPEED,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    Player,
    Side,
    WeaponState,
)
from .validation import Level, load_level
from .weapon import Weapon

MOUSE_SENSITIVITY = 0.005
SPEED_STEP_UP = 0.01
SPEED_STEP_DOWN = 0.05
SPEED_MAX = 0.99
SPEED_MIN = 0.05
FRAME_RATE = 60


def is_cub_file(name: str) -> bool:
    """Tell whether a file name ends in ``.cub``."""
    return name.endswith(".cub")


def load_wall_textures(spec: TextureSpec) -> dict[Side, Image]:
    """Load the wall textures of a scene, keyed by the side they cover.

    Without a door texture, doors are drawn with the north texture.
    """
    paths = {
        Side.NORTH: spec.north,
        Side.SOUTH: spec.south,
        Side.EAST: spec.east,
        Side.WEST: spec.west,
    }
    missing = [side.name for side, path in paths.items() if path is None]
    if missing:
        raise MapError(f"Missing wall textures: {', '.join(missing)}")
    textures = {side: Image.from_file(path) for side, path in paths.items()}
    if spec.door is not None:
        textures[Side.DOOR] = Image.from_file(spec.door)
    else:
        textures[Side.DOOR] = textures[Side.NORTH]
    return textures


@dataclass(frozen=True)
class Controls:
    """The keys and mouse buttons held during one frame, and the mouse position."""

    forward: bool = False
    backward: bool = False
    strafe_left: bool = False
    strafe_right: bool = False
    turn_left: bool = False
    turn_right: bool = False
    faster: bool = False
    slower: bool = False
    manual: bool = False
    mouse_x: int = 0
    mouse_y: int = 0
    mouse_left: bool = False
    mouse_right: bool = False


@dataclass
class Game:
    """A running game: the level, its images and all input state."""

    level: Level
    textures: Mapping[Side, Image]
    weapon: Weapon | None = None
    manual: Manual = field(default_factory=Manual)
    fov: float = DEFAULT_FOV
    window_width: int = WINDOW_WIDTH
    window_height: int = WINDOW_HEIGHT
    speed: float = PLAYER_MOVE_SPEED
    running: bool = True
    doors: DoorState = field(default_factory=DoorState)
    needle: tuple[int, int] = (0, 0)
    _previous_x: int = field(default=-1, init=False, repr=False)
    _mouse_locked: bool = field(default=False, init=False, repr=False)
    _right_held: bool = field(default=False, init=False, repr=False)
    _manual_key_held: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.frame = Image(self.window_width, self.window_height)
        self.compass = Image(COMPASS_SIZE, COMPASS_SIZE)
        self.minimap = Image(MINIMAP_SIZE, MINIMAP_SIZE)

    @property
    def player(self) -> Player:
        return self.level.player

    @property
    def num_rays(self) -> int:
        return self.window_width

    @classmethod
    def from_file(cls, path: str | os.PathLike) -> Game:
        """Load a scene, its textures, the weapon frames and the manual."""
        level = load_level(path)
        textures = load_wall_textures(level.textures)
        return cls(level, textures, weapon=Weapon.load(), manual=Manual.load())

    def handle_key(self, key: str) -> str | None:
        """React to a single key press given by name.

        ``escape`` quits, ``p`` prints and returns the position, ``r`` resets
        the player, ``x`` opens the door ahead and ``b`` holsters the weapon.
        """
        if key == "escape":
            self.running = False
        elif key == "p":
            player = self.player
            tile = self.level.walk_map[int(player.y)][int(player.x)]
            message = (f"Position X: {player.x:f} Y : {player.y:f} "
                       f"deg: {player.angle:f} map_pos: {tile}")
            print(message)
            return message
        elif key == "r":
            self.player.reset()
        elif key == "x":
            self.doors.open_ahead(self.player, self.level.walk_map)
        elif key == "b" and self.weapon is not None:
            self.weapon.state = WeaponState.HOLSTERED
        return None

    def _clicked(self, down: bool, right: bool, x: int, y: int) -> bool:
        weapon = self.weapon
        active = weapon is not None and weapon.state == WeaponState.ACTIVE
        if not down:
            if right:
                self._right_held = False
            return False
        if right and active:
            if not self._right_held:
                self._right_held = True
                weapon.cycle()
                return True
        elif not right and active:
            weapon.fire()
        return 0 < x < self.window_width and 0 < y < self.window_height

    def handle_mouse(self, controls: Controls) -> bool:
        """Lock the mouse on left click, free it on right click, turn while locked.

        The caller re-centres the mouse after every call. Returns whether the
        mouse is locked.
        """
        x, y = controls.mouse_x, controls.mouse_y
        if self._clicked(controls.mouse_left, False, x, y) and not self._mouse_locked:
            if self.weapon is not None:
                self.weapon.state = WeaponState.ACTIVE
            self._mouse_locked = True
        if self._clicked(controls.mouse_right, True, x, y):
            self._mouse_locked = False
        if self._mouse_locked:
            if self._previous_x != -1 and self._previous_x != x:
                self.player.angle += (x - self._previous_x) * MOUSE_SENSITIVITY
            self._previous_x = self.window_width // 2
            return True
        self._previous_x = -1
        return False

    def _turn(self, controls: Controls) -> None:
        if controls.turn_left and not controls.turn_right:
            self.player.angle = normalize_angle(self.player.angle - PLAYER_ROTATE_SPEED)
        if controls.turn_right and not controls.turn_left:
            self.player.angle = normalize_angle(self.player.angle + PLAYER_ROTATE_SPEED)

    def _move(self, controls: Controls) -> None:
        speed = self.speed
        if self.speed <= SPEED_MAX and controls.faster:
            self.speed += SPEED_STEP_UP
        if self.speed >= SPEED_MIN and controls.slower:
            self.speed -= SPEED_STEP_DOWN
        level = self.level
        args = (self.player, level.walk_map, level.rows, level.cols)
        if controls.forward != controls.backward:
            walk(*args, speed, controls.forward)
        if controls.strafe_left != controls.strafe_right:
            strafe(*args, PLAYER_MOVE_SPEED, controls.strafe_right)

    def _toggle_manual(self, controls: Controls) -> None:
        if controls.manual and not self._manual_key_held:
            self.manual.toggle()
            self._manual_key_held = True
        elif not controls.manual:
            self._manual_key_held = False

    def update(self, controls: Controls) -> None:
        """Apply one frame of input and advance the door timer."""
        self._turn(controls)
        self.handle_mouse(controls)
        self._move(controls)
        self._toggle_manual(controls)
        self.doors.tick(self.player, self.level.walk_map)

    def render(self) -> Image:
        """Draw the view, minimap, compass and weapon; return the main frame."""
        draw_scene(self.frame, self.level, self.player, self.textures, self.fov)
        draw_minimap(self.minimap, self.level, self.player)
        self.needle = draw_compass(self.compass, self.player.angle)
        if self.weapon is not None:
            self.weapon.draw(self.frame)
        return self.frame


def _read_controls(pygame) -> Controls:
    keys = pygame.key.get_pressed()
    buttons = pygame.mouse.get_pressed()
    mouse_x, mouse_y = pygame.mouse.get_pos()
    return Controls(
        forward=bool(keys[pygame.K_w]),
        backward=bool(keys[pygame.K_s]),
        strafe_left=bool(keys[pygame.K_a]),
        strafe_right=bool(keys[pygame.K_d]),
        turn_left=bool(keys[pygame.K_LEFT]),
        turn_right=bool(keys[pygame.K_RIGHT]),
        faster=bool(keys[pygame.K_EQUALS]),
        slower=bool(keys[pygame.K_MINUS]),
        manual=bool(keys[pygame.K_i]),
        mouse_x=mouse_x,
        mouse_y=mouse_y,
        mouse_left=bool(buttons[0]),
        mouse_right=bool(buttons[2]),
    )


def _surface(pygame, image: Image):
    return pygame.image.frombuffer(image.pixels.tobytes(), (image.width, image.height), "RGBA")


def _run(game: Game) -> None:
    import pygame

    key_names = {
        pygame.K_ESCAPE: "escape",
        pygame.K_p: "p",
        pygame.K_r: "r",
        pygame.K_x: "x",
        pygame.K_b: "b",
    }
    pygame.init()
    try:
        screen = pygame.display.set_mode((game.window_width, game.window_height))
        pygame.display.set_caption("cubcaster")
        pygame.mouse.set_visible(False)
        font = pygame.font.Font(None, 20)
        clock = pygame.time.Clock()
        center = (game.window_width // 2, game.window_height // 2)
        compass_pos = (int(game.window_width / 1.1), int(game.window_height / 75))
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type == pygame.KEYDOWN and event.key in key_names:
                    game.handle_key(key_names[event.key])
            game.update(_read_controls(pygame))
            pygame.mouse.set_pos(center)
            frame = game.render()
            screen.fill((0, 0, 0))
            screen.blit(_surface(pygame, frame), (0, 0))
            screen.blit(_surface(pygame, game.minimap), (0, 0))
            screen.blit(_surface(pygame, game.compass), compass_pos)
            for x, y, text in game.manual.visible_lines():
                screen.blit(font.render(text, True, (255, 255, 255)), (x, y))
            pygame.display.flip()
            clock.tick(FRAME_RATE)
    finally:
        pygame.quit()


def main(argv: list[str] | None = None) -> int:
    """Start the game on the ``.cub`` file named on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Error\nNo *.cub file as argument")
        return 1
    if not is_cub_file(args[0]):
        print("Error\nNo .cub file handed as argument")
        return 1
    try:
        game = Game.from_file(args[0])
    except MapError as exc:
        print(f"Error\n{exc}")
        return 1
    except OSError as exc:
        print(f"Error\n{exc}")
        return 1
    _run(game)
    return 0


if __name__ == "__main__":
    sys.exit(main())