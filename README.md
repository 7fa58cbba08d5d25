# cubcaster

A small raycasting first-person explorer shown in a pygame window. A scene
is described in a `.cub` file: four wall textures, an optional door
texture, floor and ceiling colours, and a grid map closed in by walls. The
view has a rotating minimap in the top-left corner, a compass in the
top-right corner, weapons drawn at the bottom of the screen, and an
on-screen manual.

## Installing

    pip install .

## Running

    cubcaster path/to/level.cub

The argument must name a file ending in `.cub`. Anything else, a missing
argument, or a scene that fails to parse or validate prints `Error` and a
message and exits with status 1.

The game expects two things in the current working directory:

- `textures/FPS/frames/` with the weapon frames `punch1.png` to
  `punch5.png`, `pistol1.png` to `pistol5.png` and `shotgun1.png` to
  `shotgun5.png`. They are required; a missing frame stops the game from
  starting. Frames are enlarged three times when loaded.
- `manual.txt` (optional), whose lines are shown when the manual is
  toggled. If the file is not readable it is made readable first; after it
  has been read, all of its permissions are removed again. Without the file
  the manual is empty.

## Scene files

    NO ./textures/north.png
    SO ./textures/south.png
    WE ./textures/west.png
    EA ./textures/east.png
    DO ./textures/door.png
    F 120,80,40
    C 90,160,220

    111111
    100D01
    10N001
    111111

- `NO`, `SO`, `WE`, `EA` give the wall texture paths. Each file must exist
  and be readable, and is loaded with Pillow, so any image format Pillow
  reads will do.
- `DO` is optional and gives the door texture. When it is present, every
  reachable door must sit between two walls, horizontally or vertically.
  Without it, doors are still walkable tiles but are drawn with the north
  texture.
- `F` and `C` give floor and ceiling colours as `R,G,B`, each from 0 to 255.
- The map starts at the first line made only of map characters. It uses
  `1` for walls, `0` for floor, `D` for doors, and exactly one of `N`, `S`,
  `E`, `W` for the player's start position and facing direction. Any
  whitespace inside the map counts as floor.
- The map must be closed by walls: every tile reachable from the start must
  be floor, wall or door, and no reachable floor or door may lie on the
  map's border. Once the map has started, no line may be empty.
- Lines of 1024 characters or more are rejected.

## Controls

| Input              | Action                                              |
|--------------------|-----------------------------------------------------|
| W / S              | move forward / back                                 |
| A / D              | strafe left / right                                 |
| Left / Right arrow | turn                                                |
| `=` / `-`          | increase / decrease walking speed                   |
| Left mouse button  | take up the weapon and capture the mouse; then fire |
| Mouse movement     | turn, while the mouse is captured                   |
| Right mouse button | switch weapon and release the mouse                 |
| B                  | holster the weapon                                  |
| X                  | open the door in front of you                       |
| R                  | return to the start position                        |
| P                  | print the current position                          |
| I                  | show or hide the manual                             |
| Esc                | quit                                                |

Weapons cycle through none, pistol, shotgun and fists. An opened door
closes again after 100 frames spent away from it, or when another door is
opened.

## Using it as a library

    from cubcaster.validation import load_level
    from cubcaster.raycast import cast_ray

    level = load_level("level.cub")
    p = level.player
    hit = cast_ray(level.walk_map, level.rows, level.cols, p.x, p.y, p.angle, p.angle)
    print(hit.distance, hit.side)

- `cubcaster.mapfile.read_scene` parses a file into a `Scene` (a
  `TextureSpec` and the map grid); `parse_scene` does the same for lines
  already in memory.
- `cubcaster.validation.validate_scene` checks a `Scene` and builds a
  `Level` with its walk map, minimap codes and `Player`; `load_level` does
  both steps for a file.
- `cubcaster.raycast.cast_ray` returns a `RayHit`, and `ray_angles` gives
  the angles of every screen column.
- `cubcaster.render.draw_scene`, `cubcaster.hud.draw_minimap` and
  `cubcaster.hud.draw_compass` draw into `cubcaster.canvas.Image`, an RGBA
  image backed by a numpy array.
- `cubcaster.movement` holds `walk`, `strafe`, `wall_collision` and the
  `DoorState` timer.
- `cubcaster.app.Game.from_file` sets up a full game; `Game.update` applies
  one frame of `Controls`, and `Game.render` returns the drawn frame.
- `cubcaster.debug.format_state` returns a plain-text dump of a game.

Parsing and validation problems raise `cubcaster.mapfile.MapError`, a
subclass of `ValueError`.

## What it does not do

There are no enemies, pickups, health or sound: firing only plays the
weapon animation. The game has no menus or saved state; it plays the one
scene it is started with until the window is closed or Esc is pressed.

## Tests

    pip install .[test]
    pytest