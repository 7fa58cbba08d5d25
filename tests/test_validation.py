import math

import pytest

from cubcaster.mapfile import MapError, Scene, TextureSpec
from cubcaster.player import start_angle
from cubcaster.settings import PLAYER_SIZE
from cubcaster.validation import (
    Tile,
    build_minimap,
    check_borders,
    flood_fill,
    load_level,
    validate_characters,
    validate_doors,
    validate_scene,
)

BOX = [
    "11111",
    "10001",
    "10N01",
    "10001",
    "11111",
]

DOOR_OK = [
    "11111",
    "10N01",
    "11D11",
    "10001",
    "11111",
]

DOOR_BAD = [
    "11111",
    "1N0D1",
    "10001",
    "11111",
]


def _spec(door=None):
    return TextureSpec(north="n", south="s", west="w", east="e", door=door,
                       floor=(1, 2, 3), ceiling=(4, 5, 6))


def test_validate_characters_returns_spawn():
    assert validate_characters(BOX) == (2, 2)


def test_validate_characters_multiple_players():
    with pytest.raises(MapError, match="Multiple players"):
        validate_characters(["111", "1NS", "111"])


def test_validate_characters_invalid_char():
    with pytest.raises(MapError, match="Invalid character"):
        validate_characters(["111", "1NX", "111"])


def test_validate_characters_no_player():
    with pytest.raises(MapError, match="No player"):
        validate_characters(["111", "101", "111"])


def test_build_minimap_codes_and_padding():
    minimap = build_minimap(["1N", "D0", "1"], 3, 2)
    assert minimap[0] == [1, 2]
    assert minimap[1] == [3, 0]
    assert minimap[2] == [1, 0]


def test_flood_fill_marks_reachable_tiles():
    walk = flood_fill(BOX, 5, 5, (2, 2))
    assert walk[2][2] == Tile.FLOOR
    assert walk[1][1] == Tile.FLOOR
    assert walk[0][2] == Tile.WALL
    assert walk[0][0] == Tile.EMPTY
    assert Tile.WALL == 1


def test_flood_fill_marks_doors():
    walk = flood_fill(DOOR_OK, 5, 5, (2, 1))
    assert walk[2][2] == Tile.DOOR
    assert walk[3][2] == Tile.FLOOR


def test_flood_fill_short_row_leaks():
    grid = ["1111", "1N01", "10", "1111"]
    with pytest.raises(MapError):
        flood_fill(grid, 4, 4, (1, 1))


def test_check_borders_detects_open_edge():
    grid = ["11111", "10N00", "11111"]
    walk = flood_fill(grid, 3, 5, (2, 1))
    with pytest.raises(MapError, match="leaky"):
        check_borders(walk, 3, 5)


def test_check_borders_closed_map_passes_validation():
    walk = flood_fill(BOX, 5, 5, (2, 2))
    check_borders(walk, 5, 5)
    assert all(walk[0][x] in (Tile.WALL, Tile.EMPTY) for x in range(5))


def test_validate_doors_rejects_bad_door():
    walk = flood_fill(DOOR_BAD, 4, 5, (1, 1))
    assert walk[1][3] == Tile.DOOR
    with pytest.raises(MapError, match="door"):
        validate_doors(DOOR_BAD, walk, 4, 5, True)


def test_validate_scene_bad_door_allowed_without_texture():
    level = validate_scene(Scene(_spec(), list(DOOR_BAD)))
    assert level.walk_map[1][3] == Tile.DOOR


def test_validate_scene_good_door():
    level = validate_scene(Scene(_spec(door="d"), list(DOOR_OK)))
    assert level.walk_map[2][2] == Tile.DOOR
    assert (level.player.start_x, level.player.start_y) == (2, 1)


def test_validate_scene_builds_level():
    level = validate_scene(Scene(_spec(), list(BOX)))
    assert (level.rows, level.cols) == (5, 5)
    assert level.player.x == pytest.approx(2 + PLAYER_SIZE)
    assert level.player.angle == pytest.approx(start_angle("N"))
    assert level.minimap[2][2] == 2


def test_load_level_from_file(tmp_path):
    tex = tmp_path / "wall.xpm42"
    tex.write_text("x")
    lines = [f"NO {tex}", f"SO {tex}", f"WE {tex}", f"EA {tex}",
             "F 10,20,30", "C 40,50,60", ""] + BOX
    path = tmp_path / "level.cub"
    path.write_text("\n".join(lines) + "\n")
    level = load_level(path)
    assert level.grid == BOX
    assert level.player.angle == pytest.approx(3 * math.pi / 2)
    assert level.textures.floor == (10, 20, 30)


def test_load_level_invalid_door_with_texture(tmp_path):
    tex = tmp_path / "wall.xpm42"
    tex.write_text("x")
    lines = [f"NO {tex}", f"SO {tex}", f"WE {tex}", f"EA {tex}", f"DO {tex}",
             "F 1,2,3", "C 4,5,6", ""] + DOOR_BAD
    path = tmp_path / "level.cub"
    path.write_text("\n".join(lines) + "\n")
    with pytest.raises(MapError, match="door"):
        load_level(path)