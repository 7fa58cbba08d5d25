import math

import pytest
from PIL import Image as PILImage

from cubcaster.app import Controls, Game, is_cub_file, load_wall_textures, main
from cubcaster.canvas import Image
from cubcaster.colors import RED
from cubcaster.manual import Manual
from cubcaster.mapfile import MapError, Scene, TextureSpec
from cubcaster.movement import DOOR_CLOSE_DELAY
from cubcaster.settings import (
    CENTER,
    PLAYER_MOVE_SPEED,
    PLAYER_ROTATE_SPEED,
    Side,
    WeaponState,
)
from cubcaster.validation import Tile, validate_scene
from cubcaster.weapon import FRAME_SCALE, Weapon

ROOM = ["111111", "100001", "10N001", "100001", "111111"]
DOOR_MAP = ["11111", "1ED01", "11101", "11001", "11111"]
WEAPON_COLOR = 0x11223344


def _level(grid, door=None):
    spec = TextureSpec(
        north="n",
        south="s",
        west="w",
        east="e",
        door=door,
        floor=(10, 20, 30),
        ceiling=(40, 50, 60),
    )
    return validate_scene(Scene(spec, list(grid)))


def _textures():
    out = {}
    for side in Side:
        img = Image(4, 4)
        img.fill(0x804020FF)
        out[side] = img
    return out


def _frames():
    frames = [Image(2, 2) for _ in range(5)]
    for frame in frames:
        frame.fill(WEAPON_COLOR)
    return frames


def _game(grid=ROOM, door=None):
    return Game(
        _level(grid, door),
        _textures(),
        weapon=Weapon(punch=_frames(), pistol=_frames(), shotgun=_frames()),
        manual=Manual(["first line"]),
        window_width=120,
        window_height=120,
    )


def _png(path, size=(4, 4)):
    PILImage.new("RGBA", size, (200, 100, 50, 255)).save(path)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("map.cub", True),
        (".cub", True),
        ("map.cu", False),
        ("cub", False),
        ("map.cub.txt", False),
    ],
)
def test_is_cub_file(name, expected):
    assert is_cub_file(name) is expected


def test_main_without_argument(capsys):
    assert main([]) == 1
    assert "No *.cub file as argument" in capsys.readouterr().out


def test_main_with_two_arguments(capsys):
    assert main(["a.cub", "b.cub"]) == 1
    assert "No *.cub file as argument" in capsys.readouterr().out


def test_main_rejects_other_extension(capsys):
    assert main(["map.txt"]) == 1
    assert "No .cub file handed as argument" in capsys.readouterr().out


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.cub")]) == 1
    assert capsys.readouterr().out.startswith("Error\n")


def test_load_wall_textures(tmp_path):
    paths = {}
    for name, size in (("n", (4, 4)), ("s", (5, 5)), ("e", (6, 6)), ("w", (7, 7))):
        paths[name] = tmp_path / f"{name}.png"
        _png(paths[name], size)
    spec = TextureSpec(
        north=str(paths["n"]),
        south=str(paths["s"]),
        east=str(paths["e"]),
        west=str(paths["w"]),
    )
    textures = load_wall_textures(spec)
    assert textures[Side.NORTH].width == 4
    assert textures[Side.SOUTH].width == 5
    assert textures[Side.EAST].width == 6
    assert textures[Side.WEST].width == 7
    assert textures[Side.DOOR] is textures[Side.NORTH]


def test_load_wall_textures_missing_side():
    with pytest.raises(MapError):
        load_wall_textures(TextureSpec(north="a.png"))


def test_from_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    frames_dir = tmp_path / "textures" / "FPS" / "frames"
    frames_dir.mkdir(parents=True)
    for kind in ("punch", "pistol", "shotgun"):
        for number in range(1, 6):
            _png(frames_dir / f"{kind}{number}.png", (2, 2))
    wall = tmp_path / "wall.png"
    _png(wall)
    scene = tmp_path / "map.cub"
    header = f"NO {wall}\nSO {wall}\nWE {wall}\nEA {wall}\n"
    scene.write_text(header + "F 10,20,30\nC 40,50,60\n\n111\n1N1\n111\n")
    game = Game.from_file(scene)
    assert game.level.rows == 3
    assert game.weapon.pistol[0].width == 2 * FRAME_SCALE
    assert game.manual.lines == []
    assert game.level.textures.floor == (10, 20, 30)


def test_from_file_invalid_map(tmp_path):
    scene = tmp_path / "bad.cub"
    scene.write_text("111\n1N1\n111\n")
    with pytest.raises(MapError):
        Game.from_file(scene)


def test_game_images_follow_window_size():
    game = _game()
    assert (game.frame.width, game.frame.height) == (120, 120)
    assert game.num_rays == 120
    assert game.player is game.level.player


def test_escape_stops_game():
    game = _game()
    game.handle_key("escape")
    assert game.running is False


def test_p_reports_position(capsys):
    game = _game()
    message = game.handle_key("p")
    assert message.startswith("Position X: 2.200000 Y : 2.200000")
    assert message.endswith("map_pos: 2")
    assert message in capsys.readouterr().out


def test_r_resets_player():
    game = _game()
    game.player.x, game.player.y, game.player.angle = 3.5, 3.5, 1.0
    game.handle_key("r")
    assert (game.player.x, game.player.y) == (game.player.std_x, game.player.std_y)
    assert game.player.angle == game.player.std_angle


def test_b_holsters_weapon():
    game = _game()
    game.weapon.state = WeaponState.ACTIVE
    game.handle_key("b")
    assert game.weapon.state == WeaponState.HOLSTERED


def test_x_opens_door_ahead():
    game = _game(DOOR_MAP, door="door.png")
    game.player.angle = 0.1
    game.handle_key("x")
    assert game.level.walk_map[1][2] == Tile.OPEN_DOOR
    assert game.doors.counter == DOOR_CLOSE_DELAY


def test_door_timer_waits_while_player_shares_row():
    game = _game(DOOR_MAP, door="door.png")
    game.player.angle = 0.1
    game.handle_key("x")
    game.update(Controls())
    assert game.doors.counter == DOOR_CLOSE_DELAY
    assert game.level.walk_map[1][2] == Tile.OPEN_DOOR


def test_left_click_locks_mouse_and_activates_weapon():
    game = _game()
    locked = game.handle_mouse(Controls(mouse_x=60, mouse_y=60, mouse_left=True))
    assert locked is True
    assert game.weapon.state == WeaponState.ACTIVE
    before = game.player.angle
    game.handle_mouse(Controls(mouse_x=80, mouse_y=60))
    assert game.player.angle == pytest.approx(before + 20 * 0.005)


def test_click_outside_window_does_not_lock():
    game = _game()
    locked = game.handle_mouse(Controls(mouse_x=0, mouse_y=60, mouse_left=True))
    assert locked is False
    assert game.weapon.state == WeaponState.HOLSTERED


def test_left_hold_while_active_fires():
    game = _game()
    game.handle_mouse(Controls(mouse_x=60, mouse_y=60, mouse_left=True))
    game.handle_mouse(Controls(mouse_x=60, mouse_y=60, mouse_left=True))
    assert game.weapon.animation_start == WeaponState.ANIMATE


def test_right_click_cycles_once_and_unlocks():
    game = _game()
    game.handle_mouse(Controls(mouse_x=60, mouse_y=60, mouse_left=True))
    locked = game.handle_mouse(Controls(mouse_x=60, mouse_y=60, mouse_right=True))
    assert locked is False
    assert game.weapon.weapon == 1
    game.handle_mouse(Controls(mouse_x=60, mouse_y=60, mouse_right=True))
    assert game.weapon.weapon == 1


def test_update_walks_forward():
    game = _game()
    x, y = game.player.x, game.player.y
    game.update(Controls(forward=True))
    assert game.player.y == pytest.approx(y - PLAYER_MOVE_SPEED)
    assert game.player.x == pytest.approx(x)


def test_update_opposite_keys_cancel():
    game = _game()
    x, y = game.player.x, game.player.y
    game.update(
        Controls(forward=True, backward=True, strafe_left=True, strafe_right=True)
    )
    assert (game.player.x, game.player.y) == (x, y)


def test_update_turns_left():
    game = _game()
    angle = game.player.angle
    game.update(Controls(turn_left=True))
    assert game.player.angle == pytest.approx(angle - PLAYER_ROTATE_SPEED)
    assert 0 <= game.player.angle < 2 * math.pi


def test_update_changes_speed_for_next_frame():
    game = _game()
    game.update(Controls(faster=True))
    assert game.speed == pytest.approx(PLAYER_MOVE_SPEED + 0.01)
    game.update(Controls(slower=True))
    assert game.speed < PLAYER_MOVE_SPEED


def test_manual_toggles_once_per_press():
    game = _game()
    game.update(Controls(manual=True))
    assert game.manual.shown is True
    game.update(Controls(manual=True))
    assert game.manual.shown is True
    game.update(Controls())
    game.update(Controls(manual=True))
    assert game.manual.shown is False


def test_render_draws_view_hud_and_weapon():
    game = _game()
    game.weapon.weapon = 1
    frame = game.render()
    assert frame is game.frame
    assert int(frame.pixels[:, 60].sum()) > 0
    assert game.minimap.get_pixel(50, 50) == RED
    assert game.needle[1] < CENTER
    assert frame.get_pixel(59, 118) == WEAPON_COLOR