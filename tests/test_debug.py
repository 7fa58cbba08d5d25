from types import SimpleNamespace

from cubcaster.debug import format_int_map, format_map, format_state
from cubcaster.mapfile import TextureSpec
from cubcaster.settings import Player


def test_format_map_pinned():
    assert format_map(["10", "01"]) == "1 0 \n0 1 \n\n"


def test_format_map_none():
    assert format_map(None) == ""


def test_format_map_shape():
    grid = ["111", "1N1", "111"]
    lines = format_map(grid).split("\n")
    assert lines[:3] == [" ".join(row) + " " for row in grid]
    assert lines[3:] == ["", ""]


def test_format_int_map_limits():
    int_map = [[1, 2, 3, 4], [5, 6, 7, 8], [9, 9, 9, 9]]
    text = format_int_map(int_map, 2, 3)
    lines = text.split("\n")
    assert lines[0].split() == ["1", "2", "3"]
    assert lines[1].split() == ["5", "6", "7"]
    assert lines[2:] == ["", ""]


def test_format_int_map_none():
    assert format_int_map(None, 3, 3) == ""


def test_format_state_none():
    assert format_state(None) == "Struct is empty!\n"


def _game():
    textures = TextureSpec(north="n.xpm42", south="s.xpm42", west="w.xpm42",
                           east="e.xpm42", floor=(10, 20, 30), ceiling=(40, 50, 60))
    player = Player(start_x=1, start_y=1, angle=0.0)
    level = SimpleNamespace(
        grid=["111", "1E1", "111"],
        walk_map=[[1, 1, 1], [1, 2, 1], [1, 1, 1]],
        minimap=[[1, 1, 1], [1, 2, 1], [1, 1, 1]],
        rows=3, cols=3, textures=textures, player=player,
    )
    return SimpleNamespace(level=level, player=player)


def test_format_state_sections():
    text = format_state(_game())
    assert text.startswith("\n-----Struct data-----\n\n")
    assert "Original map\n" + format_map(["111", "1E1", "111"]) in text
    assert "Validated map\n" in text
    assert "Mini_map\n" in text
    assert "NO: n.xpm42\n" in text
    assert "EA: e.xpm42\n" in text
    assert "floor: (10, 20, 30)\n" in text
    assert "ceiling: (40, 50, 60)\n" in text
    assert "start x: 1\n" in text
    assert "rows: 3\n" in text
    assert text.endswith("-" * 40 + "\n")


def test_format_state_without_level():
    text = format_state(SimpleNamespace())
    assert "Original map" not in text
    assert "map height: 0\n" in text