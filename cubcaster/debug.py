"""Plain-text dumps of maps and game state for debugging."""

from __future__ import annotations

from collections.abc import Sequence

from .settings import DEFAULT_FOV, WINDOW_HEIGHT, WINDOW_WIDTH

_UNSET_COLOR = (-1, -1, -1)


def format_map(grid: Sequence[str] | None) -> str:
    """Render a character grid, each cell followed by a space."""
    if grid is None:
        return ""
    rows = ["".join(f"{cell} " for cell in row) + "\n" for row in grid]
    return "".join(rows) + "\n"


def format_int_map(int_map: Sequence[Sequence[int]] | None, rows: int, cols: int) -> str:
    """Render the first ``rows`` x ``cols`` values of an integer map."""
    if int_map is None:
        return ""
    lines = ["".join(f"{value} " for value in row[:cols]) + "\n" for row in int_map[:rows]]
    return "".join(lines) + "\n"


def _format_textures(textures) -> list[str]:
    out = ["textures:\n"]
    for label, attr in (("NO", "north"), ("SO", "south"), ("WE", "west"), ("EA", "east")):
        path = getattr(textures, attr, None)
        if path:
            out.append(f"{label}: {path}\n")
    floor = getattr(textures, "floor", None) or _UNSET_COLOR
    ceiling = getattr(textures, "ceiling", None) or _UNSET_COLOR
    out.append("floor: ({}, {}, {})\n".format(*floor))
    out.append("ceiling: ({}, {}, {})\n".format(*ceiling))
    return out


def _format_player(player) -> list[str]:
    return [
        "\n",
        f"player:\nstart x: {player.start_x}\n",
        f"start y: {player.start_y}\n",
        f"x: {player.x:.2f}\n",
        f"y: {player.y:.2f}\n",
        f"std_x: {player.std_x:.2f}\n",
        f"std_y: {player.std_y:.2f}\n",
        f"std_angle: {player.std_angle:.2f}\n",
        f"angle: {player.angle:.2f}\n",
    ]


def format_state(game) -> str:
    """Describe the game's maps, textures, player and view settings."""
    if game is None:
        return "Struct is empty!\n"
    level = getattr(game, "level", None)
    player = getattr(game, "player", None) or getattr(level, "player", None)
    rows = getattr(level, "rows", 0)
    cols = getattr(level, "cols", 0)
    out = ["\n-----Struct data-----\n\n"]
    if level is not None:
        if getattr(level, "grid", None):
            out += ["Original map\n", format_map(level.grid)]
        if getattr(level, "walk_map", None):
            out += ["Validated map\n", format_int_map(level.walk_map, rows, cols)]
        if getattr(level, "minimap", None):
            out += ["Mini_map\n", format_int_map(level.minimap, rows, cols)]
    out.append("\n")
    textures = getattr(level, "textures", None)
    if textures is not None:
        out += _format_textures(textures)
    if player is not None:
        out += _format_player(player)
    window_width = getattr(game, "window_width", WINDOW_WIDTH)
    window_height = getattr(game, "window_height", WINDOW_HEIGHT)
    out += [
        "\n",
        f"window and map:\nwindow width: {window_width}\n",
        f"window height: {window_height}\n",
        f"map height: {rows}\n",
        f"map width: {cols}\n",
        "\n",
        f"FOV: {getattr(game, 'fov', DEFAULT_FOV):f}\n",
        f"num rays: {getattr(game, 'num_rays', window_width)}\n",
        f"cols: {cols}\n",
        f"rows: {rows}\n",
        "-" * 40 + "\n",
    ]
    return "".join(out)