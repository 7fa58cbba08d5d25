"""Reading ``.cub`` scene files: texture paths, colours and the raw map grid."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .settings import MAX_LINE_LENGTH

_WHITESPACE = " \t\n\v\f\r"
_DIGITS = "0123456789"
_MAP_CHARS = frozenset("10DSWNE" + _WHITESPACE)
_TEXTURE_KEYS = {"NO ": "north", "SO ": "south", "WE ": "west", "EA ": "east"}
_MAX_MAP_ROWS = MAX_LINE_LENGTH - 1


class MapError(ValueError):
    """Raised when a scene file or its contents are invalid."""


@dataclass
class TextureSpec:
    """Texture paths and floor/ceiling colours declared by a scene."""

    north: str | None = None
    south: str | None = None
    west: str | None = None
    east: str | None = None
    door: str | None = None
    floor: tuple[int, int, int] | None = None
    ceiling: tuple[int, int, int] | None = None

    def _walls_complete(self) -> bool:
        return None not in (self.north, self.south, self.west, self.east)

    def is_complete(self) -> bool:
        """Tell whether all four wall textures and both colours are set."""
        return (
            self._walls_complete()
            and self.floor is not None
            and self.ceiling is not None
        )


@dataclass
class Scene:
    """A parsed scene: its textures and the map rows with blanks as '0'."""

    textures: TextureSpec
    grid: list[str] = field(default_factory=list)

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def cols(self) -> int:
        return max((len(row) for row in self.grid), default=0)


def _skip(text: str, pos: int, chars: str) -> int:
    while pos < len(text) and text[pos] in chars:
        pos += 1
    return pos


def parse_rgb(text: str) -> tuple[int, int, int]:
    """Parse an ``R,G,B`` colour; each channel must be in 0..255."""
    if any(c not in _DIGITS and c != "," and c not in _WHITESPACE for c in text):
        raise MapError("Invalid RGB values: non-numeric characters found")
    pos = _skip(text, 0, _WHITESPACE)
    values = []
    for index in range(3):
        start = pos
        pos = _skip(text, pos, _DIGITS)
        value = int(text[start:pos]) if pos > start else 0
        after = _skip(text, pos, _WHITESPACE)
        if after < len(text) and text[after] != ",":
            raise MapError("Invalid RGB values")
        if not 0 <= value <= 255:
            raise MapError("RGB values must be between 0 and 255")
        values.append(value)
        if index < 2:
            pos = _skip(text, pos, _WHITESPACE + ",")
    if _skip(text, pos, _WHITESPACE) != len(text):
        raise MapError("Invalid RGB values: extra characters after blue value")
    return values[0], values[1], values[2]


def is_map_line(line: str) -> bool:
    """Tell whether a line holds only map characters and whitespace."""
    return all(c in _MAP_CHARS for c in line)


def is_texture_line(line: str) -> bool:
    """Tell whether a line declares one of the four wall textures."""
    return line.startswith(tuple(_TEXTURE_KEYS))


def normalize_map_row(line: str) -> str:
    """Replace every whitespace character of a map row with '0'."""
    return "".join("0" if c in _WHITESPACE else c for c in line)


def _check_path(path: str) -> None:
    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError as exc:
        raise MapError(f"Error opening texture file: {path}") from exc
    os.close(fd)


def _texture_path(rest: str) -> str:
    path = rest.lstrip(_WHITESPACE)
    _check_path(path)
    return path


def _parse_color_line(line: str, spec: TextureSpec) -> None:
    if spec.floor is not None and spec.ceiling is not None:
        return
    if line.startswith("F "):
        spec.floor = parse_rgb(line[2:])
    elif line.startswith("C "):
        spec.ceiling = parse_rgb(line[2:])


def _parse_texture_line(line: str, spec: TextureSpec) -> None:
    if spec._walls_complete():
        return
    attr = _TEXTURE_KEYS[line[:3]]
    setattr(spec, attr, _texture_path(line[3:]))


def _add_row(grid: list[str], line: str) -> None:
    if len(grid) >= _MAX_MAP_ROWS:
        raise MapError("Map has too many rows")
    grid.append(normalize_map_row(line))


def _clean(lines: Iterable[str]):
    for raw in lines:
        line = raw.removesuffix("\n")
        if len(line) >= MAX_LINE_LENGTH:
            raise MapError("Line too long")
        yield line


def parse_scene(lines: Iterable[str]) -> Scene:
    """Parse scene lines into textures, colours and the map grid.

    Texture files named by the scene must be readable.
    """
    spec = TextureSpec()
    grid: list[str] = []
    map_started = False
    for line in _clean(lines):
        if not line:
            if map_started:
                raise MapError("Empty line inside the map")
            continue
        if map_started:
            _add_row(grid, line)
        elif line.startswith(("F ", "C ")):
            _parse_color_line(line, spec)
        elif is_texture_line(line):
            _parse_texture_line(line, spec)
        elif is_map_line(line):
            map_started = True
            _add_row(grid, line)
    if not spec.is_complete():
        raise MapError("Unfilled textures or colors")
    if not grid:
        raise MapError("No map found")
    return Scene(spec, grid)


def find_door_texture(lines: Iterable[str]) -> str | None:
    """Return the path of the last ``DO`` line, or None if there is none."""
    door = None
    for line in _clean(lines):
        if line.startswith("DO "):
            door = _texture_path(line[3:])
    return door


def read_scene(path: str | os.PathLike) -> Scene:
    """Read and parse a scene file, including its optional door texture."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MapError(f"Error opening file: {path}") from exc
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    scene = parse_scene(lines)
    scene.textures.door = find_door_texture(lines)
    return scene