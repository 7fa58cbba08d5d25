"""The in-game manual read from a text file and toggled on screen."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass, field
from pathlib import Path

from .settings import MINIMAP_SIZE, WINDOW_WIDTH

DEFAULT_MANUAL = Path("manual.txt")
PROMPT = "Press <I> for manual"
LINE_TOP = 8
LINE_SPACING = 16
_READABLE = stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH


@dataclass
class Manual:
    """Lines of the manual and whether they are currently displayed."""

    lines: list[str] = field(default_factory=list)
    shown: bool = False

    @classmethod
    def load(cls, path: str | os.PathLike = DEFAULT_MANUAL) -> Manual:
        """Read the manual file, then lock it again by removing all permissions.

        A locked file is made readable first; a missing file gives an empty
        manual.
        """
        path = Path(path)
        try:
            try:
                text = path.read_text(encoding="utf-8")
            except PermissionError:
                path.chmod(_READABLE)
                text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return cls()
        path.chmod(0)
        return cls(text.splitlines())

    def toggle(self) -> bool:
        """Switch between the manual and the prompt; return whether it is shown."""
        self.shown = not self.shown
        return self.shown

    def visible_lines(self) -> list[tuple[int, int, str]]:
        """Return the (x, y, text) strings to draw for the current state."""
        if not self.shown:
            return [(WINDOW_WIDTH // 2 - 100, LINE_TOP, PROMPT)]
        return [
            (MINIMAP_SIZE + 3, LINE_TOP + LINE_SPACING * number, line)
            for number, line in enumerate(self.lines)
        ]