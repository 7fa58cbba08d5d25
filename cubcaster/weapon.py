"""The player's weapons: frame loading, cycling and the firing animation."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from .canvas import Image
from .settings import WINDOW_HEIGHT, WINDOW_WIDTH, WeaponState

FRAME_COUNT = 5
FRAME_SCALE = 3
TICKS_PER_FRAME = 2
DEFAULT_FRAMES_DIR = Path("textures/FPS/frames")

_KINDS = ("punch", "pistol", "shotgun")
_WEAPON_COUNT = 4


def animation_files(base: str | os.PathLike = DEFAULT_FRAMES_DIR) -> list[Path]:
    """Return the frame files of all weapons: punch, pistol, then shotgun."""
    base = Path(base)
    return [
        base / f"{kind}{number}.png"
        for kind in _KINDS
        for number in range(1, FRAME_COUNT + 1)
    ]


@dataclass
class Weapon:
    """Animation frames of each weapon plus the selection and firing state.

    ``weapon`` selects what is drawn: 0 nothing, 1 pistol, 2 shotgun,
    3 fists.
    """

    punch: list[Image]
    pistol: list[Image]
    shotgun: list[Image]
    weapon: int = 0
    state: WeaponState = WeaponState.HOLSTERED
    animation_start: WeaponState = WeaponState.HOLSTERED
    x: int = 0
    y: int = 0
    _tick: int = field(default=0, init=False, repr=False)

    @classmethod
    def load(cls, base: str | os.PathLike = DEFAULT_FRAMES_DIR) -> Weapon:
        """Load every weapon's frames from ``base``, enlarged three times."""
        frames = [Image.from_file(path).scaled(FRAME_SCALE) for path in animation_files(base)]
        return cls(
            punch=frames[:FRAME_COUNT],
            pistol=frames[FRAME_COUNT:2 * FRAME_COUNT],
            shotgun=frames[2 * FRAME_COUNT:],
        )

    def current_frames(self) -> list[Image] | None:
        """Return the frames of the selected weapon, or None when unarmed."""
        if self.weapon == 0:
            return None
        if self.weapon == 1:
            return self.pistol
        if self.weapon == 2:
            return self.shotgun
        return self.punch

    def cycle(self) -> int:
        """Select the next weapon, wrapping back to none; return the selection."""
        self.weapon = (self.weapon + 1) % _WEAPON_COUNT
        return self.weapon

    def fire(self) -> bool:
        """Start the firing animation if the weapon is drawn."""
        if self.state != WeaponState.ACTIVE:
            return False
        self.animation_start = WeaponState.ANIMATE
        return True

    def _place(self, frame: Image, image: Image) -> None:
        self.x = frame.width // 2 - image.width // 2
        self.y = frame.height - image.height
        frame.blit(image, self.x, self.y, WINDOW_WIDTH, WINDOW_HEIGHT)

    def _animate(self, frame: Image, frames: list[Image]) -> int:
        index = self._tick // TICKS_PER_FRAME
        self._place(frame, frames[index])
        self._tick += 1
        if self._tick == FRAME_COUNT * TICKS_PER_FRAME:
            self._tick = 0
            self.animation_start = WeaponState.HOLSTERED
            frame.blit(frames[0], self.x, self.y, WINDOW_WIDTH, WINDOW_HEIGHT)
            return 0
        return index

    def draw(self, frame: Image) -> int | None:
        """Draw the selected weapon at the bottom centre of ``frame``.

        Returns the index of the frame left on screen, or None when unarmed.
        """
        frames = self.current_frames()
        if not frames:
            return None
        if self.animation_start == WeaponState.ANIMATE:
            return self._animate(frame, frames)
        self._place(frame, frames[0])
        return 0