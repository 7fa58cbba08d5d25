"""RGBA pixel images backed by numpy arrays."""

from __future__ import annotations

import numpy as np
from PIL import Image as _PILImage

_SKIP_COLOR = 0x333333


class Image:
    """A ``width`` x ``height`` RGBA image; colours are packed 0xRRGGBBAA."""

    def __init__(self, width: int, height: int, pixels: np.ndarray | None = None):
        if width < 0 or height < 0:
            raise ValueError("image dimensions must not be negative")
        if pixels is None:
            pixels = np.zeros((height, width, 4), dtype=np.uint8)
        elif pixels.shape != (height, width, 4):
            raise ValueError("pixel array does not match image dimensions")
        self.pixels = pixels

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; coordinates outside the image raise IndexError."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        self.pixels[y, x] = tuple((color & 0xFFFFFFFF).to_bytes(4, "big"))

    def get_pixel(self, x: int, y: int) -> int:
        """Return a packed pixel, or 0 for coordinates outside the image."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return 0
        r, g, b, a = (int(v) for v in self.pixels[y, x])
        return r << 24 | g << 16 | b << 8 | a

    def fill(self, color: int) -> None:
        """Paint every pixel with one colour."""
        self.pixels[:, :] = tuple((color & 0xFFFFFFFF).to_bytes(4, "big"))

    def _packed(self) -> np.ndarray:
        p = self.pixels.astype(np.uint32)
        return p[..., 0] << 24 | p[..., 1] << 16 | p[..., 2] << 8 | p[..., 3]

    def blit(self, src: Image, x: int, y: int, max_width: int | None = None,
             max_height: int | None = None) -> None:
        """Copy ``src`` onto this image with its top-left corner at (x, y).

        Fully blank pixels and the 0x333333 background are skipped, as are
        targets not strictly inside (0, max_width) x (0, max_height).
        """
        limit_w = self.width if max_width is None else min(max_width, self.width)
        limit_h = self.height if max_height is None else min(max_height, self.height)
        packed = src._packed()
        mask = (packed != 0) & (packed != _SKIP_COLOR)
        xs = x + np.arange(src.width)
        ys = y + np.arange(src.height)
        mask &= ((ys > 0) & (ys < limit_h))[:, None]
        mask &= ((xs > 0) & (xs < limit_w))[None, :]
        rows, cols = np.nonzero(mask)
        self.pixels[y + rows, x + cols] = src.pixels[rows, cols]

    def scaled(self, factor: int) -> Image:
        """Return a copy enlarged by an integer factor (nearest neighbour)."""
        if factor < 1:
            raise ValueError("scale factor must be a positive integer")
        enlarged = np.repeat(np.repeat(self.pixels, factor, axis=0), factor, axis=1)
        return Image(self.width * factor, self.height * factor, enlarged)

    @classmethod
    def from_file(cls, path) -> Image:
        """Load an image file as RGBA."""
        with _PILImage.open(path) as img:
            arr = np.array(img.convert("RGBA"), dtype=np.uint8)
        return cls(arr.shape[1], arr.shape[0], arr)