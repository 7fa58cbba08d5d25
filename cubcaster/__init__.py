"""Raycasting first-person explorer for .cub scene files: parsing, validation, rendering and the game loop."""

__version__ = "0.1.0"
__all__ = ["__version__"]