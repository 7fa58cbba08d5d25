"""Casting rays through the walk map to find walls and doors."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from .mathutil import fractional_part, normalize_angle
from .settings import Hit, Side

_TRANSITION = 2.0
_MAX_INCREMENT = 0.1
_MIN_INCREMENT = 0.0007
_MAX_UNITS = 100
_REFINE_SPAN = 0.01
_REFINE_EPSILON = 0.00003
_WALL = 1
_DOOR = 3


@dataclass(frozen=True)
class RayHit:
    """Where a ray struck, how far away, and which face it saw."""

    x: float
    y: float
    distance: float
    hit: Hit
    side: Side
    tile_offset: float


def _cell(walk_map: Sequence[Sequence[int]], x: float, y: float) -> int:
    ix, iy = int(x), int(y)
    if 0 <= iy < len(walk_map) and 0 <= ix < len(walk_map[iy]):
        return walk_map[iy][ix]
    return 0


def next_depth(depth: float, max_depth: float) -> float:
    """Advance a ray: fine steps up close, coarser ones further away."""
    if depth > max_depth:
        return depth + _MAX_INCREMENT
    if depth > _TRANSITION:
        t = (depth - _TRANSITION) / (max_depth - _TRANSITION)
        return depth + _MIN_INCREMENT + (_MAX_INCREMENT - _MIN_INCREMENT) * t
    return depth + _MIN_INCREMENT


def refine_hit(walk_map: Sequence[Sequence[int]], x: float, y: float,
               ray_angle: float, depth: float) -> tuple[float, float, Hit]:
    """Bisect around ``depth`` for the exact wall edge; return (x, y, hit)."""
    cos_a, sin_a = math.cos(ray_angle), math.sin(ray_angle)
    start, end = depth - _REFINE_SPAN, depth + _REFINE_SPAN
    hit = Hit.VERTICAL
    tx, ty = x + depth * cos_a, y + depth * sin_a
    while end - start > _REFINE_EPSILON:
        depth = (start + end) / 2
        tx, ty = x + depth * cos_a, y + depth * sin_a
        cell = _cell(walk_map, tx, ty)
        if cell == _WALL:
            hit, end = Hit.VERTICAL, depth
        elif cell == _DOOR:
            hit, end = Hit.DOOR_VERTICAL, depth
        else:
            start = depth
    return tx, ty, hit


def _classify(tx: float, ty: float, hit: Hit) -> Hit:
    if hit in (Hit.VERTICAL, Hit.DOOR_VERTICAL) and abs(ty - round(ty)) > abs(tx - round(tx)):
        return Hit.NONVERTICAL if hit == Hit.VERTICAL else Hit.DOOR_HORIZONTAL
    return hit


def _side(hit: Hit, ray_angle: float) -> Side:
    if hit == Hit.NONVERTICAL:
        return Side.EAST if math.cos(ray_angle) > 0 else Side.WEST
    if hit in (Hit.DOOR_HORIZONTAL, Hit.DOOR_VERTICAL):
        return Side.DOOR
    return Side.SOUTH if math.sin(ray_angle) > 0 else Side.NORTH


def _finish(tx: float, ty: float, hit: Hit, distance: float, ray_angle: float) -> RayHit:
    hit = _classify(tx, ty, hit)
    if hit in (Hit.VERTICAL, Hit.DOOR_VERTICAL):
        offset = fractional_part(tx)
    else:
        offset = fractional_part(ty)
    return RayHit(tx, ty, distance, hit, _side(hit, ray_angle), offset)


def cast_ray(walk_map: Sequence[Sequence[int]], rows: int, cols: int, x: float,
             y: float, view_angle: float, ray_angle: float) -> RayHit:
    """Cast one ray from (x, y); the distance is fish-eye corrected."""
    max_units = float(min(max(rows, cols), _MAX_UNITS))
    cos_a, sin_a = math.cos(ray_angle), math.sin(ray_angle)
    depth = 0.0
    tx = ty = 0.0
    while depth < max_units:
        tx, ty = x + depth * cos_a, y + depth * sin_a
        if (0.0 < ty < rows and 0.0 < tx < cols
                and _cell(walk_map, tx, ty) in (_WALL, _DOOR)):
            break
        depth = next_depth(depth, max_units)
    correction = math.cos(view_angle - ray_angle)
    if depth >= max_units:
        return _finish(tx, ty, Hit.NONVERTICAL, max_units * correction, ray_angle)
    tx, ty, hit = refine_hit(walk_map, x, y, ray_angle, depth)
    return _finish(tx, ty, hit, depth * correction, ray_angle)


def ray_angles(view_angle: float, fov: float, num_rays: int) -> list[float]:
    """Return the ``num_rays + 1`` ray angles spread across the view."""
    if num_rays < 1:
        raise ValueError("num_rays must be at least 1")
    spread = math.tan(fov / 1.5)
    return [
        normalize_angle(view_angle + math.atan((i - num_rays / 2) / num_rays * spread))
        for i in range(num_rays + 1)
    ]