"""Small numeric helpers used by the ray caster."""

from __future__ import annotations

import math

_TAU = 2 * math.pi


def _round_half_away(num: float) -> int:
    return int(math.copysign(math.floor(abs(num) + 0.5), num))


def fractional_part(num: float) -> float:
    """Return the signed fractional part of ``num``."""
    return math.modf(num)[0]


def round_near_int(num: float) -> int:
    """Round to the nearest integer when just above one, otherwise truncate."""
    if fractional_part(num) < 0.005:
        return _round_half_away(num)
    return int(num)


def normalize_angle(angle: float) -> float:
    """Bring an angle in radians into the range [0, 2*pi)."""
    result = angle % _TAU
    if result >= _TAU:
        result -= _TAU
    return result


def is_integer(x: float) -> bool:
    """Tell whether ``x`` has no fractional part."""
    return abs(x - _round_half_away(x)) < 1e-15