import math

import pytest

from cubcaster.mathutil import (
    fractional_part,
    is_integer,
    normalize_angle,
    round_near_int,
)


@pytest.mark.parametrize("angle", [-10.0, -math.pi / 2, 0.0, 1.0, 2 * math.pi, 20.0])
def test_normalize_angle_in_range_and_equivalent(angle):
    result = normalize_angle(angle)
    assert 0.0 <= result < 2 * math.pi
    assert math.cos(result) == pytest.approx(math.cos(angle))
    assert math.sin(result) == pytest.approx(math.sin(angle))


def test_normalize_negative_quarter_turn():
    assert normalize_angle(-math.pi / 2) == pytest.approx(3 * math.pi / 2)


def test_fractional_part_keeps_sign():
    assert fractional_part(3.75) == pytest.approx(0.75)
    assert fractional_part(-3.75) == pytest.approx(-0.75)
    assert fractional_part(7.0) == 0.0


def test_round_near_int_truncates_and_rounds():
    assert round_near_int(2.001) == 2
    assert round_near_int(2.7) == 2
    assert round_near_int(-1.5) == -2


def test_is_integer():
    assert is_integer(3.0)
    assert not is_integer(3.1)