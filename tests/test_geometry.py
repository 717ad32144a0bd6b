import dataclasses

import pytest

from vectrace.geometry import (
    DPoint,
    Point,
    floordiv,
    hibit,
    interval,
    lobit,
    mod,
    sign,
)


@pytest.mark.parametrize("a", range(-25, 26))
@pytest.mark.parametrize("n", [1, 2, 3, 7])
def test_mod_and_floordiv_are_consistent(a, n):
    r = mod(a, n)
    assert 0 <= r < n
    assert floordiv(a, n) * n + r == a


def test_floordiv_rounds_down_for_negatives():
    assert floordiv(-1, 5) < 0
    assert floordiv(-5, 5) * 5 == -5


@pytest.mark.parametrize("value, expected", [(-3.5, -1), (0, 0), (0.0, 0), (7, 1)])
def test_sign(value, expected):
    assert sign(value) == expected


def test_lobit_and_hibit_of_zero():
    assert lobit(0) == 32
    assert hibit(0) == 0


@pytest.mark.parametrize("k", range(32))
def test_single_bit_positions(k):
    assert lobit(1 << k) == k
    assert hibit(1 << k) == k + 1


@pytest.mark.parametrize("k", range(31))
def test_lobit_ignores_higher_bits(k):
    x = (1 << k) | (1 << 31)
    assert lobit(x) == k
    assert hibit(x) == 32


def test_bit_functions_work_on_32_bits():
    assert lobit(1 << 32) == lobit(0)
    assert hibit(1 << 40) == hibit(0)


def test_interval_endpoints():
    a = DPoint(1.5, -2.0)
    b = DPoint(4.0, 3.0)
    assert interval(0.0, a, b) == a
    assert interval(1.0, a, b) == b


def test_interval_midpoint_is_symmetric():
    a = DPoint(1.5, -2.0)
    b = DPoint(4.0, 3.0)
    assert interval(0.5, a, b) == interval(0.5, b, a)


def test_point_conversion_keeps_coordinates():
    p = Point(3, -4)
    d = p.to_dpoint()
    assert (d.x, d.y) == (3.0, -4.0)


def test_points_are_immutable():
    p = Point(1, 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.x = 5
    assert (p.x, p.y) == (1, 2)