import math

import pytest

from vectrace.geometry import DPoint, Point, interval
from vectrace.model import SegmentTag
from vectrace.polygon import (
    PrivCurve,
    PrivPath,
    adjust_vertices,
    best_polygon,
    calc_lon,
    calc_sums,
)
from vectrace.smoothing import bezier, opticurve, reverse, smooth, tangent


def _square_path(size):
    pts = [Point(x, 0) for x in range(size)]
    pts += [Point(size, y) for y in range(size)]
    pts += [Point(x, size) for x in range(size, 0, -1)]
    pts += [Point(0, y) for y in range(size, 0, -1)]
    return pts


def _prepared(size, alphamax):
    pp = PrivPath(pt=_square_path(size))
    calc_sums(pp)
    calc_lon(pp)
    best_polygon(pp)
    adjust_vertices(pp)
    smooth(pp.curve, alphamax)
    return pp


def _square_curve():
    curve = PrivCurve.with_size(4)
    curve.vertex[:] = [DPoint(0, 0), DPoint(10, 0), DPoint(10, 10), DPoint(0, 10)]
    return curve


def test_bezier_endpoints():
    p0, p1, p2, p3 = DPoint(0, 0), DPoint(1, 3), DPoint(4, 3), DPoint(5, 0)
    assert bezier(0.0, p0, p1, p2, p3) == p0
    assert bezier(1.0, p0, p1, p2, p3) == p3


def test_bezier_straight_line_midpoint():
    p = bezier(0.5, DPoint(0, 0), DPoint(1, 1), DPoint(2, 2), DPoint(3, 3))
    assert p.x == pytest.approx(p.y)
    assert p.x == pytest.approx(1.5)


def test_tangent_degenerate_returns_minus_one():
    t = tangent(DPoint(0, 0), DPoint(0, 1), DPoint(1, 1), DPoint(1, 0),
                DPoint(0, 0), DPoint(1, 0))
    assert t == -1.0


def test_tangent_is_parallel_to_direction():
    p0, p1, p2, p3 = DPoint(0, 0), DPoint(0, 2), DPoint(1, 1), DPoint(1, 0)
    q0, q1 = DPoint(0, 0), DPoint(1, 0)
    t = tangent(p0, p1, p2, p3, q0, q1)
    assert 0.0 <= t <= 1.0
    s = 1 - t
    dx = s * s * (p1.x - p0.x) + 2 * s * t * (p2.x - p1.x) + t * t * (p3.x - p2.x)
    dy = s * s * (p1.y - p0.y) + 2 * s * t * (p2.y - p1.y) + t * t * (p3.y - p2.y)
    cross = dx * (q1.y - q0.y) - dy * (q1.x - q0.x)
    assert cross == pytest.approx(0.0, abs=1e-9)


def test_reverse_twice_is_identity():
    curve = _square_curve()
    original = list(curve.vertex)
    reverse(curve)
    assert curve.vertex == original[::-1]
    reverse(curve)
    assert curve.vertex == original


def test_smooth_all_corners_with_zero_alphamax():
    curve = _square_curve()
    smooth(curve, 0.0)
    assert curve.alphacurve
    for j in range(4):
        k = (j + 1) % 4
        assert curve.tag[j] == SegmentTag.CORNER
        assert curve.c[j][1] == curve.vertex[j]
        assert curve.c[j][2] == interval(0.5, curve.vertex[k], curve.vertex[j])
        assert curve.beta[j] == 0.5


def test_smooth_curves_with_large_alphamax():
    curve = _square_curve()
    smooth(curve, 10.0)
    for j in range(4):
        assert curve.tag[j] == SegmentTag.CURVETO
        assert 0.55 <= curve.alpha[j] <= 1.0
        assert curve.alpha0[j] >= curve.alpha[j]
    # alpha is clamped to 1, so both control points sit on the vertex
    assert curve.alpha[1] == 1.0
    assert curve.c[1][0] == curve.vertex[1]
    assert curve.c[1][1] == curve.vertex[1]


def test_opticurve_merges_only_into_existing_endpoints():
    pp = _prepared(6, 10.0)
    opticurve(pp, 0.2)
    oc = pp.ocurve
    assert 1 <= oc.n <= pp.curve.n
    endpoints = {c[2] for c in pp.curve.c}
    assert all(c[2] in endpoints for c in oc.c)
    assert all(not math.isnan(b) for b in oc.beta)
    assert len(oc.to_curve()) == oc.n