import pytest

from vectrace.geometry import Point
from vectrace.model import Params, Path, SegmentTag
from vectrace.polygon import PrivPath
from vectrace.progress import Progress
from vectrace.trace import process_path


def _rect_points(w, h):
    pts = [Point(0, y) for y in range(h)]
    pts += [Point(x, h) for x in range(w)]
    pts += [Point(w, y) for y in range(h, 0, -1)]
    pts += [Point(x, 0) for x in range(w, 0, -1)]
    return pts


def _path(w, h, sign="+"):
    return Path(area=w * h, sign=sign, priv=PrivPath(pt=_rect_points(w, h)))


def test_segment_ends_stay_near_shape():
    p = _path(6, 4)
    process_path([p], Params())
    assert len(p.curve) > 0
    for seg in p.curve:
        assert -0.5 <= seg.end.x <= 6.5
        assert -0.5 <= seg.end.y <= 4.5


def test_without_opticurve_one_segment_per_vertex():
    p = _path(5, 5)
    process_path([p], Params(opticurve=False))
    assert p.priv.fcurve is p.priv.curve
    assert len(p.curve) == p.priv.m


def test_with_opticurve_uses_optimized_curve():
    p = _path(7, 3)
    process_path([p], Params())
    assert p.priv.fcurve is p.priv.ocurve
    assert len(p.curve) == p.priv.ocurve.n
    assert len(p.curve) <= p.priv.m


def test_zero_alphamax_gives_only_corners():
    p = _path(4, 4)
    process_path([p], Params(alphamax=0.0, opticurve=False))
    assert all(seg.tag == SegmentTag.CORNER for seg in p.curve)


def test_large_alphamax_gives_only_curves():
    p = _path(4, 4)
    process_path([p], Params(alphamax=2.0, opticurve=False))
    assert all(seg.tag == SegmentTag.CURVETO for seg in p.curve)


def test_negative_path_has_reversed_vertices():
    plus = _path(5, 3, "+")
    minus = _path(5, 3, "-")
    process_path([plus, minus], Params(opticurve=False))
    assert minus.priv.curve.vertex == list(reversed(plus.priv.curve.vertex))


def test_progress_reports_ascending_values_ending_at_one():
    seen = []
    progress = Progress(callback=seen.append)
    process_path([_path(3, 3), _path(6, 2)], Params(), progress)
    assert seen[-1] == 1.0
    assert seen == sorted(seen)
    assert all(0.0 <= v <= 1.0 for v in seen)


def test_empty_list_only_reports_completion():
    seen = []
    process_path([], Params(), Progress(callback=seen.append))
    assert seen == [1.0]


def test_path_without_points_is_rejected():
    with pytest.raises(ValueError):
        process_path([Path()], Params())