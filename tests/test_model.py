import pytest

from vectrace.geometry import DPoint
from vectrace.model import (
    Curve,
    Params,
    Path,
    ProgressSettings,
    Segment,
    SegmentTag,
    TraceState,
    TraceStatus,
    TurnPolicy,
    default_params,
    version,
)


def test_default_params_match_documented_defaults():
    p = default_params()
    assert p.turdsize == 2
    assert p.turnpolicy is TurnPolicy.MINORITY
    assert p.alphamax == 1.0
    assert p.opticurve is True
    assert p.opttolerance == 0.2
    assert p.progress.callback is None
    assert (p.progress.min, p.progress.max, p.progress.epsilon) == (0.0, 1.0, 0.0)


def test_default_params_are_fresh_copies():
    a = default_params()
    b = default_params()
    a.turdsize = 0
    a.progress.epsilon = 0.5
    assert b.turdsize == 2
    assert b.progress.epsilon == 0.0
    assert b == Params()


def test_enum_values_fixed_by_format():
    assert int(default_params().turnpolicy) == 4
    assert TurnPolicy(4) is TurnPolicy.MINORITY
    assert [int(t) for t in TurnPolicy] == list(range(7))
    pts = (DPoint(0, 0), DPoint(1, 0), DPoint(1, 1))
    assert int(Segment(SegmentTag(1), pts).tag) == 1
    assert Segment(SegmentTag(2), pts).tag is SegmentTag.CORNER
    assert int(TraceState().status) == 0
    assert TraceStatus(1) is TraceStatus.INCOMPLETE


def test_version_is_empty_string():
    assert version() == ""


def test_curve_sequence_behaviour():
    pts = (DPoint(0, 0), DPoint(1, 0), DPoint(1, 1))
    seg_a = Segment(SegmentTag.CORNER, pts)
    seg_b = Segment(SegmentTag.CURVETO, pts)
    curve = Curve([seg_a, seg_b])
    assert len(curve) == 2
    assert curve[1] is seg_b
    assert [s.tag for s in curve] == [SegmentTag.CORNER, SegmentTag.CURVETO]
    assert seg_a.end == pts[2]


def test_path_rejects_bad_sign():
    with pytest.raises(ValueError):
        Path(sign="x")


def test_path_defaults_are_independent():
    a = Path()
    b = Path(sign="-")
    a.children.append(b)
    assert Path().children == []
    assert len(Path().curve) == 0
    assert b.sign == "-"


def test_trace_state_defaults():
    st = TraceState()
    assert st.status is TraceStatus.OK
    assert st.paths == []


def test_progress_settings_keep_callback():
    seen = []
    s = ProgressSettings(callback=seen.append, min=0.25, max=0.75)
    s.callback(0.5)
    assert seen == [0.5]