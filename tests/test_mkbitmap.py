import pytest

from vectrace.mkbitmap import (
    OptionError,
    Options,
    highpass,
    lowpass,
    make_outfilename,
    parse_options,
    threshold,
)


def test_lowpass_zero_image_stays_zero():
    gm = [[0.0] * 5 for _ in range(4)]
    lowpass(gm, 2.0)
    assert gm == [[0.0] * 5 for _ in range(4)]


def test_lowpass_spreads_spike():
    gm = [[0.0] * 7 for _ in range(7)]
    gm[3][3] = 255.0
    lowpass(gm, 1.5)
    assert gm[3][3] < 255.0
    assert gm[3][2] > 0.0
    assert gm[2][3] > 0.0
    assert all(v >= 0.0 for row in gm for v in row)


def test_lowpass_empty_greymap_unchanged():
    gm = []
    lowpass(gm, 2.0)
    assert gm == []


def test_highpass_of_black_is_mid_grey():
    gm = [[0.0] * 3 for _ in range(3)]
    highpass(gm, 4.0)
    assert gm == [[128.0] * 3 for _ in range(3)]


def test_highpass_empty_unchanged():
    gm = [[]]
    highpass(gm, 4.0)
    assert gm == [[]]


def test_threshold_sets_dark_pixels():
    gm = [[0, 255], [255, 0]]
    bm = threshold(gm, 0.45)
    assert (bm.width, bm.height) == (2, 2)
    assert bm.to_rows() == [[1, 0], [0, 1]]


def test_threshold_cutoff_is_strict():
    bm = threshold([[127.5, 127.4]], 0.5)
    assert bm.to_rows() == [[0, 1]]


@pytest.mark.parametrize(
    "infile, ext, expected",
    [
        ("foo.pgm", ".pbm", "foo.pbm"),
        ("foo", ".pbm", "foo.pbm"),
        ("foo.pbm", ".pbm", "foo.pbm-out"),
        ("-", ".pbm", "-"),
        ("a.b.c", ".pgm", "a.b.pgm"),
    ],
)
def test_make_outfilename(infile, ext, expected):
    assert make_outfilename(infile, ext) == expected


def test_defaults():
    opts = parse_options([])
    assert opts == Options()
    assert opts.lam == 4.0
    assert opts.scale == 2
    assert opts.level == 0.45
    assert opts.outext == ".pbm"


def test_reset_option():
    opts = parse_options(["-x"])
    assert not opts.highpass
    assert opts.scale == 1
    assert not opts.bilevel
    assert opts.outext == ".pgm"


def test_options_and_files():
    opts = parse_options(["a.pgm", "-f", "3", "-i", "b.pgm", "-o", "out.pbm"])
    assert opts.infiles == ["a.pgm", "b.pgm"]
    assert opts.lam == 3.0
    assert opts.invert
    assert opts.outfile == "out.pbm"


def test_clustered_short_options():
    opts = parse_options(["-n1gs3"])
    assert not opts.highpass
    assert opts.linear
    assert not opts.bilevel
    assert opts.scale == 3


def test_scale_bases():
    assert parse_options(["-s", "0x10"]).scale == 16
    assert parse_options(["-s", "010"]).scale == 8


def test_long_options_and_prefixes():
    opts = parse_options(["--grey", "--output=x.pgm", "--blur", "2", "--lin"])
    assert not opts.bilevel
    assert opts.outfile == "x.pgm"
    assert opts.lowpass and opts.lam1 == 2.0
    assert opts.linear


def test_threshold_option_restores_bilevel():
    opts = parse_options(["-g", "-t", "0.5"])
    assert opts.bilevel
    assert opts.outext == ".pbm"
    assert opts.level == 0.5


def test_help_stops_parsing():
    opts = parse_options(["-h", "-s", "bad"])
    assert opts.action == "help"


def test_double_dash_ends_options():
    opts = parse_options(["--", "-i"])
    assert opts.infiles == ["-i"]
    assert not opts.invert


@pytest.mark.parametrize(
    "argv",
    [
        ["-f", "-1"],
        ["-f", "abc"],
        ["-b", "-2"],
        ["-s", "0"],
        ["-s", "1.5"],
        ["-t", "-0.1"],
        ["-q"],
        ["-o"],
        ["--bogus"],
        ["--l"],
        ["--invert=1"],
    ],
)
def test_invalid_options(argv):
    with pytest.raises(OptionError):
        parse_options(argv)