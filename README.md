# vectrace

vectrace fits smooth closed outlines, made of cubic Bézier segments and
sharp corners, to closed paths on the integer pixel grid. It also has
helpers for preparing greymaps before tracing: lowpass and highpass
filtering, thresholding to a bitmap, and option parsing for those steps.

The package is pure Python. It needs nothing outside the standard library.

## Modules

- `vectrace.geometry`: `Point` (integer) and `DPoint` (float) points.
  Also the helpers `interval`, `mod` (cyclic, also for negative values),
  `floordiv` (rounds toward minus infinity), `sign`, and the 32-bit bit
  helpers `lobit` and `hibit`.
- `vectrace.bitmap`: `Bitmap`, a width × height grid of bits with one byte
  per pixel. Create one with `Bitmap(w, h)` or `Bitmap.from_rows(rows)`.
  It has `get`, `put`, `clear`, `copy`, `invert`, `flip`, `resize` and
  `to_rows`. Pixels outside the bitmap read as unset, and writes to them
  are ignored.
- `vectrace.model`: the data model.
  - Parameters: `Params`, `ProgressSettings` and `default_params()`.
  - Enums: `TurnPolicy`, `SegmentTag` and `TraceStatus`.
  - Results: `Segment`, `Curve`, `Path` and `TraceState`.
  - `version()`, which returns the library version string.
- `vectrace.progress`: `Progress`. It scales progress values into a range,
  splits that range into subranges (`subrange`, `end_subrange`), and skips
  updates smaller than `epsilon`.
- `vectrace.polygon`: the first tracing stages.
  - `calc_sums` computes prefix sums.
  - `calc_lon` finds the longest straight subpath from each point.
  - `best_polygon` finds the optimal polygon.
  - `adjust_vertices` places the vertices.
  - It also defines the internal `PrivPath` and `PrivCurve`. Use
    `PrivCurve.to_curve()` to get a public `Curve`.
- `vectrace.smoothing`: `smooth` detects corners and makes Bézier
  segments. `opticurve` merges runs of Bézier segments. `reverse`,
  `bezier` and `tangent` are also here.
- `vectrace.trace`: `process_path(plist, params, progress=None)` runs every
  stage over a list of paths. It changes the paths in place.
- `vectrace.trans`: `Transform`, an immutable coordinate system with a
  bounding box. It has `from_rect`, `apply`, `rotate`, `rescale` and
  `scale_to_size`. Each of these returns a new `Transform`.
- `vectrace.progress_bar`: `VT100ProgressBar` and `SimplifiedProgressBar`.
  Both write to a stream (standard error by default). Both are callables,
  so an instance can serve as a `ProgressSettings.callback`. Both are
  context managers, and both have `close()`. `bar_label` builds the label
  shown before the bar.
- `vectrace.mkbitmap`: greymap helpers. A greymap here is a list of rows of
  grey values, with 0 for black and 255 for white.
  - `lowpass(greymap, lam)` applies an approximate Gaussian blur in place.
  - `highpass(greymap, lam)` subtracts a blurred copy in place and
    recentres the result on 128.
  - `threshold(greymap, c)` returns a `Bitmap`. A pixel is set where its
    grey value is below `c * 255`.
  - `make_outfilename` and `parse_options` are also here.

## Tracing a path

`process_path` works on `Path` objects whose `priv` is a `PrivPath`. The
`PrivPath` holds the closed sequence of lattice points of one outline, and
point 0 must be a corner of the outline. After the call:

- `path.curve` holds the final `Curve`, a list of `Segment`s tagged
  `SegmentTag.CURVETO` or `SegmentTag.CORNER`.
- `path.priv.fcurve` holds the internal curve that `path.curve` was made
  from.
- For paths with sign `"-"`, the orientation is reversed before
  smoothing.

```python
from vectrace.geometry import Point
from vectrace.model import Path, default_params
from vectrace.polygon import PrivPath
from vectrace.trace import process_path

outline = [Point(x, y) for x, y in
           [(0, 0), (1, 0), (2, 0), (3, 0), (3, 1), (3, 2), (3, 3),
            (2, 3), (1, 3), (0, 3), (0, 2), (0, 1)]]
path = Path(sign="+", priv=PrivPath(pt=outline))
process_path([path], default_params())
for segment in path.curve:
    print(segment.tag.name, segment.end)
```

## Parameters

`default_params()` returns a new `Params` on each call with these values:

- `turdsize` = 2
- `turnpolicy` = `TurnPolicy.MINORITY`
- `alphamax` = 1.0 (the corner threshold)
- `opticurve` = True
- `opttolerance` = 0.2

`process_path` uses `alphamax`, `opticurve` and `opttolerance`.
`turdsize` and `turnpolicy` are only stored. They belong to bitmap
decomposition, which this package does not do.

## Small examples

```python
from vectrace.geometry import mod, floordiv, lobit, hibit

mod(-1, 5)        # 4
floordiv(-1, 2)   # -1
lobit(0)          # 32
hibit(0)          # 0
```

```python
from vectrace.mkbitmap import make_outfilename, parse_options

make_outfilename("scan.pgm", ".pbm")   # "scan.pbm"
make_outfilename("scan.pbm", ".pbm")   # "scan.pbm-out"
make_outfilename("-", ".pbm")          # "-"

opts = parse_options(["-f", "8", "-t", "0.5", "scan.pgm"])
opts.lam, opts.level, opts.infiles     # (8.0, 0.5, ["scan.pgm"])
```

## Options

`parse_options(argv)` returns an `Options` value. It takes these short and
long options, processed in order:

- `-h/--help`, `-v/--version` and `-l/--license` stop parsing. They set
  `Options.action` to `"help"`, `"version"` or `"license"`.
- `-o/--output <file>` sets the output file.
- `-x/--reset` turns off the defaults: no inversion, no highpass filter,
  scale 1, and grey output.
- `-i/--invert` inverts the input.
- `-f/--filter <n>` turns on the highpass filter with radius n.
  `-n/--nofilter` turns it off.
- `-b/--blur <n>` turns on the lowpass filter with radius n.
- `-s/--scale <n>` sets the scale. n is decimal, `0x` hex, or
  leading-zero octal.
- `-1/--linear` and `-3/--cubic` choose the interpolation.
- `-t/--threshold <n>` sets the threshold. `-g/--grey` selects grey
  output.

Long options may be abbreviated to any unique prefix. The defaults are:

- highpass filter with radius 4
- scale 2
- cubic interpolation
- threshold 0.45
- output extension `.pbm`

An invalid value raises `vectrace.mkbitmap.OptionError`, which is a
`ValueError`.

## What the package does not do

- It has no command-line program.
- It reads and writes no image files (PNM, BMP or others).
- It does not decompose a bitmap into paths. You must supply the lattice
  points of each outline yourself.
- It has no scaling or interpolation functions. `Options.scale` and
  `Options.linear` are recorded but not acted on.
- It has no renderer and no backend that writes vector files.

## Running the tests

Install the `test` extra, then run `pytest` from the project directory.