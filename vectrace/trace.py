"""Turn decomposed lattice paths into smooth vector curves."""

from __future__ import annotations

from collections.abc import Iterable

from vectrace.model import Params, Path
from vectrace.polygon import adjust_vertices, best_polygon, calc_lon, calc_sums
from vectrace.progress import Progress
from vectrace.smoothing import opticurve, reverse, smooth


def process_path(
    plist: Iterable[Path], params: Params, progress: Progress | None = None
) -> None:
    """Compute the vector curve of every path in plist, in place.

    Each path must carry its lattice points in ``priv``. On return,
    ``path.curve`` holds the final curve and ``path.priv.fcurve`` the
    internal curve it was made from.
    """
    if progress is None:
        progress = Progress()
    paths = list(plist)
    for p in paths:
        if p.priv is None:
            raise ValueError("path has no lattice points to trace")

    total = sum(p.priv.length for p in paths) if progress.callback is not None else 0
    done = 0

    for p in paths:
        pp = p.priv
        calc_sums(pp)
        calc_lon(pp)
        best_polygon(pp)
        adjust_vertices(pp)
        if p.sign == "-":
            # negative paths are traced in the opposite orientation
            reverse(pp.curve)
        smooth(pp.curve, params.alphamax)
        if params.opticurve:
            opticurve(pp, params.opttolerance)
            pp.fcurve = pp.ocurve
        else:
            pp.fcurve = pp.curve
        p.curve = pp.fcurve.to_curve()

        if progress.callback is not None:
            done += pp.length
            progress.update(done / total)

    progress.update(1.0)