"""Straight subpaths and optimal polygon fitting for closed lattice paths.

A path is a closed sequence of integer points. The stages here compute
prefix sums, the longest straight subpath from each point, the optimal
polygon through those points and finally the adjusted polygon
vertices.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from vectrace.geometry import DPoint, Point, floordiv, mod, sign
from vectrace.model import Curve, Segment, SegmentTag

_INFTY = 10000000  # longer than any path; need not be really infinite

_Matrix = list[list[float]]


@dataclass
class Sums:
    """Prefix sums of coordinates and their products along a path."""

    x: float = 0.0
    y: float = 0.0
    x2: float = 0.0
    xy: float = 0.0
    y2: float = 0.0


@dataclass
class PrivCurve:
    """Internal curve data: segments plus polygon vertices and smoothing parameters."""

    tag: list[SegmentTag] = field(default_factory=list)
    c: list[list[DPoint]] = field(default_factory=list)
    vertex: list[DPoint] = field(default_factory=list)
    alpha: list[float] = field(default_factory=list)
    alpha0: list[float] = field(default_factory=list)
    beta: list[float] = field(default_factory=list)
    alphacurve: bool = False

    @classmethod
    def with_size(cls, n: int) -> PrivCurve:
        """Return a curve of n zeroed segments."""
        origin = DPoint(0.0, 0.0)
        return cls(
            tag=[SegmentTag.CORNER] * n,
            c=[[origin, origin, origin] for _ in range(n)],
            vertex=[origin] * n,
            alpha=[0.0] * n,
            alpha0=[0.0] * n,
            beta=[0.0] * n,
        )

    @property
    def n(self) -> int:
        return len(self.vertex)

    def to_curve(self) -> Curve:
        """Return the public curve made of this curve's tags and control points."""
        return Curve(
            [Segment(SegmentTag(t), (c[0], c[1], c[2])) for t, c in zip(self.tag, self.c)]
        )


@dataclass
class PrivPath:
    """Internal data computed for one closed path during tracing."""

    pt: list[Point]
    sums: list[Sums] = field(default_factory=list)
    x0: int = 0
    y0: int = 0
    lon: list[int] = field(default_factory=list)
    m: int = 0
    po: list[int] = field(default_factory=list)
    curve: PrivCurve = field(default_factory=PrivCurve)
    ocurve: PrivCurve = field(default_factory=PrivCurve)
    fcurve: PrivCurve | None = None

    @property
    def length(self) -> int:
        return len(self.pt)


def _xprod(p1: tuple[int, int], p2: tuple[int, int]) -> int:
    return p1[0] * p2[1] - p1[1] * p2[0]


def _cyclic(a: int, b: int, c: int) -> bool:
    """True if a <= b < c < a in a cyclic sense."""
    if a <= c:
        return a <= b < c
    return a <= b or b < c


def _quadform(q: _Matrix, w: DPoint) -> float:
    v = (w.x, w.y, 1.0)
    return sum(v[i] * q[i][j] * v[j] for i in range(3) for j in range(3))


def calc_sums(pp: PrivPath) -> None:
    """Fill in the origin and prefix sums of a path."""
    if not pp.pt:
        raise ValueError("cannot compute sums of an empty path")
    pp.x0 = pp.pt[0].x
    pp.y0 = pp.pt[0].y
    acc = Sums()
    sums = [acc]
    for p in pp.pt:
        x = p.x - pp.x0
        y = p.y - pp.y0
        acc = Sums(
            acc.x + x,
            acc.y + y,
            acc.x2 + float(x) * x,
            acc.xy + float(x) * y,
            acc.y2 + float(y) * y,
        )
        sums.append(acc)
    pp.sums = sums


def pointslope(pp: PrivPath, i: int, j: int) -> tuple[DPoint, DPoint]:
    """Return the center and direction of the best line through points i..j."""
    n = pp.length
    sums = pp.sums
    r = j // n - i // n
    j %= n
    i %= n

    x = sums[j + 1].x - sums[i].x + r * sums[n].x
    y = sums[j + 1].y - sums[i].y + r * sums[n].y
    x2 = sums[j + 1].x2 - sums[i].x2 + r * sums[n].x2
    xy = sums[j + 1].xy - sums[i].xy + r * sums[n].xy
    y2 = sums[j + 1].y2 - sums[i].y2 + r * sums[n].y2
    k = float(j + 1 - i + r * n)

    ctr = DPoint(x / k, y / k)

    a = (x2 - x * x / k) / k
    b = (xy - x * y / k) / k
    c = (y2 - y * y / k) / k

    lambda2 = (a + c + math.sqrt((a - c) * (a - c) + 4 * b * b)) / 2
    a -= lambda2
    c -= lambda2

    if abs(a) >= abs(c):
        length = math.sqrt(a * a + b * b)
        direction = DPoint(-b / length, a / length) if length != 0 else None
    else:
        length = math.sqrt(c * c + b * b)
        direction = DPoint(-c / length, b / length) if length != 0 else None
    if direction is None:
        # the two eigenvalues can coincide, e.g. for four points
        direction = DPoint(0.0, 0.0)
    return ctr, direction


def calc_lon(pp: PrivPath) -> None:
    """For each point, find the furthest index reachable by a straight subpath."""
    pt = pp.pt
    n = pp.length
    if n == 0:
        raise ValueError("cannot compute straight subpaths of an empty path")

    # nc[i]: furthest future point joined to i by a horizontal or vertical run
    nc = [0] * n
    k = 0
    for i in range(n - 1, -1, -1):
        if pt[i].x != pt[k].x and pt[i].y != pt[k].y:
            k = i + 1
        nc[i] = k

    pivk = [0] * n
    for i in range(n - 1, -1, -1):
        ct = [0, 0, 0, 0]
        nxt = pt[mod(i + 1, n)]
        ct[(3 + 3 * (nxt.x - pt[i].x) + (nxt.y - pt[i].y)) // 2] += 1

        con0 = (0, 0)
        con1 = (0, 0)

        k = nc[i]
        k1 = i
        found = False
        while True:
            direction = (3 + 3 * sign(pt[k].x - pt[k1].x) + sign(pt[k].y - pt[k1].y)) // 2
            ct[direction] += 1

            if all(ct):
                pivk[i] = k1
                found = True
                break

            cur = (pt[k].x - pt[i].x, pt[k].y - pt[i].y)
            if _xprod(con0, cur) < 0 or _xprod(con1, cur) > 0:
                break

            cx, cy = cur
            if abs(cx) > 1 or abs(cy) > 1:
                off = (
                    cx + (1 if cy >= 0 and (cy > 0 or cx < 0) else -1),
                    cy + (1 if cx <= 0 and (cx < 0 or cy < 0) else -1),
                )
                if _xprod(con0, off) >= 0:
                    con0 = off
                off = (
                    cx + (1 if cy <= 0 and (cy < 0 or cx < 0) else -1),
                    cy + (1 if cx >= 0 and (cx > 0 or cy < 0) else -1),
                )
                if _xprod(con1, off) <= 0:
                    con1 = off
            k1 = k
            k = nc[k1]
            if not _cyclic(k, i, k1):
                break

        if found:
            continue

        # k1 was the last corner satisfying the constraint, k the first
        # violating it; find the last point along k1..k that satisfies it.
        dk = (sign(pt[k].x - pt[k1].x), sign(pt[k].y - pt[k1].y))
        cur = (pt[k1].x - pt[i].x, pt[k1].y - pt[i].y)
        a = _xprod(con0, cur)
        b = _xprod(con0, dk)
        c = _xprod(con1, cur)
        d = _xprod(con1, dk)
        j = _INFTY
        if b < 0:
            j = floordiv(a, -b)
        if d > 0:
            j = min(j, floordiv(-c, d))
        pivk[i] = mod(k1 + j, n)

    lon = [0] * n
    j = pivk[n - 1]
    lon[n - 1] = j
    for i in range(n - 2, -1, -1):
        if _cyclic(i + 1, pivk[i], j):
            j = pivk[i]
        lon[i] = j

    i = n - 1
    while _cyclic(mod(i + 1, n), j, lon[i]):
        lon[i] = j
        i -= 1

    pp.lon = lon


def penalty3(pp: PrivPath, i: int, j: int) -> float:
    """Penalty of a polygon edge from point i to point j (0 <= i < j <= n)."""
    n = pp.length
    pt = pp.pt
    sums = pp.sums

    if j >= n:
        j -= n
        x = sums[j + 1].x - sums[i].x + sums[n].x
        y = sums[j + 1].y - sums[i].y + sums[n].y
        x2 = sums[j + 1].x2 - sums[i].x2 + sums[n].x2
        xy = sums[j + 1].xy - sums[i].xy + sums[n].xy
        y2 = sums[j + 1].y2 - sums[i].y2 + sums[n].y2
        k = float(j + 1 - i + n)
    else:
        x = sums[j + 1].x - sums[i].x
        y = sums[j + 1].y - sums[i].y
        x2 = sums[j + 1].x2 - sums[i].x2
        xy = sums[j + 1].xy - sums[i].xy
        y2 = sums[j + 1].y2 - sums[i].y2
        k = float(j + 1 - i)

    px = (pt[i].x + pt[j].x) / 2.0 - pt[0].x
    py = (pt[i].y + pt[j].y) / 2.0 - pt[0].y
    ey = pt[j].x - pt[i].x
    ex = -(pt[j].y - pt[i].y)

    a = (x2 - 2 * x * px) / k + px * px
    b = (xy - x * py - y * px) / k + px * py
    c = (y2 - 2 * y * py) / k + py * py

    s = ex * ex * a + 2 * ex * ey * b + ey * ey * c
    return math.sqrt(s) if s >= 0 else math.nan


def best_polygon(pp: PrivPath) -> None:
    """Find the optimal polygon and store its size and point indices.

    Assumes point 0 is a polygon vertex.
    """
    n = pp.length
    if len(pp.lon) != n:
        raise ValueError("straight subpaths must be computed before the polygon")

    pen = [0.0] * (n + 1)
    prev = [0] * (n + 1)
    clip0 = [0] * n
    clip1 = [0] * (n + 1)
    seg0 = [0] * (n + 1)
    seg1 = [0] * (n + 1)

    for i in range(n):
        c = mod(pp.lon[mod(i - 1, n)] - 1, n)
        if c == i:
            c = mod(i + 1, n)
        clip0[i] = n if c < i else c

    # j <= clip0[i] iff clip1[j] <= i
    j = 1
    for i in range(n):
        while j <= clip0[i]:
            clip1[j] = i
            j += 1

    # seg0[j]: longest path from 0 with j segments
    i = 0
    j = 0
    while i < n:
        seg0[j] = i
        i = clip0[i]
        j += 1
    seg0[j] = n
    m = j

    # seg1[j]: longest path to n with m-j segments
    i = n
    for j in range(m, 0, -1):
        seg1[j] = i
        i = clip1[i]
    seg1[0] = 0

    pen[0] = 0.0
    for j in range(1, m + 1):
        for i in range(seg1[j], seg0[j] + 1):
            best = -1.0
            for k in range(seg0[j - 1], clip1[i] - 1, -1):
                thispen = penalty3(pp, k, i) + pen[k]
                if best < 0 or thispen < best:
                    prev[i] = k
                    best = thispen
            pen[i] = best

    po = [0] * m
    i = n
    j = m - 1
    while i > 0:
        i = prev[i]
        po[j] = i
        j -= 1

    pp.m = m
    pp.po = po


def adjust_vertices(pp: PrivPath) -> None:
    """Place each polygon vertex near the intersection of its two adjacent edges.

    Each vertex stays within the unit square around its lattice point.
    """
    m = pp.m
    po = pp.po
    n = pp.length
    pt = pp.pt
    x0 = pp.x0
    y0 = pp.y0

    lines = []
    for i in range(m):
        j = po[mod(i + 1, m)]
        j = mod(j - po[i], n) + po[i]
        lines.append(pointslope(pp, po[i], j))

    # each segment as a singular quadratic form measuring squared distance
    q: list[_Matrix] = []
    for ctr, direction in lines:
        d = direction.x**2 + direction.y**2
        if d == 0.0:
            q.append([[0.0] * 3 for _ in range(3)])
        else:
            v = (direction.y, -direction.x, direction.x * ctr.y - direction.y * ctr.x)
            q.append([[v[l] * v[k] / d for k in range(3)] for l in range(3)])

    curve = PrivCurve.with_size(m)
    for i in range(m):
        s = DPoint(float(pt[po[i]].x - x0), float(pt[po[i]].y - y0))
        j = mod(i - 1, m)
        Q = [[q[j][l][k] + q[i][l][k] for k in range(3)] for l in range(3)]

        while True:
            det = Q[0][0] * Q[1][1] - Q[0][1] * Q[1][0]
            if det != 0.0:
                w = DPoint(
                    (-Q[0][2] * Q[1][1] + Q[1][2] * Q[0][1]) / det,
                    (Q[0][2] * Q[1][0] - Q[1][2] * Q[0][0]) / det,
                )
                break
            # lines are parallel: add an orthogonal axis through the square's center
            if Q[0][0] > Q[1][1]:
                v0, v1 = -Q[0][1], Q[0][0]
            elif Q[1][1]:
                v0, v1 = -Q[1][1], Q[1][0]
            else:
                v0, v1 = 1.0, 0.0
            d = v0 * v0 + v1 * v1
            v = (v0, v1, -v1 * s.y - v0 * s.x)
            for l in range(3):
                for k in range(3):
                    Q[l][k] += v[l] * v[k] / d

        if abs(w.x - s.x) <= 0.5 and abs(w.y - s.y) <= 0.5:
            curve.vertex[i] = DPoint(w.x + x0, w.y + y0)
            continue

        # minimum lies outside the unit square: search its boundary
        best = _quadform(Q, s)
        xmin, ymin = s.x, s.y

        if Q[0][0] != 0.0:
            for z in range(2):
                wy = s.y - 0.5 + z
                wx = -(Q[0][1] * wy + Q[0][2]) / Q[0][0]
                cand = _quadform(Q, DPoint(wx, wy))
                if abs(wx - s.x) <= 0.5 and cand < best:
                    best, xmin, ymin = cand, wx, wy

        if Q[1][1] != 0.0:
            for z in range(2):
                wx = s.x - 0.5 + z
                wy = -(Q[1][0] * wx + Q[1][2]) / Q[1][1]
                cand = _quadform(Q, DPoint(wx, wy))
                if abs(wy - s.y) <= 0.5 and cand < best:
                    best, xmin, ymin = cand, wx, wy

        for l in range(2):
            for k in range(2):
                wx = s.x - 0.5 + l
                wy = s.y - 0.5 + k
                cand = _quadform(Q, DPoint(wx, wy))
                if cand < best:
                    best, xmin, ymin = cand, wx, wy

        curve.vertex[i] = DPoint(xmin + x0, ymin + y0)

    pp.curve = curve