"""Corner detection, smoothing and Bezier curve optimization of traced polygons."""

from __future__ import annotations

import math
from dataclasses import dataclass

from vectrace.geometry import DPoint, interval, mod, sign
from vectrace.model import SegmentTag
from vectrace.polygon import PrivCurve, PrivPath

_COS179 = -0.999847695156  # the cosine of 179 degrees


def _dpara(p0: DPoint, p1: DPoint, p2: DPoint) -> float:
    """(p1-p0) x (p2-p0): the signed area of the parallelogram."""
    return (p1.x - p0.x) * (p2.y - p0.y) - (p2.x - p0.x) * (p1.y - p0.y)


def _ddenom(p0: DPoint, p2: DPoint) -> float:
    # direction 90 degrees counterclockwise from p2-p0, restricted to a wind direction
    ry = sign(p2.x - p0.x)
    rx = -sign(p2.y - p0.y)
    return ry * (p2.x - p0.x) - rx * (p2.y - p0.y)


def _cprod(p0: DPoint, p1: DPoint, p2: DPoint, p3: DPoint) -> float:
    """(p1-p0) x (p3-p2)."""
    return (p1.x - p0.x) * (p3.y - p2.y) - (p3.x - p2.x) * (p1.y - p0.y)


def _iprod(p0: DPoint, p1: DPoint, p2: DPoint) -> float:
    """(p1-p0) . (p2-p0)."""
    return (p1.x - p0.x) * (p2.x - p0.x) + (p1.y - p0.y) * (p2.y - p0.y)


def _iprod1(p0: DPoint, p1: DPoint, p2: DPoint, p3: DPoint) -> float:
    """(p1-p0) . (p3-p2)."""
    return (p1.x - p0.x) * (p3.x - p2.x) + (p1.y - p0.y) * (p3.y - p2.y)


def _ddist(p: DPoint, q: DPoint) -> float:
    return math.sqrt((p.x - q.x) ** 2 + (p.y - q.y) ** 2)


def bezier(t: float, p0: DPoint, p1: DPoint, p2: DPoint, p3: DPoint) -> DPoint:
    """Point at parameter t of the cubic Bezier curve (p0, p1, p2, p3)."""
    s = 1 - t
    return DPoint(
        s * s * s * p0.x + 3 * (s * s * t) * p1.x + 3 * (t * t * s) * p2.x + t * t * t * p3.x,
        s * s * s * p0.y + 3 * (s * s * t) * p1.y + 3 * (t * t * s) * p2.y + t * t * t * p3.y,
    )


def tangent(
    p0: DPoint, p1: DPoint, p2: DPoint, p3: DPoint, q0: DPoint, q1: DPoint
) -> float:
    """Parameter in [0, 1] where the convex Bezier curve is tangent to q1-q0.

    Returns -1.0 if there is no such parameter.
    """
    big_a = _cprod(p0, p1, q0, q1)
    big_b = _cprod(p1, p2, q0, q1)
    big_c = _cprod(p2, p3, q0, q1)

    a = big_a - 2 * big_b + big_c
    b = -2 * big_a + 2 * big_b
    c = big_a

    d = b * b - 4 * a * c
    if a == 0 or d < 0:
        return -1.0

    s = math.sqrt(d)
    r1 = (-b + s) / (2 * a)
    r2 = (-b - s) / (2 * a)
    if 0 <= r1 <= 1:
        return r1
    if 0 <= r2 <= 1:
        return r2
    return -1.0


def reverse(curve: PrivCurve) -> None:
    """Reverse the order of the curve's vertices in place."""
    curve.vertex.reverse()


def smooth(curve: PrivCurve, alphamax: float) -> None:
    """Turn the polygon vertices into corners or Bezier segments."""
    m = curve.n
    vertex = curve.vertex
    for i in range(m):
        j = mod(i + 1, m)
        k = mod(i + 2, m)
        p4 = interval(0.5, vertex[k], vertex[j])

        denom = _ddenom(vertex[i], vertex[k])
        if denom != 0.0:
            dd = abs(_dpara(vertex[i], vertex[j], vertex[k]) / denom)
            alpha = (1 - 1.0 / dd) if dd > 1 else 0.0
            alpha = alpha / 0.75
        else:
            alpha = 4 / 3.0
        curve.alpha0[j] = alpha

        if alpha >= alphamax:
            curve.tag[j] = SegmentTag.CORNER
            curve.c[j][1] = vertex[j]
            curve.c[j][2] = p4
        else:
            alpha = min(max(alpha, 0.55), 1.0)
            p2 = interval(0.5 + 0.5 * alpha, vertex[i], vertex[j])
            p3 = interval(0.5 + 0.5 * alpha, vertex[k], vertex[j])
            curve.tag[j] = SegmentTag.CURVETO
            curve.c[j][0] = p2
            curve.c[j][1] = p3
            curve.c[j][2] = p4
        curve.alpha[j] = alpha
        curve.beta[j] = 0.5
    curve.alphacurve = True


@dataclass
class _Opti:
    pen: float
    c: tuple[DPoint, DPoint]
    t: float
    s: float
    alpha: float


def _opti_penalty(
    pp: PrivPath,
    i: int,
    j: int,
    opttolerance: float,
    convc: list[int],
    areac: list[float],
) -> _Opti | None:
    """Best single Bezier fit from i+.5 to j+.5, or None if impossible."""
    curve = pp.curve
    m = curve.n
    vertex = curve.vertex
    cc = curve.c

    if i == j:  # a full loop can never be an opticurve
        return None

    i1 = mod(i + 1, m)
    k1 = mod(i + 1, m)
    conv = convc[k1]
    if conv == 0:
        return None
    d = _ddist(vertex[i], vertex[i1])
    k = k1
    while k != j:
        k1 = mod(k + 1, m)
        k2 = mod(k + 2, m)
        if convc[k1] != conv:
            return None
        if sign(_cprod(vertex[i], vertex[i1], vertex[k1], vertex[k2])) != conv:
            return None
        if (
            _iprod1(vertex[i], vertex[i1], vertex[k1], vertex[k2])
            < d * _ddist(vertex[k1], vertex[k2]) * _COS179
        ):
            return None
        k = k1

    p0 = cc[mod(i, m)][2]
    p1 = vertex[mod(i + 1, m)]
    p2 = vertex[mod(j, m)]
    p3 = cc[mod(j, m)][2]

    area = areac[j] - areac[i]
    area -= _dpara(vertex[0], cc[i][2], cc[j][2]) / 2
    if i >= j:
        area += areac[m]

    a1 = _dpara(p0, p1, p2)
    a2 = _dpara(p0, p1, p3)
    a3 = _dpara(p0, p2, p3)
    a4 = a1 + a3 - a2

    if a2 == a1:
        return None

    t = a3 / (a3 - a4)
    s = a2 / (a2 - a1)
    big_a = a2 * t / 2.0
    if big_a == 0.0:
        return None

    r = area / big_a
    disc = 4 - r / 0.3
    if disc < 0:
        return None
    alpha = 2 - math.sqrt(disc)

    c0 = interval(t * alpha, p0, p1)
    c1 = interval(s * alpha, p3, p2)
    pen = 0.0

    # tangency with edges
    k = mod(i + 1, m)
    while k != j:
        k1 = mod(k + 1, m)
        tt = tangent(p0, c0, c1, p3, vertex[k], vertex[k1])
        if tt < -0.5:
            return None
        pt = bezier(tt, p0, c0, c1, p3)
        dist = _ddist(vertex[k], vertex[k1])
        if dist == 0.0:
            return None
        d1 = _dpara(vertex[k], vertex[k1], pt) / dist
        if abs(d1) > opttolerance:
            return None
        if _iprod(vertex[k], vertex[k1], pt) < 0 or _iprod(vertex[k1], vertex[k], pt) < 0:
            return None
        pen += d1 * d1
        k = k1

    # corners
    k = i
    while k != j:
        k1 = mod(k + 1, m)
        tt = tangent(p0, c0, c1, p3, cc[k][2], cc[k1][2])
        if tt < -0.5:
            return None
        pt = bezier(tt, p0, c0, c1, p3)
        dist = _ddist(cc[k][2], cc[k1][2])
        if dist == 0.0:
            return None
        d1 = _dpara(cc[k][2], cc[k1][2], pt) / dist
        d2 = _dpara(cc[k][2], cc[k1][2], vertex[k1]) / dist
        d2 *= 0.75 * curve.alpha[k1]
        if d2 < 0:
            d1 = -d1
            d2 = -d2
        if d1 < d2 - opttolerance:
            return None
        if d1 < d2:
            pen += (d1 - d2) ** 2
        k = k1

    return _Opti(pen=pen, c=(c0, c1), t=t, s=s, alpha=alpha)


def opticurve(pp: PrivPath, opttolerance: float) -> None:
    """Replace runs of Bezier segments by single segments where possible.

    The result is stored in ``pp.ocurve``.
    """
    curve = pp.curve
    m = curve.n
    vertex = curve.vertex

    convc = [
        sign(_dpara(vertex[mod(i - 1, m)], vertex[i], vertex[mod(i + 1, m)]))
        if curve.tag[i] == SegmentTag.CURVETO
        else 0
        for i in range(m)
    ]

    area = 0.0
    areac = [0.0]
    p0 = vertex[0] if m else DPoint(0.0, 0.0)
    for i in range(m):
        i1 = mod(i + 1, m)
        if curve.tag[i1] == SegmentTag.CURVETO:
            alpha = curve.alpha[i1]
            area += (
                0.3 * alpha * (4 - alpha)
                * _dpara(curve.c[i][2], vertex[i1], curve.c[i1][2]) / 2
            )
            area += _dpara(p0, curve.c[i][2], curve.c[i1][2]) / 2
        areac.append(area)

    pt = [0] * (m + 1)
    pen = [0.0] * (m + 1)
    length = [0] * (m + 1)
    opt: list[_Opti | None] = [None] * (m + 1)
    pt[0] = -1

    for j in range(1, m + 1):
        pt[j] = j - 1
        pen[j] = pen[j - 1]
        length[j] = length[j - 1] + 1
        for i in range(j - 2, -1, -1):
            o = _opti_penalty(pp, i, mod(j, m), opttolerance, convc, areac)
            if o is None:
                break
            if length[j] > length[i] + 1 or (
                length[j] == length[i] + 1 and pen[j] > pen[i] + o.pen
            ):
                pt[j] = i
                pen[j] = pen[i] + o.pen
                length[j] = length[i] + 1
                opt[j] = o

    om = length[m]
    ocurve = PrivCurve.with_size(om)
    s = [0.0] * om
    t = [0.0] * om

    j = m
    for i in range(om - 1, -1, -1):
        jm = mod(j, m)
        o = opt[j]
        if pt[j] == j - 1 or o is None:
            ocurve.tag[i] = curve.tag[jm]
            ocurve.c[i] = list(curve.c[jm])
            ocurve.vertex[i] = curve.vertex[jm]
            ocurve.alpha[i] = curve.alpha[jm]
            ocurve.alpha0[i] = curve.alpha0[jm]
            ocurve.beta[i] = curve.beta[jm]
            s[i] = t[i] = 1.0
        else:
            ocurve.tag[i] = SegmentTag.CURVETO
            ocurve.c[i] = [o.c[0], o.c[1], curve.c[jm][2]]
            ocurve.vertex[i] = interval(o.s, curve.c[jm][2], curve.vertex[jm])
            ocurve.alpha[i] = o.alpha
            ocurve.alpha0[i] = o.alpha
            s[i] = o.s
            t[i] = o.t
        j = pt[j]

    for i in range(om):
        i1 = mod(i + 1, om)
        denom = s[i] + t[i1]
        ocurve.beta[i] = s[i] / denom if denom != 0 else math.nan
    ocurve.alphacurve = True

    pp.ocurve = ocurve