"""Affine coordinate transformations together with a bounding box."""

from __future__ import annotations

import math
from dataclasses import dataclass

from vectrace.geometry import DPoint


@dataclass(frozen=True)
class Transform:
    """A coordinate system: bounding box, origin and basis vectors."""

    bb: tuple[float, float]
    orig: tuple[float, float]
    x: tuple[float, float]
    y: tuple[float, float]
    scalex: float = 1.0
    scaley: float = 1.0

    @classmethod
    def from_rect(cls, w: float, h: float) -> Transform:
        """Standard cartesian coordinate system for a w x h rectangle."""
        return cls(bb=(w, h), orig=(0.0, 0.0), x=(1.0, 0.0), y=(0.0, 1.0))

    def apply(self, p: DPoint) -> DPoint:
        """Map a point into this coordinate system."""
        return DPoint(
            self.orig[0] + p.x * self.x[0] + p.y * self.y[0],
            self.orig[1] + p.x * self.x[1] + p.y * self.y[1],
        )

    def rotate(self, alpha: float) -> Transform:
        """Rotate counterclockwise by alpha degrees, enlarging the bounding box to fit."""
        s = math.sin(alpha / 180 * math.pi)
        c = math.cos(alpha / 180 * math.pi)

        x0 = c * self.bb[0]
        x1 = s * self.bb[0]
        y0 = -s * self.bb[1]
        y1 = c * self.bb[1]

        o0 = -min(x0, 0) - min(y0, 0)
        o1 = -min(x1, 0) - min(y1, 0)

        return Transform(
            bb=(abs(x0) + abs(y0), abs(x1) + abs(y1)),
            orig=(
                o0 + c * self.orig[0] - s * self.orig[1],
                o1 + s * self.orig[0] + c * self.orig[1],
            ),
            x=(c * self.x[0] - s * self.x[1], s * self.x[0] + c * self.x[1]),
            y=(c * self.y[0] - s * self.y[1], s * self.y[0] + c * self.y[1]),
            scalex=self.scalex,
            scaley=self.scaley,
        )

    def rescale(self, sc: float) -> Transform:
        """Scale the whole coordinate system by sc >= 0."""
        return Transform(
            bb=(self.bb[0] * sc, self.bb[1] * sc),
            orig=(self.orig[0] * sc, self.orig[1] * sc),
            x=(self.x[0] * sc, self.x[1] * sc),
            y=(self.y[0] * sc, self.y[1] * sc),
            scalex=self.scalex * sc,
            scaley=self.scaley * sc,
        )

    def scale_to_size(self, w: float, h: float) -> Transform:
        """Scale to a w x h bounding box; a negative size mirrors that axis."""
        xsc = w / self.bb[0]
        ysc = h / self.bb[1]
        bb0, bb1 = w, h
        orig0 = self.orig[0] * xsc
        orig1 = self.orig[1] * ysc
        if w < 0:
            orig0 -= w
            bb0 = -w
        if h < 0:
            orig1 -= h
            bb1 = -h
        return Transform(
            bb=(bb0, bb1),
            orig=(orig0, orig1),
            x=(self.x[0] * xsc, self.x[1] * ysc),
            y=(self.y[0] * xsc, self.y[1] * ysc),
            scalex=self.scalex * xsc,
            scaley=self.scaley * ysc,
        )