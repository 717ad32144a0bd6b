"""Point types and small integer/bit helpers used throughout the tracer."""

from __future__ import annotations

from dataclasses import dataclass

_WORD32 = 0xFFFFFFFF


@dataclass(frozen=True, slots=True)
class Point:
    """A point with integer coordinates (a pixel corner)."""

    x: int
    y: int

    def to_dpoint(self) -> DPoint:
        """Return the same point with floating-point coordinates."""
        return DPoint(float(self.x), float(self.y))


@dataclass(frozen=True, slots=True)
class DPoint:
    """A point with floating-point coordinates."""

    x: float
    y: float


def interval(lam: float, a: DPoint, b: DPoint) -> DPoint:
    """Point on segment [a, b] that moves from a to b as lam goes from 0 to 1."""
    return DPoint(a.x + lam * (b.x - a.x), a.y + lam * (b.y - a.y))


def mod(a: int, n: int) -> int:
    """Remainder of a by n in the range 0..n-1, also for negative a."""
    return a % n


def floordiv(a: int, n: int) -> int:
    """Largest integer <= a/n, also for negative a (n > 0)."""
    return a // n


def sign(x: float) -> int:
    """Return 1, -1 or 0 according to the sign of x."""
    return (x > 0) - (x < 0)


def lobit(x: int) -> int:
    """Position of the rightmost 1 bit of a 32-bit integer, or 32 if none."""
    x &= _WORD32
    if x == 0:
        return 32
    return (x & -x).bit_length() - 1


def hibit(x: int) -> int:
    """One plus the position of the leftmost 1 bit of a 32-bit integer, or 0."""
    return (x & _WORD32).bit_length()