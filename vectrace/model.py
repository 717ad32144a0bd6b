"""Tracing parameters and the vector data produced by tracing."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from vectrace.geometry import DPoint


class TurnPolicy(IntEnum):
    """How ambiguous turns are resolved during path decomposition."""

    BLACK = 0
    WHITE = 1
    LEFT = 2
    RIGHT = 3
    MINORITY = 4
    MAJORITY = 5
    RANDOM = 6


class SegmentTag(IntEnum):
    """Kind of a curve segment."""

    CURVETO = 1
    CORNER = 2


class TraceStatus(IntEnum):
    """Outcome of a trace."""

    OK = 0
    INCOMPLETE = 1


@dataclass
class ProgressSettings:
    """Progress reporting: callback receives values in [min, max]."""

    callback: Callable[[float], None] | None = None
    min: float = 0.0
    max: float = 1.0
    epsilon: float = 0.0


@dataclass
class Params:
    """Tracing parameters."""

    turdsize: int = 2
    turnpolicy: TurnPolicy = TurnPolicy.MINORITY
    alphamax: float = 1.0
    opticurve: bool = True
    opttolerance: float = 0.2
    progress: ProgressSettings = field(default_factory=ProgressSettings)


@dataclass
class Segment:
    """One segment of a closed curve.

    For a CURVETO segment, ``c`` holds two Bezier control points and the
    end point. For a CORNER segment, ``c[0]`` is unused, ``c[1]`` is the
    corner vertex and ``c[2]`` the end point.
    """

    tag: SegmentTag
    c: tuple[DPoint, DPoint, DPoint]

    @property
    def end(self) -> DPoint:
        return self.c[2]


@dataclass
class Curve:
    """A closed curve made of segments."""

    segments: list[Segment] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __getitem__(self, index: int) -> Segment:
        return self.segments[index]


@dataclass
class Path:
    """A signed traced path with its vector data and child paths."""

    area: int = 0
    sign: str = "+"
    curve: Curve = field(default_factory=Curve)
    children: list[Path] = field(default_factory=list)
    priv: Any = None

    def __post_init__(self) -> None:
        if self.sign not in ("+", "-"):
            raise ValueError(f"path sign must be '+' or '-', not {self.sign!r}")


@dataclass
class TraceState:
    """Result of tracing: a status and the list of paths."""

    status: TraceStatus = TraceStatus.OK
    paths: list[Path] = field(default_factory=list)


def default_params() -> Params:
    """Return a fresh set of default tracing parameters."""
    return Params()


def version() -> str:
    """Return the library version string."""
    return ""