"""Text progress bars drawn on a terminal stream."""

from __future__ import annotations

import math
import sys
from typing import TextIO

_COL0 = "\033[G"  # move the cursor back to column 0
_TICKS = 40


def bar_label(filename: str, count: int) -> str:
    """Label shown before a progress bar: the file's base name, or a page number."""
    if count != 0:
        return f" (p.{count + 1}):"
    name = filename.rsplit("/", 1)[-1]
    if len(name) > 20:
        name = name[:17] + "..."
    return name + ":"


def _ticks(d: float) -> int:
    # the small offset makes rounding errors still end on a full bar
    return int(math.floor(d * _TICKS + 0.01))


class VT100ProgressBar:
    """A progress bar redrawn in place with VT100 control codes."""

    def __init__(self, filename: str, count: int = 0, stream: TextIO | None = None) -> None:
        self.name = bar_label(filename, count)
        self.stream = stream if stream is not None else sys.stderr
        self.dnext = 0.0
        self(0.0)

    def __call__(self, d: float) -> None:
        """Show progress d in [0, 1] if it moved the bar forward."""
        if d < self.dnext:
            return
        tick = _ticks(d)
        perc = int(math.floor(d * 100 + 0.025))
        self.stream.write(f"{self.name:<21} |{'=' * tick:<40}| {perc}% {_COL0}")
        self.stream.flush()
        self.dnext = (tick + 0.995) / _TICKS

    def close(self) -> None:
        """Finish the bar's line."""
        self.stream.write("\n")
        self.stream.flush()

    def __enter__(self) -> VT100ProgressBar:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class SimplifiedProgressBar:
    """A progress bar for dumb terminals that only appends characters."""

    def __init__(self, filename: str, count: int = 0, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stderr
        self.n = 0
        self.dnext = 0.0
        self.stream.write(f"{bar_label(filename, count):<21} |")
        self(0.0)

    def __call__(self, d: float) -> None:
        """Extend the bar to progress d in [0, 1]."""
        if d < self.dnext:
            return
        tick = _ticks(d)
        if tick > self.n:
            self.stream.write("=" * (tick - self.n))
            self.n = tick
        self.stream.flush()
        self.dnext = (tick + 0.995) / _TICKS

    def close(self) -> None:
        """Complete the bar and end its line."""
        self(1.0)
        self.stream.write("| 100%\n")
        self.stream.flush()

    def __enter__(self) -> SimplifiedProgressBar:
        return self

    def __exit__(self, *exc) -> None:
        self.close()