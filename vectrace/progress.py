"""Progress reporting with nested subranges and a granularity threshold."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from vectrace.model import ProgressSettings


@dataclass
class Progress:
    """Progress state that scales values in [0, 1] into [min, max]."""

    callback: Callable[[float], None] | None = None
    min: float = 0.0
    max: float = 1.0
    epsilon: float = 0.0
    b: float = 0.0
    d_prev: float = 0.0

    @classmethod
    def from_settings(cls, settings: ProgressSettings) -> Progress:
        """Create a progress state from user settings."""
        return cls(
            callback=settings.callback,
            min=settings.min,
            max=settings.max,
            epsilon=settings.epsilon,
            d_prev=settings.min,
        )

    def update(self, d: float) -> None:
        """Report progress d in [0, 1], skipping steps smaller than epsilon."""
        if self.callback is None:
            return
        d_scaled = self.min * (1 - d) + self.max * d
        if d == 1.0 or d_scaled >= self.d_prev + self.epsilon:
            self.callback(d_scaled)
            self.d_prev = d_scaled

    def subrange(self, a: float, b: float) -> Progress:
        """Return a progress state for the part [a, b] of this range."""
        if self.callback is None:
            return Progress(callback=None)
        lo = self.min * (1 - a) + self.max * a
        hi = self.min * (1 - b) + self.max * b
        if hi - lo < self.epsilon:
            return Progress(callback=None, b=b)
        return Progress(
            callback=self.callback,
            min=lo,
            max=hi,
            epsilon=self.epsilon,
            d_prev=self.d_prev,
        )

    def end_subrange(self, sub: Progress) -> None:
        """Finish a subrange obtained from :meth:`subrange`."""
        if self.callback is None:
            return
        if sub.callback is None:
            self.update(sub.b)
        else:
            self.d_prev = sub.d_prev