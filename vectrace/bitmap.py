"""A bilevel bitmap with pixel access, inversion, flipping and resizing."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class Bitmap:
    """A width x height grid of bits.

    Rows are kept in storage order; after :meth:`flip` the view onto
    that storage is upside down, which affects how :meth:`resize`
    truncates or extends the image.
    """

    __slots__ = ("_width", "_height", "_rows", "_flipped")

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"bitmap dimensions must be non-negative: {width}x{height}")
        self._width = width
        self._height = height
        self._rows = [bytearray(width) for _ in range(height)]
        self._flipped = False

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[int]]) -> Bitmap:
        """Build a bitmap from rows of truthy/falsy values, row 0 first."""
        materialised = [bytearray(1 if v else 0 for v in row) for row in rows]
        width = len(materialised[0]) if materialised else 0
        if any(len(row) != width for row in materialised):
            raise ValueError("all rows must have the same length")
        bm = cls(width, len(materialised))
        bm._rows = materialised
        return bm

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _row(self, y: int) -> bytearray:
        return self._rows[self._height - 1 - y if self._flipped else y]

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def get(self, x: int, y: int) -> bool:
        """Return the pixel at (x, y); pixels outside the bitmap are unset."""
        if not self._inside(x, y):
            return False
        return bool(self._row(y)[x])

    def put(self, x: int, y: int, value) -> None:
        """Set or clear the pixel at (x, y); outside the bitmap nothing happens."""
        if self._inside(x, y):
            self._row(y)[x] = 1 if value else 0

    def clear(self, value) -> None:
        """Set every pixel to value."""
        fill = 1 if value else 0
        for row in self._rows:
            row[:] = bytes([fill]) * self._width

    def copy(self) -> Bitmap:
        """Return an independent copy with the same pixels, in normal orientation."""
        bm = Bitmap(self._width, self._height)
        bm._rows = [bytearray(self._row(y)) for y in range(self._height)]
        return bm

    def invert(self) -> None:
        """Invert every pixel."""
        table = bytes([1, 0]) + bytes(254)
        for row in self._rows:
            row[:] = row.translate(table)

    def flip(self) -> None:
        """Turn the bitmap upside down without moving its stored rows."""
        if self._height <= 1:
            return
        self._flipped = not self._flipped

    def resize(self, height: int) -> None:
        """Change the height.

        Storage rows are kept from the start: the image stays
        bottom-aligned normally and top-aligned when flipped. New rows
        are cleared.
        """
        if height < 0:
            raise ValueError(f"bitmap height must be non-negative: {height}")
        flipped = self._flipped
        if flipped:
            self.flip()
        del self._rows[height:]
        self._rows.extend(bytearray(self._width) for _ in range(height - len(self._rows)))
        self._height = height
        if flipped:
            self.flip()

    def to_rows(self) -> list[list[int]]:
        """Return the pixels as lists of 0/1, row 0 first."""
        return [list(self._row(y)) for y in range(self._height)]

    def __iter__(self) -> Iterator[list[int]]:
        return iter(self.to_rows())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bitmap):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self.to_rows() == other.to_rows()
        )

    def __repr__(self) -> str:
        return f"Bitmap({self._width}x{self._height})"