"""Greyscale images with 8-bit pixels and 4/8-neighbour adjacency."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence

from .pixel import Pixel

_FOUR = ((-1, 0), (0, -1), (0, 1), (1, 0))
_EIGHT = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)


class Image:
    """A width-by-height grid of intensities in ``[0, 255]``."""

    def __init__(self, width: int, height: int, default_value: int = 0) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Image dimensions must be positive")
        self._width = width
        self._height = height
        self._data = [bytearray([default_value]) * width for _ in range(height)]

    @classmethod
    def from_rows(cls, rows: Sequence[Iterable[int]]) -> Image:
        """Image built from rows of intensities, all of the same length."""
        data = [bytearray(row) for row in rows]
        if not data or not data[0]:
            raise ValueError("Image data cannot be empty")
        width = len(data[0])
        if any(len(row) != width for row in data):
            raise ValueError("All rows must have the same width")
        image = cls(width, len(data))
        image._data = data
        return image

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def is_valid(self, x: int, y: int) -> bool:
        """Whether ``(x, y)`` lies inside the image."""
        return 0 <= x < self._width and 0 <= y < self._height

    def _check(self, x: int, y: int) -> None:
        if not self.is_valid(x, y):
            raise IndexError("Pixel coordinates out of image bounds")

    def value(self, x: int, y: int) -> int:
        """Intensity at ``(x, y)``."""
        self._check(x, y)
        return self._data[y][x]

    def set_value(self, x: int, y: int, value: int) -> None:
        """Set the intensity at ``(x, y)``."""
        self._check(x, y)
        self._data[y][x] = value

    def pixel(self, x: int, y: int) -> Pixel:
        """The pixel at ``(x, y)`` with its intensity."""
        self._check(x, y)
        return Pixel(x, y, self._data[y][x])

    def rows(self) -> list[list[int]]:
        """A copy of the intensities, one list per row."""
        return [list(row) for row in self._data]

    def pixels(self) -> list[Pixel]:
        """Every pixel in row-major order."""
        return [
            Pixel(x, y, value)
            for y, row in enumerate(self._data)
            for x, value in enumerate(row)
        ]

    def neighbors(self, pixel: Pixel, eight_connected: bool = False) -> list[Pixel]:
        """Adjacent pixels inside the image, under 4- or 8-connectivity."""
        directions = _EIGHT if eight_connected else _FOUR
        found = []
        for dy, dx in directions:
            x, y = pixel.x + dx, pixel.y + dy
            if self.is_valid(x, y):
                found.append(Pixel(x, y, self._data[y][x]))
        return found

    def __str__(self) -> str:
        lines = [f"Image {self._width}x{self._height}:"]
        lines.extend("".join(f"{value:3d} " for value in row) for row in self._data)
        return "\n".join(lines) + "\n"

    def save_pgm(self, path: str | os.PathLike[str]) -> None:
        """Write the image as a plain-text PGM (P2) file."""
        with open(path, "w", encoding="ascii") as handle:
            handle.write("P2\n")
            handle.write(f"{self._width} {self._height}\n")
            handle.write("255\n")
            for row in self._data:
                handle.write(" ".join(str(value) for value in row) + "\n")