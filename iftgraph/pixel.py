"""Image pixels: coordinates plus an 8-bit intensity."""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import total_ordering


@total_ordering
@dataclass(frozen=True)
class Pixel:
    """A pixel at ``(x, y)`` with its intensity.

    Two pixels are equal only when coordinates and intensity all match.
    Pixels order row-major: by ``y``, then ``x``, then intensity.
    """

    x: int = 0
    y: int = 0
    intensity: int = 0

    def _key(self) -> tuple[int, int, int]:
        return (self.y, self.x, self.intensity)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Pixel):
            return NotImplemented
        return self._key() < other._key()

    def distance_to(self, other: Pixel) -> float:
        """Euclidean distance between the two pixel positions."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_linear_index(self, image_width: int) -> int:
        """Row-major index of this pixel in an image of the given width."""
        return self.y * image_width + self.x

    @classmethod
    def from_linear_index(cls, linear_index: int, image_width: int) -> Pixel:
        """Pixel at a row-major index, with intensity 0."""
        y, x = divmod(linear_index, image_width)
        return cls(x, y, 0)

    def __str__(self) -> str:
        return f"Pixel({self.x},{self.y},{self.intensity})"