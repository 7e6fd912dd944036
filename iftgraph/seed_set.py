"""Seed pixels for the IFT: labels, handicaps and activation state."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from .image import Image
from .pixel import Pixel

AUTO_LABEL = -1


@dataclass
class Seed:
    """A seed pixel with its object label and initial cost h(t)."""

    pixel: Pixel = Pixel()
    label: int = 0
    handicap: float = 0.0
    active: bool = True
    name: str = ""

    def __str__(self) -> str:
        text = (
            f"Seed{{{self.pixel}, label={self.label}, handicap={self.handicap:g}, "
            f"active={'true' if self.active else 'false'}"
        )
        if self.name:
            text += f", name='{self.name}'"
        return text + "}"


class SeedSet:
    """The seed set S: seeds indexed by pixel, with automatic labelling."""

    def __init__(self) -> None:
        self._seeds: list[Seed] = []
        self._index: dict[Pixel, int] = {}
        self._next_label = 1

    def add(
        self,
        pixel: Pixel,
        label: int | None = None,
        handicap: float = 0.0,
        name: str = "",
    ) -> None:
        """Add a seed, or update the seed already at ``pixel`` and reactivate it.

        Without a label (``None`` or -1) the next automatic label is used.
        """
        if label is None or label == AUTO_LABEL:
            label = self._next_label
            self._next_label += 1

        position = self._index.get(pixel)
        if position is not None:
            seed = self._seeds[position]
            seed.label = label
            seed.handicap = handicap
            seed.active = True
            if name:
                seed.name = name
            return

        self._index[pixel] = len(self._seeds)
        self._seeds.append(Seed(pixel, label, handicap, True, name))

    def add_at(self, x: int, y: int, intensity: int = 0) -> None:
        """Add a seed at ``(x, y)`` with an automatic label."""
        self.add(Pixel(x, y, intensity))

    def remove(self, pixel: Pixel) -> bool:
        """Remove the seed at ``pixel``; the last seed takes its place."""
        position = self._index.pop(pixel, None)
        if position is None:
            return False
        last = self._seeds.pop()
        if position < len(self._seeds):
            self._seeds[position] = last
            self._index[last.pixel] = position
        return True

    def clear(self) -> None:
        """Remove every seed and restart automatic labels at 1."""
        self._seeds.clear()
        self._index.clear()
        self._next_label = 1

    def set_active(self, pixel: Pixel, active: bool) -> bool:
        """Activate or deactivate a seed; False if there is none at ``pixel``."""
        position = self._index.get(pixel)
        if position is None:
            return False
        self._seeds[position].active = active
        return True

    def is_seed(self, pixel: Pixel) -> bool:
        """Whether ``pixel`` holds an active seed."""
        position = self._index.get(pixel)
        return position is not None and self._seeds[position].active

    def has_seed(self, pixel: Pixel) -> bool:
        """Whether ``pixel`` holds a seed, active or not."""
        return pixel in self._index

    def label_of(self, pixel: Pixel) -> int:
        """Label of the seed at ``pixel``, or -1 if there is none."""
        position = self._index.get(pixel)
        return AUTO_LABEL if position is None else self._seeds[position].label

    def handicap_of(self, pixel: Pixel) -> float:
        """Handicap of the seed at ``pixel``, or infinity if there is none."""
        position = self._index.get(pixel)
        return math.inf if position is None else self._seeds[position].handicap

    def get(self, pixel: Pixel) -> Seed | None:
        """A copy of the seed at ``pixel``, or None."""
        position = self._index.get(pixel)
        return None if position is None else replace(self._seeds[position])

    def seeds(self) -> list[Seed]:
        """Copies of all seeds, active and inactive."""
        return [replace(seed) for seed in self._seeds]

    def active_seeds(self) -> list[Seed]:
        """Copies of the active seeds."""
        return [replace(seed) for seed in self._seeds if seed.active]

    def active_pixels(self) -> list[Pixel]:
        """Pixels of the active seeds."""
        return [seed.pixel for seed in self._seeds if seed.active]

    def seeds_with_label(self, label: int) -> list[Seed]:
        """Copies of the active seeds carrying ``label``."""
        return [replace(seed) for seed in self._seeds if seed.active and seed.label == label]

    def __len__(self) -> int:
        return len(self._seeds)

    def active_count(self) -> int:
        """Number of active seeds."""
        return sum(1 for seed in self._seeds if seed.active)

    def active_labels(self) -> list[int]:
        """Distinct labels of the active seeds, sorted."""
        return sorted({seed.label for seed in self._seeds if seed.active})

    def validate(self, image: Image) -> bool:
        """Whether every active seed lies inside ``image``."""
        return all(
            image.is_valid(seed.pixel.x, seed.pixel.y)
            for seed in self._seeds
            if seed.active
        )

    def __str__(self) -> str:
        labels = ",".join(str(label) for label in self.active_labels())
        return f"SeedSet{{{len(self._seeds)} total, {self.active_count()} active, labels=[{labels}]}}"

    def set_handicaps_from_intensity(self) -> None:
        """Use each active seed's intensity as its handicap."""
        for seed in self._seeds:
            if seed.active:
                seed.handicap = float(seed.pixel.intensity)

    def set_uniform_handicaps(self, handicap: float) -> None:
        """Give every active seed the same handicap."""
        for seed in self._seeds:
            if seed.active:
                seed.handicap = handicap

    def add_border_seeds(self, image: Image, label: int = 0, handicap: float = math.inf) -> None:
        """Add every pixel on the image border as a seed."""
        width, height = image.width, image.height
        for x in range(width):
            self.add(image.pixel(x, 0), label, handicap, "border_top")
            self.add(image.pixel(x, height - 1), label, handicap, "border_bottom")
        for y in range(1, height - 1):
            self.add(image.pixel(0, y), label, handicap, "border_left")
            self.add(image.pixel(width - 1, y), label, handicap, "border_right")


def _fixed_positions(width: int, height: int) -> list[tuple[int, int]]:
    return [
        (width // 4, height // 4),
        (3 * width // 4, height // 4),
        (width // 4, 3 * height // 4),
        (3 * width // 4, 3 * height // 4),
        (width // 2, height // 2),
        (width // 8, height // 2),
        (7 * width // 8, height // 2),
        (width // 2, height // 8),
    ]


def _grid_positions(width: int, height: int, num_seeds: int) -> list[tuple[int, int]]:
    per_row = math.isqrt(num_seeds) + 1
    per_col = (num_seeds + per_row - 1) // per_row
    step_x = max(1, width // (per_row + 1))
    step_y = max(1, height // (per_col + 1))

    positions = []
    for i in range(num_seeds):
        row, col = divmod(i, per_row)
        offset_x = (i * 17) % (step_x // 4 + 1)
        offset_y = (i * 23) % (step_y // 4 + 1)
        x = step_x * (col + 1) + offset_x - step_x // 8
        y = step_y * (row + 1) + offset_y - step_y // 8
        positions.append((max(0, min(width - 1, x)), max(0, min(height - 1, y))))
    return positions


def generate_automatic_seeds(image: Image, num_seeds: int) -> SeedSet:
    """Seeds spread over the image, labelled 1 to ``num_seeds``.

    Up to eight seeds use fixed positions; more are laid out on a grid.
    """
    seeds = SeedSet()
    if num_seeds <= 0:
        return seeds

    if num_seeds <= 8:
        positions = _fixed_positions(image.width, image.height)[:num_seeds]
    else:
        positions = _grid_positions(image.width, image.height, num_seeds)

    for label, (x, y) in enumerate(positions, start=1):
        if image.is_valid(x, y):
            seeds.add(image.pixel(x, y), label, 0.0)
    return seeds