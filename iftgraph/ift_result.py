"""The optimum-path forest (P, C, L) produced by an IFT run."""

from __future__ import annotations

import math

from .image import Image
from .pixel import Pixel
from .seed_set import SeedSet

NO_LABEL = -1


def _fmt(value: float) -> str:
    return f"{value:g}"


class IFTResult:
    """Predecessor, cost and label maps of an optimum-path forest."""

    def __init__(self, width: int, height: int) -> None:
        self._width = width
        self._height = height
        self._predecessors: dict[Pixel, Pixel] = {}
        self._costs: dict[Pixel, float] = {}
        self._labels: dict[Pixel, int] = {}
        self._seed_pixels: list[Pixel] = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def seed_pixels(self) -> list[Pixel]:
        """Pixels registered as seeds, in the order they were added."""
        return list(self._seed_pixels)

    # P(t)

    def predecessor(self, pixel: Pixel) -> Pixel:
        """P(t), or a default pixel when ``pixel`` has no predecessor."""
        return self._predecessors.get(pixel, Pixel())

    def set_predecessor(self, pixel: Pixel, predecessor: Pixel) -> None:
        self._predecessors[pixel] = predecessor

    def has_predecessor(self, pixel: Pixel) -> bool:
        return pixel in self._predecessors

    # C(t)

    def cost(self, pixel: Pixel) -> float:
        """C(t), or infinity for a pixel never given a cost."""
        return self._costs.get(pixel, math.inf)

    def set_cost(self, pixel: Pixel, cost: float) -> None:
        self._costs[pixel] = cost

    # L(t)

    def label(self, pixel: Pixel) -> int:
        """L(t), or -1 for an unlabelled pixel."""
        return self._labels.get(pixel, NO_LABEL)

    def set_label(self, pixel: Pixel, label: int) -> None:
        self._labels[pixel] = label

    def has_label(self, pixel: Pixel) -> bool:
        return pixel in self._labels

    # Paths

    def optimal_path(self, pixel: Pixel) -> list[Pixel]:
        """Path from the root to ``pixel`` along the predecessors."""
        path = []
        current = pixel
        while current in self._predecessors:
            path.append(current)
            current = self._predecessors[current]
        if current in self._costs:
            path.append(current)
        path.reverse()
        return path

    def root_pixel(self, pixel: Pixel) -> Pixel:
        """The pixel reached by following predecessors until there are none."""
        current = pixel
        while current in self._predecessors:
            current = self._predecessors[current]
        return current

    def is_root(self, pixel: Pixel) -> bool:
        """Whether ``pixel`` has a cost but no predecessor."""
        return pixel not in self._predecessors and pixel in self._costs

    # Segmentation

    def segmentation_image(self) -> Image:
        """Image whose intensities are the labels, capped at 255."""
        image = Image(self._width, self._height, 0)
        for pixel, label in self._labels.items():
            image.set_value(pixel.x, pixel.y, min(label, 255) & 0xFF)
        return image

    def cost_image(self) -> Image:
        """Image of finite costs scaled so the largest becomes 255."""
        image = Image(self._width, self._height, 0)
        highest = self.max_cost()
        if highest == math.inf or highest == 0:
            return image
        for pixel, cost in self._costs.items():
            if cost != math.inf:
                scaled = int((cost / highest) * 255)
                image.set_value(pixel.x, pixel.y, max(0, min(255, scaled)))
        return image

    def pixels_with_label(self, label: int) -> list[Pixel]:
        return [pixel for pixel, value in self._labels.items() if value == label]

    def unique_labels(self) -> list[int]:
        """Distinct labels present, sorted."""
        return sorted(set(self._labels.values()))

    # Statistics

    def _finite_costs(self) -> list[float]:
        return [cost for cost in self._costs.values() if cost != math.inf]

    def processed_pixel_count(self) -> int:
        """Number of pixels with a finite cost."""
        return len(self._finite_costs())

    def min_cost(self) -> float:
        """Smallest finite cost, or infinity if there is none."""
        return min(self._finite_costs(), default=math.inf)

    def max_cost(self) -> float:
        """Largest finite cost, never below 0."""
        return max([0.0, *self._finite_costs()])

    def average_cost(self) -> float:
        """Mean of the finite costs, or 0 if there are none."""
        finite = self._finite_costs()
        return sum(finite) / len(finite) if finite else 0.0

    def component_count(self) -> int:
        """Number of trees, one per seed pixel."""
        return len(self._seed_pixels)

    # Validation

    def is_valid_forest(self) -> bool:
        """Whether following predecessors never runs into a cycle."""
        for start in self._predecessors:
            seen: set[Pixel] = set()
            current = start
            while current in self._predecessors:
                if current in seen:
                    return False
                seen.add(current)
                current = self._predecessors[current]
        return True

    def is_complete(self) -> bool:
        """Whether there are costs and all of them are finite."""
        return bool(self._costs) and all(cost != math.inf for cost in self._costs.values())

    # Setup

    def initialize(self, image: Image, seeds: SeedSet) -> None:
        """Reset the maps: infinite cost everywhere, handicaps and labels on seeds."""
        self._predecessors.clear()
        self._costs.clear()
        self._labels.clear()
        self._seed_pixels.clear()

        for y in range(self._height):
            for x in range(self._width):
                self._costs[image.pixel(x, y)] = math.inf

        for seed in seeds.active_seeds():
            self._costs[seed.pixel] = seed.handicap
            self._labels[seed.pixel] = seed.label
            self._seed_pixels.append(seed.pixel)

    def add_seed_pixel(self, pixel: Pixel) -> None:
        self._seed_pixels.append(pixel)

    # Reports

    def summary(self) -> str:
        lines = [
            "=== IFT RESULT ===",
            f"Dimensions: {self._width}x{self._height}",
            f"Processed pixels: {self.processed_pixel_count()}",
            f"Components: {self.component_count()}",
        ]
        if self._costs:
            lines.append(f"Cost range: [{_fmt(self.min_cost())}, {_fmt(self.max_cost())}]")
            lines.append(f"Average cost: {_fmt(self.average_cost())}")
        lines.append("Unique labels: " + ", ".join(str(label) for label in self.unique_labels()))
        lines.append(f"Is valid forest: {'Yes' if self.is_valid_forest() else 'No'}")
        lines.append(f"Is complete: {'Yes' if self.is_complete() else 'No'}")
        lines.append("==================")
        return "\n".join(lines)

    def statistics(self) -> str:
        lines = ["=== IFT STATISTICS ==="]
        for label in self.unique_labels():
            lines.append(f"Label {label}: {len(self.pixels_with_label(label))} pixels")
        lines.append("")
        lines.append("Seeds processed: " + ", ".join(str(p) for p in self._seed_pixels))
        lines.append("======================")
        return "\n".join(lines)


def compare_results(result1: IFTResult, result2: IFTResult, tolerance: float = 1e-6) -> bool:
    """Whether two results have equal dimensions and matching costs."""
    if result1.width != result2.width or result1.height != result2.height:
        return False
    for y in range(result1.height):
        for x in range(result1.width):
            pixel = Pixel(x, y, 0)
            if abs(result1.cost(pixel) - result2.cost(pixel)) > tolerance:
                return False
    return True


def visualize_forest(result: IFTResult, image: Image) -> str:
    """ASCII map: R for roots, * for pixels with a predecessor, . otherwise."""
    lines = ["IFT Forest Visualization:", "-" * (result.width * 4)]
    for y in range(result.height):
        cells = []
        for x in range(result.width):
            pixel = image.pixel(x, y)
            if result.is_root(pixel):
                cells.append(" R  ")
            elif result.has_predecessor(pixel):
                cells.append(" *  ")
            else:
                cells.append(" .  ")
        lines.append("".join(cells))
    return "\n".join(lines) + "\n"