"""Path-cost functions and arc-weight strategies for the IFT."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .image import Image
from .pixel import Pixel

if TYPE_CHECKING:
    from .seed_set import SeedSet

INFINITY_COST = math.inf


def _fmt(value: float) -> str:
    return "+∞" if value == INFINITY_COST else f"{value:g}"


class ArcWeightStrategy(ABC):
    """Computes the weight w(s, t) of the arc between adjacent pixels."""

    @abstractmethod
    def weight(self, source: Pixel, target: Pixel, image: Image) -> float:
        """Weight of the arc from ``source`` to ``target``."""

    @abstractmethod
    def name(self) -> str:
        """Human-readable name."""


class IntensityDifferenceWeight(ArcWeightStrategy):
    """|I(s) - I(t)|."""

    def weight(self, source: Pixel, target: Pixel, image: Image) -> float:
        return float(abs(source.intensity - target.intensity))

    def name(self) -> str:
        return "Intensity Difference"


class GradientWeight(ArcWeightStrategy):
    """Intensity difference damped by a smoothing parameter."""

    def __init__(self, sigma: float = 1.0) -> None:
        self.sigma = sigma

    def weight(self, source: Pixel, target: Pixel, image: Image) -> float:
        return abs(source.intensity - target.intensity) / (1.0 + self.sigma)

    def name(self) -> str:
        return "Gradient Weight"


class ConstantWeight(ArcWeightStrategy):
    """The same weight for every arc."""

    def __init__(self, weight: float = 1.0) -> None:
        self._weight = weight

    def weight(self, source: Pixel, target: Pixel, image: Image) -> float:
        return self._weight

    def name(self) -> str:
        return "Constant Weight"


class DestinationIntensityWeight(ArcWeightStrategy):
    """Intensity of the destination pixel, as used for watersheds."""

    def weight(self, source: Pixel, target: Pixel, image: Image) -> float:
        return float(target.intensity)

    def name(self) -> str:
        return "Destination Intensity"


class PathCostFunction(ABC):
    """A path-cost function f defined by handicaps and incremental extension."""

    def handicap(self, pixel: Pixel, seeds: SeedSet) -> float:
        """h(t): the seed's handicap, or infinity for pixels that are not seeds."""
        if not seeds.is_seed(pixel):
            return INFINITY_COST
        return seeds.handicap_of(pixel)

    @abstractmethod
    def arc_weight(self, source: Pixel, target: Pixel, image: Image) -> float:
        """w(s, t)."""

    @abstractmethod
    def extend(self, cost: float, weight: float) -> float:
        """f(π·⟨s,t⟩) from f(π) and w(s, t)."""

    def path_cost(self, path: Sequence[Pixel], image: Image, seeds: SeedSet) -> float:
        """Cost of a whole path, starting from the handicap of its first pixel."""
        if not path:
            return INFINITY_COST
        cost = self.handicap(path[0], seeds)
        if cost == INFINITY_COST:
            return INFINITY_COST
        for source, target in zip(path, path[1:]):
            cost = self.extend(cost, self.arc_weight(source, target, image))
            if cost == INFINITY_COST:
                break
        return cost

    @abstractmethod
    def is_monotonic_incremental(self) -> bool:
        """Whether the function satisfies the monotonic-incremental condition."""

    @abstractmethod
    def name(self) -> str:
        """Human-readable name."""


class _StrategyPathCost(PathCostFunction):
    _prefix = ""

    def __init__(self, strategy: ArcWeightStrategy) -> None:
        self.strategy = strategy

    def arc_weight(self, source: Pixel, target: Pixel, image: Image) -> float:
        return self.strategy.weight(source, target, image)

    def is_monotonic_incremental(self) -> bool:
        return True

    def name(self) -> str:
        return f"{self._prefix} ({self.strategy.name()})"


class AdditivePathCost(_StrategyPathCost):
    """f_sum(π·⟨s,t⟩) = f_sum(π) + w(s, t)."""

    _prefix = "f_sum"

    def extend(self, cost: float, weight: float) -> float:
        if cost == INFINITY_COST:
            return INFINITY_COST
        return cost + weight


class MaxPathCost(_StrategyPathCost):
    """f_max(π·⟨s,t⟩) = max(f_max(π), w(s, t))."""

    _prefix = "f_max"

    def extend(self, cost: float, weight: float) -> float:
        if cost == INFINITY_COST:
            return INFINITY_COST
        return max(cost, weight)


def describe_cost_function(cost_function: PathCostFunction) -> str:
    """Short description of a cost function."""
    monotonic = "Yes" if cost_function.is_monotonic_incremental() else "No"
    return "\n".join([
        "=== Cost Function ===",
        f"Name: {cost_function.name()}",
        f"Monotonic-Incremental: {monotonic}",
        "=====================",
    ])


def explain_path_cost(
    cost_function: PathCostFunction,
    path: Sequence[Pixel],
    image: Image,
    seeds: SeedSet,
) -> str:
    """Report of a path's cost, step by step when the cost is finite."""
    lines = [f"=== TEST: {cost_function.name()} ==="]
    if not path:
        lines.append("Empty path - cost: +∞")
        return "\n".join(lines)

    total = cost_function.path_cost(path, image, seeds)
    lines.append("Path: " + " -> ".join(str(p) for p in path))
    lines.append(f"Total cost: {_fmt(total)}")

    if len(path) > 1 and total != INFINITY_COST:
        lines.append("Breakdown:")
        cost = cost_function.handicap(path[0], seeds)
        lines.append(f"  h({path[0]}) = {_fmt(cost)}")
        for source, target in zip(path, path[1:]):
            weight = cost_function.arc_weight(source, target, image)
            cost = cost_function.extend(cost, weight)
            lines.append(f"  w({source},{target}) = {_fmt(weight)} -> cost = {_fmt(cost)}")

    lines.append("=" * 40)
    return "\n".join(lines)


def intensity_difference_sum() -> PathCostFunction:
    """f_sum with intensity-difference arc weights."""
    return AdditivePathCost(IntensityDifferenceWeight())


def intensity_difference_max() -> PathCostFunction:
    """f_max with intensity-difference arc weights."""
    return MaxPathCost(IntensityDifferenceWeight())


def watershed_sum() -> PathCostFunction:
    """f_sum with destination-intensity arc weights."""
    return AdditivePathCost(DestinationIntensityWeight())


def watershed_max() -> PathCostFunction:
    """f_max with destination-intensity arc weights."""
    return MaxPathCost(DestinationIntensityWeight())


def constant_sum(weight: float = 1.0) -> PathCostFunction:
    """f_sum with a constant arc weight."""
    return AdditivePathCost(ConstantWeight(weight))


def constant_max(weight: float = 1.0) -> PathCostFunction:
    """f_max with a constant arc weight."""
    return MaxPathCost(ConstantWeight(weight))